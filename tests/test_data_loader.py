"""데이터 로더 테스트"""

import json
import logging
import pytest
import pandas as pd
import geopandas as gpd
import sys
from pathlib import Path

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from crop_atlas.data_loader import (
    load_regions,
    load_crop_records,
    load_boundaries,
    parse_crop_record,
    records_to_frame,
    unknown_region_ids,
)
from crop_atlas.config import COUNTY_NAME_TO_ID, RESOLVED_ID_PROPERTY
from crop_atlas.models import CropRecord, Region


def write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


class TestLoadRegions:
    """load_regions 함수 테스트"""

    def test_load_shipped_regions(self):
        """기본 데이터 로드"""
        regions = load_regions()
        assert len(regions) == 20
        assert Region("TPE", "臺北市") in regions

    def test_region_ids_match_county_table(self):
        """기준 지역 코드 = 대응표 코드"""
        ids = {r.id for r in load_regions()}
        assert ids == set(COUNTY_NAME_TO_ID.values())

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="찾을 수 없습니다"):
            load_regions(tmp_path)

    def test_not_a_list(self, tmp_path):
        write_json(tmp_path / "regions.json", {"id": "TPE"})
        with pytest.raises(ValueError, match="배열"):
            load_regions(tmp_path)

    def test_missing_id(self, tmp_path):
        write_json(tmp_path / "regions.json", [{"name": "臺北市"}])
        with pytest.raises(ValueError, match="id"):
            load_regions(tmp_path)

    def test_name_defaults_to_id(self, tmp_path):
        write_json(tmp_path / "regions.json", [{"id": "TPE"}])
        assert load_regions(tmp_path) == [Region("TPE", "TPE")]


class TestLoadCropRecords:
    """load_crop_records 함수 테스트"""

    def test_load_shipped_records(self):
        records = load_crop_records()
        assert len(records) > 0
        assert all(isinstance(r, CropRecord) for r in records)

    def test_file_order_preserved(self, tmp_path):
        write_json(tmp_path / "crops.json", [
            {"regionId": "YUN", "crop": "花生"},
            {"regionId": "CHW", "crop": "水稻"},
        ])
        assert [r.crop for r in load_crop_records(tmp_path)] == ["花生", "水稻"]

    def test_missing_fields_become_empty(self, tmp_path):
        """sowing / harvest / fertilization 이 없으면 빈 값"""
        write_json(tmp_path / "crops.json", [{"regionId": "TPE", "crop": "茶"}])
        record = load_crop_records(tmp_path)[0]
        assert record.sowing == frozenset()
        assert record.harvest == frozenset()
        assert record.fertilization == ()

    def test_out_of_range_months_dropped(self, tmp_path, caplog):
        write_json(tmp_path / "crops.json", [{
            "regionId": "TPE", "crop": "Rice",
            "sowing": [0, 3, 13], "harvest": [10],
            "fertilization": [{"stage": "base", "months": [3, 14], "ratio": "30%"}],
        }])
        with caplog.at_level(logging.WARNING, logger="crop_atlas.data_loader"):
            record = load_crop_records(tmp_path)[0]

        assert record.sowing == frozenset({3})
        assert record.fertilization[0].months == frozenset({3})
        assert record.fertilization[0].ratio == "30%"
        assert "3개 제외" in caplog.text

    def test_unknown_region_kept(self, tmp_path):
        """기준 데이터와 무관하게 레코드는 그대로 로드"""
        write_json(tmp_path / "crops.json", [{"regionId": "ZZZ", "crop": "Rice"}])
        records = load_crop_records(tmp_path)
        assert [r.region_id for r in records] == ["ZZZ"]

    def test_duplicate_months_no_warning(self, tmp_path, caplog):
        """같은 월을 다른 표기로 중복해도 제외 경고 없음"""
        write_json(tmp_path / "crops.json", [{
            "regionId": "TPE", "crop": "Rice",
            "sowing": [3, 3.0, "3"],
            "fertilization": [{"stage": "base", "months": [4, 4]}],
        }])
        with caplog.at_level(logging.WARNING, logger="crop_atlas.data_loader"):
            record = load_crop_records(tmp_path)[0]

        assert record.sowing == frozenset({3})
        assert "제외" not in caplog.text

    def test_record_without_crop(self, tmp_path):
        write_json(tmp_path / "crops.json", [{"regionId": "TPE"}])
        with pytest.raises(ValueError, match="regionId / crop"):
            load_crop_records(tmp_path)


class TestParseCropRecord:
    """parse_crop_record 함수 테스트"""

    def test_stage_order_kept(self):
        record = parse_crop_record({
            "regionId": "CHW", "crop": "水稻",
            "fertilization": [
                {"stage": "基肥", "months": [2]},
                {"stage": "追肥", "months": [3]},
                "garbage",
            ],
        })
        assert [s.stage for s in record.fertilization] == ["基肥", "追肥"]

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="객체"):
            parse_crop_record(["TPE", "Rice"])


class TestUnknownRegionIds:
    """unknown_region_ids 함수 테스트"""

    def test_sorted_unknown_ids(self):
        records = [
            CropRecord("ZZZ", "Rice"),
            CropRecord("TPE", "Tea"),
            CropRecord("AAA", "Corn"),
            CropRecord("ZZZ", "Corn"),
        ]
        assert unknown_region_ids(records, [Region("TPE", "臺北市")]) == ["AAA", "ZZZ"]

    def test_all_known(self):
        assert unknown_region_ids(load_crop_records(), load_regions()) == []


class TestLoadBoundaries:
    """load_boundaries 함수 테스트"""

    def test_load_shipped_boundaries(self):
        gdf = load_boundaries()
        assert isinstance(gdf, gpd.GeoDataFrame)
        assert RESOLVED_ID_PROPERTY in gdf.columns
        assert "TPE" in set(gdf[RESOLVED_ID_PROPERTY])

    def test_unmapped_name_falls_back(self):
        """대응표에 없는 옛 이름은 원래 이름 그대로"""
        gdf = load_boundaries()
        assert "台北縣" in set(gdf[RESOLVED_ID_PROPERTY])

    def test_alt_id_fallback(self, tmp_path):
        write_json(tmp_path / "counties.geojson", {
            "type": "FeatureCollection",
            "features": [{
                "type": "Feature",
                "properties": {"COUNTYNAME": "釣魚臺", "COUNTY_ID": "X01"},
                "geometry": {"type": "Point", "coordinates": [123.5, 25.7]},
            }],
        })
        gdf = load_boundaries(tmp_path, "counties.geojson")
        assert list(gdf[RESOLVED_ID_PROPERTY]) == ["X01"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="GeoJSON"):
            load_boundaries(tmp_path)


class TestRecordsToFrame:
    """records_to_frame 함수 테스트"""

    def test_columns_and_names(self):
        regions = load_regions()
        records = load_crop_records()
        df = records_to_frame(records, regions)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == len(records)
        assert list(df.columns) == ["지역코드", "지역", "작물", "파종", "시비", "수확"]
        assert df.iloc[0]["지역"] == "彰化縣"

    def test_empty(self):
        df = records_to_frame([])
        assert df.empty
        assert "작물" in df.columns


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
