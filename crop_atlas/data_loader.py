"""
데이터 로딩 모듈

縣市 기준 데이터, 작물 시기 데이터, 縣市 경계 GeoJSON 로딩 유틸리티
"""

from __future__ import annotations

import json
import logging
import pandas as pd
import geopandas as gpd
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config import (
    REGIONS_FILE,
    CROPS_FILE,
    GEOJSON_FILE,
    COUNTY_NAME_TO_ID,
    RESOLVED_ID_PROPERTY,
    DEFAULT_ENCODING,
    get_data_path,
    get_geo_path,
)
from .models import CropRecord, FertilizationStage, Region
from .resolver import feature_ref_from_properties, resolve
from .temporal import months_of


logger = logging.getLogger(__name__)


def _read_json_list(file_path: Path, encoding: str) -> List[Any]:
    """JSON 배열 파일 읽기"""
    if not file_path.exists():
        raise FileNotFoundError(f"데이터 파일을 찾을 수 없습니다: {file_path}")

    with open(file_path, "r", encoding=encoding) as fh:
        payload = json.load(fh)

    if not isinstance(payload, list):
        raise ValueError(f"JSON 최상위는 배열이어야 합니다: {file_path}")

    return payload


def load_regions(
    data_path: Optional[Path] = None,
    encoding: str = DEFAULT_ENCODING
) -> List[Region]:
    """
    縣市 기준 데이터 로드

    Args:
        data_path: 데이터 디렉토리 경로 (기본값: data/)
        encoding: 파일 인코딩

    Returns:
        Region 목록 (파일 순서 유지)

    Raises:
        FileNotFoundError: regions.json 이 없는 경우
        ValueError: id 가 없는 항목이 있는 경우

    Example:
        >>> regions = load_regions()
        >>> regions[0]
        Region(id='TPE', name='臺北市')
    """
    if data_path is None:
        data_path = get_data_path()

    regions = []
    for item in _read_json_list(data_path / REGIONS_FILE, encoding):
        region = parse_region(item)
        regions.append(region)

    logger.info("지역 %d개 로드", len(regions))
    return regions


def parse_region(item: Mapping[str, Any]) -> Region:
    """{id, name} → Region"""
    if not isinstance(item, Mapping) or not item.get("id"):
        raise ValueError(f"지역 id 가 없습니다: {item!r}")

    region_id = str(item["id"]).strip()
    return Region(id=region_id, name=str(item.get("name") or region_id))


def parse_fertilization(items: Optional[Iterable[Any]]) -> tuple:
    """시비 단계 목록 파싱 (없으면 빈 튜플)"""
    if not isinstance(items, list):
        return ()

    stages = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        ratio = item.get("ratio")
        stages.append(FertilizationStage(
            stage=str(item.get("stage") or ""),
            months=months_of(item.get("months")),
            ratio=str(ratio) if ratio is not None else None,
        ))
    return tuple(stages)


def parse_crop_record(item: Mapping[str, Any]) -> CropRecord:
    """
    JSON 항목 → CropRecord

    월 목록이 없거나 범위를 벗어난 값은 빈 집합 / 제외로 처리합니다.

    Raises:
        ValueError: regionId 또는 crop 이 없는 경우
    """
    if not isinstance(item, Mapping):
        raise ValueError(f"작물 레코드는 객체여야 합니다: {item!r}")

    region_id = item.get("regionId")
    crop = item.get("crop")
    if not region_id or not crop:
        raise ValueError(f"regionId / crop 이 없는 레코드입니다: {item!r}")

    record = CropRecord(
        region_id=str(region_id).strip(),
        crop=str(crop),
        sowing=months_of(item.get("sowing")),
        harvest=months_of(item.get("harvest")),
        fertilization=parse_fertilization(item.get("fertilization")),
    )

    dropped = _count_dropped_months(item)
    if dropped:
        logger.warning("%s/%s: 1~12 범위 밖의 월 값 %d개 제외", record.region_id, record.crop, dropped)

    return record


def _count_dropped_months(item: Mapping[str, Any]) -> int:
    """months_of() 가 버리는 원본 월 값 개수"""
    def rejected(values):
        if not isinstance(values, list):
            return 0
        return sum(1 for value in values if not months_of([value]))

    count = rejected(item.get("sowing")) + rejected(item.get("harvest"))

    fert = item.get("fertilization")
    if isinstance(fert, list):
        count += sum(rejected(f.get("months")) for f in fert if isinstance(f, Mapping))

    return count


def load_crop_records(
    data_path: Optional[Path] = None,
    encoding: str = DEFAULT_ENCODING
) -> List[CropRecord]:
    """
    작물 시기 데이터 로드

    Args:
        data_path: 데이터 디렉토리 경로 (기본값: data/)
        encoding: 파일 인코딩

    Returns:
        CropRecord 목록 (파일 순서 유지)

    Raises:
        FileNotFoundError: crops.json 이 없는 경우
        ValueError: 필수 필드가 없는 레코드가 있는 경우
    """
    if data_path is None:
        data_path = get_data_path()

    records = [parse_crop_record(item) for item in _read_json_list(data_path / CROPS_FILE, encoding)]

    logger.info("작물 레코드 %d개 로드", len(records))
    return records


def unknown_region_ids(records: Iterable[CropRecord], regions: Iterable[Region]) -> List[str]:
    """기준 데이터에 없는 레코드 지역 코드 (정렬)"""
    known = {region.id for region in regions}
    return sorted({record.region_id for record in records} - known)


def load_boundaries(
    geo_path: Optional[Path] = None,
    filename: str = GEOJSON_FILE
) -> gpd.GeoDataFrame:
    """
    縣市 경계 GeoJSON 로드

    각 feature 의 지역 코드를 계산해 region_id 컬럼으로 추가합니다.

    Args:
        geo_path: 지리 데이터 경로 (기본값: data/geo/)
        filename: GeoJSON 파일명

    Returns:
        region_id 컬럼이 추가된 GeoDataFrame

    Raises:
        FileNotFoundError: GeoJSON 파일이 없는 경우
    """
    if geo_path is None:
        geo_path = get_geo_path()

    file_path = geo_path / filename
    if not file_path.exists():
        raise FileNotFoundError(f"GeoJSON 파일을 찾을 수 없습니다: {file_path}")

    gdf = gpd.read_file(file_path)
    gdf[RESOLVED_ID_PROPERTY] = [
        resolve(feature_ref_from_properties(row)) for row in gdf.drop(columns="geometry").to_dict("records")
    ]

    unmapped = [rid for rid in gdf[RESOLVED_ID_PROPERTY] if rid not in COUNTY_NAME_TO_ID.values()]
    if unmapped:
        logger.warning("대응표에 없는 경계 %d개 (데이터 없음으로 표시): %s", len(unmapped), unmapped)

    logger.info("경계 %d개 로드: %s", len(gdf), file_path)
    return gdf


def records_to_frame(records: Iterable[CropRecord], regions: Optional[List[Region]] = None) -> pd.DataFrame:
    """
    레코드 목록을 표 형태로 변환

    Returns:
        지역코드, 지역, 작물, 파종, 시비, 수확 컬럼의 DataFrame
    """
    names: Dict[str, str] = {r.id: r.name for r in regions or []}

    rows = [
        {
            "지역코드": record.region_id,
            "지역": names.get(record.region_id, record.region_id),
            "작물": record.crop,
            "파종": sorted(record.sowing),
            "시비": [f"{stage.stage}:{sorted(stage.months)}" for stage in record.fertilization],
            "수확": sorted(record.harvest),
        }
        for record in records
    ]

    return pd.DataFrame(rows, columns=["지역코드", "지역", "작물", "파종", "시비", "수확"])
