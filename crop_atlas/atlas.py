"""
작물 시기 지도 상태 모듈

로드된 데이터와 필터 상태를 소유하고, 사용자 동작(지역 클릭, 작물 선택,
월 토글, 전체 해제, hover)을 받아 화면에 필요한 값을 계산합니다.
계산 결과는 캐시하지 않고 호출할 때마다 새로 만듭니다.
"""

from __future__ import annotations

import logging
import geopandas as gpd
from pathlib import Path
from typing import Dict, List, Optional, Set

from .config import (
    EXPORT_ENCODING,
    LABELS,
    RESOLVED_ID_PROPERTY,
    get_data_path,
    get_geo_path,
    get_output_path,
)
from .data_loader import (
    load_boundaries,
    load_crop_records,
    load_regions,
    records_to_frame,
    unknown_region_ids,
)
from .filters import crop_options, filter_records, regions_with_match
from .highlight import FeatureInteraction
from .models import CropRecord, FilterState, LoadStatus, PathStyle, Region


logger = logging.getLogger(__name__)


class CropAtlas:
    """
    대만 縣市별 작물 시기 지도 상태

    Example:
        >>> atlas = CropAtlas().load_data()
        >>> atlas.set_crop_filter("水稻")
        >>> atlas.toggle_month(3)
        >>> atlas.match_set()
        {'TPE', 'CHW', ...}
        >>> atlas.select_region("CHW")
        >>> [r.crop for r in atlas.visible_records()]
        ['水稻']
    """

    def __init__(
        self,
        data_path: Optional[Path] = None,
        geo_path: Optional[Path] = None
    ):
        """
        Args:
            data_path: 데이터 디렉토리 경로 (기본값: data/)
            geo_path: 경계 GeoJSON 디렉토리 경로 (기본값: data/geo/)
        """
        self.data_path = data_path or get_data_path()
        self.geo_path = geo_path or get_geo_path()

        self.regions: List[Region] = []
        self.records: List[CropRecord] = []
        self.boundaries: Optional[gpd.GeoDataFrame] = None
        self.interactions: List[FeatureInteraction] = []

        self.filter_state = FilterState()
        self.status = LoadStatus()

    # -------------------------------------------------------------------------
    # 데이터 로드 (순서 무관)
    # -------------------------------------------------------------------------

    def load_data(self) -> "CropAtlas":
        """
        지역, 작물, 경계 데이터 로드

        Returns:
            self (체이닝 지원)
        """
        self.load_regions()
        self.load_crops()
        self.load_boundaries()
        return self

    def load_regions(self) -> "CropAtlas":
        self.regions = load_regions(self.data_path)
        self.status.regions = True
        self._check_region_ids()
        return self

    def load_crops(self) -> "CropAtlas":
        self.records = load_crop_records(self.data_path)
        self.status.crops = True
        self._check_region_ids()
        return self

    def load_boundaries(self) -> "CropAtlas":
        self.boundaries = load_boundaries(self.geo_path)
        self.interactions = [
            FeatureInteraction(region_id) for region_id in self.boundaries[RESOLVED_ID_PROPERTY]
        ]
        self.status.boundaries = True
        return self

    def _check_region_ids(self) -> None:
        """지역 + 작물이 모두 로드된 시점에 알 수 없는 지역 코드 경고"""
        if not self.is_ready:
            return

        unknown = unknown_region_ids(self.records, self.regions)
        if unknown:
            logger.warning("알 수 없는 지역 코드 (매칭에서 제외): %s", unknown)

    @property
    def is_ready(self) -> bool:
        """지역 + 작물 데이터가 모두 로드되었는지"""
        return self.status.ready

    # -------------------------------------------------------------------------
    # 사용자 동작
    # -------------------------------------------------------------------------

    def select_region(self, region_id: Optional[str]) -> None:
        self.filter_state = self.filter_state.with_region(region_id)

    def set_crop_filter(self, crop: Optional[str]) -> None:
        self.filter_state = self.filter_state.with_crop(crop)

    def toggle_month(self, month: int) -> None:
        self.filter_state = self.filter_state.toggle_month(month)

    def clear_month(self) -> None:
        self.filter_state = self.filter_state.clear_month()

    def clear_all(self) -> None:
        """지역 / 작물 / 월 필터 모두 해제"""
        self.filter_state = self.filter_state.cleared()

    def pointer_enter(self, feature_index: int) -> None:
        self.interactions[feature_index].pointer_enter()

    def pointer_leave(self, feature_index: int) -> None:
        self.interactions[feature_index].pointer_leave()

    def click(self, feature_index: int) -> str:
        """경계 클릭: 해당 지역을 선택 (스타일은 직접 바꾸지 않음)"""
        region_id = self.interactions[feature_index].click()
        logger.debug("지역 선택: %s", region_id)
        self.select_region(region_id)
        return region_id

    # -------------------------------------------------------------------------
    # 화면 값 계산
    # -------------------------------------------------------------------------

    def visible_records(self) -> List[CropRecord]:
        """오른쪽 카드 목록"""
        return filter_records(
            self.records,
            self.filter_state,
            known_region_ids=[region.id for region in self.regions],
        )

    def match_set(self) -> Set[str]:
        """지도에서 강조할 지역 (선택 지역과 무관)"""
        return regions_with_match(self.regions, self.records, self.filter_state.without_region())

    def feature_styles(self) -> List[PathStyle]:
        """경계 feature 순서대로 스타일"""
        matches = self.match_set()
        return [interaction.style(matches) for interaction in self.interactions]

    def crop_options(self) -> List[str]:
        return crop_options(self.records)

    def region_name(self, region_id: str) -> str:
        """지역 코드 → 표시명 (없으면 코드 그대로)"""
        names: Dict[str, str] = {region.id: region.name for region in self.regions}
        return names.get(region_id, region_id)

    def panel_title(self) -> str:
        active = self.filter_state.active_region
        if active:
            return LABELS["region_heading"].format(name=self.region_name(active))
        return LABELS["choose_region"]

    def export_records(
        self,
        filename: str = "records.csv",
        output_dir: Optional[Path] = None
    ) -> Path:
        """
        현재 카드 목록을 CSV 로 저장

        Args:
            filename: 저장할 파일명
            output_dir: 출력 디렉토리 (기본값: outputs/)

        Returns:
            저장된 파일 경로
        """
        if output_dir is None:
            output_dir = get_output_path()

        output_dir.mkdir(parents=True, exist_ok=True)
        filepath = output_dir / filename

        df = records_to_frame(self.visible_records(), self.regions)
        df.to_csv(filepath, index=False, encoding=EXPORT_ENCODING)

        logger.info("레코드 %d개 저장: %s", len(df), filepath)
        return filepath
