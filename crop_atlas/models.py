"""
데이터 모델 모듈

지역, 작물 시기 레코드, 필터 상태, 지도 feature 입력 타입 정의
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Optional, Tuple

from .config import MONTHS


@dataclass(frozen=True)
class Region:
    """縣市 기준 데이터 (세션 동안 불변)"""
    id: str
    name: str


@dataclass(frozen=True)
class FertilizationStage:
    """시비 단계 하나 (ratio 는 표시용, 매칭에는 사용하지 않음)"""
    stage: str
    months: FrozenSet[int] = frozenset()
    ratio: Optional[str] = None


@dataclass(frozen=True)
class CropRecord:
    """
    한 지역의 한 작물 재배 시기

    Attributes:
        region_id: Region.id 참조
        crop: 작물 이름
        sowing: 파종 월 집합
        harvest: 수확 월 집합
        fertilization: 시비 단계 (입력 순서 유지)
    """
    region_id: str
    crop: str
    sowing: FrozenSet[int] = frozenset()
    harvest: FrozenSet[int] = frozenset()
    fertilization: Tuple[FertilizationStage, ...] = ()


@dataclass(frozen=True)
class FilterState:
    """
    사용자 필터 상태

    세 필드는 서로 독립적이며 None 이면 해당 필터가 꺼진 상태입니다.

    Raises:
        ValueError: month 가 1~12 범위를 벗어난 경우
    """
    active_region: Optional[str] = None
    month: Optional[int] = None
    crop_filter: Optional[str] = None

    def __post_init__(self):
        if self.month is not None and self.month not in MONTHS:
            raise ValueError(f"월은 1~12 사이여야 합니다: {self.month}")

    @property
    def is_empty(self) -> bool:
        return self.active_region is None and self.month is None and self.crop_filter is None

    def without_region(self) -> "FilterState":
        """지역 필터를 뺀 상태 (지도 하이라이트 계산용)"""
        return replace(self, active_region=None)

    def with_region(self, region_id: Optional[str]) -> "FilterState":
        return replace(self, active_region=region_id or None)

    def with_crop(self, crop: Optional[str]) -> "FilterState":
        # 선택 상자의 빈 값("全部作物")은 필터 해제
        return replace(self, crop_filter=crop or None)

    def toggle_month(self, month: int) -> "FilterState":
        """같은 월을 다시 누르면 해제"""
        return replace(self, month=None if self.month == month else month)

    def clear_month(self) -> "FilterState":
        return replace(self, month=None)

    def cleared(self) -> "FilterState":
        return FilterState()


@dataclass(frozen=True)
class FeatureRef:
    """Resolver 입력: GeoJSON feature 에서 필요한 두 속성만 추린 타입"""
    display_name: Optional[str] = None
    alt_id: Optional[str] = None


@dataclass(frozen=True)
class PathStyle:
    """경계 폴리곤 스타일"""
    stroke_color: str
    stroke_weight: int
    fill_color: str
    fill_opacity: float

    def to_leaflet(self) -> Dict[str, any]:
        """Leaflet path 옵션 형태로 변환"""
        return {
            "color": self.stroke_color,
            "weight": self.stroke_weight,
            "fillColor": self.fill_color,
            "fillOpacity": self.fill_opacity,
        }


@dataclass
class LoadStatus:
    """데이터 로드 진행 상태 (표시 계층용)"""
    regions: bool = False
    crops: bool = False
    boundaries: bool = False

    @property
    def ready(self) -> bool:
        return self.regions and self.crops
