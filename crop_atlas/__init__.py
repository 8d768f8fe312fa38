"""
대만 縣市별 작물 시기 지도

- 縣市 경계(GeoJSON) ↔ 지역 코드 변환
- 작물 / 월 / 지역 필터와 지도 하이라이트 계산
- Folium 기반 작물 시기(파종/시비/수확) 지도 시각화
"""

from .config import (
    COUNTY_NAME_TO_ID,
    MONTHS,
    PALETTE,
)
from .models import (
    Region,
    FertilizationStage,
    CropRecord,
    FilterState,
    FeatureRef,
    PathStyle,
)
from .resolver import (
    resolve,
    feature_ref_from_properties,
)
from .temporal import (
    touches_month,
    months_of,
)
from .filters import (
    filter_records,
    regions_with_match,
    crop_options,
)
from .highlight import (
    style_for,
    FeatureInteraction,
)
from .data_loader import (
    load_regions,
    load_crop_records,
    load_boundaries,
    records_to_frame,
    unknown_region_ids,
)
from .atlas import CropAtlas
from .visualization import (
    CropAtlasVisualizer,
    create_atlas_map,
)

__version__ = "1.0.0"
__all__ = [
    # Config
    "COUNTY_NAME_TO_ID",
    "MONTHS",
    "PALETTE",
    # Models
    "Region",
    "FertilizationStage",
    "CropRecord",
    "FilterState",
    "FeatureRef",
    "PathStyle",
    # Engine
    "resolve",
    "feature_ref_from_properties",
    "touches_month",
    "months_of",
    "filter_records",
    "regions_with_match",
    "crop_options",
    "style_for",
    "FeatureInteraction",
    # Data Loader
    "load_regions",
    "load_crop_records",
    "load_boundaries",
    "records_to_frame",
    "unknown_region_ids",
    # Visualization
    "CropAtlas",
    "CropAtlasVisualizer",
    "create_atlas_map",
]
