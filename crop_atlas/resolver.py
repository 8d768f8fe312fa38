"""
지역 식별자 변환 모듈

GeoJSON 縣市 feature 의 이름/속성을 regions.json 의 지역 코드로 변환합니다.

Note:
    경계 데이터는 縣市名稱(예: 「新北市」)만 갖고 있고 작물 데이터는
    짧은 코드(NTP)를 쓰므로 대응표로 연결합니다. 대응표에 없으면
    대체 식별자 → 원래 이름 순으로 물러나며, 이 경우 어떤 지역 코드와도
    일치하지 않아 "데이터 없음"으로 표시됩니다.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from .config import (
    COUNTY_NAME_TO_ID,
    GEOJSON_NAME_PROPERTY,
    GEOJSON_ALT_ID_PROPERTY,
)
from .models import FeatureRef


def _clean(value: Any) -> Optional[str]:
    """None / NaN / 공백 문자열은 None, 숫자는 문자열로"""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            value = int(value)
    text = str(value).strip()
    return text or None


def feature_ref_from_properties(properties: Optional[Mapping[str, Any]]) -> FeatureRef:
    """
    GeoJSON properties 에서 Resolver 입력 생성

    Args:
        properties: feature 의 properties (없거나 dict 가 아니어도 됨)

    Returns:
        FeatureRef (누락된 값은 None)
    """
    if not isinstance(properties, Mapping):
        return FeatureRef()

    return FeatureRef(
        display_name=_clean(properties.get(GEOJSON_NAME_PROPERTY)),
        alt_id=_clean(properties.get(GEOJSON_ALT_ID_PROPERTY)),
    )


def resolve(feature: FeatureRef) -> str:
    """
    feature → 지역 코드

    대응표 → 대체 식별자 → 원래 이름 → 빈 문자열 순으로 찾습니다.
    어떤 입력에도 예외 없이 문자열을 반환합니다.

    Example:
        >>> resolve(FeatureRef(display_name="臺北市"))
        'TPE'
        >>> resolve(FeatureRef(display_name="釣魚臺", alt_id="X01"))
        'X01'
    """
    name = feature.display_name
    if name and name in COUNTY_NAME_TO_ID:
        return COUNTY_NAME_TO_ID[name]
    return feature.alt_id or name or ""


def display_label(feature: FeatureRef, region_id: str) -> str:
    """툴팁 문구: 이름이 없으면 지역 코드"""
    return feature.display_name or region_id
