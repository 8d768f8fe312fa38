"""
필터 엔진 모듈

(지역, 작물, 월) 필터 조합으로 작물 레코드를 걸러내고,
지도 하이라이트용 "데이터가 있는 지역" 집합을 계산합니다.

Note:
    지역 하이라이트 집합은 작물/월 필터에만 의존합니다.
    선택된 지역(active_region)과 무관하게 계산해야 다른 지역에
    데이터가 있다는 것을 지도에서 계속 보여줄 수 있습니다.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from .models import CropRecord, FilterState, Region
from .temporal import touches_month


def _passes(record: CropRecord, crop_filter: Optional[str], month: Optional[int]) -> bool:
    """작물 + 월 조건 (지역 조건 제외)"""
    if crop_filter is not None and record.crop != crop_filter:
        return False
    return touches_month(record, month)


def filter_records(
    records: Sequence[CropRecord],
    state: FilterState,
    known_region_ids: Optional[Iterable[str]] = None
) -> List[CropRecord]:
    """
    필터 조건을 모두 만족하는 레코드 (입력 순서 유지)

    Args:
        records: 작물 레코드 목록 (로드 전이면 빈 목록)
        state: 필터 상태 (모든 조건 AND)
        known_region_ids: 주어지면 목록에 없는 지역 코드의 레코드는 제외

    Returns:
        원래 순서를 유지한 부분 목록

    Example:
        >>> filter_records(records, FilterState(month=3))
        [CropRecord(region_id='TPE', crop='Rice', ...)]
    """
    known = set(known_region_ids) if known_region_ids is not None else None

    return [
        record for record in records
        if (known is None or record.region_id in known)
        and (state.active_region is None or record.region_id == state.active_region)
        and _passes(record, state.crop_filter, state.month)
    ]


def regions_with_match(
    regions: Sequence[Region],
    records: Sequence[CropRecord],
    state: FilterState
) -> Set[str]:
    """
    작물/월 필터를 만족하는 레코드가 하나라도 있는 지역 코드 집합

    state.active_region 은 무시합니다.

    Args:
        regions: 기준 지역 목록
        records: 작물 레코드 목록
        state: 필터 상태

    Returns:
        매칭 지역 코드 집합
    """
    hit_ids = {
        record.region_id for record in records
        if _passes(record, state.crop_filter, state.month)
    }
    return {region.id for region in regions if region.id in hit_ids}


def crop_options(records: Iterable[CropRecord]) -> List[str]:
    """작물 선택 목록 (전체 지역 기준, 대소문자 구분, 정렬)"""
    return sorted({record.crop for record in records})
