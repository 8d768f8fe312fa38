"""
월 포함 여부 판정 모듈

파종 / 수확 / 시비 세 시기 중 하나라도 해당 월에 걸치면 매칭으로 봅니다.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, List, Optional, Tuple

from .config import MONTHS
from .models import CropRecord


def months_of(values: Optional[Iterable[Any]]) -> FrozenSet[int]:
    """
    월 값 정규화

    1~12 정수로 바꿀 수 있는 값만 남깁니다 ("3" → 3, 0 / 13 / "x" 는 버림).
    """
    if values is None or isinstance(values, (str, bytes)):
        return frozenset()

    try:
        items = list(values)
    except TypeError:
        # 반복 불가능한 값
        return frozenset()

    result = set()
    for value in items:
        if isinstance(value, bool):
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                continue
            value = int(value)
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, int) and value in MONTHS:
            result.add(value)
    return frozenset(result)


def touches_month(record: CropRecord, month: Optional[int]) -> bool:
    """
    레코드의 시기 중 하나라도 month 에 걸치는지 여부

    Args:
        record: 작물 레코드
        month: 1~12, None 이면 월 필터 없음 (항상 True)

    Returns:
        month ∈ 파종 ∪ 수확 ∪ (모든 시비 단계의 월)
    """
    if month is None:
        return True

    if month in (record.sowing or ()):
        return True
    if month in (record.harvest or ()):
        return True
    return any(month in (stage.months or ()) for stage in (record.fertilization or ()))


def month_strip(months: Iterable[int]) -> List[Tuple[str, bool]]:
    """타임라인 카드용 12칸 (라벨, 활성 여부)"""
    active = months_of(months)
    return [(str(m), m in active) for m in MONTHS]
