"""
경계 하이라이트 모듈

매칭 지역 집합과 hover 상태로 각 縣市 경계의 스타일을 결정합니다.
우선순위: hover > 매칭 > 비매칭
"""

from __future__ import annotations

from enum import Enum
from typing import AbstractSet

from .config import PALETTE, FILL_OPACITY
from .models import PathStyle


def style_for(region_id: str, match_set: AbstractSet[str], hovered: bool = False) -> PathStyle:
    """
    경계 스타일 계산

    Args:
        region_id: 정규화된 지역 코드
        match_set: regions_with_match() 결과
        hovered: 마우스가 올라가 있는지 여부

    Returns:
        PathStyle (hover 는 테두리만 바꾸고 채우기는 매칭 상태를 따름)
    """
    base = PALETTE["active"] if region_id in match_set else PALETTE["inactive"]
    stroke = PALETTE["hover"] if hovered else base

    return PathStyle(
        stroke_color=stroke["stroke_color"],
        stroke_weight=stroke["stroke_weight"],
        fill_color=base["fill_color"],
        fill_opacity=FILL_OPACITY,
    )


class HoverState(Enum):
    IDLE = "idle"
    HOVERED = "hovered"


class FeatureInteraction:
    """
    경계 하나의 hover 상태 머신

    IDLE --pointer_enter--> HOVERED --pointer_leave--> IDLE
    click 은 상태를 바꾸지 않고 선택할 지역 코드만 돌려줍니다.
    """

    def __init__(self, region_id: str):
        self.region_id = region_id
        self.state = HoverState.IDLE

    @property
    def hovered(self) -> bool:
        return self.state is HoverState.HOVERED

    def pointer_enter(self) -> None:
        self.state = HoverState.HOVERED

    def pointer_leave(self) -> None:
        self.state = HoverState.IDLE

    def click(self) -> str:
        return self.region_id

    def style(self, match_set: AbstractSet[str]) -> PathStyle:
        return style_for(self.region_id, match_set, self.hovered)
