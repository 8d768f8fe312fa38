"""
작물 시기 지도 시각화 모듈

Folium을 활용한 대만 縣市별 작물 시기(파종/시비/수확) 지도
- 작물 / 월 필터에 해당하는 縣市 강조
- 선택한 縣市의 작물 카드 패널

Note:
    경계 레이어는 한 번만 만들고, 필터가 바뀌면 refresh()로
    스타일 함수만 다시 연결합니다 (GeoJSON 재로딩 없음).
"""

from __future__ import annotations

import html
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import folium

from .atlas import CropAtlas
from .config import (
    LABELS,
    MAP_CONFIG,
    MONTHS,
    RESOLVED_ID_PROPERTY,
    TIMELINE_COLORS,
    get_output_path,
)
from .highlight import style_for
from .models import CropRecord
from .resolver import display_label, feature_ref_from_properties
from .temporal import month_strip


logger = logging.getLogger(__name__)


class CropAtlasVisualizer:
    """
    작물 시기 지도 시각화 클래스

    folium.Map 핸들과 경계 레이어를 소유합니다.
    init_map()에서 한 번 만들고 close()에서 해제합니다.

    Example:
        >>> atlas = CropAtlas().load_data()
        >>> viz = CropAtlasVisualizer(atlas)
        >>> atlas.toggle_month(3)
        >>> m = viz.create_map()
        >>> viz.save_map("map_3월.html")
    """

    def __init__(self, atlas: CropAtlas):
        self.atlas = atlas
        self.map: Optional[folium.Map] = None
        self.layer: Optional[folium.GeoJson] = None

    # -------------------------------------------------------------------------
    # 지도 핸들
    # -------------------------------------------------------------------------

    def init_map(self, tiles: Optional[str] = None) -> folium.Map:
        """지도 생성 (이미 있으면 그대로 반환)"""
        if self.map is not None:
            return self.map

        self.map = folium.Map(
            location=MAP_CONFIG["center"],
            zoom_start=MAP_CONFIG["zoom"],
            max_zoom=MAP_CONFIG["max_zoom"],
            tiles=tiles or MAP_CONFIG["tiles"],
            zoom_control=True,
            attribution_control=False,
        )
        return self.map

    def close(self) -> None:
        """지도 핸들과 레이어 해제"""
        self.map = None
        self.layer = None

    def create_map(self, tiles: Optional[str] = None) -> folium.Map:
        """
        지도 시각화 생성

        여러 번 호출해도 지도와 경계 레이어는 하나만 유지되고
        패널 HTML 만 현재 필터 상태로 교체됩니다.

        Args:
            tiles: 지도 타일 스타일

        Returns:
            Folium Map 객체
        """
        m = self.init_map(tiles)

        if not self.atlas.is_ready:
            self._add_loading(m)
            return m

        self._add_header(m)

        if self.atlas.boundaries is not None:
            self._add_boundaries(m)

        self._add_records_panel(m)
        self._add_footer(m)

        return m

    # -------------------------------------------------------------------------
    # 경계 레이어
    # -------------------------------------------------------------------------

    def _feature_collection(self) -> Dict[str, Any]:
        """GeoDataFrame → FeatureCollection (툴팁 라벨 포함)"""
        collection = json.loads(self.atlas.boundaries.to_json())

        for feature in collection["features"]:
            props = feature.setdefault("properties", {}) or {}
            region_id = props.get(RESOLVED_ID_PROPERTY, "")
            props["label"] = html.escape(display_label(feature_ref_from_properties(props), region_id))
            feature["properties"] = props

        return collection

    def _add_boundaries(self, m: folium.Map) -> None:
        """縣市 경계 추가 (한 번만)"""
        if self.layer is not None:
            self.refresh()
            return

        self.layer = folium.GeoJson(
            self._feature_collection(),
            name="counties",
            style_function=self._style_function(),
            highlight_function=self._highlight_function(),
            tooltip=folium.GeoJsonTooltip(fields=["label"], labels=False),
        )
        self.layer.add_to(m)

    def _style_function(self):
        matches = self.atlas.match_set()

        def style_function(feature):
            region_id = feature.get("properties", {}).get(RESOLVED_ID_PROPERTY, "")
            return style_for(region_id, matches).to_leaflet()

        return style_function

    def _highlight_function(self):
        matches = self.atlas.match_set()

        def highlight_function(feature):
            region_id = feature.get("properties", {}).get(RESOLVED_ID_PROPERTY, "")
            return style_for(region_id, matches, hovered=True).to_leaflet()

        return highlight_function

    def refresh(self) -> None:
        """필터 변경 반영: 스타일만 다시 계산"""
        if self.layer is None:
            return

        self.layer.style_function = self._style_function()
        self.layer.highlight_function = self._highlight_function()

    # -------------------------------------------------------------------------
    # 패널
    # -------------------------------------------------------------------------

    def _set_overlay(self, m: folium.Map, key: str, content: str) -> None:
        """고정 위치 HTML 추가 (같은 key 는 교체)"""
        m.get_root().html.add_child(folium.Element(content), name=f"atlas-{key}")

    def _add_loading(self, m: folium.Map) -> None:
        loading_html = f'''
            <div style="position: fixed; top: 15px; left: 60px; z-index: 9999;
                        padding: 16px; color: #6b7280; background: white;">
                {LABELS["loading"]}
            </div>
        '''
        self._set_overlay(m, "header", loading_html)

    def _add_header(self, m: folium.Map) -> None:
        """제목 + 현재 필터 (작물 목록, 월 버튼)"""
        state = self.atlas.filter_state

        crop_items = "".join(
            f'<option{" selected" if crop == state.crop_filter else ""}>{html.escape(crop)}</option>'
            for crop in self.atlas.crop_options()
        )

        month_buttons = "".join(
            f'''<span style="padding: 2px 7px; border: 1px solid #d1d5db; border-radius: 6px;
                        font-size: 12px; {"background: black; color: white;" if month == state.month else "background: white;"}">{month}</span>'''
            for month in MONTHS
        )

        header_html = f'''
            <div style="position: fixed;
                        top: 15px; left: 60px;
                        z-index: 9999;
                        background: white;
                        padding: 12px 18px;
                        border-radius: 12px;
                        box-shadow: 0 4px 15px rgba(0,0,0,0.15);
                        font-family: 'Microsoft JhengHei', -apple-system, sans-serif;">
                <h3 style="margin: 0 0 8px 0; font-size: 18px; color: #111827;">{LABELS["title"]}</h3>
                <div style="display: flex; gap: 6px; align-items: center; flex-wrap: wrap;">
                    <select disabled style="padding: 2px 6px; border-radius: 6px;">
                        <option{"" if state.crop_filter else " selected"}>{LABELS["all_crops"]}</option>
                        {crop_items}
                    </select>
                    {month_buttons}
                </div>
                <p style="margin: 8px 0 0 0; color: #6b7280; font-size: 11px;">{LABELS["hint"]}</p>
            </div>
        '''
        self._set_overlay(m, "header", header_html)

    def _timeline_row(self, title: str, months, channel: str) -> str:
        """1~12월 타임라인 한 줄"""
        bg, border = TIMELINE_COLORS[channel]

        cells = "".join(
            f'''<div style="height: 20px; border-radius: 5px; font-size: 10px; display: flex;
                        align-items: center; justify-content: center;
                        border: 1px solid {border if active else '#e5e7eb'};
                        background: {bg if active else 'white'};">{label}</div>'''
            for label, active in month_strip(months)
        )

        return f'''
            <div style="margin-bottom: 6px;">
                <div style="font-size: 12px; font-weight: 500; margin-bottom: 3px;">{title}</div>
                <div style="display: grid; grid-template-columns: repeat(12, 1fr); gap: 2px;">{cells}</div>
            </div>
        '''

    def _record_card(self, record: CropRecord) -> str:
        """작물 카드 (파종 → 시비 단계들 → 수확)"""
        rows = self._timeline_row(LABELS["sowing"], record.sowing, "sowing")
        for stage in record.fertilization:
            rows += self._timeline_row(
                LABELS["fertilization"].format(stage=html.escape(stage.stage)), stage.months, "fertilization"
            )
        rows += self._timeline_row(LABELS["harvest"], record.harvest, "harvest")

        return f'''
            <div style="border: 1px solid #e5e7eb; border-radius: 14px; padding: 10px; margin-bottom: 10px;">
                <div style="font-weight: 600; font-size: 14px;">{html.escape(record.crop)}</div>
                <div style="margin-top: 6px;">{rows}</div>
            </div>
        '''

    def _add_records_panel(self, m: folium.Map) -> None:
        """오른쪽 작물 카드 패널"""
        records: List[CropRecord] = self.atlas.visible_records()

        if records:
            cards = "".join(self._record_card(record) for record in records)
        else:
            cards = f'<div style="font-size: 13px; color: #6b7280;">{LABELS["empty"]}</div>'

        panel_html = f'''
            <div id="records-panel" style="
                position: fixed;
                top: 15px; right: 15px;
                z-index: 9999;
                background: white;
                border-radius: 16px;
                box-shadow: 0 8px 32px rgba(0,0,0,0.15);
                width: 360px;
                font-family: 'Microsoft JhengHei', -apple-system, sans-serif;">
                <div style="padding: 14px 18px; border-bottom: 1px solid #eee; font-weight: 600;">
                    {html.escape(self.atlas.panel_title())}
                </div>
                <div style="max-height: 70vh; overflow-y: auto; padding: 12px;">
                    {cards}
                </div>
            </div>
        '''
        self._set_overlay(m, "panel", panel_html)

    def _add_footer(self, m: folium.Map) -> None:
        footer_html = f'''
            <div style="position: fixed; bottom: 10px; left: 15px; z-index: 9999;
                        font-size: 11px; color: #6b7280; background: rgba(255,255,255,0.85);
                        padding: 4px 8px; border-radius: 6px;">
                {LABELS["source"].format(date=date.today().isoformat())}
            </div>
        '''
        self._set_overlay(m, "footer", footer_html)

    def save_map(
        self,
        filename: str = "map.html",
        output_dir: Optional[Path] = None
    ) -> Path:
        """
        지도 HTML 파일 저장

        Args:
            filename: 저장할 파일명
            output_dir: 출력 디렉토리 (기본값: outputs/maps/)

        Returns:
            저장된 파일 경로

        Raises:
            ValueError: create_map()을 먼저 실행하지 않은 경우
        """
        if self.map is None:
            raise ValueError("먼저 create_map()을 실행하세요.")

        if output_dir is None:
            output_dir = get_output_path() / "maps"

        output_dir.mkdir(parents=True, exist_ok=True)
        filepath = output_dir / filename
        self.map.save(str(filepath))

        logger.info("지도 저장: %s", filepath)
        return filepath


def create_atlas_map(
    crop: Optional[str] = None,
    month: Optional[int] = None,
    region: Optional[str] = None,
    save: bool = True,
    data_path: Optional[Path] = None,
    geo_path: Optional[Path] = None
) -> folium.Map:
    """
    작물 시기 지도 생성 (간편 함수)

    Args:
        crop: 작물 필터
        month: 월 필터 (1~12)
        region: 선택 지역 코드
        save: HTML 파일 저장 여부
        data_path: 데이터 디렉토리 경로
        geo_path: 경계 GeoJSON 디렉토리 경로

    Returns:
        Folium Map 객체
    """
    atlas = CropAtlas(data_path, geo_path).load_data()
    atlas.set_crop_filter(crop)
    if month is not None:
        atlas.toggle_month(month)
    atlas.select_region(region)

    viz = CropAtlasVisualizer(atlas)
    m = viz.create_map()

    if save:
        suffix = "_".join(str(v) for v in (region, crop, month) if v) or "all"
        filepath = viz.save_map(f"map_{suffix}.html")
        print(f"지도가 저장되었습니다: {filepath}")

    return m
