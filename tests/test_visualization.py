"""시각화 모듈 테스트"""

import pytest
import folium
import sys
from pathlib import Path

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from crop_atlas.atlas import CropAtlas
from crop_atlas.config import LABELS
from crop_atlas.models import CropRecord, FertilizationStage, Region
from crop_atlas.visualization import CropAtlasVisualizer, create_atlas_map


@pytest.fixture
def atlas():
    return CropAtlas().load_data()


@pytest.fixture
def visualizer(atlas):
    """테스트용 visualizer 생성"""
    return CropAtlasVisualizer(atlas)


def render(m: folium.Map) -> str:
    return m.get_root().render()


class TestCropAtlasVisualizer:
    """CropAtlasVisualizer 클래스 테스트"""

    def test_create_map(self, visualizer):
        """지도 생성 테스트"""
        m = visualizer.create_map()
        assert isinstance(m, folium.Map)
        assert visualizer.layer is not None

        html = render(m)
        assert LABELS["title"] in html
        assert LABELS["choose_region"] in html

    def test_single_map_handle(self, visualizer):
        """여러 번 호출해도 같은 지도 / 같은 레이어"""
        m1 = visualizer.create_map()
        layer = visualizer.layer
        m2 = visualizer.create_map()
        assert m1 is m2
        assert visualizer.layer is layer

    def test_refresh_restyles_existing_layer(self, atlas, visualizer):
        """필터 변경 후 refresh: 레이어는 유지, 스타일만 변경"""
        visualizer.create_map()
        layer = visualizer.layer
        chw = {"properties": {"region_id": "CHW"}}

        assert layer.style_function(chw)["weight"] == 2

        atlas.set_crop_filter("茶")
        visualizer.refresh()
        assert visualizer.layer is layer
        assert layer.style_function(chw)["weight"] == 1
        assert layer.highlight_function(chw)["weight"] == 3

    def test_records_panel(self, atlas, visualizer):
        atlas.select_region("CHW")
        html = render(visualizer.create_map())
        assert "彰化縣 — 作物資訊" in html
        assert "葡萄" in html
        assert LABELS["sowing"] in html
        assert LABELS["fertilization"].format(stage="基肥") in html

    def test_empty_message(self, atlas, visualizer):
        atlas.select_region("TPE")
        atlas.toggle_month(7)
        html = render(visualizer.create_map())
        assert LABELS["empty"] in html

    def test_panel_replaced_on_rerender(self, atlas, visualizer):
        """다시 그리면 이전 패널은 교체됨"""
        atlas.select_region("CHW")
        visualizer.create_map()
        atlas.select_region("TPE")
        html = render(visualizer.create_map())
        assert "臺北市 — 作物資訊" in html
        assert "彰化縣 — 作物資訊" not in html

    def test_data_strings_escaped(self, atlas, visualizer):
        """작물 / 시비 단계 / 지역 이름의 HTML 특수문자는 이스케이프"""
        atlas.regions = [Region("TPE", "<i>臺北&</i>")]
        atlas.records = [CropRecord(
            "TPE", "<b>&", frozenset({1}),
            fertilization=(FertilizationStage("<script>x</script>", frozenset({2})),),
        )]
        atlas.select_region("TPE")
        html = render(visualizer.create_map())

        assert "&lt;b&gt;&amp;" in html
        assert "<option><b>&</option>" not in html
        assert "&lt;script&gt;x&lt;/script&gt;" in html
        assert "<script>x</script>" not in html
        assert "&lt;i&gt;臺北&amp;&lt;/i&gt;" in html

    def test_loading_before_data(self):
        viz = CropAtlasVisualizer(CropAtlas())
        html = render(viz.create_map())
        assert LABELS["loading"] in html
        assert viz.layer is None

    def test_close(self, visualizer):
        visualizer.create_map()
        visualizer.close()
        assert visualizer.map is None
        assert visualizer.layer is None

    def test_save_requires_map(self, visualizer, tmp_path):
        with pytest.raises(ValueError, match="create_map"):
            visualizer.save_map("map.html", tmp_path)

    def test_save_map(self, visualizer, tmp_path):
        visualizer.create_map()
        path = visualizer.save_map("map.html", tmp_path)
        assert path.exists()
        assert LABELS["title"] in path.read_text(encoding="utf-8")


class TestCreateAtlasMap:
    """create_atlas_map 함수 테스트"""

    def test_create_map_without_save(self):
        """저장 없이 지도 생성 테스트"""
        m = create_atlas_map(crop="水稻", month=3, save=False)
        assert isinstance(m, folium.Map)

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            create_atlas_map(month=13, save=False)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
