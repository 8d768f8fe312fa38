"""
프로젝트 설정 모듈

모든 하드코딩된 값들을 중앙 관리합니다.
- 파일 경로
- 縣市 이름 ↔ 지역 코드 대응표
- GeoJSON 속성명
- 지도 색상 / 시각화 설정
"""

from pathlib import Path
from typing import Dict, List


# =============================================================================
# 경로 설정
# =============================================================================

def get_project_root() -> Path:
    """프로젝트 루트 경로 반환"""
    return Path(__file__).parent.parent


def get_data_path() -> Path:
    """데이터 디렉토리 경로 반환"""
    return get_project_root() / "data"


def get_geo_path() -> Path:
    """지리 데이터 경로 반환"""
    return get_data_path() / "geo"


def get_output_path() -> Path:
    """출력 디렉토리 경로 반환"""
    return get_project_root() / "outputs"


# =============================================================================
# 파일명 설정
# =============================================================================

REGIONS_FILE: str = "regions.json"
CROPS_FILE: str = "crops.json"

# 縣市 경계 GeoJSON 파일명
GEOJSON_FILE: str = "taiwan-counties.geojson"

# JSON 파일 기본 인코딩
DEFAULT_ENCODING: str = "utf-8"

# CSV 내보내기 인코딩 (엑셀 호환)
EXPORT_ENCODING: str = "utf-8-sig"


# =============================================================================
# 지역 설정
# =============================================================================

# GeoJSON 縣市名稱 → regions.json 의 id
COUNTY_NAME_TO_ID: Dict[str, str] = {
    "新北市": "NTP",
    "臺中市": "TXG",
    "高雄市": "KHH",
    "臺北市": "TPE",
    "桃園市": "TYN",
    "新竹縣": "HSC",
    "宜蘭縣": "ILA",
    "花蓮縣": "HUA",
    "臺東縣": "TTT",
    "苗栗縣": "MIA",
    "彰化縣": "CHW",
    "南投縣": "NAN",
    "雲林縣": "YUN",
    "嘉義市": "CYI",
    "嘉義縣": "CYU",
    "臺南市": "TNN",
    "屏東縣": "PIF",
    "澎湖縣": "PGM",
    "金門縣": "KMN",
    "連江縣": "LNN",
}

# GeoJSON 속성명 (표시명 / 대체 식별자)
GEOJSON_NAME_PROPERTY: str = "COUNTYNAME"
GEOJSON_ALT_ID_PROPERTY: str = "COUNTY_ID"

# GeoJSON feature 에 주입하는 정규화된 지역 코드 속성명
RESOLVED_ID_PROPERTY: str = "region_id"


# =============================================================================
# 월 설정
# =============================================================================

MONTHS: List[int] = list(range(1, 13))


# =============================================================================
# 시각화 설정
# =============================================================================

# 지도 기본 설정
MAP_CONFIG: Dict[str, any] = {
    "center": [23.7, 121.0],  # 대만 중심 좌표
    "zoom": 7,
    "max_zoom": 18,
    "tiles": "OpenStreetMap",
}

# 경계 색상 (hover > 매칭 > 비매칭)
PALETTE: Dict[str, Dict[str, any]] = {
    "hover": {
        "stroke_color": "#1f2937",
        "stroke_weight": 3,
    },
    "active": {
        "stroke_color": "#2563eb",
        "stroke_weight": 2,
        "fill_color": "#93c5fd",
    },
    "inactive": {
        "stroke_color": "#cbd5e1",
        "stroke_weight": 1,
        "fill_color": "#e2e8f0",
    },
}

FILL_OPACITY: float = 0.6

# 타임라인 카드 색상 {채널: (배경, 테두리)}
TIMELINE_COLORS: Dict[str, tuple] = {
    "sowing": ("#ecfccb", "#bef264"),
    "fertilization": ("#e0f2fe", "#7dd3fc"),
    "harvest": ("#fef3c7", "#fcd34d"),
}


# =============================================================================
# 화면 문구 (원문 그대로 고정)
# =============================================================================

LABELS: Dict[str, str] = {
    "title": "台灣作物時序地圖",
    "all_crops": "全部作物",
    "clear_month": "清除",
    "clear_all": "清除全部",
    "map_heading": "互動地圖",
    "hint": "提示：點選縣市可在右側查看該地的作物卡；上方可依「作物」或「月份」過濾。",
    "choose_region": "請從地圖選擇縣市或使用上方篩選",
    "region_heading": "{name} — 作物資訊",
    "sowing": "播種",
    "fertilization": "施肥｜{stage}",
    "harvest": "採收／盛產",
    "empty": "沒有符合條件的作物資料。請更換篩選。",
    "loading": "地圖載入中…",
    "source": "資料來源：作物施肥手冊、農糧署統計；更新：{date}",
}
