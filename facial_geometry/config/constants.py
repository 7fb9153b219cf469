"""얼굴 랜드마크 인덱스 및 시스템 상수 정의"""

from typing import Dict, List, Tuple

# MediaPipe FaceMesh 랜드마크 개수 (refine_landmarks=True 이면 478개)
FACE_MESH_LANDMARK_COUNT = 468

# 얼굴형 분석용 주요 포인트
FACE_SHAPE_LANDMARKS: Dict[str, int] = {
    # 세로 측정 (얼굴 높이)
    'forehead_top': 10,        # 이마 상단
    'chin_bottom': 152,        # 턱 끝

    # 가로 측정 (얼굴 너비)
    'temple_left': 234,        # 왼쪽 관자놀이
    'temple_right': 454,       # 오른쪽 관자놀이

    # 턱선 너비
    'jaw_left': 172,           # 턱선 왼쪽
    'jaw_right': 397,          # 턱선 오른쪽
}

# 입술 형태 분석용 포인트
LIP_LANDMARKS: Dict[str, int] = {
    'upper_center': 0,         # 윗입술 중앙
    'lower_center': 17,        # 아랫입술 중앙
    'left_corner': 61,         # 왼쪽 입꼬리
    'right_corner': 291,       # 오른쪽 입꼬리
}

# 눈 형태 분석용 주요 포인트 (분류는 left_eye 하나로 측정)
EYE_LANDMARKS: Dict[str, Dict[str, int]] = {
    'left_eye': {
        'top': 159,            # 상단 중앙
        'bottom': 145,         # 하단 중앙
        'inner_corner': 133,   # 내안각
        'outer_corner': 33,    # 외안각
    },
}

# 턱선 윤곽 (왼쪽 턱 → 턱 끝 → 오른쪽 턱)
JAWLINE_CONTOUR: List[int] = [172, 136, 150, 152, 149, 148, 397]

# 코 끝 (움직임 추적 기준점)
NOSE_TIP = 1

# 메이크업 오버레이 영역별 인덱스
MAKEUP_REGION_INDICES: Dict[str, List[int]] = {
    'left_eye': [33, 7, 163, 144, 145, 153, 154, 155, 133, 173,
                 157, 158, 159, 160, 161, 246],
    'right_eye': [362, 382, 381, 380, 374, 373, 390, 249, 263, 466,
                  388, 387, 386, 385, 384, 398],
    'lips': [61, 146, 91, 181, 84, 17, 314, 405, 321, 375,
             291, 409, 270, 269, 267, 0],
    'left_cheek': [116, 123, 147, 187, 207, 216],
    'right_cheek': [346, 345, 376, 411, 427, 436],
    'forehead': [10, 8, 6, 191, 251, 284, 332, 297, 338],
    'left_eyebrow': [282, 295, 300, 293, 334],
    'right_eyebrow': [52, 65, 70, 63, 105],
}

# 분류기가 참조하는 모든 인덱스
REQUIRED_LANDMARK_INDICES: Tuple[int, ...] = tuple(sorted(
    set(FACE_SHAPE_LANDMARKS.values())
    | set(LIP_LANDMARKS.values())
    | set(EYE_LANDMARKS['left_eye'].values())
    | set(JAWLINE_CONTOUR)
))

# 피부톤 샘플링 영역
SKIN_SAMPLE_REGIONS: List[str] = ['left_cheek', 'right_cheek', 'forehead']

# 기본 프레임 크기 (정규화 좌표 → 픽셀 변환용)
DEFAULT_FRAME_SIZE: Tuple[int, int] = (640, 480)

# 제품별 기본 색상 (HEX)
LIPSTICK_SHADES: Dict[str, str] = {
    "Classic Red": "#DC143C",
    "Pink Bliss": "#FF69B4",
    "Nude Beige": "#D29682",
    "Coral Pop": "#FF7F50",
    "Berry Wine": "#963250",
    "Deep Wine": "#800020",
}

EYESHADOW_SHADES: Dict[str, str] = {
    "Warm Brown": "#8B5A3C",
    "Golden Shimmer": "#DAA520",
    "Purple Haze": "#9370DB",
    "Neutral Taupe": "#A99589",
    "Blue Velvet": "#6495ED",
}

BLUSH_SHADES: Dict[str, str] = {
    "Peach": "#FFB38A",
    "Rose": "#E8879C",
    "Berry": "#B5485D",
}

FOUNDATION_SHADES: Dict[str, str] = {
    "Fair Porcelain": "#FFE4C4",
    "Light Beige": "#F5DEB3",
    "Medium Tan": "#DEB887",
    "Deep Caramel": "#CD853F",
    "Rich Mocha": "#8B5A3C",
}

PRODUCT_SHADES: Dict[str, Dict[str, str]] = {
    'lips': LIPSTICK_SHADES,
    'eyes': EYESHADOW_SHADES,
    'cheeks': BLUSH_SHADES,
    'foundation': FOUNDATION_SHADES,
}
