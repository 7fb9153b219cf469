"""데이터 모델 정의"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple
from enum import Enum
import time

import numpy as np

from .utils.validators import parse_hex_color, validate_intensity

Point = Tuple[int, int]


class FaceShape(Enum):
    """얼굴형 분류"""
    OVAL = "Oval"
    OBLONG = "Oblong"      # 세로로 긴형
    ROUND = "Round"        # 둥근형
    SQUARE = "Square"      # 사각형 (턱이 넓음)
    HEART = "Heart"        # 하트형 (턱이 좁음)


class EyeShape(Enum):
    """눈 형태 분류"""
    ALMOND = "Almond"      # 기본형
    WIDE = "Wide"          # 가로로 긴 눈
    ROUND = "Round"        # 둥근 눈


class LipShape(Enum):
    """입술 형태 분류"""
    AVERAGE = "Average"
    WIDE = "Wide"          # 얇고 넓은 입술
    FULL = "Full"          # 도톰한 입술


class JawlineType(Enum):
    """턱선 분류"""
    AVERAGE = "Average"
    ANGULAR = "Angular"    # 직선적인 턱선
    SOFT = "Soft"          # 둥근 턱선


class SkinTone(Enum):
    """피부톤 분류 (L* 기준)"""
    LIGHT = "Light"
    MEDIUM = "Medium"
    TAN = "Tan"
    DEEP = "Deep"


@dataclass
class Landmark:
    """단일 랜드마크 포인트"""

    x: float  # 정규화 x 좌표 (0-1)
    y: float  # 정규화 y 좌표 (0-1)
    z: float = 0.0  # 깊이 정보 (상대적)
    visibility: float = 1.0  # 가시성 점수 (0-1)

    # 픽셀 좌표 (계산 후 저장)
    pixel_x: Optional[int] = None
    pixel_y: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'x': self.x,
            'y': self.y,
            'z': self.z,
            'visibility': self.visibility,
            'pixel_x': self.pixel_x,
            'pixel_y': self.pixel_y,
        }


@dataclass
class FeatureMeasurements:
    """분류에 사용된 측정값"""

    face_width: float
    face_height: float
    face_ratio: float          # 세로/가로
    jaw_width: float
    jaw_ratio: float           # 턱/얼굴 너비
    lip_ratio: float           # 입술 가로/세로
    eye_ratio: float           # 눈 가로/세로
    jaw_angle: float           # 턱선 평균 내각 (도)
    jaw_angles: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'face_width': round(self.face_width, 2),
            'face_height': round(self.face_height, 2),
            'face_ratio': round(self.face_ratio, 3),
            'jaw_width': round(self.jaw_width, 2),
            'jaw_ratio': round(self.jaw_ratio, 3),
            'lip_ratio': round(self.lip_ratio, 3),
            'eye_ratio': round(self.eye_ratio, 3),
            'jaw_angle': round(self.jaw_angle, 2),
            'jaw_angles': [round(a, 2) for a in self.jaw_angles],
        }


@dataclass
class FacialClassification:
    """얼굴 특징 분류 결과 (프레임마다 재계산)"""

    face_shape: FaceShape
    eye_shape: EyeShape
    lip_shape: LipShape
    jawline_type: JawlineType
    skin_tone: SkinTone = SkinTone.MEDIUM
    measurements: Optional[FeatureMeasurements] = None

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환 (UI 호환 camelCase 키)"""
        result = {
            'faceShape': self.face_shape.value,
            'eyeShape': self.eye_shape.value,
            'lipShape': self.lip_shape.value,
            'jawlineType': self.jawline_type.value,
            'skinTone': self.skin_tone.value,
        }
        if self.measurements:
            result['measurements'] = self.measurements.to_dict()
        return result


@dataclass
class MakeupRegion:
    """오버레이용 메이크업 영역 (폴리곤 + 중심점)"""

    name: str
    points: List[Point]
    center: Point

    def as_array(self) -> np.ndarray:
        """OpenCV fillPoly 용 int32 배열"""
        return np.array(self.points, dtype=np.int32).reshape((-1, 1, 2))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.name,
            'region': {
                'points': [{'x': x, 'y': y} for x, y in self.points],
                'center': {'x': self.center[0], 'y': self.center[1]},
            },
        }


@dataclass
class MakeupRegions:
    """이름별 메이크업 영역 모음"""

    regions: Dict[str, MakeupRegion] = field(default_factory=dict)

    def get(self, name: str) -> Optional[MakeupRegion]:
        return self.regions.get(name)

    def __getitem__(self, name: str) -> MakeupRegion:
        return self.regions[name]

    def __contains__(self, name: str) -> bool:
        return name in self.regions

    def __iter__(self) -> Iterator[MakeupRegion]:
        return iter(self.regions.values())

    def __len__(self) -> int:
        return len(self.regions)

    def names(self) -> List[str]:
        return list(self.regions.keys())

    def to_dict(self) -> Dict[str, Any]:
        return {name: region.to_dict() for name, region in self.regions.items()}


@dataclass
class ProductSetting:
    """제품별 색상/강도 설정"""

    color: str                 # '#RRGGBB'
    intensity: float = 0.5     # 0-1
    glossy: bool = False       # 립 전용
    style: Optional[str] = None  # 아이 전용 (예: 'smokey')
    coverage: Optional[float] = None  # 파운데이션 전용, 없으면 intensity 사용

    def __post_init__(self):
        """색상/강도 검증"""
        parse_hex_color(self.color)
        validate_intensity(self.intensity)
        if self.coverage is not None:
            validate_intensity(self.coverage, "coverage")

    @property
    def bgr(self) -> Tuple[int, int, int]:
        return parse_hex_color(self.color)

    @property
    def effective_coverage(self) -> float:
        return self.coverage if self.coverage is not None else self.intensity

    def to_dict(self) -> Dict[str, Any]:
        result = {'color': self.color, 'intensity': self.intensity}
        if self.glossy:
            result['glossy'] = True
        if self.style:
            result['style'] = self.style
        if self.coverage is not None:
            result['coverage'] = self.coverage
        return result


@dataclass
class MakeupConfiguration:
    """사용자가 선택한 메이크업 설정 (UI 상태)"""

    eyes: Optional[ProductSetting] = None
    lips: Optional[ProductSetting] = None
    cheeks: Optional[ProductSetting] = None
    foundation: Optional[ProductSetting] = None

    PRODUCTS = ('foundation', 'eyes', 'lips', 'cheeks')

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.PRODUCTS)

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Any]]) -> 'MakeupConfiguration':
        """{'lips': {'color': '#ff0000', 'intensity': 0.6}, ...} 형식에서 생성"""
        unknown = set(data) - set(cls.PRODUCTS)
        if unknown:
            raise ValueError(f"Unknown makeup products: {sorted(unknown)}")
        return cls(**{name: ProductSetting(**values) for name, values in data.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: getattr(self, name).to_dict()
            for name in self.PRODUCTS
            if getattr(self, name) is not None
        }


@dataclass
class FaceGeometry:
    """얼굴 기하학 정보"""

    # 얼굴 각도 (도 단위)
    pitch: float = 0.0  # 상하 회전
    yaw: float = 0.0    # 좌우 회전
    roll: float = 0.0   # 기울기

    # 크기 (픽셀)
    face_width: float = 0.0
    face_height: float = 0.0


@dataclass
class MovementData:
    """코 끝 기준 얼굴 움직임"""

    x: float = 0.0
    y: float = 0.0
    magnitude: float = 0.0
    timestamp: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {'x': round(self.x, 2), 'y': round(self.y, 2), 'magnitude': round(self.magnitude, 2)}


@dataclass
class DetectedAction:
    """움직임에서 추정한 동작"""

    action: str
    confidence: float
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {'action': self.action, 'confidence': round(self.confidence, 2), 'timestamp': self.timestamp}


@dataclass
class TrackingState:
    """얼굴 검출 디바운스 상태"""

    face_detected: bool = False
    confidence: float = 0.0
    successful_detections: int = 0
    missed_detections: int = 0
    changed: bool = False       # 이번 업데이트에서 face_detected 가 바뀌었는지
    should_analyze: bool = False  # 이번 프레임에서 분류를 수행할지


@dataclass
class DetectionResult:
    """얼굴 검출 결과"""

    success: bool
    landmarks: List[Landmark] = field(default_factory=list)
    confidence: float = 0.0
    bounding_box: Tuple[int, int, int, int] = (0, 0, 0, 0)  # (x, y, w, h)
    face_geometry: Optional[FaceGeometry] = None
    processing_time: float = 0.0  # ms


@dataclass
class ProcessedResult:
    """프레임 처리 결과"""

    original_image: np.ndarray
    annotated_image: Optional[np.ndarray] = None
    detection_result: Optional[DetectionResult] = None
    tracking: Optional[TrackingState] = None
    movement: Optional[MovementData] = None
    trends: Optional[MovementData] = None  # 최근 평균 움직임
    actions: List[DetectedAction] = field(default_factory=list)  # 최신 동작이 앞쪽
    regions: Optional[MakeupRegions] = None
    classification: Optional[FacialClassification] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """메타데이터 초기화"""
        if 'timestamp' not in self.metadata:
            self.metadata['timestamp'] = time.time()
