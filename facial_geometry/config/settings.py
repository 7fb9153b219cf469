"""시스템 설정 클래스 정의"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, TypeVar

from ..utils.config_loader import Config, get_config
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')


def _resolve(config: Optional[Config]) -> Config:
    return config if config is not None else get_config()


def build_from_section(factory: Callable[..., T], section: str, values: Any, **overrides) -> T:
    """
    설정 섹션(dict)으로 객체 생성

    Raises:
        ConfigurationError: 섹션이 매핑이 아니거나 알 수 없는 키가 있는 경우
    """
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ConfigurationError(f"'{section}' section must be a mapping, got {type(values).__name__}")

    kwargs = dict(values)
    kwargs.update(overrides)
    try:
        return factory(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Invalid '{section}' settings: {e}")


@dataclass
class DetectionConfig:
    """얼굴 검출 설정"""

    # MediaPipe FaceMesh 설정
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    max_num_faces: int = 1
    refine_landmarks: bool = True  # 눈/입 주변 정밀 검출

    # 처리 모드
    static_image_mode: bool = False  # True: 이미지, False: 비디오
    enable_face_geometry: bool = True

    def __post_init__(self):
        """설정 값 검증"""
        if not 0.0 <= self.min_detection_confidence <= 1.0:
            raise ConfigurationError("min_detection_confidence must be between 0 and 1")
        if not 0.0 <= self.min_tracking_confidence <= 1.0:
            raise ConfigurationError("min_tracking_confidence must be between 0 and 1")
        if self.max_num_faces < 1:
            raise ConfigurationError("max_num_faces must be >= 1")

    @classmethod
    def from_config(cls, config: Optional[Config] = None, **overrides) -> 'DetectionConfig':
        """config.yaml 의 mediapipe.detection 섹션으로 생성"""
        config = _resolve(config)
        return build_from_section(cls, 'mediapipe.detection', config.get('mediapipe.detection'), **overrides)


@dataclass
class ClassificationThresholds:
    """
    얼굴 특징 분류 임계값

    모든 값은 검증되지 않은 경험적 추정치이며, 라벨링된 데이터로 보정하기
    전까지는 임시값으로 취급해야 한다.
    """

    # 얼굴형 (세로/가로 비율, 턱/얼굴 너비 비율)
    oblong_ratio: float = 1.5
    round_ratio: float = 1.2
    square_jaw_ratio: float = 0.9
    heart_jaw_ratio: float = 0.8

    # 입술 (가로/세로)
    lip_wide_ratio: float = 4.0
    lip_full_ratio: float = 3.0

    # 눈 (가로/세로)
    eye_wide_ratio: float = 3.0
    eye_round_ratio: float = 2.0

    # 턱선 내각 (도)
    jaw_angular_angle: float = 160.0
    jaw_soft_angle: float = 140.0

    def __post_init__(self):
        """상한/하한 순서 검증"""
        pairs = [
            ('round_ratio', 'oblong_ratio'),
            ('heart_jaw_ratio', 'square_jaw_ratio'),
            ('lip_full_ratio', 'lip_wide_ratio'),
            ('eye_round_ratio', 'eye_wide_ratio'),
            ('jaw_soft_angle', 'jaw_angular_angle'),
        ]
        for low, high in pairs:
            if getattr(self, low) > getattr(self, high):
                raise ConfigurationError(f"{low} must be <= {high}")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'ClassificationThresholds':
        """config.yaml 의 classification 섹션으로 생성"""
        config = _resolve(config)
        defaults = cls()
        return cls(
            oblong_ratio=config.get('classification.face.oblong_ratio', defaults.oblong_ratio),
            round_ratio=config.get('classification.face.round_ratio', defaults.round_ratio),
            square_jaw_ratio=config.get('classification.face.square_jaw_ratio', defaults.square_jaw_ratio),
            heart_jaw_ratio=config.get('classification.face.heart_jaw_ratio', defaults.heart_jaw_ratio),
            lip_wide_ratio=config.get('classification.lip.wide_ratio', defaults.lip_wide_ratio),
            lip_full_ratio=config.get('classification.lip.full_ratio', defaults.lip_full_ratio),
            eye_wide_ratio=config.get('classification.eye.wide_ratio', defaults.eye_wide_ratio),
            eye_round_ratio=config.get('classification.eye.round_ratio', defaults.eye_round_ratio),
            jaw_angular_angle=config.get('classification.jawline.angular_angle', defaults.jaw_angular_angle),
            jaw_soft_angle=config.get('classification.jawline.soft_angle', defaults.jaw_soft_angle),
        )


@dataclass
class TrackingConfig:
    """얼굴 검출 디바운스 설정"""

    detect_frames: int = 1
    lost_frames: int = 10
    confidence_frames: int = 10
    classification_interval: int = 30

    def __post_init__(self):
        if self.detect_frames < 1:
            raise ConfigurationError("detect_frames must be >= 1")
        if self.lost_frames < 0:
            raise ConfigurationError("lost_frames must be >= 0")
        if self.confidence_frames < 1:
            raise ConfigurationError("confidence_frames must be >= 1")
        if self.classification_interval < 1:
            raise ConfigurationError("classification_interval must be >= 1")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'TrackingConfig':
        config = _resolve(config)
        return build_from_section(cls, 'tracking', config.get('tracking'))


@dataclass
class VisualizationStyle:
    """시각화 스타일 설정"""

    # 색상 (BGR 형식)
    region_color: Tuple[int, int, int] = (0, 255, 255)  # 노란색
    bbox_color: Tuple[int, int, int] = (0, 255, 0)  # 녹색
    text_color: Tuple[int, int, int] = (255, 255, 255)

    # 두께
    region_thickness: int = 1
    bbox_thickness: int = 3

    # bbox 여백 (픽셀)
    bbox_padding: int = 20
