"""
facial_geometry

468-point face mesh landmarks → facial feature classification
(face / eye / lip shape, jawline, skin tone) and makeup overlay regions.

MediaPipe 검출기(core.face_detector.FaceDetector)는 필요할 때 직접 import 한다.
"""

__version__ = "0.1.0"

from .models import (
    DetectedAction,
    DetectionResult,
    EyeShape,
    FaceShape,
    FacialClassification,
    FeatureMeasurements,
    JawlineType,
    Landmark,
    LipShape,
    MakeupConfiguration,
    MakeupRegion,
    MakeupRegions,
    MovementData,
    ProcessedResult,
    ProductSetting,
    SkinTone,
    TrackingState,
)
from .processing import (
    FaceDetectionTracker,
    FacialGeometryClassifier,
    FrameProcessor,
    MakeupAdvisor,
    MakeupRegionMapper,
    MakeupRenderer,
    MovementTracker,
    SkinToneEstimator,
)

__all__ = [
    'DetectedAction', 'DetectionResult', 'EyeShape', 'FaceShape',
    'FacialClassification', 'FeatureMeasurements', 'JawlineType', 'Landmark',
    'LipShape', 'MakeupConfiguration', 'MakeupRegion', 'MakeupRegions',
    'MovementData', 'ProcessedResult', 'ProductSetting', 'SkinTone',
    'TrackingState',
    'FaceDetectionTracker', 'FacialGeometryClassifier', 'FrameProcessor',
    'MakeupAdvisor', 'MakeupRegionMapper', 'MakeupRenderer', 'MovementTracker',
    'SkinToneEstimator',
]
