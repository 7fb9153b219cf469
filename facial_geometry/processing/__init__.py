"""
Geometry / classification / overlay processing package.
"""
# FrameProcessor 는 검출기 인스턴스를 주입받으므로 MediaPipe 를 직접 import 하지 않음
from .geometry import GeometryCalculator
from .face_classifier import FacialGeometryClassifier
from .region_mapper import MakeupRegionMapper
from .skin_tone import SkinToneEstimator
from .detection_tracker import FaceDetectionTracker, MovementTracker
from .makeup_renderer import MakeupRenderer
from .makeup_advisor import MakeupAdvisor, MakeupRecommendation
from .frame_processor import FrameProcessor

__all__ = [
    'GeometryCalculator',
    'FacialGeometryClassifier',
    'MakeupRegionMapper',
    'SkinToneEstimator',
    'FaceDetectionTracker',
    'MovementTracker',
    'MakeupRenderer',
    'MakeupAdvisor',
    'MakeupRecommendation',
    'FrameProcessor',
]
