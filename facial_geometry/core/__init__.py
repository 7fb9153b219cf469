"""
Landmark provider package.
"""
# Lazy imports to avoid the mediapipe dependency when only the
# geometry/classification modules are used.
# from .face_detector import FaceDetector

from .normalizer import CoordinateNormalizer
from .landmark_extractor import LandmarkExtractor

__all__ = ['CoordinateNormalizer', 'LandmarkExtractor']
