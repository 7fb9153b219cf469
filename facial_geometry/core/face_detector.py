"""MediaPipe FaceMesh 랜드마크 제공자 (pip install facial-geometry[detector])"""

import time
from typing import Any, Dict, Optional

import cv2
import numpy as np
import mediapipe as mp

from ..models import DetectionResult
from ..config.settings import DetectionConfig
from ..utils.exceptions import ConfigurationError, DetectionError, LandmarkExtractionError
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image
from .normalizer import CoordinateNormalizer
from .landmark_extractor import LandmarkExtractor

logger = get_logger(__name__)

_TO_RGB = {2: cv2.COLOR_GRAY2RGB, 3: cv2.COLOR_BGR2RGB, 4: cv2.COLOR_BGRA2RGB}


def _to_rgb(image: np.ndarray) -> np.ndarray:
    channels = 2 if image.ndim == 2 else image.shape[2]
    if channels == 1:
        channels = 2
    return cv2.cvtColor(image, _TO_RGB[channels])


class FaceDetector:
    """
    프레임 → DetectionResult

    FrameProcessor 는 detect()/release() 만 사용하므로
    같은 인터페이스의 다른 제공자로 바꿔 끼울 수 있다.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        Args:
            config: 검출 설정 (None이면 config.yaml 의 mediapipe.detection)

        Raises:
            ConfigurationError: FaceMesh 생성 실패 시
        """
        self.config = config or DetectionConfig.from_config()
        self.extractor = LandmarkExtractor()
        self.face_mesh = None
        self._init_face_mesh()

    def _init_face_mesh(self):
        try:
            self.face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=self.config.static_image_mode,
                max_num_faces=self.config.max_num_faces,
                refine_landmarks=self.config.refine_landmarks,
                min_detection_confidence=self.config.min_detection_confidence,
                min_tracking_confidence=self.config.min_tracking_confidence
            )
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize MediaPipe FaceMesh: {e}")
        logger.info(f"FaceMesh ready: {self.get_model_info()}")

    def detect(self, image: np.ndarray) -> DetectionResult:
        """
        Args:
            image: BGR / BGRA / grayscale 프레임

        Returns:
            DetectionResult (얼굴이 없으면 success=False, 예외 아님)

        Raises:
            InvalidImageError: 프레임이 유효하지 않은 경우
            DetectionError: 얼굴은 있으나 랜드마크가 불완전한 경우
        """
        validate_image(image)
        start_time = time.time()

        results = self.face_mesh.process(_to_rgb(image))
        processing_time = (time.time() - start_time) * 1000

        if not results or not results.multi_face_landmarks:
            logger.debug("No face detected")
            return DetectionResult(success=False, processing_time=processing_time)

        height, width = image.shape[:2]
        try:
            landmarks = self.extractor.extract_landmarks(results, width, height)
        except LandmarkExtractionError as e:
            raise DetectionError(f"Failed to extract landmarks: {e}")

        return DetectionResult(
            success=True,
            landmarks=landmarks,
            confidence=1.0,  # FaceMesh 는 얼굴별 점수를 주지 않음
            bounding_box=CoordinateNormalizer.get_bounding_box(landmarks),
            processing_time=processing_time
        )

    def get_model_info(self) -> Dict[str, Any]:
        return {
            'max_num_faces': self.config.max_num_faces,
            'min_detection_confidence': self.config.min_detection_confidence,
            'min_tracking_confidence': self.config.min_tracking_confidence,
            'refine_landmarks': self.config.refine_landmarks,
            'static_image_mode': self.config.static_image_mode,
        }

    def release(self):
        if self.face_mesh is not None:
            self.face_mesh.close()
            self.face_mesh = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
