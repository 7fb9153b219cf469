"""얼굴 특징 분류 (얼굴형, 눈, 입술, 턱선)"""

from typing import Any, Optional

import numpy as np

from ..models import (
    EyeShape,
    FaceShape,
    FacialClassification,
    FeatureMeasurements,
    JawlineType,
    LipShape,
    SkinTone,
)
from ..config.constants import (
    EYE_LANDMARKS,
    FACE_MESH_LANDMARK_COUNT,
    FACE_SHAPE_LANDMARKS,
    JAWLINE_CONTOUR,
    LIP_LANDMARKS,
    REQUIRED_LANDMARK_INDICES,
)
from ..config.settings import ClassificationThresholds
from ..core.normalizer import CoordinateNormalizer
from ..utils.logging_config import get_logger
from .geometry import GeometryCalculator
from .skin_tone import SkinToneEstimator

logger = get_logger(__name__)


class FacialGeometryClassifier:
    """
    얼굴 특징 분류 클래스

    기능:
    - 얼굴형 분류 (Oval/Oblong/Round/Square/Heart)
    - 눈 형태 분류 (Almond/Wide/Round)
    - 입술 형태 분류 (Average/Wide/Full)
    - 턱선 분류 (Average/Angular/Soft)
    - 피부톤 (프레임 이미지가 주어진 경우)

    상태를 갖지 않으며 같은 입력에는 항상 같은 결과를 반환한다.
    얼굴이 없거나 랜드마크가 부족하면 예외 대신 None 을 반환한다.
    """

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        skin_tone_estimator: Optional[SkinToneEstimator] = None,
    ):
        """
        Args:
            thresholds: 분류 임계값 (None이면 기본값)
            skin_tone_estimator: 피부톤 추정기 (None이면 기본 설정)
        """
        self.thresholds = thresholds or ClassificationThresholds()
        self.skin_tone_estimator = skin_tone_estimator or SkinToneEstimator()

    def classify(self, landmarks: Any, image: Optional[np.ndarray] = None) -> Optional[FacialClassification]:
        """
        랜드마크 집합으로 얼굴 특징 분류

        Args:
            landmarks: 468개 이상의 Landmark 리스트 또는 (N, 2)/(N, 3) 좌표 배열
            image: BGR 프레임 (피부톤 추정용, 선택). 배열 입력은 이 이미지의
                   픽셀 좌표로 간주한다.

        Returns:
            FacialClassification, 분류할 수 없으면 None
        """
        points = self._prepare_points(landmarks)
        if points is None:
            return None

        measurements = self.measure(points)
        if measurements is None:
            logger.debug("Degenerate landmark geometry, skipping classification")
            return None

        skin_tone = SkinTone.MEDIUM
        if image is not None:
            estimated = self.skin_tone_estimator.estimate(image, landmarks)
            if estimated is not None:
                skin_tone = estimated

        result = FacialClassification(
            face_shape=self.classify_face_shape(measurements.face_ratio, measurements.jaw_ratio),
            eye_shape=self.classify_eye_shape(measurements.eye_ratio),
            lip_shape=self.classify_lip_shape(measurements.lip_ratio),
            jawline_type=self.classify_jawline(measurements.jaw_angle),
            skin_tone=skin_tone,
            measurements=measurements,
        )
        logger.debug(
            f"Classification: face={result.face_shape.value} (ratio {measurements.face_ratio:.3f}), "
            f"eye={result.eye_shape.value}, lip={result.lip_shape.value}, "
            f"jaw={result.jawline_type.value} ({measurements.jaw_angle:.1f}°)"
        )
        return result

    def _prepare_points(self, landmarks: Any) -> Optional[np.ndarray]:
        """입력 검증: 전체 크기의 랜드마크 집합이 아니면 None"""
        points = CoordinateNormalizer.to_points(landmarks)
        if points is None:
            logger.debug("Landmarks could not be converted to points")
            return None

        if len(points) < FACE_MESH_LANDMARK_COUNT:
            logger.debug(f"Insufficient landmarks: {len(points)} < {FACE_MESH_LANDMARK_COUNT}")
            return None

        if not np.all(np.isfinite(points[list(REQUIRED_LANDMARK_INDICES)])):
            logger.debug("Non-finite landmark coordinates")
            return None

        return points

    def measure(self, points: np.ndarray) -> Optional[FeatureMeasurements]:
        """
        분류에 필요한 비율/각도 측정

        Args:
            points: (N, 2) 좌표 배열 (N >= 468)

        Returns:
            FeatureMeasurements, 분모가 0이 되는 퇴화된 형태면 None
        """
        dist = GeometryCalculator.distance

        # 1. 얼굴 높이/너비
        face_height = dist(points[FACE_SHAPE_LANDMARKS['forehead_top']],
                           points[FACE_SHAPE_LANDMARKS['chin_bottom']])
        face_width = dist(points[FACE_SHAPE_LANDMARKS['temple_left']],
                          points[FACE_SHAPE_LANDMARKS['temple_right']])

        # 2. 턱 너비
        jaw_width = dist(points[FACE_SHAPE_LANDMARKS['jaw_left']],
                         points[FACE_SHAPE_LANDMARKS['jaw_right']])

        # 3. 입술 가로/세로
        lip_width = dist(points[LIP_LANDMARKS['left_corner']],
                         points[LIP_LANDMARKS['right_corner']])
        lip_height = dist(points[LIP_LANDMARKS['upper_center']],
                          points[LIP_LANDMARKS['lower_center']])

        # 4. 눈 가로/세로 (왼쪽 눈 기준)
        left_eye = EYE_LANDMARKS['left_eye']
        eye_width = dist(points[left_eye['outer_corner']], points[left_eye['inner_corner']])
        eye_height = dist(points[left_eye['top']], points[left_eye['bottom']])

        if face_width == 0 or lip_height == 0 or eye_height == 0:
            return None

        # 5. 턱선 내각
        jaw_angles = GeometryCalculator.polyline_interior_angles(points[JAWLINE_CONTOUR])
        if not jaw_angles:
            return None

        return FeatureMeasurements(
            face_width=face_width,
            face_height=face_height,
            face_ratio=face_height / face_width,
            jaw_width=jaw_width,
            jaw_ratio=jaw_width / face_width,
            lip_ratio=lip_width / lip_height,
            eye_ratio=eye_width / eye_height,
            jaw_angle=sum(jaw_angles) / len(jaw_angles),
            jaw_angles=jaw_angles,
        )

    def classify_face_shape(self, face_ratio: float, jaw_ratio: float) -> FaceShape:
        """
        세로/가로 비율 기반 얼굴형 분류

        비율이 중간 구간이면 턱/얼굴 너비 비율로 Square/Heart/Oval 구분
        """
        t = self.thresholds
        if face_ratio > t.oblong_ratio:
            return FaceShape.OBLONG
        if face_ratio < t.round_ratio:
            return FaceShape.ROUND

        if jaw_ratio > t.square_jaw_ratio:
            return FaceShape.SQUARE
        if jaw_ratio < t.heart_jaw_ratio:
            return FaceShape.HEART
        return FaceShape.OVAL

    def classify_lip_shape(self, lip_ratio: float) -> LipShape:
        t = self.thresholds
        if lip_ratio > t.lip_wide_ratio:
            return LipShape.WIDE
        if lip_ratio < t.lip_full_ratio:
            return LipShape.FULL
        return LipShape.AVERAGE

    def classify_eye_shape(self, eye_ratio: float) -> EyeShape:
        t = self.thresholds
        if eye_ratio > t.eye_wide_ratio:
            return EyeShape.WIDE
        if eye_ratio < t.eye_round_ratio:
            return EyeShape.ROUND
        return EyeShape.ALMOND

    def classify_jawline(self, jaw_angle: float) -> JawlineType:
        """턱선 평균 내각으로 분류 (직선에 가까울수록 큰 각도)"""
        t = self.thresholds
        if jaw_angle > t.jaw_angular_angle:
            return JawlineType.ANGULAR
        if jaw_angle < t.jaw_soft_angle:
            return JawlineType.SOFT
        return JawlineType.AVERAGE
