"""얼굴 기하학 계산 유틸리티"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..models import FaceGeometry

# 얼굴 각도 계산용 포인트
_NOSE_TIP = 4
_LEFT_EYE_OUTER = 33
_RIGHT_EYE_OUTER = 263


class GeometryCalculator:
    """얼굴 기하학 계산 (모든 입력은 (N, 2) 좌표 배열)"""

    @staticmethod
    def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
        """
        두 점 사이의 유클리드 거리

        Args:
            p1, p2: (x, y) 좌표

        Returns:
            거리
        """
        dx = float(p2[0]) - float(p1[0])
        dy = float(p2[1]) - float(p1[1])
        return math.sqrt(dx**2 + dy**2)

    @staticmethod
    def interior_angle(
        prev: Sequence[float],
        current: Sequence[float],
        nxt: Sequence[float]
    ) -> Optional[float]:
        """
        current 꼭짓점에서 두 인접 변이 이루는 내각 (도)

        v1 = prev - current, v2 = next - current 에 대해
        angle = acos(v1·v2 / (|v1||v2|))

        Returns:
            0~180 범위의 각도, 변의 길이가 0이면 None
        """
        v1 = np.asarray(prev, dtype=np.float64)[:2] - np.asarray(current, dtype=np.float64)[:2]
        v2 = np.asarray(nxt, dtype=np.float64)[:2] - np.asarray(current, dtype=np.float64)[:2]

        v1_mag = float(np.linalg.norm(v1))
        v2_mag = float(np.linalg.norm(v2))
        if v1_mag == 0.0 or v2_mag == 0.0:
            return None

        cos_angle = float(np.dot(v1, v2)) / (v1_mag * v2_mag)
        # 부동소수점 오차로 acos 도메인을 벗어나지 않도록
        cos_angle = max(-1.0, min(1.0, cos_angle))
        return math.degrees(math.acos(cos_angle))

    @staticmethod
    def polyline_interior_angles(points: Sequence[Sequence[float]]) -> List[float]:
        """
        폴리라인 내부 꼭짓점들의 내각 목록 (양 끝점 제외)

        길이가 0인 변을 가진 꼭짓점은 건너뛴다.
        """
        angles = []
        for i in range(1, len(points) - 1):
            angle = GeometryCalculator.interior_angle(points[i - 1], points[i], points[i + 1])
            if angle is not None:
                angles.append(angle)
        return angles

    @staticmethod
    def polygon_center(points: Sequence[Sequence[float]]) -> Tuple[float, float]:
        """폴리곤 꼭짓점 평균 (오버레이 중심점)"""
        if len(points) == 0:
            return (0.0, 0.0)
        arr = np.asarray(points, dtype=np.float64)
        return (float(arr[:, 0].mean()), float(arr[:, 1].mean()))

    @staticmethod
    def calculate_face_angles(points: np.ndarray) -> Tuple[float, float, float]:
        """
        얼굴 각도 근사 (pitch, yaw, roll)

        눈 사이 거리로 정규화하므로 좌표 스케일에 무관하다.

        Args:
            points: (N, 2) 랜드마크 좌표

        Returns:
            (pitch, yaw, roll) 튜플 (도 단위)
        """
        nose_tip = points[_NOSE_TIP]
        left_eye = points[_LEFT_EYE_OUTER]
        right_eye = points[_RIGHT_EYE_OUTER]

        dx = float(right_eye[0] - left_eye[0])
        dy = float(right_eye[1] - left_eye[1])
        eye_distance = math.sqrt(dx**2 + dy**2)
        if eye_distance == 0:
            return (0.0, 0.0, 0.0)

        # Roll (기울기)
        roll = math.degrees(math.atan2(dy, dx))

        eye_center_x = (left_eye[0] + right_eye[0]) / 2
        eye_center_y = (left_eye[1] + right_eye[1]) / 2

        # Yaw (좌우 회전): 눈 중심 대비 코 끝의 가로 오프셋
        yaw = math.degrees(math.atan2((nose_tip[0] - eye_center_x) / eye_distance, 0.5)) * 2

        # Pitch (상하 회전): 눈 중심 대비 코 끝의 세로 오프셋
        pitch = math.degrees(math.atan2((nose_tip[1] - eye_center_y) / eye_distance, 0.3)) * 1.5

        return (pitch, yaw, roll)

    @staticmethod
    def calculate_face_size(points: np.ndarray) -> Tuple[float, float]:
        """
        얼굴 크기 계산 (랜드마크 범위)

        Returns:
            (width, height) 튜플
        """
        if points is None or len(points) == 0:
            return (0.0, 0.0)

        width = float(points[:, 0].max() - points[:, 0].min())
        height = float(points[:, 1].max() - points[:, 1].min())
        return (width, height)

    @staticmethod
    def get_face_geometry(points: np.ndarray) -> FaceGeometry:
        """
        전체 얼굴 기하학 정보 계산

        Args:
            points: (N, 2) 랜드마크 좌표

        Returns:
            FaceGeometry 객체
        """
        pitch, yaw, roll = GeometryCalculator.calculate_face_angles(points)
        width, height = GeometryCalculator.calculate_face_size(points)

        return FaceGeometry(
            pitch=pitch,
            yaw=yaw,
            roll=roll,
            face_width=width,
            face_height=height,
        )
