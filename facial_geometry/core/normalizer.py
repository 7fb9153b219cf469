"""좌표 정규화 유틸리티"""

from typing import Any, Optional, Sequence, Tuple

import numpy as np


class CoordinateNormalizer:
    """좌표계 변환 및 정규화"""

    @staticmethod
    def to_points(
        landmarks: Any,
        frame_size: Optional[Tuple[int, int]] = None
    ) -> Optional[np.ndarray]:
        """
        랜드마크 집합을 (N, 2) float 배열로 변환

        - Landmark 계열 객체: pixel 좌표가 있으면 그대로, 없으면 정규화 좌표
          (frame_size 가 주어지면 픽셀로 스케일)
        - (N, 2) / (N, 3) 배열: 그대로 사용 (frame_size 가 주어지면 스케일)

        Args:
            landmarks: Landmark 리스트 또는 좌표 배열
            frame_size: (width, height), 정규화 좌표를 픽셀로 바꿀 때만 사용

        Returns:
            (N, 2) 배열, 변환할 수 없으면 None
        """
        if landmarks is None:
            return None

        if isinstance(landmarks, np.ndarray):
            items: Sequence = landmarks
        else:
            try:
                items = list(landmarks)
            except TypeError:
                return None

        if len(items) == 0:
            return None

        first = items[0]
        if hasattr(first, 'x') and hasattr(first, 'y'):
            return CoordinateNormalizer._points_from_objects(items, frame_size)

        try:
            points = np.asarray(items, dtype=np.float64)
        except (TypeError, ValueError):
            return None

        if points.ndim != 2 or points.shape[1] not in (2, 3):
            return None

        points = points[:, :2].copy()
        if frame_size is not None:
            width, height = frame_size
            points[:, 0] *= width
            points[:, 1] *= height
        return points

    @staticmethod
    def _points_from_objects(
        items: Sequence[Any],
        frame_size: Optional[Tuple[int, int]]
    ) -> Optional[np.ndarray]:
        use_pixels = all(getattr(lm, 'pixel_x', None) is not None for lm in items)

        try:
            if use_pixels:
                coords = [(float(lm.pixel_x), float(lm.pixel_y)) for lm in items]
            else:
                coords = [(float(lm.x), float(lm.y)) for lm in items]
        except (TypeError, ValueError, AttributeError):
            return None

        points = np.array(coords, dtype=np.float64)
        if not use_pixels and frame_size is not None:
            width, height = frame_size
            points[:, 0] *= width
            points[:, 1] *= height
        return points


    @staticmethod
    def get_bounding_box(
        landmarks: Any,
        frame_size: Optional[Tuple[int, int]] = None
    ) -> Tuple[int, int, int, int]:
        """
        랜드마크를 감싸는 (x, y, width, height)

        pixel 좌표가 없는 Landmark 는 frame_size 가 있어야 계산되고,
        그렇지 않으면 (0, 0, 0, 0). frame_size 가 주어지면 프레임 안으로 자른다.
        """
        if frame_size is None and not CoordinateNormalizer._has_pixels(landmarks):
            return (0, 0, 0, 0)

        points = CoordinateNormalizer.to_points(landmarks, frame_size)
        if points is None or not np.isfinite(points).all():
            return (0, 0, 0, 0)

        x_min, y_min = np.floor(points.min(axis=0)).astype(int)
        x_max, y_max = np.floor(points.max(axis=0)).astype(int)
        if frame_size is not None:
            width, height = frame_size
            x_min, x_max = np.clip([x_min, x_max], 0, width - 1)
            y_min, y_max = np.clip([y_min, y_max], 0, height - 1)

        return (int(x_min), int(y_min), int(x_max - x_min), int(y_max - y_min))

    @staticmethod
    def _has_pixels(landmarks: Any) -> bool:
        if isinstance(landmarks, np.ndarray):
            return True
        try:
            return bool(landmarks) and all(getattr(lm, 'pixel_x', None) is not None for lm in landmarks)
        except TypeError:
            return False
