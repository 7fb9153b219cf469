"""랜드마크 → 메이크업 오버레이 영역 매핑"""

import math
from typing import Any, Dict, List, Optional

import numpy as np

from ..models import MakeupRegion, MakeupRegions, Point
from ..core.normalizer import CoordinateNormalizer
from ..config.constants import (
    DEFAULT_FRAME_SIZE,
    FACE_MESH_LANDMARK_COUNT,
    MAKEUP_REGION_INDICES,
)
from ..utils.config_loader import Config, get_config
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class MakeupRegionMapper:
    """
    고정 랜드마크 인덱스를 픽셀 폴리곤으로 변환

    - Landmark 집합의 모든 점에 pixel 좌표가 있으면 그대로 사용
    - 정규화 좌표는 프레임 크기를 곱한 뒤 내림(floor)
    - 배열 입력은 normalized 플래그에 따라 정규화/픽셀 좌표로 해석
    """

    def __init__(
        self,
        frame_width: int = DEFAULT_FRAME_SIZE[0],
        frame_height: int = DEFAULT_FRAME_SIZE[1],
        normalized: bool = True,
        region_indices: Optional[Dict[str, List[int]]] = None,
    ):
        """
        Args:
            frame_width: 오버레이 프레임 너비
            frame_height: 오버레이 프레임 높이
            normalized: 배열 입력을 0-1 정규화 좌표로 볼지 여부
            region_indices: 영역별 인덱스 (None이면 기본 영역)
        """
        if frame_width <= 0 or frame_height <= 0:
            raise ValueError(f"Frame size must be positive, got {frame_width}x{frame_height}")

        self.frame_width = frame_width
        self.frame_height = frame_height
        self.normalized = normalized
        self.region_indices = region_indices or MAKEUP_REGION_INDICES

    @classmethod
    def from_config(cls, config: Optional[Config] = None, **overrides) -> 'MakeupRegionMapper':
        """config.yaml 의 regions 섹션으로 생성"""
        config = config if config is not None else get_config()
        values = {
            'frame_width': config.get('regions.frame_width', DEFAULT_FRAME_SIZE[0]),
            'frame_height': config.get('regions.frame_height', DEFAULT_FRAME_SIZE[1]),
        }
        values.update(overrides)
        return cls(**values)

    def map_regions(self, landmarks: Any) -> Optional[MakeupRegions]:
        """
        랜드마크 집합에서 메이크업 영역 생성

        Args:
            landmarks: Landmark 리스트 또는 (N, 2)/(N, 3) 좌표 배열

        Returns:
            MakeupRegions, 랜드마크가 없거나 부족하면 None
        """
        pixels = self._to_pixels(landmarks)
        if pixels is None:
            return None

        regions = {}
        for name, indices in self.region_indices.items():
            points: List[Point] = [
                (int(pixels[i][0]), int(pixels[i][1])) for i in indices
            ]
            regions[name] = MakeupRegion(
                name=name,
                points=points,
                center=self._center(points),
            )

        return MakeupRegions(regions=regions)

    def _to_pixels(self, landmarks: Any) -> Optional[np.ndarray]:
        if landmarks is None:
            return None

        try:
            items = list(landmarks)
        except TypeError:
            return None

        if len(items) < FACE_MESH_LANDMARK_COUNT:
            logger.debug(f"Insufficient landmarks for region mapping: {len(items)}")
            return None

        # 객체 집합은 모두 pixel 좌표가 있을 때만 pixel 사용 (집합 단위로 한 규칙)
        is_objects = hasattr(items[0], 'x') and hasattr(items[0], 'y')
        frame_size = (self.frame_width, self.frame_height) if is_objects or self.normalized else None
        pixels = CoordinateNormalizer.to_points(items, frame_size)
        if pixels is None:
            return None

        if not np.all(np.isfinite(pixels)):
            logger.debug("Non-finite landmark coordinates in region mapping")
            return None

        return np.floor(pixels)

    @staticmethod
    def _center(points: List[Point]) -> Point:
        if not points:
            return (0, 0)
        cx = sum(p[0] for p in points) / len(points)
        cy = sum(p[1] for p in points) / len(points)
        return (int(math.floor(cx)), int(math.floor(cy)))

    @staticmethod
    def face_outline(regions: MakeupRegions) -> List[Point]:
        """파운데이션용 얼굴 윤곽 (이마 + 오른쪽 볼 + 왼쪽 볼)"""
        outline: List[Point] = []
        for name in ('forehead', 'right_cheek', 'left_cheek'):
            region = regions.get(name)
            if region is not None:
                outline.extend(region.points)
        return outline
