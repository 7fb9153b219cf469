"""
Makeup Overlay Renderer
메이크업 영역에 색상을 알파 블렌딩으로 합성
"""

from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..models import MakeupConfiguration, MakeupRegion, MakeupRegions, Point
from ..config.settings import VisualizationStyle, build_from_section
from ..utils.config_loader import Config, get_config
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image
from .region_mapper import MakeupRegionMapper

logger = get_logger(__name__)

_WHITE = (255, 255, 255)


class MakeupRenderer:
    """
    제품별 오버레이 합성

    - foundation: 얼굴 윤곽 폴리곤, alpha = coverage * foundation_alpha
    - eyes: 양쪽 눈 폴리곤, alpha = intensity * eyes_alpha
    - lips: 입술 폴리곤, alpha = intensity * lips_alpha (+ glossy 흰색 레이어)
    - cheeks: 볼 중심 기준 방사형 블러셔, alpha = intensity * cheeks_alpha
    """

    def __init__(
        self,
        foundation_alpha: float = 0.3,
        eyes_alpha: float = 0.7,
        lips_alpha: float = 0.8,
        cheeks_alpha: float = 0.4,
        gloss_alpha: float = 0.3,
        blush_radius: int = 30,
        blush_inner_radius: int = 5,
        style: Optional[VisualizationStyle] = None,
    ):
        if blush_inner_radius < 0 or blush_radius <= blush_inner_radius:
            raise ValueError("blush_radius must be greater than blush_inner_radius >= 0")

        self.foundation_alpha = foundation_alpha
        self.eyes_alpha = eyes_alpha
        self.lips_alpha = lips_alpha
        self.cheeks_alpha = cheeks_alpha
        self.gloss_alpha = gloss_alpha
        self.blush_radius = blush_radius
        self.blush_inner_radius = blush_inner_radius
        self.style = style or VisualizationStyle()

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'MakeupRenderer':
        config = config if config is not None else get_config()
        return build_from_section(cls, 'makeup', config.get('makeup'))

    def apply(
        self,
        image: np.ndarray,
        regions: Optional[MakeupRegions],
        makeup: Optional[MakeupConfiguration]
    ) -> np.ndarray:
        """
        메이크업 적용

        Args:
            image: BGR 이미지 (원본은 수정하지 않음)
            regions: MakeupRegionMapper 결과
            makeup: 제품 설정

        Returns:
            메이크업이 합성된 새 이미지
        """
        validate_image(image)
        output = image.copy()

        if regions is None or makeup is None or makeup.is_empty():
            return output

        # 캔버스 합성 순서: 파운데이션 → 아이 → 립 → 블러셔
        if makeup.foundation is not None:
            outline = MakeupRegionMapper.face_outline(regions)
            alpha = makeup.foundation.effective_coverage * self.foundation_alpha
            output = self._fill_polygons(output, [outline], makeup.foundation.bgr, alpha)

        if makeup.eyes is not None:
            eyes = [r.points for r in (regions.get('left_eye'), regions.get('right_eye')) if r is not None]
            alpha = makeup.eyes.intensity * self.eyes_alpha
            output = self._fill_polygons(output, eyes, makeup.eyes.bgr, alpha)

        lips = regions.get('lips')
        if makeup.lips is not None and lips is not None:
            alpha = makeup.lips.intensity * self.lips_alpha
            output = self._fill_polygons(output, [lips.points], makeup.lips.bgr, alpha)
            if makeup.lips.glossy:
                output = self._fill_polygons(output, [lips.points], _WHITE, self.gloss_alpha)

        if makeup.cheeks is not None:
            alpha = makeup.cheeks.intensity * self.cheeks_alpha
            for name in ('left_cheek', 'right_cheek'):
                cheek = regions.get(name)
                if cheek is not None and cheek.points:
                    output = self._radial_blush(output, cheek, makeup.cheeks.bgr, alpha)

        logger.debug(f"Applied makeup: {', '.join(makeup.to_dict())}")
        return output

    def _fill_polygons(
        self,
        image: np.ndarray,
        polygons: Sequence[List[Point]],
        color: Tuple[int, int, int],
        alpha: float
    ) -> np.ndarray:
        """폴리곤 마스크 영역에 단색 알파 블렌딩"""
        mask = np.zeros(image.shape[:2], dtype=np.uint8)
        for points in polygons:
            if len(points) < 3:
                continue
            cv2.fillPoly(mask, [np.array(points, dtype=np.int32).reshape((-1, 1, 2))], 255)

        return self._blend(image, mask.astype(np.float32) / 255.0, color, alpha)

    def _radial_blush(
        self,
        image: np.ndarray,
        cheek: MakeupRegion,
        color: Tuple[int, int, int],
        alpha: float
    ) -> np.ndarray:
        """
        방사형 그라데이션 블러셔

        inner_radius 안쪽은 불투명, radius 까지 선형으로 투명해짐
        """
        height, width = image.shape[:2]
        cx, cy = cheek.center

        ys, xs = np.ogrid[:height, :width]
        dist = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2)

        falloff = (self.blush_radius - dist) / float(self.blush_radius - self.blush_inner_radius)
        mask = np.clip(falloff, 0.0, 1.0).astype(np.float32)

        return self._blend(image, mask, color, alpha)

    @staticmethod
    def _blend(
        image: np.ndarray,
        mask: np.ndarray,
        color: Tuple[int, int, int],
        alpha: float
    ) -> np.ndarray:
        """
        Normal alpha blending (source-over)

        Args:
            image: BGR 또는 grayscale 이미지
            mask: 0-1 float 마스크 (H, W)
            color: (B, G, R)
            alpha: 블렌딩 강도 (0-1)
        """
        if alpha <= 0 or not np.any(mask):
            return image

        base = image.astype(np.float32)
        weight = mask * alpha

        if base.ndim == 2:
            gray = 0.114 * color[0] + 0.587 * color[1] + 0.299 * color[2]
            blended = base * (1 - weight) + gray * weight
        else:
            channels = base.shape[2]
            overlay = np.zeros_like(base)
            overlay[:, :, :3] = color
            weight_3d = np.repeat(weight[:, :, np.newaxis], channels, axis=2)
            if channels == 4:
                # 알파 채널은 유지
                weight_3d[:, :, 3] = 0
            blended = base * (1 - weight_3d) + overlay * weight_3d

        return np.clip(np.round(blended), 0, 255).astype(image.dtype)

    def draw_regions(
        self,
        image: np.ndarray,
        regions: Optional[MakeupRegions],
        labels: bool = False
    ) -> np.ndarray:
        """
        디버그용 영역 외곽선 그리기

        Args:
            image: BGR 이미지
            regions: 메이크업 영역
            labels: 영역 이름 표시 여부

        Returns:
            외곽선이 그려진 새 이미지
        """
        validate_image(image)
        output = image.copy()
        if regions is None:
            return output

        for region in regions:
            if len(region.points) < 2:
                continue
            cv2.polylines(output, [region.as_array()], True,
                          self.style.region_color, self.style.region_thickness)
            cv2.circle(output, region.center, 2, self.style.region_color, -1)
            if labels:
                cv2.putText(output, region.name, region.center, cv2.FONT_HERSHEY_SIMPLEX,
                            0.35, self.style.text_color, 1, cv2.LINE_AA)
        return output

    def draw_face_box(self, image: np.ndarray, bounding_box: Tuple[int, int, int, int]) -> np.ndarray:
        """검출된 얼굴 주변에 여백을 둔 사각형 표시"""
        validate_image(image)
        output = image.copy()
        x, y, w, h = bounding_box
        if w <= 0 or h <= 0:
            return output

        height, width = output.shape[:2]
        pad = self.style.bbox_padding
        x1, y1 = max(0, x - pad), max(0, y - pad)
        x2, y2 = min(width, x + w + pad), min(height, y + h + pad)
        cv2.rectangle(output, (x1, y1), (x2, y2), self.style.bbox_color, self.style.bbox_thickness)
        return output
