"""볼/이마 영역 밝기(L*) 기반 피부톤 추정"""

from typing import Any, List, Optional

import cv2
import numpy as np

from ..models import MakeupRegions, SkinTone
from ..config.constants import SKIN_SAMPLE_REGIONS
from ..utils.config_loader import Config, get_config
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image
from .region_mapper import MakeupRegionMapper

logger = get_logger(__name__)


class SkinToneEstimator:
    """
    CIELAB L* 평균으로 피부톤 분류

    L* (0-100) > light → Light, > medium → Medium, > tan → Tan, 그 외 Deep
    """

    def __init__(
        self,
        light_threshold: float = 75.0,
        medium_threshold: float = 60.0,
        tan_threshold: float = 45.0,
        sample_regions: Optional[List[str]] = None,
    ):
        if not tan_threshold <= medium_threshold <= light_threshold:
            raise ValueError("Skin tone thresholds must satisfy tan <= medium <= light")

        self.light_threshold = light_threshold
        self.medium_threshold = medium_threshold
        self.tan_threshold = tan_threshold
        self.sample_regions = sample_regions or SKIN_SAMPLE_REGIONS

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'SkinToneEstimator':
        config = config if config is not None else get_config()
        return cls(
            light_threshold=config.get('skin_tone.light_threshold', 75.0),
            medium_threshold=config.get('skin_tone.medium_threshold', 60.0),
            tan_threshold=config.get('skin_tone.tan_threshold', 45.0),
        )

    def estimate(self, image: np.ndarray, landmarks: Any) -> Optional[SkinTone]:
        """
        프레임과 랜드마크로 피부톤 추정

        Args:
            image: BGR 이미지
            landmarks: Landmark 리스트 또는 이 이미지의 픽셀 좌표 배열

        Returns:
            SkinTone, 샘플 영역이 비어 있으면 None
        """
        validate_image(image)
        height, width = image.shape[:2]
        mapper = MakeupRegionMapper(frame_width=width, frame_height=height, normalized=False)
        regions = mapper.map_regions(landmarks)
        if regions is None:
            return None
        return self.estimate_from_regions(image, regions)

    def estimate_from_regions(self, image: np.ndarray, regions: MakeupRegions) -> Optional[SkinTone]:
        """이미 매핑된 영역으로 피부톤 추정"""
        lightness = self.mean_lightness(image, regions)
        if lightness is None:
            return None

        tone = self.classify(lightness)
        logger.debug(f"Skin lightness L*={lightness:.1f} → {tone.value}")
        return tone

    def mean_lightness(self, image: np.ndarray, regions: MakeupRegions) -> Optional[float]:
        """샘플 영역의 평균 L* (0-100)"""
        validate_image(image)

        if image.ndim == 2:
            bgr = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        elif image.shape[2] == 4:
            bgr = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
        else:
            bgr = image

        mask = np.zeros(bgr.shape[:2], dtype=np.uint8)
        for name in self.sample_regions:
            region = regions.get(name)
            if region is None or len(region.points) < 3:
                continue
            cv2.fillPoly(mask, [region.as_array()], 255)

        if not np.any(mask):
            return None

        lab = cv2.cvtColor(bgr, cv2.COLOR_BGR2LAB)
        # OpenCV 8bit LAB 의 L 채널은 0-255 로 스케일되어 있음
        l_mean = cv2.mean(lab[:, :, 0], mask=mask)[0]
        return float(l_mean) * 100.0 / 255.0

    def classify(self, lightness: float) -> SkinTone:
        if lightness > self.light_threshold:
            return SkinTone.LIGHT
        if lightness > self.medium_threshold:
            return SkinTone.MEDIUM
        if lightness > self.tan_threshold:
            return SkinTone.TAN
        return SkinTone.DEEP
