"""입력 검증 유틸리티 함수"""

from typing import Tuple

import numpy as np

from .exceptions import InvalidColorError, InvalidImageError


def validate_image(image: np.ndarray) -> None:
    """
    프레임 검증: 비어 있지 않은 (H, W) 또는 (H, W, 1|3|4) 배열

    Raises:
        InvalidImageError
    """
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"Image must be numpy.ndarray, got {type(image).__name__}")

    if image.size == 0:
        raise InvalidImageError("Image is empty")

    if image.ndim == 3 and image.shape[2] in (1, 3, 4):
        return
    if image.ndim != 2:
        raise InvalidImageError(f"Unsupported image shape {image.shape}")


def validate_intensity(intensity: float, param_name: str = "intensity") -> None:
    """메이크업 강도/커버리지 (0.0 ~ 1.0)"""
    if not 0.0 <= intensity <= 1.0:
        raise ValueError(f"{param_name} must be between 0.0 and 1.0, got {intensity}")


def parse_hex_color(color: str) -> Tuple[int, int, int]:
    """
    '#RRGGBB' / '#RGB' 문자열을 OpenCV용 BGR 튜플로 변환

    Args:
        color: 16진수 색상 문자열

    Returns:
        (B, G, R) 튜플

    Raises:
        InvalidColorError: 형식이 잘못된 경우
    """
    if not isinstance(color, str):
        raise InvalidColorError(f"Color must be a hex string, got {type(color)}")

    value = color.strip().lstrip('#')
    if len(value) == 3:
        value = ''.join(c * 2 for c in value)

    if len(value) != 6:
        raise InvalidColorError(f"Invalid hex color: {color!r}")

    try:
        r = int(value[0:2], 16)
        g = int(value[2:4], 16)
        b = int(value[4:6], 16)
    except ValueError:
        raise InvalidColorError(f"Invalid hex color: {color!r}")

    return (b, g, r)
