"""Configuration constants and settings"""

from .settings import (
    DetectionConfig,
    ClassificationThresholds,
    TrackingConfig,
    VisualizationStyle,
)

__all__ = [
    'DetectionConfig',
    'ClassificationThresholds',
    'TrackingConfig',
    'VisualizationStyle',
]
