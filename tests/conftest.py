"""Shared test fixtures: synthetic 468-point face mesh landmark sets."""

import math

import numpy as np
import pytest

from facial_geometry.models import Landmark
from facial_geometry.utils.config_loader import set_config

FRAME_WIDTH = 640
FRAME_HEIGHT = 480

FACE_WIDTH = 200.0
FACE_CENTER = (320.0, 240.0)
LIP_HEIGHT = 10.0
EYE_HEIGHT = 10.0

JAW_CONTOUR = [172, 136, 150, 152, 149, 148, 397]


def build_landmarks(
    face_ratio=1.35,
    jaw_ratio=0.85,
    lip_ratio=3.5,
    eye_ratio=2.5,
    jaw_angle=150.0,
):
    """
    Build a (468, 2) pixel-coordinate landmark array whose measured ratios
    and mean jaw interior angle are exactly the requested values.

    Unused points sit on a grid inside the face so every makeup region is a
    non-degenerate polygon.
    """
    points = np.zeros((468, 2), dtype=np.float64)
    for i in range(468):
        points[i] = (200 + (i % 26) * 9, 100 + (i // 26) * 14)

    cx, cy = FACE_CENTER
    face_height = face_ratio * FACE_WIDTH

    # face height / width
    points[10] = (cx, cy - face_height / 2)
    points[234] = (cx - FACE_WIDTH / 2, cy)
    points[454] = (cx + FACE_WIDTH / 2, cy)
    chin = (cx, cy + face_height / 2)

    # jaw contour: equal chords on a circle arc centred under the chin, so
    # every interior vertex has the same interior angle
    theta = math.radians(180.0 - jaw_angle)
    jaw_width = jaw_ratio * FACE_WIDTH
    radius = jaw_width / (2 * math.sin(3 * theta))
    arc_center_y = chin[1] - radius
    for k, index in zip(range(-3, 4), JAW_CONTOUR):
        points[index] = (
            chin[0] + radius * math.sin(k * theta),
            arc_center_y + radius * math.cos(k * theta),
        )

    # lips
    lip_width = lip_ratio * LIP_HEIGHT
    points[0] = (cx, 330.0)
    points[17] = (cx, 330.0 + LIP_HEIGHT)
    points[61] = (cx - lip_width / 2, 335.0)
    points[291] = (cx + lip_width / 2, 335.0)

    # left eye
    eye_width = eye_ratio * EYE_HEIGHT
    points[159] = (260.0, 200.0)
    points[145] = (260.0, 200.0 + EYE_HEIGHT)
    points[33] = (260.0 - eye_width / 2, 205.0)
    points[133] = (260.0 + eye_width / 2, 205.0)

    return points


def to_landmark_objects(points, with_pixels=True):
    """Convert a pixel array into Landmark objects (normalized + optional pixel coords)."""
    landmarks = []
    for x, y in points:
        landmarks.append(Landmark(
            x=x / FRAME_WIDTH,
            y=y / FRAME_HEIGHT,
            pixel_x=int(round(x)) if with_pixels else None,
            pixel_y=int(round(y)) if with_pixels else None,
        ))
    return landmarks


@pytest.fixture
def landmark_factory():
    return build_landmarks


@pytest.fixture
def default_points():
    return build_landmarks()


@pytest.fixture
def default_landmarks():
    return to_landmark_objects(build_landmarks())


@pytest.fixture
def blank_frame():
    return np.zeros((FRAME_HEIGHT, FRAME_WIDTH, 3), dtype=np.uint8)


@pytest.fixture(autouse=True)
def reset_global_config():
    """Tests that swap the global config must not leak into other tests."""
    yield
    set_config(None)
