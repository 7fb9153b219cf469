"""Tests for MakeupRenderer."""

import numpy as np
import pytest

from facial_geometry.models import MakeupConfiguration, MakeupRegion, MakeupRegions, ProductSetting
from facial_geometry.processing.makeup_renderer import MakeupRenderer
from facial_geometry.processing.region_mapper import MakeupRegionMapper
from facial_geometry.utils.exceptions import InvalidColorError


def _square(name, x0, y0, size=40):
    points = [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]
    center = (x0 + size // 2, y0 + size // 2)
    return MakeupRegion(name=name, points=points, center=center)


@pytest.fixture
def regions():
    return MakeupRegions(regions={
        'lips': _square('lips', 10, 10),
        'left_eye': _square('left_eye', 100, 10),
        'right_eye': _square('right_eye', 160, 10),
        'left_cheek': _square('left_cheek', 80, 180),
        'right_cheek': _square('right_cheek', 400, 180),
        'forehead': _square('forehead', 300, 10),
    })


@pytest.fixture
def black():
    return np.zeros((480, 640, 3), dtype=np.uint8)


class TestApply:

    def test_returns_new_image(self, black, regions):
        makeup = MakeupConfiguration(lips=ProductSetting('#ff0000', 1.0))
        output = MakeupRenderer().apply(black, regions, makeup)

        assert output is not black
        assert output.shape == black.shape
        assert not black.any()

    def test_lip_alpha(self, black, regions):
        makeup = MakeupConfiguration(lips=ProductSetting('#ff0000', 0.5))
        output = MakeupRenderer().apply(black, regions, makeup)

        # alpha = 0.5 * 0.8 = 0.4 → R = 102 (BGR 순서)
        b, g, r = output[30, 30]
        assert (int(b), int(g)) == (0, 0)
        assert abs(int(r) - 102) <= 1
        assert not output[300, 300].any()

    def test_glossy_lips_are_brighter(self, black, regions):
        matte = MakeupRenderer().apply(black, regions, MakeupConfiguration(
            lips=ProductSetting('#ff0000', 0.5)))
        glossy = MakeupRenderer().apply(black, regions, MakeupConfiguration(
            lips=ProductSetting('#ff0000', 0.5, glossy=True)))

        assert all(int(g) > int(m) for g, m in zip(glossy[30, 30], matte[30, 30]))

    def test_eyes_cover_both_polygons(self, black, regions):
        makeup = MakeupConfiguration(eyes=ProductSetting('#0000ff', 1.0))
        output = MakeupRenderer().apply(black, regions, makeup)

        # alpha = 1.0 * 0.7 → B ≈ 178
        assert abs(int(output[30, 120][0]) - 178) <= 1
        assert abs(int(output[30, 180][0]) - 178) <= 1
        assert not output[30, 30].any()

    def test_foundation_uses_coverage(self, black, regions):
        makeup = MakeupConfiguration(foundation=ProductSetting('#ffffff', 0.1, coverage=1.0))
        output = MakeupRenderer().apply(black, regions, makeup)

        outline = MakeupRegionMapper.face_outline(regions)
        assert len(outline) == 12
        # 이마 사각형 내부: alpha = 1.0 * 0.3
        assert abs(int(output[30, 320][0]) - 76) <= 1

    def test_blush_radial_falloff(self, black, regions):
        makeup = MakeupConfiguration(cheeks=ProductSetting('#ffffff', 1.0))
        output = MakeupRenderer().apply(black, regions, makeup)

        cx, cy = regions['left_cheek'].center
        center_value = int(output[cy, cx][0])
        mid_value = int(output[cy, cx + 18][0])
        outside_value = int(output[cy, cx + 31][0])

        assert abs(center_value - 102) <= 1
        assert 0 < mid_value < center_value
        assert outside_value == 0

    def test_no_makeup_is_identity(self, black, regions):
        output = MakeupRenderer().apply(black, regions, MakeupConfiguration())
        assert np.array_equal(output, black)

    def test_missing_regions_is_identity(self, black):
        makeup = MakeupConfiguration(lips=ProductSetting('#ff0000', 1.0))
        assert np.array_equal(MakeupRenderer().apply(black, None, makeup), black)

    def test_grayscale_image(self, regions):
        gray = np.zeros((480, 640), dtype=np.uint8)
        output = MakeupRenderer().apply(gray, regions, MakeupConfiguration(
            lips=ProductSetting('#ffffff', 1.0)))
        assert output.ndim == 2
        assert output[30, 30] > 0

    def test_mapped_regions_from_landmarks(self, blank_frame, default_landmarks):
        regions = MakeupRegionMapper().map_regions(default_landmarks)
        makeup = MakeupConfiguration(
            lips=ProductSetting('#c21e56', 0.8),
            cheeks=ProductSetting('#ffb38a', 0.6),
        )
        output = MakeupRenderer().apply(blank_frame, regions, makeup)
        assert output.any()


class TestColorValidation:

    @pytest.mark.parametrize("color", ["red", "#12345", "#gggggg", ""])
    def test_invalid_color_raises(self, color):
        with pytest.raises(InvalidColorError):
            ProductSetting(color, 0.5)

    def test_invalid_intensity_raises(self):
        with pytest.raises(ValueError):
            ProductSetting('#ffffff', 1.5)

    def test_invalid_blush_radius(self):
        with pytest.raises(ValueError):
            MakeupRenderer(blush_radius=5, blush_inner_radius=5)


class TestDebugDrawing:

    def test_draw_regions(self, black, regions):
        output = MakeupRenderer().draw_regions(black, regions, labels=True)
        assert output.any()
        assert not black.any()

    def test_draw_face_box(self, black):
        output = MakeupRenderer().draw_face_box(black, (100, 100, 200, 200))
        # 여백 20px 바깥쪽 테두리
        assert output[80, 150].any()

    def test_empty_box_is_identity(self, black):
        assert np.array_equal(MakeupRenderer().draw_face_box(black, (0, 0, 0, 0)), black)
