"""Tests for MakeupRegionMapper."""

import numpy as np
import pytest

from facial_geometry.config.constants import MAKEUP_REGION_INDICES
from facial_geometry.models import Landmark
from facial_geometry.processing.region_mapper import MakeupRegionMapper

from conftest import to_landmark_objects


def _normalized_landmarks(x=0.5, y=0.5):
    return [Landmark(x=x, y=y) for _ in range(468)]


class TestMapRegions:

    def test_all_regions_present(self, default_landmarks):
        regions = MakeupRegionMapper().map_regions(default_landmarks)

        assert set(regions.names()) == set(MAKEUP_REGION_INDICES)
        for name, indices in MAKEUP_REGION_INDICES.items():
            assert len(regions[name].points) == len(indices)

    def test_normalized_coordinates_scaled_and_floored(self):
        regions = MakeupRegionMapper(640, 480).map_regions(_normalized_landmarks(0.9999, 0.50001))
        assert regions['lips'].points[0] == (639, 240)

    def test_custom_frame_size(self):
        regions = MakeupRegionMapper(1280, 720).map_regions(_normalized_landmarks())
        assert regions['forehead'].center == (640, 360)

    def test_pixel_coordinates_used_as_given(self, default_points):
        regions = MakeupRegionMapper().map_regions(to_landmark_objects(default_points))
        # 61 번이 입술 폴리곤의 첫 점
        expected = (int(round(default_points[61][0])), int(round(default_points[61][1])))
        assert regions['lips'].points[0] == expected

    def test_mixed_pixel_set_uses_one_rule(self):
        # 일부만 pixel 좌표가 있는 집합은 전부 정규화 좌표 × 프레임 크기로 매핑
        landmarks = _normalized_landmarks(0.25, 0.5)
        for lm in landmarks[:200]:
            lm.pixel_x, lm.pixel_y = 10, 10

        regions = MakeupRegionMapper(640, 480).map_regions(landmarks)

        points = [p for name in regions.names() for p in regions[name].points]
        assert set(points) == {(160, 240)}

    def test_pixel_array_when_not_normalized(self, default_points):
        regions = MakeupRegionMapper(normalized=False).map_regions(default_points)
        assert regions['lips'].points[5] == (int(default_points[17][0]), int(default_points[17][1]))

    def test_center_is_mean_of_points(self, default_landmarks):
        regions = MakeupRegionMapper().map_regions(default_landmarks)
        cheek = regions['left_cheek']
        xs = [p[0] for p in cheek.points]
        ys = [p[1] for p in cheek.points]
        assert cheek.center == (int(np.floor(np.mean(xs))), int(np.floor(np.mean(ys))))

    def test_short_set_returns_none(self, default_landmarks):
        assert MakeupRegionMapper().map_regions(default_landmarks[:100]) is None

    def test_none_returns_none(self):
        assert MakeupRegionMapper().map_regions(None) is None

    def test_invalid_frame_size(self):
        with pytest.raises(ValueError):
            MakeupRegionMapper(0, 480)


class TestFaceOutline:

    def test_outline_order(self, default_landmarks):
        regions = MakeupRegionMapper().map_regions(default_landmarks)
        outline = MakeupRegionMapper.face_outline(regions)

        assert len(outline) == 9 + 6 + 6
        assert outline[:9] == regions['forehead'].points
        assert outline[9:15] == regions['right_cheek'].points
        assert outline[15:] == regions['left_cheek'].points

    def test_to_dict_shape(self, default_landmarks):
        data = MakeupRegionMapper().map_regions(default_landmarks).to_dict()
        lips = data['lips']
        assert lips['type'] == 'lips'
        assert set(lips['region']) == {'points', 'center'}
        assert set(lips['region']['points'][0]) == {'x', 'y'}
