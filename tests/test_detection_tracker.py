"""Tests for FaceDetectionTracker and MovementTracker."""

import numpy as np
import pytest

from facial_geometry.models import Landmark
from facial_geometry.processing.detection_tracker import FaceDetectionTracker, MovementTracker
from facial_geometry.utils.exceptions import ConfigurationError


def _run(tracker, pattern):
    return [tracker.update(hit) for hit in pattern]


class TestFaceDetectionTracker:

    def test_first_hit_turns_detection_on(self):
        tracker = FaceDetectionTracker()
        state = tracker.update(True)

        assert state.face_detected is True
        assert state.changed is True
        assert state.confidence == pytest.approx(0.1)

    def test_detect_frames_debounce(self):
        tracker = FaceDetectionTracker(detect_frames=3)
        states = _run(tracker, [True, True, True])
        assert [s.face_detected for s in states] == [False, False, True]

    def test_detect_frames_requires_consecutive_hits(self):
        tracker = FaceDetectionTracker(detect_frames=3)
        states = _run(tracker, [True, True, False, True, True, True])

        assert [s.face_detected for s in states] == [False, False, False, False, False, True]
        # 신뢰도 카운터는 연속 여부와 무관
        assert states[4].successful_detections == 3

    def test_lost_only_after_more_than_lost_frames_misses(self):
        tracker = FaceDetectionTracker(lost_frames=10)
        tracker.update(True)

        states = _run(tracker, [False] * 10)
        assert all(s.face_detected for s in states)
        assert not any(s.changed for s in states)

        state = tracker.update(False)
        assert state.face_detected is False
        assert state.changed is True
        assert state.missed_detections == 11

    def test_hit_resets_misses(self):
        tracker = FaceDetectionTracker(lost_frames=2)
        _run(tracker, [True, False, False, True, False, False])
        assert tracker.face_detected is True
        assert tracker.missed_detections == 2

    def test_miss_decrements_successes_floor_zero(self):
        tracker = FaceDetectionTracker()
        _run(tracker, [True, True, True, False])
        assert tracker.successful_detections == 2

        _run(tracker, [False] * 5)
        assert tracker.successful_detections == 0

    def test_confidence_caps_at_one(self):
        tracker = FaceDetectionTracker(confidence_frames=10)
        states = _run(tracker, [True] * 15)
        assert states[4].confidence == pytest.approx(0.5)
        assert states[-1].confidence == 1.0

    def test_should_analyze_every_interval(self):
        tracker = FaceDetectionTracker(classification_interval=3)
        states = _run(tracker, [True] * 7)
        assert [s.should_analyze for s in states] == [False, False, True, False, False, True, False]

    def test_no_analysis_on_miss(self):
        tracker = FaceDetectionTracker(classification_interval=1)
        assert tracker.update(False).should_analyze is False

    def test_reset(self):
        tracker = FaceDetectionTracker()
        _run(tracker, [True] * 5)
        tracker.reset()
        assert tracker.face_detected is False
        assert tracker.successful_detections == 0
        assert tracker.confidence == 0.0

    @pytest.mark.parametrize("kwargs", [
        {'detect_frames': 0},
        {'lost_frames': -1},
        {'classification_interval': 0},
        {'confidence_frames': 0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ConfigurationError):
            FaceDetectionTracker(**kwargs)


def _nose_at(x, y):
    points = np.full((468, 2), 0.5)
    points[1] = (x, y)
    return points


class TestMovementTracker:

    def test_first_frame_has_no_movement(self):
        movement = MovementTracker().update(_nose_at(0.5, 0.5), timestamp=1.0)
        assert movement.magnitude == 0.0
        assert movement.timestamp == 1.0

    def test_delta_scaled_by_100(self):
        tracker = MovementTracker()
        tracker.update(_nose_at(0.5, 0.5))
        movement = tracker.update(_nose_at(0.53, 0.46))

        assert movement.x == pytest.approx(3.0)
        assert movement.y == pytest.approx(-4.0)
        assert movement.magnitude == pytest.approx(5.0)
        assert tracker.actions == []

    def test_landmark_objects_use_normalized_coordinates(self):
        tracker = MovementTracker()
        first = [Landmark(x=0.5, y=0.5, pixel_x=320, pixel_y=240) for _ in range(468)]
        second = [Landmark(x=0.5, y=0.5, pixel_x=320, pixel_y=240) for _ in range(468)]
        second[1] = Landmark(x=0.52, y=0.5, pixel_x=333, pixel_y=240)

        tracker.update(first)
        assert tracker.update(second).x == pytest.approx(2.0)

    @pytest.mark.parametrize("dx, dy, action", [
        (0.2, 0.0, "Head turning right"),
        (-0.2, 0.0, "Head turning left"),
        (0.0, 0.15, "Head moving down"),
        (0.05, -0.15, "Head moving up"),
    ])
    def test_action_detection(self, dx, dy, action):
        tracker = MovementTracker()
        tracker.update(_nose_at(0.5, 0.5))
        tracker.update(_nose_at(0.5 + dx, 0.5 + dy))

        assert len(tracker.actions) == 1
        assert tracker.actions[0].action == action

    def test_action_confidence(self):
        tracker = MovementTracker()
        tracker.update(_nose_at(0.5, 0.5))
        tracker.update(_nose_at(0.7, 0.5))
        assert tracker.actions[0].confidence == pytest.approx(0.9)

        tracker.update(_nose_at(0.2, 0.5))
        assert tracker.actions[0].confidence == pytest.approx(0.95)

    def test_actions_newest_first_and_capped(self):
        tracker = MovementTracker(max_actions=3)
        tracker.update(_nose_at(0.5, 0.5), timestamp=0.0)
        for i in range(1, 6):
            x = 0.5 + (0.2 if i % 2 else 0.0)
            tracker.update(_nose_at(x, 0.5), timestamp=float(i))

        assert len(tracker.actions) == 3
        assert [a.timestamp for a in tracker.actions] == [5.0, 4.0, 3.0]

    def test_history_size_and_trends(self):
        tracker = MovementTracker(history_size=4, trend_window=2)
        x = 0.0
        tracker.update(_nose_at(x, 0.5))
        for step in (0.01, 0.02, 0.03, 0.04, 0.05):
            x += step
            tracker.update(_nose_at(x, 0.5))

        assert len(tracker.history) == 4
        trend = tracker.trends()
        assert trend.x == pytest.approx(4.5)
        assert trend.y == pytest.approx(0.0)

    def test_empty_trends(self):
        assert MovementTracker().trends().magnitude == 0.0

    def test_single_sample_has_no_trend(self):
        tracker = MovementTracker()
        tracker.update(_nose_at(0.5, 0.5))
        tracker.update(_nose_at(0.6, 0.5))

        assert len(tracker.history) == 1
        assert tracker.trends().magnitude == 0.0

    def test_missing_landmarks_keep_previous(self):
        tracker = MovementTracker()
        tracker.update(_nose_at(0.5, 0.5))
        assert tracker.update(None).magnitude == 0.0
        assert tracker.update(_nose_at(0.51, 0.5)).x == pytest.approx(1.0)

    def test_reset(self):
        tracker = MovementTracker()
        tracker.update(_nose_at(0.5, 0.5))
        tracker.update(_nose_at(0.8, 0.5))
        tracker.reset()

        assert tracker.actions == []
        assert len(tracker.history) == 0
        assert tracker.update(_nose_at(0.1, 0.1)).magnitude == 0.0
