"""프레임 간 얼굴 검출 상태 추적 (디바운스 / 움직임)"""

import time
from collections import deque
from typing import Any, Deque, List, Optional, Tuple

from ..models import DetectedAction, MovementData, TrackingState
from ..config.constants import NOSE_TIP
from ..config.settings import TrackingConfig
from ..core.normalizer import CoordinateNormalizer
from ..utils.config_loader import Config, get_config
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


class FaceDetectionTracker:
    """
    얼굴 검출 플래그 디바운스

    - 검출 성공: successes += 1, consecutive_hits += 1, misses = 0
    - 검출 실패: misses += 1, consecutive_hits = 0, successes = max(0, successes - 1)
    - detect_frames 번 연속 성공하면 face_detected = True
    - lost_frames 를 초과해 연속 실패하면 face_detected = False
    """

    def __init__(
        self,
        detect_frames: int = 1,
        lost_frames: int = 10,
        classification_interval: int = 30,
        confidence_frames: int = 10,
    ):
        # 검증은 TrackingConfig 에 위임
        self.config = TrackingConfig(
            detect_frames=detect_frames,
            lost_frames=lost_frames,
            confidence_frames=confidence_frames,
            classification_interval=classification_interval,
        )
        self.reset()

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'FaceDetectionTracker':
        settings = TrackingConfig.from_config(config)
        return cls(
            detect_frames=settings.detect_frames,
            lost_frames=settings.lost_frames,
            classification_interval=settings.classification_interval,
            confidence_frames=settings.confidence_frames,
        )

    def reset(self):
        """추적 상태 초기화"""
        self.face_detected = False
        self.successful_detections = 0
        self.consecutive_hits = 0
        self.missed_detections = 0

    @property
    def confidence(self) -> float:
        return min(self.successful_detections / self.config.confidence_frames, 1.0)

    def update(self, detected: bool) -> TrackingState:
        """
        프레임 검출 결과로 상태 갱신

        Args:
            detected: 이번 프레임에서 얼굴이 검출되었는지

        Returns:
            갱신된 TrackingState
        """
        was_detected = self.face_detected
        should_analyze = False

        if detected:
            self.successful_detections += 1
            self.consecutive_hits += 1
            self.missed_detections = 0

            if not self.face_detected and self.consecutive_hits >= self.config.detect_frames:
                self.face_detected = True
                logger.info("Face detected")

            should_analyze = (
                self.face_detected
                and self.successful_detections % self.config.classification_interval == 0
            )
        else:
            self.missed_detections += 1
            self.consecutive_hits = 0
            self.successful_detections = max(0, self.successful_detections - 1)

            if self.face_detected and self.missed_detections > self.config.lost_frames:
                self.face_detected = False
                logger.info("Face lost")

        return TrackingState(
            face_detected=self.face_detected,
            confidence=self.confidence,
            successful_detections=self.successful_detections,
            missed_detections=self.missed_detections,
            changed=was_detected != self.face_detected,
            should_analyze=should_analyze,
        )


class MovementTracker:
    """코 끝(landmark 1) 이동량 기반 머리 움직임 추적"""

    def __init__(
        self,
        history_size: int = 30,
        trend_window: int = 5,
        action_threshold: float = 10.0,
        max_actions: int = 10,
    ):
        if history_size < 1 or trend_window < 1 or max_actions < 1:
            raise ValueError("history_size, trend_window and max_actions must be >= 1")

        self.history_size = history_size
        self.trend_window = trend_window
        self.action_threshold = action_threshold
        self.max_actions = max_actions

        self.history: Deque[MovementData] = deque(maxlen=history_size)
        self.actions: List[DetectedAction] = []
        self._previous: Optional[Tuple[float, float]] = None

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'MovementTracker':
        config = config if config is not None else get_config()
        return cls(
            history_size=config.get('movement.history_size', 30),
            trend_window=config.get('movement.trend_window', 5),
            action_threshold=config.get('movement.action_threshold', 10.0),
            max_actions=config.get('movement.max_actions', 10),
        )

    def reset(self):
        self.history.clear()
        self.actions = []
        self._previous = None

    def update(self, landmarks: Any, timestamp: Optional[float] = None) -> MovementData:
        """
        이전 프레임 대비 코 끝 이동량 계산

        좌표는 정규화 좌표 기준이며 델타에 100을 곱해 사용한다.
        첫 프레임(또는 코 끝을 구할 수 없는 경우)은 0 움직임을 반환한다.

        Args:
            landmarks: Landmark 리스트 또는 정규화 좌표 배열
            timestamp: 샘플 시각 (None이면 현재 시각)

        Returns:
            MovementData
        """
        timestamp = time.time() if timestamp is None else timestamp
        nose = self._nose_tip(landmarks)
        if nose is None:
            return MovementData(timestamp=timestamp)

        previous, self._previous = self._previous, nose
        if previous is None:
            return MovementData(timestamp=timestamp)

        dx = (nose[0] - previous[0]) * 100
        dy = (nose[1] - previous[1]) * 100
        movement = MovementData(
            x=dx,
            y=dy,
            magnitude=(dx ** 2 + dy ** 2) ** 0.5,
            timestamp=timestamp,
        )
        self.history.append(movement)

        if movement.magnitude > self.action_threshold:
            self._record_action(movement)

        return movement

    @staticmethod
    def _nose_tip(landmarks: Any) -> Optional[Tuple[float, float]]:
        if landmarks is None:
            return None

        try:
            items = list(landmarks)
        except TypeError:
            return None
        if len(items) <= NOSE_TIP:
            return None

        # 이동량은 항상 정규화 좌표 기준 (pixel 좌표 무시)
        nose = items[NOSE_TIP]
        if hasattr(nose, 'x') and hasattr(nose, 'y'):
            return (float(nose.x), float(nose.y))

        points = CoordinateNormalizer.to_points(items[:NOSE_TIP + 1])
        if points is None:
            return None
        return (float(points[NOSE_TIP][0]), float(points[NOSE_TIP][1]))

    def _record_action(self, movement: MovementData):
        if abs(movement.x) > abs(movement.y):
            name = "Head turning right" if movement.x > 0 else "Head turning left"
            delta = movement.x
        else:
            name = "Head moving down" if movement.y > 0 else "Head moving up"
            delta = movement.y

        action = DetectedAction(
            action=name,
            confidence=min(0.7 + abs(delta) / 100, 0.95),
            timestamp=movement.timestamp,
        )
        # 최신 동작이 앞쪽
        self.actions = [action] + self.actions[:self.max_actions - 1]
        logger.debug(f"Detected action: {name} ({action.confidence:.2f})")

    def trends(self) -> MovementData:
        """최근 trend_window 개 샘플의 평균 움직임 (샘플 2개 미만이면 0)"""
        if len(self.history) < 2:
            return MovementData()

        recent = list(self.history)[-self.trend_window:]
        count = len(recent)
        return MovementData(
            x=sum(m.x for m in recent) / count,
            y=sum(m.y for m in recent) / count,
            magnitude=sum(m.magnitude for m in recent) / count,
            timestamp=recent[-1].timestamp,
        )
