"""프레임 처리 파이프라인 (검출 → 추적 → 영역 → 분류 → 메이크업)"""

import time
from pathlib import Path
from typing import Any, Generator, List, Optional

import cv2
import numpy as np

from ..models import (
    DetectionResult,
    FacialClassification,
    MakeupConfiguration,
    ProcessedResult,
)
from ..core.normalizer import CoordinateNormalizer
from ..utils.exceptions import InvalidImageError
from ..utils.logging_config import get_logger
from ..utils.validators import validate_image
from .detection_tracker import FaceDetectionTracker, MovementTracker
from .face_classifier import FacialGeometryClassifier
from .geometry import GeometryCalculator
from .makeup_renderer import MakeupRenderer
from .region_mapper import MakeupRegionMapper

logger = get_logger(__name__)

WINDOW_NAME = 'Facial Geometry'


class FrameProcessor:
    """프레임 처리 파이프라인"""

    def __init__(
        self,
        detector: Any,
        classifier: Optional[FacialGeometryClassifier] = None,
        mapper: Optional[MakeupRegionMapper] = None,
        tracker: Optional[FaceDetectionTracker] = None,
        movement: Optional[MovementTracker] = None,
        renderer: Optional[MakeupRenderer] = None,
        skin_tone: bool = True,
        draw_regions: bool = False,
    ):
        """
        초기화

        Args:
            detector: detect(image) -> DetectionResult 를 제공하는 검출기 (FaceDetector)
            classifier: 얼굴 특징 분류기
            mapper: 메이크업 영역 매퍼
            tracker: 검출 디바운스 추적기
            movement: 머리 움직임 추적기
            renderer: 메이크업 렌더러
            skin_tone: 프레임 픽셀로 피부톤 추정 여부
            draw_regions: 결과 이미지에 영역 외곽선 표시 여부
        """
        self.detector = detector
        self.classifier = classifier or FacialGeometryClassifier()
        self.mapper = mapper or MakeupRegionMapper()
        self.tracker = tracker or FaceDetectionTracker()
        self.movement = movement or MovementTracker()
        self.renderer = renderer or MakeupRenderer()
        self.skin_tone = skin_tone
        self.draw_regions = draw_regions
        self.geometry_calculator = GeometryCalculator()

        self._last_classification: Optional[FacialClassification] = None

    @property
    def last_classification(self) -> Optional[FacialClassification]:
        return self._last_classification

    def reset(self):
        """프레임 간 상태 초기화 (새 입력 소스 시작 시)"""
        self.tracker.reset()
        self.movement.reset()
        self._last_classification = None

    def process_frame(
        self,
        frame: np.ndarray,
        makeup: Optional[MakeupConfiguration] = None,
        force_analysis: bool = False
    ) -> ProcessedResult:
        """
        단일 프레임 처리

        분류는 추적기가 지정한 주기마다 수행하고, 그 사이 프레임에서는
        마지막 분류 결과를 재사용한다.

        Args:
            frame: BGR 프레임
            makeup: 적용할 메이크업 설정 (선택)
            force_analysis: 주기와 무관하게 분류 수행

        Returns:
            ProcessedResult
        """
        validate_image(frame)

        detection_result: DetectionResult = self.detector.detect(frame)
        tracking = self.tracker.update(detection_result.success)

        if tracking.changed and not tracking.face_detected:
            self.movement.reset()
            self._last_classification = None

        regions = None
        movement = None
        if detection_result.success:
            landmarks = detection_result.landmarks

            # 기하학 정보 추가
            detector_config = getattr(self.detector, 'config', None)
            if getattr(detector_config, 'enable_face_geometry', True):
                points = CoordinateNormalizer.to_points(landmarks, frame_size=(frame.shape[1], frame.shape[0]))
                if points is not None:
                    detection_result.face_geometry = self.geometry_calculator.get_face_geometry(points)

            regions = self.mapper.map_regions(landmarks)
            movement = self.movement.update(landmarks)

            needs_analysis = (
                force_analysis
                or tracking.should_analyze
                or self._last_classification is None
            )
            if needs_analysis:
                classification = self.classifier.classify(
                    landmarks, image=frame if self.skin_tone else None
                )
                if classification is not None:
                    self._last_classification = classification

        annotated = self._render(frame, regions, makeup)

        return ProcessedResult(
            original_image=frame,
            annotated_image=annotated,
            detection_result=detection_result,
            tracking=tracking,
            movement=movement,
            trends=self.movement.trends() if movement is not None else None,
            actions=list(self.movement.actions) if movement is not None else [],
            regions=regions,
            classification=self._last_classification if detection_result.success else None,
            metadata={
                'timestamp': time.time(),
                'image_shape': frame.shape,
            }
        )

    def _render(self, frame, regions, makeup) -> np.ndarray:
        annotated = self.renderer.apply(frame, regions, makeup)
        if self.draw_regions and regions is not None:
            annotated = self.renderer.draw_regions(annotated, regions)
        return annotated

    def process_image(
        self,
        image_path: str,
        makeup: Optional[MakeupConfiguration] = None
    ) -> ProcessedResult:
        """
        단일 이미지 처리 (항상 분류 수행)

        Args:
            image_path: 이미지 파일 경로
            makeup: 적용할 메이크업 설정 (선택)

        Returns:
            ProcessedResult: 처리 결과

        Raises:
            InvalidImageError: 이미지 로드 실패
        """
        image = cv2.imread(str(image_path))
        if image is None:
            raise InvalidImageError(f"Failed to load image: {image_path}")

        # 이미지끼리는 독립적
        self.reset()
        result = self.process_frame(image, makeup=makeup, force_analysis=True)
        result.metadata['image_path'] = str(image_path)

        if not result.detection_result.success:
            logger.warning(f"No face detected: {image_path}")
        return result

    def process_batch(
        self,
        image_paths: List[str],
        makeup: Optional[MakeupConfiguration] = None
    ) -> List[ProcessedResult]:
        """배치 이미지 처리"""
        return [self.process_image(path, makeup=makeup) for path in image_paths]

    def process_video(
        self,
        video_path: str,
        output_path: Optional[str] = None,
        makeup: Optional[MakeupConfiguration] = None
    ) -> Generator[ProcessedResult, None, None]:
        """
        비디오 처리 (제너레이터)

        Args:
            video_path: 비디오 파일 경로
            output_path: 결과 비디오 경로 (선택적)
            makeup: 적용할 메이크업 설정 (선택)

        Yields:
            ProcessedResult: 각 프레임의 처리 결과
        """
        cap = cv2.VideoCapture(str(video_path))
        if not cap.isOpened():
            raise InvalidImageError(f"Failed to open video: {video_path}")

        self.reset()
        writer = None
        frame_count = 0

        try:
            while cap.isOpened():
                ret, frame = cap.read()
                if not ret:
                    break

                result = self.process_frame(frame, makeup=makeup)
                result.metadata.update({
                    'video_path': str(video_path),
                    'frame_number': frame_count,
                })

                if output_path is not None:
                    if writer is None:
                        writer = self._open_writer(cap, output_path, frame)
                    writer.write(result.annotated_image)

                yield result
                frame_count += 1

        finally:
            cap.release()
            if writer is not None:
                writer.release()
            logger.info(f"Processed {frame_count} frames from {video_path}")

    @staticmethod
    def _open_writer(cap, output_path: str, frame: np.ndarray):
        fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
        height, width = frame.shape[:2]
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        return cv2.VideoWriter(str(output_path), fourcc, fps, (width, height))

    def process_realtime(
        self,
        camera_id: int = 0,
        display: bool = True,
        max_frames: Optional[int] = None,
        makeup: Optional[MakeupConfiguration] = None
    ) -> Generator[ProcessedResult, None, None]:
        """
        실시간 카메라 처리

        Args:
            camera_id: 카메라 디바이스 ID
            display: 결과 화면 표시 여부 ('q' 로 종료)
            max_frames: 최대 처리 프레임 수 (None이면 무한)
            makeup: 적용할 메이크업 설정 (선택)

        Yields:
            ProcessedResult: 각 프레임의 처리 결과
        """
        cap = cv2.VideoCapture(camera_id)
        if not cap.isOpened():
            raise InvalidImageError(f"Failed to open camera {camera_id}")

        self.reset()
        frame_count = 0

        try:
            while cap.isOpened():
                if max_frames and frame_count >= max_frames:
                    break

                ret, frame = cap.read()
                if not ret:
                    break

                result = self.process_frame(frame, makeup=makeup)
                result.metadata.update({
                    'camera_id': camera_id,
                    'frame_number': frame_count,
                })

                if display:
                    cv2.imshow(WINDOW_NAME, self._display_frame(result))
                    if cv2.waitKey(1) & 0xFF == ord('q'):
                        break

                yield result
                frame_count += 1

        finally:
            cap.release()
            if display:
                cv2.destroyAllWindows()

    def _display_frame(self, result: ProcessedResult) -> np.ndarray:
        """화면 표시용 프레임 (얼굴 박스 + 분류 요약)"""
        display_frame = result.annotated_image
        detection = result.detection_result
        if detection is not None and detection.success:
            display_frame = self.renderer.draw_face_box(display_frame, detection.bounding_box)

        if result.classification is not None:
            c = result.classification
            lines = [
                f"Face: {c.face_shape.value}  Jaw: {c.jawline_type.value}",
                f"Eyes: {c.eye_shape.value}  Lips: {c.lip_shape.value}  Skin: {c.skin_tone.value}",
            ]
            color = self.renderer.style.text_color
            for i, line in enumerate(lines):
                cv2.putText(display_frame, line, (10, 25 + i * 22),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.55, color, 1, cv2.LINE_AA)
        return display_frame
