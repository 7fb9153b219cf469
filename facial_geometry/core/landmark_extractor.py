"""FaceMesh 결과 → Landmark 리스트"""

from typing import List

from ..models import Landmark
from ..config.constants import FACE_MESH_LANDMARK_COUNT
from ..utils.exceptions import LandmarkExtractionError


class LandmarkExtractor:
    """MediaPipe FaceMesh 결과에서 한 얼굴의 Landmark 리스트 추출"""

    def __init__(self, min_landmarks: int = FACE_MESH_LANDMARK_COUNT):
        self.min_landmarks = min_landmarks

    def extract_landmarks(
        self,
        mediapipe_result,
        image_width: int,
        image_height: int,
        face_index: int = 0
    ) -> List[Landmark]:
        """
        Args:
            mediapipe_result: FaceMesh.process() 결과
            image_width: 이미지 너비 (pixel 좌표 계산용)
            image_height: 이미지 높이
            face_index: multi_face_landmarks 중 사용할 얼굴

        Returns:
            468개 (refine_landmarks 시 478개) Landmark

        Raises:
            LandmarkExtractionError: 얼굴이 없거나 점 개수가 부족한 경우
        """
        faces = getattr(mediapipe_result, 'multi_face_landmarks', None) if mediapipe_result else None
        if not faces or face_index >= len(faces):
            raise LandmarkExtractionError("No face landmarks found in result")

        points = faces[face_index].landmark
        if len(points) < self.min_landmarks:
            raise LandmarkExtractionError(
                f"Expected at least {self.min_landmarks} landmarks, got {len(points)}"
            )

        return [
            Landmark(
                x=p.x,
                y=p.y,
                z=p.z,
                visibility=getattr(p, 'visibility', 1.0),
                pixel_x=int(p.x * image_width),
                pixel_y=int(p.y * image_height),
            )
            for p in points
        ]
