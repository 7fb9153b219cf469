"""
분석 결과를 JSON으로 변환 (UI/엔진 연동용 enum 코드 포함)
"""
import json
import os
from datetime import datetime
from typing import Any, Dict, Optional

from ..models import MovementData, ProcessedResult
from .logging_config import get_logger

logger = get_logger(__name__)


# Enum 코드 정의 (클라이언트와 동일하게 매칭)
FACE_SHAPE_ENUM = {
    "Oval": 0,
    "Oblong": 1,
    "Round": 2,
    "Square": 3,
    "Heart": 4,
    "Unknown": -1
}

EYE_SHAPE_ENUM = {
    "Almond": 0,
    "Wide": 1,
    "Round": 2,
    "Unknown": -1
}

LIP_SHAPE_ENUM = {
    "Average": 0,
    "Wide": 1,
    "Full": 2,
    "Unknown": -1
}

JAWLINE_ENUM = {
    "Average": 0,
    "Angular": 1,
    "Soft": 2,
    "Unknown": -1
}

SKIN_TONE_ENUM = {
    "Light": 0,
    "Medium": 1,
    "Tan": 2,
    "Deep": 3,
    "Unknown": -1
}


def to_json(result: ProcessedResult, image_path: str = "") -> Dict[str, Any]:
    """
    처리 결과를 JSON 직렬화 가능한 딕셔너리로 변환
    - 각 분류: enum 코드 + 원본 문자열
    - 얼굴이 없으면 face_detected = 0, 분류 필드는 Unknown(-1)

    Args:
        result: FrameProcessor 결과
        image_path: 원본 이미지 경로 (선택)

    Returns:
        dict: JSON 직렬화 가능한 딕셔너리
    """
    detection = result.detection_result
    detected = bool(detection is not None and detection.success)
    classification = result.classification

    names = {
        "face_shape": classification.face_shape.value if classification else "Unknown",
        "eye_shape": classification.eye_shape.value if classification else "Unknown",
        "lip_shape": classification.lip_shape.value if classification else "Unknown",
        "jawline": classification.jawline_type.value if classification else "Unknown",
        "skin_tone": classification.skin_tone.value if classification else "Unknown",
    }

    output = {
        "face_detected": 1 if detected else 0,

        # 분류 (enum + 원본 문자열)
        "face_shape": FACE_SHAPE_ENUM.get(names["face_shape"], -1),
        "face_shape_name": names["face_shape"],
        "eye_shape": EYE_SHAPE_ENUM.get(names["eye_shape"], -1),
        "eye_shape_name": names["eye_shape"],
        "lip_shape": LIP_SHAPE_ENUM.get(names["lip_shape"], -1),
        "lip_shape_name": names["lip_shape"],
        "jawline": JAWLINE_ENUM.get(names["jawline"], -1),
        "jawline_name": names["jawline"],
        "skin_tone": SKIN_TONE_ENUM.get(names["skin_tone"], -1),
        "skin_tone_name": names["skin_tone"],

        # 메타데이터
        "timestamp": datetime.now().isoformat(),
        "image_path": image_path or result.metadata.get('image_path', ""),
    }

    if classification is not None and classification.measurements is not None:
        output["measurements"] = classification.measurements.to_dict()

    if result.regions is not None:
        output["regions"] = result.regions.to_dict()

    if detection is not None and detection.face_geometry is not None:
        geometry = detection.face_geometry
        output["head_pose"] = {
            "pitch": round(geometry.pitch, 2),
            "yaw": round(geometry.yaw, 2),
            "roll": round(geometry.roll, 2),
        }

    if result.movement is not None:
        output["movement"] = {
            "current": result.movement.to_dict(),
            "trend": (result.trends or MovementData()).to_dict(),
            "actions": [action.to_dict() for action in result.actions],
        }

    return output


def save_json(result: ProcessedResult, output_path: str, image_path: str = "") -> Dict[str, Any]:
    """
    처리 결과를 JSON 파일로 저장

    Args:
        result: FrameProcessor 결과
        output_path: 저장할 JSON 파일 경로
        image_path: 원본 이미지 경로 (선택)

    Returns:
        저장된 딕셔너리
    """
    dir_path = os.path.dirname(output_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    json_data = to_json(result, image_path)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(json_data, f, indent=2, ensure_ascii=False)

    logger.info(f"[JSON] Saved to: {output_path}")
    return json_data


def to_json_string(result: ProcessedResult, image_path: str = "", indent: Optional[int] = 2) -> str:
    """처리 결과를 JSON 문자열로 변환"""
    return json.dumps(to_json(result, image_path), indent=indent, ensure_ascii=False)
