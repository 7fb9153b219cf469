"""facial-geometry 명령행 도구"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import cv2

from .config.constants import PRODUCT_SHADES
from .config.settings import ClassificationThresholds, DetectionConfig
from .models import MakeupConfiguration, ProductSetting
from .processing.detection_tracker import FaceDetectionTracker, MovementTracker
from .processing.face_classifier import FacialGeometryClassifier
from .processing.makeup_advisor import MakeupAdvisor
from .processing.makeup_renderer import MakeupRenderer
from .processing.region_mapper import MakeupRegionMapper
from .processing.skin_tone import SkinToneEstimator
from .utils.config_loader import Config, get_config, set_config
from .utils.exceptions import FacialGeometryException, InvalidColorError
from .utils.json_exporter import to_json, to_json_string
from .utils.logging_config import configure_logging, get_logger
from .utils.validators import parse_hex_color

logger = get_logger(__name__)

IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.bmp']


def resolve_shade(name: str) -> Optional[str]:
    """프리셋 색상 이름 → HEX (대소문자 무시, 없으면 None)"""
    wanted = name.strip().lower()
    for shades in PRODUCT_SHADES.values():
        for shade, hex_color in shades.items():
            if shade.lower() == wanted:
                return hex_color
    return None


def parse_product(value: str) -> Dict[str, object]:
    """
    제품 인자 파싱 ('#ff0000:0.6' → {'color': '#ff0000', 'intensity': 0.6})

    색상 자리에 프리셋 이름('Classic Red:0.6')도 사용 가능. 강도를 생략하면 0.5
    """
    color, _, intensity = value.partition(':')
    color = resolve_shade(color) or color
    try:
        parse_hex_color(color)
        level = float(intensity) if intensity else 0.5
    except (InvalidColorError, ValueError) as e:
        raise argparse.ArgumentTypeError(f"invalid product value {value!r}: {e}")

    if not 0.0 <= level <= 1.0:
        raise argparse.ArgumentTypeError(f"intensity must be between 0 and 1, got {level}")
    return {'color': color, 'intensity': level}


def build_makeup(args: argparse.Namespace) -> Optional[MakeupConfiguration]:
    """CLI 인자로 메이크업 설정 생성 (지정한 제품이 없으면 None)"""
    products = {}
    for name in MakeupConfiguration.PRODUCTS:
        value = getattr(args, name, None)
        if value is not None:
            products[name] = dict(value)

    if not products:
        return None

    if 'lips' in products and args.glossy:
        products['lips']['glossy'] = True
    if 'foundation' in products:
        products['foundation']['coverage'] = products['foundation']['intensity']

    return MakeupConfiguration(**{name: ProductSetting(**values) for name, values in products.items()})


def collect_images(paths: Sequence[str]) -> List[Path]:
    """파일/디렉토리 인자에서 이미지 파일 목록 수집"""
    image_files = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for ext in IMAGE_EXTENSIONS:
                image_files.extend(path.glob(f'*{ext}'))
                image_files.extend(path.glob(f'*{ext.upper()}'))
        else:
            image_files.append(path)
    return sorted(set(image_files))


def build_processor(config: Config, static_image_mode: bool, draw_regions: bool = False):
    """설정 파일 기반 FrameProcessor 생성 (MediaPipe 는 여기서만 로드)"""
    from .core.face_detector import FaceDetector
    from .processing.frame_processor import FrameProcessor

    detector = FaceDetector(DetectionConfig.from_config(config, static_image_mode=static_image_mode))
    classifier = FacialGeometryClassifier(
        thresholds=ClassificationThresholds.from_config(config),
        skin_tone_estimator=SkinToneEstimator.from_config(config),
    )

    return FrameProcessor(
        detector=detector,
        classifier=classifier,
        mapper=MakeupRegionMapper.from_config(config),
        tracker=FaceDetectionTracker.from_config(config),
        movement=MovementTracker.from_config(config),
        renderer=MakeupRenderer.from_config(config),
        skin_tone=bool(config.get('skin_tone.enabled', True)),
        draw_regions=draw_regions,
    )


def cmd_analyze(args: argparse.Namespace, config: Config) -> int:
    """이미지 분석 (분류 + 영역 + 메이크업 합성)"""
    image_files = collect_images(args.paths)
    if not image_files:
        print("No images found", file=sys.stderr)
        return 1

    makeup = build_makeup(args)
    annotate_dir = Path(args.annotate) if args.annotate else None
    if annotate_dir is not None:
        annotate_dir.mkdir(parents=True, exist_ok=True)

    processor = build_processor(config, static_image_mode=True, draw_regions=args.draw_regions)

    results = []
    start_time = time.time()
    try:
        for i, image_file in enumerate(image_files, 1):
            logger.info(f"[{i}/{len(image_files)}] Analyzing: {image_file.name}")
            try:
                result = processor.process_image(str(image_file), makeup=makeup)
            except FacialGeometryException as e:
                logger.error(f"Failed to analyze {image_file}: {e}")
                results.append({'image_path': str(image_file), 'status': 'error', 'error': str(e)})
                continue

            entry = to_json(result, str(image_file))
            entry['status'] = 'success' if result.classification is not None else 'no_face'
            results.append(entry)

            if result.classification is not None:
                c = result.classification
                print(f"{image_file.name}: face={c.face_shape.value} eyes={c.eye_shape.value} "
                      f"lips={c.lip_shape.value} jaw={c.jawline_type.value} skin={c.skin_tone.value}")
            else:
                print(f"{image_file.name}: no face detected")

            if annotate_dir is not None:
                out_file = annotate_dir / f"{image_file.stem}_annotated{image_file.suffix or '.png'}"
                cv2.imwrite(str(out_file), result.annotated_image)
    finally:
        processor.detector.release()

    elapsed_time = time.time() - start_time
    summary = {
        'total_images': len(image_files),
        'successful': sum(1 for r in results if r.get('status') == 'success'),
        'no_face': sum(1 for r in results if r.get('status') == 'no_face'),
        'failed': sum(1 for r in results if r.get('status') == 'error'),
        'elapsed_time_seconds': round(elapsed_time, 2),
        'results': results,
    }

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)
        logger.info(f"Summary saved to: {json_path}")

    return 0 if summary['failed'] == 0 else 2


def cmd_camera(args: argparse.Namespace, config: Config) -> int:
    """실시간 카메라 미리보기 ('q' 로 종료)"""
    makeup = build_makeup(args)
    processor = build_processor(config, static_image_mode=False, draw_regions=args.draw_regions)

    frames = 0
    last_action = None
    try:
        for result in processor.process_realtime(
            camera_id=args.camera_id,
            display=not args.no_display,
            max_frames=args.max_frames,
            makeup=makeup,
        ):
            frames += 1
            if result.tracking is not None and result.tracking.changed:
                state = "detected" if result.tracking.face_detected else "lost"
                print(f"Face {state} (frame {frames})")

            newest = result.actions[0] if result.actions else None
            if newest is not None and newest is not last_action:
                print(f"{newest.action} ({newest.confidence:.2f})")
            last_action = newest

            if args.json_lines:
                print(to_json_string(result, indent=None), flush=True)
    finally:
        processor.detector.release()

    logger.info(f"Camera session ended after {frames} frames")
    return 0


def cmd_recommend(args: argparse.Namespace, config: Config) -> int:
    """상황/지역/스타일/팔레트 기반 메이크업 추천"""
    recommendation = MakeupAdvisor().get_recommendations(
        args.occasion, args.region, args.style, args.palette
    )
    print(json.dumps(recommendation.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _add_makeup_arguments(parser: argparse.ArgumentParser):
    group = parser.add_argument_group('makeup', 'COLOR[:INTENSITY], e.g. #c21e56:0.6 or "Classic Red:0.6"')
    group.add_argument('--lips', type=parse_product, metavar='COLOR')
    group.add_argument('--eyes', type=parse_product, metavar='COLOR')
    group.add_argument('--cheeks', type=parse_product, metavar='COLOR')
    group.add_argument('--foundation', type=parse_product, metavar='COLOR')
    group.add_argument('--glossy', action='store_true', help='add gloss layer to lips')
    parser.add_argument('--draw-regions', action='store_true', help='outline makeup regions')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='facial-geometry',
        description='Facial geometry classification and virtual makeup overlay',
    )
    parser.add_argument('--config', help='path to config.yaml')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='override logging.level from config')
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    analyze = subparsers.add_parser('analyze', help='classify faces in images')
    analyze.add_argument('paths', nargs='+', help='image files or directories')
    analyze.add_argument('--json', metavar='OUT', help='write summary JSON')
    analyze.add_argument('--annotate', metavar='DIR', help='write rendered images')
    _add_makeup_arguments(analyze)
    analyze.set_defaults(func=cmd_analyze)

    camera = subparsers.add_parser('camera', help='live camera preview')
    camera.add_argument('--camera-id', type=int, default=0)
    camera.add_argument('--max-frames', type=int, default=None)
    camera.add_argument('--no-display', action='store_true')
    camera.add_argument('--json-lines', action='store_true', help='print one JSON result per frame')
    _add_makeup_arguments(camera)
    camera.set_defaults(func=cmd_camera)

    recommend = subparsers.add_parser('recommend', help='makeup look recommendation')
    recommend.add_argument('--occasion', required=True)
    recommend.add_argument('--region', required=True)
    recommend.add_argument('--style', required=True)
    recommend.add_argument('--palette', required=True)
    recommend.set_defaults(func=cmd_recommend)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config:
        set_config(Config(args.config))
    config = get_config()
    configure_logging(config, level=args.log_level)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
