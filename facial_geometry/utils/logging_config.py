"""
로깅 설정 모듈

핸들러는 패키지 로거('facial_geometry') 한 곳에만 붙이고,
각 모듈은 get_logger(__name__) 으로 하위 로거를 받아 전파(propagate)로 출력한다.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config_loader import Config, get_config

PACKAGE_LOGGER = 'facial_geometry'

_configured = False


def _level(name: Optional[str], fallback: int) -> int:
    if not name:
        return fallback
    return getattr(logging, str(name).upper(), fallback)


def configure_logging(config: Optional[Config] = None, level: Optional[str] = None) -> logging.Logger:
    """
    config.yaml 의 logging 섹션으로 패키지 로거 (재)설정

    Args:
        config: 사용할 설정 (None이면 전역 설정)
        level: 로그 레벨 강제 지정 (예: 'DEBUG'), 콘솔 핸들러에도 적용

    Returns:
        패키지 로거
    """
    global _configured

    config = config or get_config()
    settings = config.get('logging', {}) or {}
    console = settings.get('console', {}) or {}
    file_settings = settings.get('file', {}) or {}

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(_level(level or settings.get('level'), logging.INFO))
    formatter = logging.Formatter(
        settings.get('format', '%(asctime)s [%(levelname)s] %(name)s: %(message)s'),
        datefmt=settings.get('date_format'),
    )

    if console.get('enabled', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(level or console.get('level'), logging.INFO))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_settings.get('enabled', False):
        log_dir = Path(file_settings.get('directory', 'logs'))
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / file_settings.get('filename', 'facial_geometry.log'),
            maxBytes=file_settings.get('max_bytes', 5 * 1024 * 1024),
            backupCount=file_settings.get('backup_count', 3),
            encoding='utf-8'
        )
        file_handler.setLevel(_level(file_settings.get('level'), logging.DEBUG))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _configured = True
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    모듈 로거 반환 (처음 호출 시 패키지 로거 설정)

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용)
    """
    if not _configured:
        configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)
