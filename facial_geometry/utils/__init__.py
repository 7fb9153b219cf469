"""
Utilities package.
"""
from .config_loader import get_config, reload_config, set_config, Config
from .logging_config import configure_logging, get_logger

__all__ = [
    'get_config', 'reload_config', 'set_config', 'Config',
    'configure_logging', 'get_logger',
]
