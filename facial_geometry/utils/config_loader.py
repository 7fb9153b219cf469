"""
Configuration Loader Module

패키지 기본 config.yaml 위에 사용자 설정 파일을 덮어써서(deep merge) 제공한다.
사용자 파일에는 바꾸고 싶은 키만 적으면 된다.
"""
import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV_VAR = 'FACIAL_GEOMETRY_CONFIG_PATH'
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Pass an existing config.yaml or set {CONFIG_ENV_VAR}."
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format in {path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """override 값을 base 에 재귀적으로 병합한 새 dict"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _wrap(value: Any) -> Any:
    return ConfigSection(value) if isinstance(value, dict) else value


class Config:
    """
    설정 관리자

    Usage:
        config = Config()
        threshold = config.get('classification.face.oblong_ratio')
        # or
        threshold = config.classification.face.oblong_ratio
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: 사용자 config.yaml 경로
                (None이면 FACIAL_GEOMETRY_CONFIG_PATH, 그것도 없으면 패키지 기본값만 사용)
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR)

        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        defaults = _read_yaml(DEFAULT_CONFIG_PATH)
        if self.config_path.resolve() == DEFAULT_CONFIG_PATH:
            self._config = defaults
        else:
            self._config = _merge(defaults, _read_yaml(self.config_path))

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        점(.) 구분 경로로 설정값 조회

        >>> Config().get('classification.lip.wide_ratio')
        4.0
        """
        value = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
        if name in self._config:
            return _wrap(self._config[name])
        raise AttributeError(f"Config has no key '{name}'")

    def reload(self):
        """설정 파일 다시 로드"""
        self._load_config()

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def __repr__(self):
        return f"Config(path={self.config_path})"


class ConfigSection:
    """중첩 dict 를 속성 방식으로 접근하기 위한 래퍼"""

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
        if name in self._data:
            return _wrap(self._data[name])
        raise AttributeError(f"ConfigSection has no key '{name}'")

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def __repr__(self):
        return f"ConfigSection({list(self._data.keys())})"


_global_config: Optional[Config] = None


def get_config() -> Config:
    """전역 Config 인스턴스 (최초 호출 시 생성)"""
    global _global_config
    if _global_config is None:
        _global_config = Config()
    return _global_config


def reload_config():
    """전역 설정 다시 로드"""
    if _global_config is not None:
        _global_config.reload()


def set_config(config: Optional[Config]):
    """전역 설정 교체 (None 이면 다음 get_config() 에서 다시 생성)"""
    global _global_config
    _global_config = config
