# ctxerror/config.py
"""
Settings for the builtin default handler.

Every field has a default in CaptureConfig. A YAML file may override them
under a single `capture:` section; a file that is missing, undecodable or
not valid YAML leaves the defaults in place. Nothing is read on import,
only through load_config(), and configure() installs the result.

Example config.yml:

    capture:
      logger_name: myservice.errors
      level: WARNING
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".ctxerror" / "config.yml"

VALID_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class CaptureConfig:
    """
    Settings used by the builtin default handler.

    Only affects errors captured under bindings without a handler of
    their own.
    """

    logger_name: str = "ctxerror"
    level: str = "ERROR"

    def __post_init__(self) -> None:
        if not isinstance(self.logger_name, str) or not self.logger_name:
            raise ConfigError("logger_name", self.logger_name, "must be a non-empty string")

        level = str(self.level).strip().upper()
        if level not in VALID_LEVELS:
            raise ConfigError("level", self.level, f"expected one of {', '.join(VALID_LEVELS)}")
        object.__setattr__(self, "level", level)

    @property
    def log_level(self) -> int:
        return getattr(logging, self.level)

    @classmethod
    def default(cls) -> "CaptureConfig":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {"logger_name": self.logger_name, "level": self.level}


def _load_yaml(config_path: Optional[Union[str, Path]] = None) -> Optional[Dict[str, Any]]:
    """Load YAML file, return None if not found (not an error)"""
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be a mapping", path)
        return None
    return data


def _merge_config(default: CaptureConfig, yaml_data: Dict[str, Any]) -> CaptureConfig:
    """Merge YAML data into defaults, keeping the default for any invalid field"""
    known = {f.name for f in fields(CaptureConfig)}
    merged = default.to_dict()

    for key, value in yaml_data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key capture.%s", key)
            continue
        candidate = {**merged, key: value}
        try:
            CaptureConfig(**candidate)
        except ConfigError as e:
            logger.warning("Keeping default for capture.%s: %s", key, e)
            continue
        merged = candidate

    return CaptureConfig(**merged)


def load_config(config_path: Optional[Union[str, Path]] = None) -> CaptureConfig:
    """
    Load ctxerror configuration.

    Args:
        config_path: Optional path to YAML file. Defaults to
            ~/.ctxerror/config.yml.

    Returns:
        CaptureConfig (code defaults when the file is absent or invalid)
    """
    config = CaptureConfig.default()

    yaml_data = _load_yaml(config_path)
    if not yaml_data:
        return config

    section = yaml_data.get("capture")
    if section is None:
        return config
    if not isinstance(section, dict):
        logger.warning("Ignoring config section 'capture': expected a mapping")
        return config

    return _merge_config(config, section)


_active_config: CaptureConfig = CaptureConfig.default()


def configure(config: Optional[CaptureConfig] = None) -> CaptureConfig:
    """Install the process-wide config; None resets to defaults."""
    global _active_config
    _active_config = config if config is not None else CaptureConfig.default()
    return _active_config


def get_config() -> CaptureConfig:
    return _active_config


__all__ = [
    "CaptureConfig",
    "DEFAULT_CONFIG_PATH",
    "VALID_LEVELS",
    "configure",
    "get_config",
    "load_config",
]
