"""
Reading match settings from YAML files.
"""

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError
from .game_config import GameConfig, default_config

CONFIG_KEYS = frozenset(f.name for f in fields(GameConfig))


def _split_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Keep the keys GameConfig knows; warn about the rest."""
    for key in sorted(set(settings) - CONFIG_KEYS):
        print(f"Warning: Unknown config key '{key}' in YAML file")
    return {key: value for key, value in settings.items() if key in CONFIG_KEYS}


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Build a GameConfig from a YAML mapping of setting names to values.

    Missing settings keep their defaults and an empty file yields the
    default configuration.

    Raises:
        FileNotFoundError: no file at `config_path`
        yaml.YAMLError: the file is not valid YAML
        ConfigError: the document is not a mapping or a value is out of range
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open('r') as f:
        settings = yaml.safe_load(f)

    if settings is None:
        return GameConfig()
    if not isinstance(settings, dict):
        raise ConfigError("<document>", settings, "expected a mapping of setting names to values")

    return GameConfig(**_split_settings(settings)).validate()


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """The shared default configuration, or the one read from `config_path`."""
    if config_path is None:
        return default_config
    return load_config_from_yaml(config_path)
