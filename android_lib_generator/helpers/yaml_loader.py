#!/usr/bin/env python3
"""
YAML loading for user-edited files (android-lib.yaml).
Uses ruamel.yaml so quotes and comments survive a load/dump cycle.
"""

from pathlib import Path
from typing import Union, cast

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from android_lib_generator.core.errors import ConfigError

# Recursive type for nested YAML structures
ConfigValue = Union[str, int, float, bool, None, 'ConfigDict', list['ConfigValue']]
ConfigDict = dict[str, ConfigValue]


def _create_yaml_loader() -> YAML:
    """Create the round-trip YAML instance shared by this module."""
    yaml_obj = YAML()
    yaml_obj.preserve_quotes = True
    yaml_obj.default_flow_style = False
    return yaml_obj


# Singleton round-trip loader
yaml = _create_yaml_loader()


def load_yaml_file(file_path: Path) -> ConfigValue:
    """Load a YAML file.

    ruamel.yaml's round-trip load() is safe (no arbitrary object construction).

    Args:
        file_path: Path to YAML file to load

    Returns:
        Parsed YAML content (None for an empty file)

    Raises:
        FileNotFoundError: If file does not exist
        ConfigError: If the file is not valid YAML
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    try:
        with file_path.open(encoding="utf-8") as f:
            return cast(ConfigValue, yaml.load(f))
    except YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {file_path}: {exc}") from exc


def save_yaml_file(data: ConfigDict, file_path: Path) -> None:
    """Save data to YAML file with comment preservation.

    Args:
        data: Configuration dictionary to save
        file_path: Path to YAML file to write
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with file_path.open('w', encoding='utf-8') as f:
        yaml.dump(data, f)
