"""parsers/yaml_config.py — Load a book config written in YAML."""

from pathlib import Path

import yaml

from errors import ConfigError
from models import Book
from parsers.base import book_from_dict


def load_yaml(config_path: Path) -> Book:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if data is None:
        raise ConfigError(f"Config file is empty: {config_path}")
    return book_from_dict(data, config_path.parent)
