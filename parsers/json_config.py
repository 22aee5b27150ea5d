"""parsers/json_config.py — Load a book config written in JSON."""

import json
from pathlib import Path

from errors import ConfigError
from models import Book
from parsers.base import book_from_dict


def load_json(config_path: Path) -> Book:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    return book_from_dict(data, config_path.parent)
