"""parsers/base.py — Turn a decoded config mapping into a validated Book."""

import os
from pathlib import Path

from errors import ConfigError
from models import DEFAULT_LANGUAGE, XML_ILLEGAL_RE, Book, Chapter

BOOK_KEYS = {"title", "author", "language", "lang", "css", "cover", "images", "chapters"}
CHAPTER_KEYS = {"title", "source", "subchapters"}

# Environment overrides, e.g. from a .env file next to the config
LANGUAGE_ENV = "MD2EPUB_LANGUAGE"
CSS_ENV = "MD2EPUB_CSS"


def normalize_keys(data, where: str) -> dict:
    """
    Check data is a mapping and strip the leading ':' that Ruby-style
    configs put on symbol keys (':title:' -> 'title').
    """
    if not isinstance(data, dict):
        raise ConfigError(f"expected a mapping, got {type(data).__name__}", where)
    result = {}
    for key, value in data.items():
        name = str(key).lstrip(":")
        if name in result:
            raise ConfigError(f"key '{name}' given twice", where)
        result[name] = value
    return result


def _check_keys(data: dict, allowed: set[str], where: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(
            f"unknown key(s) {', '.join(unknown)}. Supported: {', '.join(sorted(allowed))}",
            where,
        )


def _text(data: dict, key: str, where: str, required: bool = True) -> str | None:
    value = data.get(key)
    if value is None:
        if required:
            raise ConfigError(f"missing required '{key}'", where)
        return None
    # YAML reads 'title: 1.1' as a number
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}", where)
    value = str(value).strip()
    if XML_ILLEGAL_RE.search(value):
        raise ConfigError(f"'{key}' contains a control character not allowed in XML: {value!r}", where)
    if not value and required:
        raise ConfigError(f"'{key}' is empty", where)
    return value or None


def _parse_chapter(data, where: str) -> Chapter:
    data = normalize_keys(data, where)
    _check_keys(data, CHAPTER_KEYS, where)
    chapter = Chapter(title=_text(data, "title", where), source=_text(data, "source", where))

    subchapters = data.get("subchapters")
    if subchapters is None:
        subchapters = []
    elif not isinstance(subchapters, list):
        raise ConfigError("'subchapters' must be a list", where)
    for i, sub in enumerate(subchapters):
        chapter.add(_parse_chapter(sub, f"{where}.subchapters[{i}]"))
    return chapter


def _parse_images(value, working_dir: Path) -> list[Path]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("'images' must be a list of paths", "images")
    images = []
    for i, image in enumerate(value):
        if not isinstance(image, str) or not image.strip():
            raise ConfigError("image path must be a non-empty string", f"images[{i}]")
        path = working_dir / image.strip()
        if path not in images:
            images.append(path)
    return images


def book_from_dict(data, working_dir: Path) -> Book:
    """Validate a decoded config document and build the Book it describes."""
    data = normalize_keys(data, "config")
    _check_keys(data, BOOK_KEYS, "config")

    chapters = data.get("chapters")
    if not chapters:
        raise ConfigError("No chapters declared", "chapters")
    if not isinstance(chapters, list):
        raise ConfigError("'chapters' must be a list", "chapters")
    if "language" in data and "lang" in data:
        raise ConfigError("give either 'language' or 'lang', not both", "config")

    language = (
        _text(data, "language", "config", required=False)
        or _text(data, "lang", "config", required=False)
        or os.getenv(LANGUAGE_ENV, "").strip()
        or DEFAULT_LANGUAGE
    )
    css = _text(data, "css", "config", required=False) or os.getenv(CSS_ENV, "").strip()
    cover = _text(data, "cover", "config", required=False)

    return Book(
        title=_text(data, "title", "config"),
        author=_text(data, "author", "config"),
        chapters=[_parse_chapter(ch, f"chapters[{i}]") for i, ch in enumerate(chapters)],
        working_dir=working_dir,
        language=language,
        stylesheet=working_dir / css if css else None,
        cover=working_dir / cover if cover else None,
        images=_parse_images(data.get("images"), working_dir),
    )
