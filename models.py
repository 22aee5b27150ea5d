"""models.py — Shared data types for md2epub."""

import hashlib
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from errors import ConfigError

DEFAULT_LANGUAGE = "en-US"

# Characters XML 1.0 forbids outright; no escaping makes them legal
XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def slugify(title: str) -> str:
    """'Test Book' -> 'test_book'. Anything unsafe in a file name becomes '_'."""
    slug = re.sub(r"[^\w\-.]+", "_", title.strip().lower()).strip("_.")
    return slug or "book"


@dataclass
class Chapter:
    title: str       # Display title, e.g. "Chapter 1: The Beginning"
    source: str      # Markdown source, relative to Book.working_dir
    children: list["Chapter"] = field(default_factory=list)
    id: str = ""          # Assigned once by ids.allocate_ids()
    html_file: str = ""   # Assigned once by ids.allocate_ids()

    def add(self, chapter: "Chapter") -> "Chapter":
        self.children.append(chapter)
        return chapter

    @property
    def depth(self) -> int:
        """Nesting levels from this chapter to its deepest descendant, inclusive."""
        if not self.children:
            return 1
        return 1 + max(child.depth for child in self.children)

    def __str__(self) -> str:
        return f"'{self.title}' ({self.source})"


@dataclass
class Book:
    title: str
    author: str
    chapters: list[Chapter]
    working_dir: Path
    language: str = DEFAULT_LANGUAGE
    stylesheet: Path | None = None
    cover: Path | None = None
    images: list[Path] = field(default_factory=list)

    def __post_init__(self):
        if not self.chapters:
            raise ConfigError(f"Book '{self.title}' declares no chapters")
        fields = [("title", self.title), ("author", self.author), ("language", self.language)]
        for ch in walk_chapters(self.chapters):
            fields += [("chapter title", ch.title), ("chapter source", ch.source)]
        for name, text in fields:
            if XML_ILLEGAL_RE.search(text):
                raise ConfigError(f"{name} contains a control character not allowed in XML: {text!r}")

    @property
    def book_id(self) -> str:
        return hashlib.sha1(f"[{self.title}|{self.author}]".encode("utf-8")).hexdigest()

    @property
    def output_name(self) -> str:
        """File name of the finished archive, e.g. 'test_book.epub'."""
        return f"{slugify(self.title)}.epub"

    @property
    def depth(self) -> int:
        return max(ch.depth for ch in self.chapters)

    def resolve(self, path: str | Path) -> Path:
        return self.working_dir / path


def walk_chapters(chapters: list[Chapter]) -> Iterator[Chapter]:
    """Depth-first pre-order: a parent precedes its descendants, siblings in order."""
    for chapter in chapters:
        yield chapter
        yield from walk_chapters(chapter.children)
