from pathlib import Path

import pytest

from models import Book, Chapter

# Intro, Chapter 1 > 1.1
SCENARIO_CHAPTERS = [
    {"title": "Intro", "source": "intro.md"},
    {
        "title": "Chapter 1",
        "source": "ch1.md",
        "subchapters": [{"title": "1.1", "source": "ch1_1.md"}],
    },
]


def chapters_from(outline: list[dict]) -> list[Chapter]:
    chapters = []
    for entry in outline:
        chapter = Chapter(title=entry["title"], source=entry["source"])
        chapter.children = chapters_from(entry.get("subchapters", []))
        chapters.append(chapter)
    return chapters


def write_sources(working_dir: Path, outline: list[dict]) -> None:
    for entry in outline:
        path = working_dir / entry["source"]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {entry['title']}\n\nText of {entry['title']}.\n", encoding="utf-8")
        write_sources(working_dir, entry.get("subchapters", []))


@pytest.fixture(autouse=True)
def _no_env_defaults(monkeypatch):
    monkeypatch.delenv("MD2EPUB_LANGUAGE", raising=False)
    monkeypatch.delenv("MD2EPUB_CSS", raising=False)


@pytest.fixture
def make_book(tmp_path):
    def _make(outline=SCENARIO_CHAPTERS, **kwargs) -> Book:
        write_sources(tmp_path, outline)
        kwargs.setdefault("title", "Test Book")
        kwargs.setdefault("author", "A. Author")
        return Book(chapters=chapters_from(outline), working_dir=tmp_path, **kwargs)
    return _make


@pytest.fixture
def scenario_book(make_book) -> Book:
    return make_book()
