"""ids.py — Assign manifest/navigation ids and HTML file names to chapters."""

import hashlib
from pathlib import PurePath

from errors import DuplicateFileNameError, DuplicateIdError
from models import Chapter, walk_chapters

ID_PREFIX = "chapter-"

# Pages the builder generates itself; no chapter may be written over them.
TITLE_PAGE = "title_page.html"
TOC_PAGE = "table_of_contents.html"
RESERVED_PAGES = (TITLE_PAGE, TOC_PAGE)


def chapter_id(title: str, source: str) -> str:
    """
    SHA-1 of title and source. The prefix keeps the id a valid XML name
    (a bare hex digest may start with a digit).
    """
    digest = hashlib.sha1(f"{title}_{source}".encode("utf-8")).hexdigest()
    return f"{ID_PREFIX}{digest}"


def html_file_name(source: str) -> str:
    """'text/ch1.md' -> 'ch1.html'. Only the last extension is replaced."""
    return f"{PurePath(source).stem}.html"


def allocate_ids(chapters: list[Chapter]) -> dict[str, Chapter]:
    """
    Walk the whole tree in pre-order, setting chapter.id and chapter.html_file.
    Returns the allocated ids mapped to their chapters.

    Raises DuplicateIdError when two chapters hash to the same id and
    DuplicateFileNameError when two chapters would share an HTML page.
    """
    allocated: dict[str, Chapter] = {}
    pages: dict[str, Chapter | None] = {name: None for name in RESERVED_PAGES}

    for chapter in walk_chapters(chapters):
        ident = chapter_id(chapter.title, chapter.source)
        if ident in allocated:
            raise DuplicateIdError(ident, allocated[ident], chapter)

        page = html_file_name(chapter.source)
        if page in pages:
            owner = pages[page]
            raise DuplicateFileNameError(page, owner if owner else "generated page", chapter)

        chapter.id = ident
        chapter.html_file = page
        allocated[ident] = chapter
        pages[page] = chapter

    return allocated
