"""spine.py — Linear reading order of the package."""

from manifest import TITLE_PAGE_ID, TOC_PAGE_ID
from models import Book, walk_chapters


def build_spine(book: Book) -> list[str]:
    """
    Manifest ids in reading order: title page, TOC page, then every chapter
    in the same pre-order traversal the manifest uses.
    """
    spine = [TITLE_PAGE_ID, TOC_PAGE_ID]
    spine.extend(chapter.id for chapter in walk_chapters(book.chapters))
    return spine
