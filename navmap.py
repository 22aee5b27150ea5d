"""navmap.py — Hierarchical NCX navigation map with play order and depth."""

from dataclasses import dataclass, field

from ids import TITLE_PAGE, TOC_PAGE
from models import Book, Chapter

TOC_LABEL = "Table of Contents"


@dataclass
class NavPoint:
    label: str
    src: str
    play_order: int
    children: list["NavPoint"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return f"navpoint-{self.play_order}"


@dataclass
class NavMap:
    points: list[NavPoint]
    depth: int   # Deepest nesting emitted; top-level points are depth 1


class _NavContext:
    """Play-order counter and depth tracker shared by one traversal."""

    def __init__(self):
        self.play_order = 0
        self.depth = 0

    def point(self, label: str, src: str, level: int) -> NavPoint:
        self.play_order += 1
        self.depth = max(self.depth, level)
        return NavPoint(label=label, src=src, play_order=self.play_order)


def _chapter_points(chapters: list[Chapter], ctx: _NavContext, level: int) -> list[NavPoint]:
    points = []
    for chapter in chapters:
        # Parent takes its number before any child does
        point = ctx.point(chapter.title, chapter.html_file, level)
        point.children = _chapter_points(chapter.children, ctx, level + 1)
        points.append(point)
    return points


def build_navmap(book: Book) -> NavMap:
    """
    Title page (1) and TOC page (2), then one nested point per chapter.
    Play order is a single pre-order count across the whole map.
    """
    ctx = _NavContext()
    points = [
        ctx.point(book.title, TITLE_PAGE, 1),
        ctx.point(TOC_LABEL, TOC_PAGE, 1),
    ]
    points.extend(_chapter_points(book.chapters, ctx, 1))
    return NavMap(points=points, depth=ctx.depth)
