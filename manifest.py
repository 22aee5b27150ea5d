"""manifest.py — Enumerate every resource the package document declares."""

from dataclasses import dataclass
from pathlib import Path

from errors import ConfigError, DuplicateIdError
from ids import TITLE_PAGE, TOC_PAGE
from models import Book, walk_chapters

XHTML = "application/xhtml+xml"
NCX = "application/x-dtbncx+xml"

NCX_FILE = "toc.ncx"

MEDIA_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "css": "text/css",
    "html": XHTML,
    "ncx": NCX,
}

# Fixed ids for resources that are not chapters
NCX_ID = "ncx"
STYLE_ID = "style"
COVER_ID = "book-cover"
TITLE_PAGE_ID = "title_page"
TOC_PAGE_ID = "table_of_contents"


@dataclass
class ManifestItem:
    id: str
    href: str
    media_type: str
    source: Path | None = None   # File copied into the package, for assets
    chapter: object = None       # The Chapter this page renders, if any

    def __str__(self) -> str:
        return f"'{self.id}' ({self.href})"


def media_type_for(path: str | Path) -> str:
    ext = Path(path).suffix.lower().lstrip(".")
    try:
        return MEDIA_TYPES[ext]
    except KeyError:
        raise ConfigError(
            f"Unsupported file type '.{ext}' for '{Path(path).name}'. "
            f"Supported: {', '.join(sorted(MEDIA_TYPES))}"
        ) from None


def _asset_item(ident: str, path: Path) -> ManifestItem:
    return ManifestItem(ident, path.name, media_type_for(path), source=path)


def build_manifest(book: Book) -> list[ManifestItem]:
    """
    Items in package order: NCX, stylesheet, cover, title page, TOC page,
    chapters (pre-order, same traversal as the spine), then extra images.
    Chapter ids must already be allocated (ids.allocate_ids).
    """
    items = [ManifestItem(NCX_ID, NCX_FILE, NCX)]
    if book.stylesheet:
        items.append(_asset_item(STYLE_ID, book.stylesheet))
    if book.cover:
        items.append(_asset_item(COVER_ID, book.cover))
    items.append(ManifestItem(TITLE_PAGE_ID, TITLE_PAGE, XHTML))
    items.append(ManifestItem(TOC_PAGE_ID, TOC_PAGE, XHTML))

    for chapter in walk_chapters(book.chapters):
        if not chapter.id:
            raise ValueError(f"Chapter {chapter} has no id; call allocate_ids() first")
        items.append(ManifestItem(chapter.id, chapter.html_file, XHTML, chapter=chapter))

    for n, image in enumerate(book.images, start=1):
        items.append(_asset_item(f"image-{n}", image))

    _check_unique(items)
    return items


def _check_unique(items: list[ManifestItem]) -> None:
    ids: dict[str, ManifestItem] = {}
    hrefs: dict[str, ManifestItem] = {}
    for item in items:
        if item.id in ids:
            first = ids[item.id]
            raise DuplicateIdError(item.id, first.chapter or first, item.chapter or item)
        if item.href in hrefs:
            raise ConfigError(
                f"'{item.href}' is declared twice: {hrefs[item.href]} and {item}. "
                "Files are stored under their base name, rename one of them."
            )
        ids[item.id] = item
        hrefs[item.href] = item
