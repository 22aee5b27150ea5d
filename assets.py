"""assets.py — Check and copy the stylesheet, cover and images into the package."""

import shutil
from pathlib import Path

from errors import AssetMissingError
from models import Book


def declared_assets(book: Book) -> list[tuple[str, Path]]:
    """(role, path) for every asset the book declares, in package order."""
    assets = []
    if book.stylesheet:
        assets.append(("stylesheet", book.stylesheet))
    if book.cover:
        assets.append(("cover", book.cover))
    assets += [("image", image) for image in book.images]
    return assets


def check_assets(book: Book) -> None:
    """Raise AssetMissingError for the first declared asset not on disk."""
    for role, path in declared_assets(book):
        if not path.is_file():
            raise AssetMissingError(role, path)


def copy_asset(source: Path, dest_dir: Path, role: str = "asset") -> Path:
    """Copy source byte-for-byte into dest_dir under its base name."""
    if not source.is_file():
        raise AssetMissingError(role, source)
    dest = dest_dir / source.name
    shutil.copyfile(source, dest)
    return dest
