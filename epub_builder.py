"""epub_builder.py — Materialize the book in a scratch directory and archive it as EPUB."""

import os
import shutil
import tempfile
import zipfile
from datetime import datetime
from pathlib import Path

from tqdm import tqdm

import templates
from assets import check_assets, copy_asset, declared_assets
from errors import ChapterReadError, PackagingError
from ids import TITLE_PAGE, TOC_PAGE, allocate_ids
from manifest import NCX_FILE, build_manifest
from markdown_renderer import render_markdown
from models import Book, Chapter, slugify, walk_chapters
from navmap import build_navmap
from spine import build_spine

MIMETYPE_FILE = "mimetype"
MIMETYPE = "application/epub+zip"


def make_scratch_dir(book: Book) -> Path:
    """Fresh, uniquely named directory such as 'test_book_2024-05-01_09-30-00_x1y2z3'."""
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    try:
        return Path(tempfile.mkdtemp(prefix=f"{slugify(book.title)}_{stamp}_", dir=book.working_dir))
    except OSError as e:
        raise PackagingError(f"Cannot create scratch directory in {book.working_dir}: {e}") from e


def read_chapter_source(book: Book, chapter: Chapter) -> str:
    path = book.resolve(chapter.source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ChapterReadError(chapter, path, str(e)) from e


def _write(scratch_dir: Path, name: str, text: str) -> str:
    path = scratch_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return name


def write_archive(scratch_dir: Path, entries: list[str], archive_path: Path) -> Path:
    """
    Zip the listed scratch files. 'mimetype' always goes first and uncompressed,
    content exactly MIMETYPE with no newline, so readers can sniff the format.
    """
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(zipfile.ZipInfo(MIMETYPE_FILE), MIMETYPE, compress_type=zipfile.ZIP_STORED)
        for name in entries:
            zf.write(scratch_dir / name, arcname=name)
    return archive_path


def write_package(book: Book, scratch_dir: Path, render=render_markdown) -> list[str]:
    """
    Write every package file into scratch_dir. Returns archive entry names in
    order: container, OPF, NCX, title page, TOC page, chapters, assets.
    Chapter ids must already be allocated.
    """
    manifest = build_manifest(book)
    spine = build_spine(book)
    navmap = build_navmap(book)
    css = book.stylesheet.name if book.stylesheet else None

    entries = [
        _write(scratch_dir, templates.CONTAINER_FILE, templates.container_xml()),
        _write(scratch_dir, templates.OPF_FILE, templates.content_opf(book, manifest, spine)),
        _write(scratch_dir, NCX_FILE, templates.toc_ncx(book, navmap)),
        _write(scratch_dir, TITLE_PAGE, templates.title_page(book, css)),
        _write(scratch_dir, TOC_PAGE, templates.toc_page(book, css)),
    ]

    chapters = list(walk_chapters(book.chapters))
    for chapter in tqdm(chapters, desc="  Rendering", unit="chapter"):
        body = render(read_chapter_source(book, chapter))
        entries.append(_write(scratch_dir, chapter.html_file, templates.chapter_page(chapter, body, css)))

    for role, path in declared_assets(book):
        entries.append(copy_asset(path, scratch_dir, role).name)

    return entries


def build_epub(book: Book, output_path: Path | None = None, render=render_markdown) -> Path:
    """
    Build the EPUB for book. Either the finished archive ends up at output_path
    (default: <working_dir>/<slug>.epub) or nothing does; the scratch directory
    is removed on every path out.
    """
    output_path = Path(output_path) if output_path else book.working_dir / book.output_name

    allocate_ids(book.chapters)
    check_assets(book)

    scratch_dir = make_scratch_dir(book)
    try:
        try:
            entries = write_package(book, scratch_dir, render)
            print(f"  Archiving {len(entries) + 1} files...")
            partial = write_archive(scratch_dir, entries, scratch_dir / output_path.name)
            os.replace(partial, output_path)
        except OSError as e:
            raise PackagingError(f"Error while saving epub: {e}") from e
    finally:
        shutil.rmtree(scratch_dir, ignore_errors=True)

    return output_path
