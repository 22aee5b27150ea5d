#!/usr/bin/env python3
"""
md2epub — Build an EPUB from a book config and Markdown chapter files.

Quick start:
  1. Write book.yaml next to your chapters:

       title: Test Book
       author: A. Author
       css: style.css          # optional
       cover: cover.jpg        # optional
       images: [map.png]       # optional
       chapters:
         - title: Intro
           source: intro.md
         - title: Chapter 1
           source: ch1.md
           subchapters:
             - title: "1.1"
               source: ch1_1.md

  2. python md2epub.py book.yaml   ->  test_book.epub next to book.yaml

Defaults can be set in .env:
  MD2EPUB_LANGUAGE=en-GB     language tag when the config has none
  MD2EPUB_CSS=default.css    stylesheet when the config has none
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from errors import Md2EpubError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert Markdown chapters described by a YAML/JSON config into an EPUB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python md2epub.py book.yaml
  python md2epub.py ~/writing/novel/book.json
        """,
    )
    parser.add_argument("config_path", type=Path, help="Path to the book config (.yaml, .yml or .json)")
    return parser.parse_args(argv)


def print_chapter_tree(chapters, indent: int = 1):
    for chapter in chapters:
        print(f"{'  ' * indent}- {chapter.title:<50} {chapter.source}")
        print_chapter_tree(chapter.children, indent + 1)


def run(config_path: Path) -> Path:
    # Import lazily to keep --help fast
    from epub_builder import build_epub
    from models import walk_chapters
    from parsers import load_config

    print(f"Parsing: {config_path}")
    book = load_config(config_path)

    print(f"Title:    {book.title}")
    print(f"Author:   {book.author}")
    print(f"Language: {book.language}")
    print(f"\nFound {len(list(walk_chapters(book.chapters)))} chapters (depth {book.depth}):")
    print("-" * 70)
    print_chapter_tree(book.chapters)
    print("-" * 70)

    return build_epub(book)


def main(argv=None) -> int:
    args = parse_args(argv)
    load_dotenv()

    try:
        output_file = run(args.config_path)
    except Md2EpubError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"\nDone! EPUB saved to: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
