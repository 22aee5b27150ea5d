import pytest

from errors import ConfigError, DuplicateIdError
from ids import allocate_ids
from manifest import MEDIA_TYPES, build_manifest, media_type_for
from models import walk_chapters
from spine import build_spine


@pytest.fixture
def allocated_book(scenario_book):
    allocate_ids(scenario_book.chapters)
    return scenario_book


def test_scenario_manifest(allocated_book):
    items = build_manifest(allocated_book)
    chapter_ids = [ch.id for ch in walk_chapters(allocated_book.chapters)]

    assert [item.id for item in items] == ["ncx", "title_page", "table_of_contents", *chapter_ids]
    assert [item.href for item in items] == [
        "toc.ncx", "title_page.html", "table_of_contents.html",
        "intro.html", "ch1.html", "ch1_1.html",
    ]
    assert items[0].media_type == "application/x-dtbncx+xml"
    assert {item.media_type for item in items[1:]} == {"application/xhtml+xml"}


def test_full_manifest_order(make_book, tmp_path):
    book = make_book(
        stylesheet=tmp_path / "style.css",
        cover=tmp_path / "art" / "cover.jpg",
        images=[tmp_path / "map.png", tmp_path / "seal.GIF"],
    )
    allocate_ids(book.chapters)

    items = build_manifest(book)

    assert [item.id for item in items[:5]] == [
        "ncx", "style", "book-cover", "title_page", "table_of_contents",
    ]
    assert [(item.id, item.href, item.media_type) for item in items[-2:]] == [
        ("image-1", "map.png", "image/png"),
        ("image-2", "seal.GIF", "image/gif"),
    ]
    by_id = {item.id: item for item in items}
    assert by_id["style"].media_type == "text/css"
    assert by_id["book-cover"].href == "cover.jpg"
    assert by_id["book-cover"].media_type == "image/jpeg"
    assert by_id["book-cover"].source == tmp_path / "art" / "cover.jpg"


@pytest.mark.parametrize("name, media_type", [
    ("a.jpg", "image/jpeg"),
    ("a.jpeg", "image/jpeg"),
    ("a.png", "image/png"),
    ("a.gif", "image/gif"),
    ("a.css", "text/css"),
])
def test_media_types(name, media_type):
    assert media_type_for(name) == media_type


def test_unknown_media_type_is_config_error():
    with pytest.raises(ConfigError, match=r"\.bmp"):
        media_type_for("photo.bmp")
    assert "bmp" not in MEDIA_TYPES


def test_manifest_requires_allocated_ids(scenario_book):
    with pytest.raises(ValueError, match="allocate_ids"):
        build_manifest(scenario_book)


def test_manifest_reports_duplicate_ids(allocated_book):
    intro, chapter_one = allocated_book.chapters
    chapter_one.id = intro.id

    with pytest.raises(DuplicateIdError) as exc:
        build_manifest(allocated_book)
    assert exc.value.first is intro
    assert exc.value.second is chapter_one


def test_assets_with_same_base_name_are_rejected(make_book, tmp_path):
    book = make_book(images=[tmp_path / "a" / "fig.png", tmp_path / "b" / "fig.png"])
    allocate_ids(book.chapters)

    with pytest.raises(ConfigError, match="fig.png"):
        build_manifest(book)


def test_spine_scenario(allocated_book):
    intro, chapter_one = allocated_book.chapters
    sub = chapter_one.children[0]

    assert build_spine(allocated_book) == [
        "title_page", "table_of_contents", intro.id, chapter_one.id, sub.id,
    ]


def test_spine_matches_manifest_chapter_order(make_book):
    outline = [
        {"title": "A", "source": "a.md", "subchapters": [
            {"title": "A1", "source": "a1.md", "subchapters": [
                {"title": "A1a", "source": "a1a.md"},
            ]},
            {"title": "A2", "source": "a2.md"},
        ]},
        {"title": "B", "source": "b.md"},
        {"title": "C", "source": "c.md", "subchapters": [{"title": "C1", "source": "c1.md"}]},
    ]
    book = make_book(outline)
    allocate_ids(book.chapters)

    manifest_chapters = [item.id for item in build_manifest(book) if item.chapter is not None]
    spine_chapters = build_spine(book)[2:]

    assert spine_chapters == manifest_chapters
    assert [ch.title for ch in walk_chapters(book.chapters)] == [
        "A", "A1", "A1a", "A2", "B", "C", "C1",
    ]
