from ids import allocate_ids
from models import walk_chapters
from navmap import TOC_LABEL, build_navmap


def _allocated(book):
    allocate_ids(book.chapters)
    return book


def _in_play_order(points):
    for point in points:
        yield point
        yield from _in_play_order(point.children)


def test_scenario_navmap(scenario_book):
    navmap = build_navmap(_allocated(scenario_book))

    title, toc, intro, chapter_one = navmap.points
    assert (title.label, title.src, title.play_order) == ("Test Book", "title_page.html", 1)
    assert (toc.label, toc.src, toc.play_order) == (TOC_LABEL, "table_of_contents.html", 2)
    assert (intro.label, intro.play_order, intro.children) == ("Intro", 3, [])
    assert (chapter_one.label, chapter_one.play_order) == ("Chapter 1", 4)

    [sub] = chapter_one.children
    assert (sub.label, sub.src, sub.play_order) == ("1.1", "ch1_1.html", 5)
    assert navmap.depth == 2


def test_navpoint_ids_follow_play_order(scenario_book):
    navmap = build_navmap(_allocated(scenario_book))
    assert [point.id for point in _in_play_order(navmap.points)] == [f"navpoint-{n}" for n in range(1, 6)]


def test_flat_book_has_depth_one(make_book):
    book = make_book([{"title": "Only", "source": "only.md"}])
    assert build_navmap(_allocated(book)).depth == 1


def test_play_order_is_contiguous_for_deep_trees(make_book):
    outline = [
        {"title": "A", "source": "a.md", "subchapters": [
            {"title": "A1", "source": "a1.md", "subchapters": [
                {"title": "A1a", "source": "a1a.md", "subchapters": [
                    {"title": "A1a-i", "source": "a1ai.md"},
                ]},
            ]},
            {"title": "A2", "source": "a2.md"},
        ]},
        {"title": "B", "source": "b.md", "subchapters": [
            {"title": "B1", "source": "b1.md"},
            {"title": "B2", "source": "b2.md"},
        ]},
    ]
    book = _allocated(make_book(outline))
    chapter_count = len(list(walk_chapters(book.chapters)))

    navmap = build_navmap(book)
    points = list(_in_play_order(navmap.points))
    orders = [point.play_order for point in points]

    # Counter keeps running across subtrees, never restarts
    assert orders == list(range(1, 2 + chapter_count + 1))
    assert [point.label for point in points][2:] == [ch.title for ch in walk_chapters(book.chapters)]
    assert navmap.depth == book.depth == 4


def test_nesting_mirrors_chapter_tree(make_book):
    outline = [{"title": "P", "source": "p.md", "subchapters": [
        {"title": "C1", "source": "c1.md"},
        {"title": "C2", "source": "c2.md", "subchapters": [{"title": "G", "source": "g.md"}]},
    ]}]
    navmap = build_navmap(_allocated(make_book(outline)))

    parent = navmap.points[2]
    assert [child.label for child in parent.children] == ["C1", "C2"]
    assert [grandchild.label for grandchild in parent.children[1].children] == ["G"]
    assert len(navmap.points) == 3
