"""templates.py — Text of every document the builder generates."""

from xml.sax.saxutils import escape

from manifest import COVER_ID, NCX_ID, TOC_PAGE_ID, ManifestItem
from models import Book, Chapter
from navmap import TOC_LABEL, NavMap, NavPoint

OPF_FILE = "content.opf"
CONTAINER_FILE = "META-INF/container.xml"

_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def xml_escape(text: str) -> str:
    """Escape all five XML-reserved characters, for text nodes and attributes alike."""
    return escape(text, _ENTITIES)


def container_xml() -> str:
    return "\n".join([
        '<?xml version="1.0"?>',
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">',
        "\t<rootfiles>",
        f'\t\t<rootfile full-path="{OPF_FILE}" media-type="application/oebps-package+xml" />',
        "\t</rootfiles>",
        "</container>",
    ]) + "\n"


def content_opf(book: Book, manifest: list[ManifestItem], spine: list[str]) -> str:
    """Package document: metadata, manifest, spine and a guide to the TOC page."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<package version="2.0" xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookId">',
        '\t<metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">',
        f"\t\t<dc:title>{xml_escape(book.title)}</dc:title>",
        f'\t\t<dc:creator opf:role="aut">{xml_escape(book.author)}</dc:creator>',
        f"\t\t<dc:language>{xml_escape(book.language)}</dc:language>",
        f'\t\t<dc:identifier id="BookId">{book.book_id}</dc:identifier>',
    ]
    if any(item.id == COVER_ID for item in manifest):
        lines.append(f'\t\t<meta name="cover" content="{COVER_ID}" />')
    lines.append("\t</metadata>")

    lines.append("\t<manifest>")
    for item in manifest:
        lines.append(
            f'\t\t<item id="{xml_escape(item.id)}" href="{xml_escape(item.href)}" '
            f'media-type="{item.media_type}" />'
        )
    lines.append("\t</manifest>")

    lines.append(f'\t<spine toc="{NCX_ID}">')
    lines += [f'\t\t<itemref idref="{xml_escape(idref)}" />' for idref in spine]
    lines.append("\t</spine>")

    toc = next(item for item in manifest if item.id == TOC_PAGE_ID)
    lines += [
        "\t<guide>",
        f'\t\t<reference type="toc" title="{TOC_LABEL}" href="{xml_escape(toc.href)}" />',
        "\t</guide>",
        "</package>",
    ]
    return "\n".join(lines) + "\n"


def _navpoint_lines(point: NavPoint, indent: int) -> list[str]:
    tab = "\t" * indent
    lines = [
        f'{tab}<navPoint id="{point.id}" playOrder="{point.play_order}">',
        f"{tab}\t<navLabel><text>{xml_escape(point.label)}</text></navLabel>",
        f'{tab}\t<content src="{xml_escape(point.src)}"/>',
    ]
    for child in point.children:
        lines += _navpoint_lines(child, indent + 1)
    lines.append(f"{tab}</navPoint>")
    return lines


def toc_ncx(book: Book, navmap: NavMap) -> str:
    """Navigation document (NCX) with nested navPoints."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<ncx version="2005-1" xmlns="http://www.daisy.org/z3986/2005/ncx/">',
        "\t<head>",
        f'\t\t<meta name="dtb:uid" content="{book.book_id}" />',
        f'\t\t<meta name="dtb:depth" content="{navmap.depth}" />',
        '\t\t<meta name="dtb:totalPageCount" content="0" />',
        '\t\t<meta name="dtb:maxPageNumber" content="0" />',
        "\t</head>",
        "\t<docTitle>",
        f"\t\t<text>{xml_escape(book.title)}</text>",
        "\t</docTitle>",
        "\t<navMap>",
    ]
    for point in navmap.points:
        lines += _navpoint_lines(point, 2)
    lines += ["\t</navMap>", "</ncx>"]
    return "\n".join(lines) + "\n"


def xhtml_page(title: str, body: str, stylesheet: str | None = None) -> str:
    """Minimal XHTML 1.1 shell around a body fragment."""
    head = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" '
        '"http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">',
        '<html xmlns="http://www.w3.org/1999/xhtml">',
        "<head>",
        f"<title>{xml_escape(title)}</title>",
    ]
    if stylesheet:
        head.append(f'<link rel="stylesheet" type="text/css" href="{xml_escape(stylesheet)}" />')
    head += ["</head>", "<body>"]
    return "\n".join(head + [body.rstrip("\n"), "</body>", "</html>"]) + "\n"


def title_page(book: Book, stylesheet: str | None = None) -> str:
    body = "\n".join([
        f'<h1 class="title">{xml_escape(book.title)}</h1>',
        f'<h3 class="author">By {xml_escape(book.author)}</h3>',
    ])
    return xhtml_page(book.title, body, stylesheet)


def _toc_list(chapters: list[Chapter]) -> str:
    items = ["<ul>"]
    for chapter in chapters:
        link = f'<a href="{xml_escape(chapter.html_file)}">{xml_escape(chapter.title)}</a>'
        nested = f"\n{_toc_list(chapter.children)}\n" if chapter.children else ""
        items.append(f"<li>{link}{nested}</li>")
    items.append("</ul>")
    return "\n".join(items)


def toc_page(book: Book, stylesheet: str | None = None) -> str:
    body = f"<h2>{TOC_LABEL}</h2>\n{_toc_list(book.chapters)}"
    return xhtml_page(book.title, body, stylesheet)


def chapter_page(chapter: Chapter, body_html: str, stylesheet: str | None = None) -> str:
    return xhtml_page(chapter.title, body_html, stylesheet)
