"""markdown_renderer.py — Convert chapter Markdown into an XHTML body fragment."""

import re
import xml.etree.ElementTree as etree

from bs4 import BeautifulSoup
from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor
from markdown.util import AtomicString

from models import XML_ILLEGAL_RE

# Bare URL not already inside an attribute, <...> autolink or a longer word.
# Trailing punctuation belongs to the sentence, not the URL.
BARE_URL_RE = r"(?<![\w/\"'=<])((?:https?|ftp)://[^\s<>\"'`]*[^\s<>\"'`.,;:!?)\]])"
WWW_URL_RE = r"(?<![\w/\"'=<.])(www\.[^\s<>\"'`]*[^\s<>\"'`.,;:!?)\]])"
EMAIL_RE = r"(?<![\w.+\-/:@\"'=<])([\w.+\-]+@[\w\-]+(?:\.[\w\-]+)+)"


class _BareUrlProcessor(InlineProcessor):
    # A link inside link text would nest <a> elements
    ANCESTOR_EXCLUDES = ("a",)

    def __init__(self, pattern, md, scheme=""):
        super().__init__(pattern, md)
        self.scheme = scheme

    def handleMatch(self, m, data):
        url = m.group(1)
        el = etree.Element("a")
        el.set("href", self.scheme + url)
        el.text = AtomicString(url)
        return el, m.start(0), m.end(0)


class AutolinkExtension(Extension):
    """Turn bare http(s)://, ftp://, www. and e-mail addresses into links."""

    def extendMarkdown(self, md):
        # After <url> autolinks (120), before emphasis so '_' in URLs survives
        md.inlinePatterns.register(_BareUrlProcessor(BARE_URL_RE, md), "bare_url", 115)
        md.inlinePatterns.register(
            _BareUrlProcessor(WWW_URL_RE, md, scheme="http://"), "bare_www", 114
        )
        md.inlinePatterns.register(
            _BareUrlProcessor(EMAIL_RE, md, scheme="mailto:"), "bare_email", 113
        )


class _HeaderSpacePreprocessor(Preprocessor):
    # Optional blockquote markers or one list marker may precede the hashes
    HASH_RE = re.compile(r"^((?: {0,3}> ?)*(?: {0,3}(?:[-*+]|\d+\.) +)?)(#{1,6})(?=[^#\s])")

    def run(self, lines):
        # '\#' renders as a literal '#', so '#tag' stays a paragraph
        return [self.HASH_RE.sub(r"\1\\\2", line) for line in lines]


class SpaceAfterHeadersExtension(Extension):
    """Require a space after the hashes of an ATX header ('#Title' is not a header)."""

    def extendMarkdown(self, md):
        # Below html_block (20) so stashed raw HTML is left alone
        md.preprocessors.register(_HeaderSpacePreprocessor(md), "header_space", 15)


def to_xhtml(fragment: str) -> str:
    """Best-effort repair of raw HTML into well-formed XHTML (closed tags, '<br/>')."""
    soup = BeautifulSoup(fragment, "html.parser")
    return soup.decode(formatter="minimal")


def render_markdown(text: str, autolink: bool = True, space_after_headers: bool = True) -> str:
    """Render Markdown source to an XHTML fragment. Pure; accepts any text."""
    extensions = []
    if autolink:
        extensions.append(AutolinkExtension())
    if space_after_headers:
        extensions.append(SpaceAfterHeadersExtension())
    md = Markdown(extensions=extensions, output_format="xhtml")
    return to_xhtml(md.convert(XML_ILLEGAL_RE.sub("", text)))
