"""HTML-to-text helpers shared by the extraction passes (core domain).

The feed returns a small HTML fragment rather than a document, so everything
here works on regex segments instead of a parsed tree.
"""

from __future__ import annotations

import re
from typing import Callable, List
from urllib.parse import urljoin

WOL_ORIGIN = "https://wol.jw.org"

ZERO_WIDTH_SPACE = "\u200b"

# A tag must start with a letter, "/" or "!" so decoded text such as
# "a < b > c" is never mistaken for markup.
_TAG_RE = re.compile(r"<[A-Za-z/!][^>]*>")

_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&#8203;": "",
    "&#x200b;": "",
    "&#x200B;": "",
}
_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in _ENTITIES))

_PARAGRAPH_OPEN_RE = re.compile(r"<p(?:\s[^>]*)?>", re.IGNORECASE)
_PARAGRAPH_CLOSE_RE = re.compile(r"</p\s*>", re.IGNORECASE)
_EMPHASIS_RE = re.compile(r"<(em|i)(?:\s[^>]*)?>(.*?)</\1\s*>", re.IGNORECASE | re.DOTALL)
_LINK_RE = re.compile(r"<a\b([^>]*)>(.*?)</a\s*>", re.IGNORECASE | re.DOTALL)
_HREF_RE = re.compile(r"""href\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)


def _clean_once(text: str) -> str:
    text = _TAG_RE.sub("", text)
    # One replacement per entity match; nested encodings wait for the next pass.
    text = _ENTITY_RE.sub(lambda match: _ENTITIES[match.group(0)], text)
    return text.replace(ZERO_WIDTH_SPACE, "").strip()


def normalize(text: str) -> str:
    """Return plain text: tags removed, entities decoded, zero-width spaces gone.

    Decoding can surface new markup ("&lt;b&gt;" becomes "<b>"), so the clean
    step is repeated until the text stops changing. Every step only shortens
    the text, which makes the loop finite and the result idempotent.
    """

    cleaned = _clean_once(text)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


def split_segments(html: str) -> List[str]:
    """Split on paragraph openings, cutting each piece at its closing tag.

    Piece 0 is whatever precedes the first paragraph (usually the date
    header); the rest are paragraph bodies in document order.
    """

    pieces = _PARAGRAPH_OPEN_RE.split(html)
    return [_PARAGRAPH_CLOSE_RE.split(piece, maxsplit=1)[0] for piece in pieces]


def paragraph_segments(html: str) -> List[str]:
    """Return the raw inner HTML of each paragraph."""

    return split_segments(html)[1:]


def emphasis_spans(html: str) -> List[str]:
    """Return the raw inner HTML of each emphasis span in document order."""

    return [match.group(2) for match in _EMPHASIS_RE.finditer(html)]


def contains_link(html: str) -> bool:
    return _LINK_RE.search(html) is not None


def strip_links(html: str) -> str:
    return _LINK_RE.sub("", html)


def convert_links(html: str, base_url: str = WOL_ORIGIN) -> str:
    """Rewrite inline links as ``[text](url)`` with the href resolved on base_url."""

    def _replace(match: re.Match) -> str:
        attributes, body = match.group(1), match.group(2)
        text = normalize(body)
        href_match = _HREF_RE.search(attributes)
        if not href_match or not text:
            return text
        href = normalize(href_match.group(1) or href_match.group(2) or "")
        if not href:
            return text
        return f"[{text}]({urljoin(base_url, href)})"

    return _LINK_RE.sub(_replace, html)


def drop_emphasis_spans(html: str, predicate: Callable[[str], bool]) -> str:
    """Remove the emphasis spans whose normalized text satisfies predicate."""

    def _replace(match: re.Match) -> str:
        return "" if predicate(normalize(match.group(2))) else match.group(0)

    return _EMPHASIS_RE.sub(_replace, html)
