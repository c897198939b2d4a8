"""Daily text extraction (core domain).

The feed wraps each day's text in a loosely structured HTML fragment. Two
layouts have been seen in the wild:

- embedded: scripture and citation share one emphasis span, separated by an
  em dash ("In everything let love rule.—1 Cor. 13:8.");
- traditional: the citation sits in its own, second emphasis span.

Each field is found by an ordered list of strategies; the first strategy
that returns text wins and an exhausted list yields an empty string. The
passes are pure functions of the input and never depend on each other.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Optional

from core.citations import (
    DASHES,
    find_dash_citation,
    looks_like_citation,
    match_bare_citation,
    split_embedded_citation,
)
from core.models import DailyTextRecord
from core.segment_rules import Segment, rejection_reason
from core.text_cleaning import (
    WOL_ORIGIN,
    convert_links,
    drop_emphasis_spans,
    emphasis_spans,
    normalize,
    paragraph_segments,
    split_segments,
)

LOGGER = logging.getLogger(__name__)

MIN_EMPHASIS_CHARS = 10
MIN_COMMENTARY_CHARS = 20
# Header preamble and the scripture/citation paragraph precede the commentary.
COMMENTARY_SKIP = 2

Strategy = Callable[[str], Optional[str]]


class ExtractionError(ValueError):
    """Raised when the input cannot be treated as text at all."""


def _first_present(strategies: Iterable[Strategy], html: str) -> str:
    for strategy in strategies:
        result = strategy(html)
        if result:
            return result
    return ""


def _finish_scripture(text: str) -> str:
    embedded = split_embedded_citation(text)
    if embedded:
        text = embedded[0]
    return text.rstrip(DASHES + "- \t\r\n")


def _scripture_from_paragraphs(html: str) -> Optional[str]:
    for index, raw in enumerate(paragraph_segments(html)):
        # A citation in its own span is not part of the quotation.
        segment = Segment.from_html(drop_emphasis_spans(raw, looks_like_citation))
        reason = rejection_reason(segment)
        if reason:
            LOGGER.debug("Paragraph %s rejected as scripture (%s)", index, reason)
            continue
        return _finish_scripture(segment.text)
    return None


def _scripture_from_emphasis(html: str) -> Optional[str]:
    for raw in emphasis_spans(html):
        text = normalize(raw)
        if len(text) < MIN_EMPHASIS_CHARS or looks_like_citation(text):
            continue
        return _finish_scripture(text)
    return None


def _citation_from_patterns(html: str) -> Optional[str]:
    for raw in emphasis_spans(html):
        text = normalize(raw)
        found = find_dash_citation(text) or match_bare_citation(text)
        if found:
            return found
    return None


def _citation_from_position(html: str) -> Optional[str]:
    spans = emphasis_spans(html)
    if len(spans) < 2:
        return None
    return normalize(spans[1])


SCRIPTURE_STRATEGIES: tuple[Strategy, ...] = (
    _scripture_from_paragraphs,
    _scripture_from_emphasis,
)

CITATION_STRATEGIES: tuple[Strategy, ...] = (
    _citation_from_patterns,
    _citation_from_position,
)


def extract_scripture(html: str) -> str:
    """Return the scripture quotation, or an empty string."""

    return _first_present(SCRIPTURE_STRATEGIES, html)


def extract_citation(html: str) -> str:
    """Return the bible reference, or an empty string."""

    return _first_present(CITATION_STRATEGIES, html)


def extract_commentary(html: str, base_url: str = WOL_ORIGIN) -> str:
    """Return the first substantial paragraph after the scripture block.

    Inline links become ``[text](url)`` with hrefs resolved on base_url.
    """

    for raw in split_segments(html)[COMMENTARY_SKIP:]:
        text = normalize(convert_links(raw, base_url))
        if len(text) > MIN_COMMENTARY_CHARS:
            return text
    return ""


def extract(html: str, date: str = "", base_url: str = WOL_ORIGIN) -> DailyTextRecord:
    """Extract scripture, citation and commentary from a daily text fragment.

    The date is a label supplied by the caller and is never read from the
    content. Missing fields come back as empty strings; only input that is
    not text at all raises ExtractionError.
    """

    if not isinstance(html, str):
        raise ExtractionError(f"Expected HTML text, got {type(html).__name__}")

    try:
        return DailyTextRecord(
            date=date,
            scripture=extract_scripture(html),
            citation=extract_citation(html),
            commentary=extract_commentary(html, base_url),
        )
    except re.error as exc:
        raise ExtractionError(f"Pattern matching failed: {exc}") from exc
