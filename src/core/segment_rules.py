"""Rejection rules for scripture candidate paragraphs (core domain).

Each rule is a named predicate over a Segment so it can be tested on its
own. A paragraph is a scripture candidate only when no rule fires.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from core.citations import DASHES
from core.text_cleaning import contains_link, normalize, strip_links

MIN_SEGMENT_CHARS = 20
MIN_SCRIPTURE_WORDS = 5

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
FOOTNOTE_MARKERS = "¶§†*"

_WEEKDAY_RE = re.compile(rf"^(?:{'|'.join(WEEKDAYS)})\b", re.IGNORECASE)
# "May" opens plenty of verses, so a month only counts when a number
# follows it or it stands alone.
_MONTH_RE = re.compile(
    rf"^(?:{'|'.join(MONTHS)})(?:\s+\d{{1,4}}\b|\s*$)",
    re.IGNORECASE,
)
_DAY_MONTH_RE = re.compile(rf"^\d{{1,2}}\s+(?:{'|'.join(MONTHS)})\b", re.IGNORECASE)
_NUMERIC_DATE_RE = re.compile(r"\d{1,4}(?:\s*[/.\-]\s*\d{1,4}){0,2}")
_ISO_DATE_RE = re.compile(r"\b\d{4}-\d{2}-\d{2}\b")
_BOOK_NUMBER_RE = re.compile(r"^[1-3]\s*[A-Z][a-z]+\.?(?:\s|$)")
_SUP_RE = re.compile(r"<sup\b", re.IGNORECASE)


@dataclass(frozen=True)
class Segment:
    """A paragraph as raw HTML plus its normalized text."""

    raw: str
    text: str

    @classmethod
    def from_html(cls, raw: str) -> "Segment":
        return cls(raw=raw, text=normalize(raw))


def is_link_only(segment: Segment) -> bool:
    if not contains_link(segment.raw):
        return False
    remainder = normalize(strip_links(segment.raw))
    return not remainder.strip(DASHES + " .,;:")


def starts_with_dash(segment: Segment) -> bool:
    return segment.text[:1] in DASHES if segment.text else False


def starts_with_book_number(segment: Segment) -> bool:
    return _BOOK_NUMBER_RE.match(segment.text) is not None


def is_weekday_header(segment: Segment) -> bool:
    return _WEEKDAY_RE.match(segment.text) is not None


def is_month_header(segment: Segment) -> bool:
    return _MONTH_RE.match(segment.text) is not None or _DAY_MONTH_RE.match(segment.text) is not None


def is_numeric_date(segment: Segment) -> bool:
    return _NUMERIC_DATE_RE.fullmatch(segment.text) is not None


def contains_iso_date(segment: Segment) -> bool:
    return _ISO_DATE_RE.search(segment.text) is not None


def is_too_short_or_marked(segment: Segment) -> bool:
    if len(segment.text) < MIN_SEGMENT_CHARS:
        return True
    if _SUP_RE.search(segment.raw):
        return True
    return any(marker in segment.text for marker in FOOTNOTE_MARKERS)


def has_too_few_words(segment: Segment) -> bool:
    return len(segment.text.split()) < MIN_SCRIPTURE_WORDS


REJECTION_RULES: Tuple[Tuple[str, Callable[[Segment], bool]], ...] = (
    ("link_only", is_link_only),
    ("leading_dash", starts_with_dash),
    ("book_reference", starts_with_book_number),
    ("weekday_header", is_weekday_header),
    ("month_header", is_month_header),
    ("numeric_date", is_numeric_date),
    ("iso_date", contains_iso_date),
    ("too_short_or_marked", is_too_short_or_marked),
    ("too_few_words", has_too_few_words),
)


def rejection_reason(segment: Segment) -> Optional[str]:
    """Return the name of the first rule rejecting segment, or None."""

    for name, rule in REJECTION_RULES:
        if rule(segment):
            return name
    return None
