"""Bible reference patterns (core domain).

A reference is an optional leading book number (1-3), a book name or
abbreviation, a chapter and an optional verse part, e.g. "1 Cor. 13:8.",
"John 3:16" or "Ps. 23:1-3".
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

DASHES = "—–"

REFERENCE_PATTERN = (
    r"[1-3]?\s*[A-Za-z][A-Za-z.]*(?:\s+of\s+[A-Za-z][A-Za-z.]*)?\s*"
    r"\d+(?::\d+(?:\s*[-–,]\s*\d+)*)?\.?"
)

_DASH_CITATION_RE = re.compile(rf"[{DASHES}]\s*({REFERENCE_PATTERN})\s*$")
_BARE_CITATION_RE = re.compile(rf"\s*({REFERENCE_PATTERN})\s*")
_EMBEDDED_CITATION_RE = re.compile(
    rf"^(.+?)\s*[{DASHES}]\s*({REFERENCE_PATTERN})\s*$",
    re.DOTALL,
)


def find_dash_citation(text: str) -> Optional[str]:
    """Return the reference following an em dash at the end of text."""

    match = _DASH_CITATION_RE.search(text)
    return match.group(1).strip() if match else None


def match_bare_citation(text: str) -> Optional[str]:
    """Return text when it is nothing but a reference."""

    match = _BARE_CITATION_RE.fullmatch(text)
    return match.group(1).strip() if match else None


def split_embedded_citation(text: str) -> Optional[Tuple[str, str]]:
    """Split "scripture—reference" into its (scripture, reference) parts."""

    match = _EMBEDDED_CITATION_RE.match(text)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


def looks_like_citation(text: str) -> bool:
    stripped = text.strip()
    if stripped and stripped[0] in DASHES:
        return True
    return match_bare_citation(stripped) is not None
