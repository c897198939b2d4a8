"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any feed- or vault-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyTextRecord:
    """Fields extracted from one daily text fragment.

    Every content field is optional: an empty string means the field could
    not be located, which is not an error.
    """

    date: str = ""
    scripture: str = ""
    citation: str = ""
    commentary: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.scripture or self.citation or self.commentary)


@dataclass(frozen=True)
class FetchRecord:
    """Persisted representation of a single written daily text."""

    date: str
    scripture: str
    citation: str
    commentary: str
    path: str
    created_at: str
