"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for the feed, vault and storage adapters
so that the core can be reused with different backends.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional, Protocol

from core.models import DailyTextRecord


class FeedPort(Protocol):
    """Source of the raw daily text HTML for a date."""

    async def fetch_daily_html(self, target_date: date) -> str:
        ...


class NoteWriterPort(Protocol):
    """Vault operations required by the core pipeline."""

    def write(self, relative_path: str, content: str, append: bool) -> Path:
        ...


class StoragePort(Protocol):
    """Storage operations required by the processor and scheduler."""

    def get_last_run_date(self) -> Optional[str]:
        ...

    def set_last_run_date(self, run_date: str) -> None:
        ...

    def save_fetch(self, record: DailyTextRecord, path: str) -> None:
        ...
