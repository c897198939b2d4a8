"""Core daily text pipeline.

This module is integration-agnostic. It only relies on ports for the feed,
the vault and storage, so the CLI, the scheduler and the config panel all
drive the same code.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from core.config import NoteConfig
from core.extractor import extract
from core.models import DailyTextRecord
from core.note_paths import format_path_template
from core.ports import FeedPort, NoteWriterPort, StoragePort

LOGGER = logging.getLogger(__name__)

Formatter = Callable[[DailyTextRecord], str]


class DailyTextProcessor:
    """Orchestrates fetch, extraction, formatting, writing and history."""

    def __init__(
        self,
        feed: FeedPort,
        writer: NoteWriterPort,
        storage: StoragePort,
        note_config: NoteConfig,
        formatter: Formatter,
    ) -> None:
        self._feed = feed
        self._writer = writer
        self._storage = storage
        self._note = note_config
        self._formatter = formatter

    async def fetch_and_write(self, target_date: date) -> Optional[str]:
        """Fetch the daily text for target_date and write it into the vault.

        Returns the vault-relative path written, or None when nothing usable
        was extracted. Feed and vault errors propagate to the caller.
        """

        date_str = target_date.isoformat()
        LOGGER.info("Fetching daily text for %s", date_str)
        html = await self._feed.fetch_daily_html(target_date)

        record = extract(html, date=date_str)
        if record.is_empty:
            # Soft failure: nothing matched, so nothing is written.
            LOGGER.warning("No daily text fields found for %s; nothing written", date_str)
            return None

        missing = [name for name in ("scripture", "citation", "commentary") if not getattr(record, name)]
        if missing:
            LOGGER.info("Daily text for %s is missing: %s", date_str, ", ".join(missing))

        path = format_path_template(self._note.path_template, target_date)
        self._writer.write(path, self._formatter(record), self._note.append)
        self._storage.save_fetch(record, path)
        LOGGER.info("Daily text for %s written to %s", date_str, path)
        return path
