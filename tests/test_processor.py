from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path

import pytest

from core.config import NoteConfig
from core.models import DailyTextRecord
from core.processor import DailyTextProcessor

HTML = (
    "<h2>Wednesday, May 1</h2>"
    "<p><em>In everything let love rule.—1 Cor. 13:8.</em></p>"
    "<p>Love moves us to be patient and kind with everyone we meet.</p>"
)


class FakeFeed:
    def __init__(self, html: str = HTML, error: Exception | None = None) -> None:
        self.html = html
        self.error = error
        self.requested: list[date] = []

    async def fetch_daily_html(self, target_date: date) -> str:
        self.requested.append(target_date)
        if self.error:
            raise self.error
        return self.html


class FakeWriter:
    def __init__(self) -> None:
        self.writes: list[tuple[str, str, bool]] = []

    def write(self, relative_path: str, content: str, append: bool) -> Path:
        self.writes.append((relative_path, content, append))
        return Path("/vault") / relative_path


class FakeStorage:
    def __init__(self) -> None:
        self.saved: list[tuple[DailyTextRecord, str]] = []

    def get_last_run_date(self):
        return None

    def set_last_run_date(self, run_date: str) -> None:
        pass

    def save_fetch(self, record: DailyTextRecord, path: str) -> None:
        self.saved.append((record, path))


def _processor(feed: FakeFeed, writer: FakeWriter, storage: FakeStorage, append: bool = True):
    return DailyTextProcessor(
        feed=feed,
        writer=writer,
        storage=storage,
        note_config=NoteConfig(path_template="Daily/{YYYY}-{MM}-{DD}.md", append=append),
        formatter=lambda record: f"{record.scripture}|{record.citation}",
    )


def test_writes_formatted_note_and_records_history() -> None:
    feed, writer, storage = FakeFeed(), FakeWriter(), FakeStorage()
    processor = _processor(feed, writer, storage, append=False)

    path = asyncio.run(processor.fetch_and_write(date(2024, 5, 1)))

    assert path == "Daily/2024-05-01.md"
    assert feed.requested == [date(2024, 5, 1)]
    assert writer.writes == [("Daily/2024-05-01.md", "In everything let love rule.|1 Cor. 13:8.", False)]
    record, saved_path = storage.saved[0]
    assert record.date == "2024-05-01"
    assert record.commentary == "Love moves us to be patient and kind with everyone we meet."
    assert saved_path == "Daily/2024-05-01.md"


def test_empty_extraction_writes_nothing() -> None:
    feed, writer, storage = FakeFeed(html="<p>x</p>"), FakeWriter(), FakeStorage()
    processor = _processor(feed, writer, storage)

    assert asyncio.run(processor.fetch_and_write(date(2024, 5, 1))) is None
    assert writer.writes == []
    assert storage.saved == []


def test_partial_record_is_still_written() -> None:
    html = "<h2>h</h2><p>x</p><p>Only the commentary made it through this time.</p>"
    feed, writer, storage = FakeFeed(html=html), FakeWriter(), FakeStorage()
    processor = _processor(feed, writer, storage)

    assert asyncio.run(processor.fetch_and_write(date(2024, 5, 2))) == "Daily/2024-05-02.md"
    assert storage.saved[0][0].citation == ""
    assert writer.writes[0][2] is True


def test_feed_errors_propagate() -> None:
    feed, writer, storage = FakeFeed(error=RuntimeError("offline")), FakeWriter(), FakeStorage()
    processor = _processor(feed, writer, storage)

    with pytest.raises(RuntimeError):
        asyncio.run(processor.fetch_and_write(date(2024, 5, 1)))
    assert writer.writes == []
