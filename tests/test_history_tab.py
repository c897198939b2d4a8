from __future__ import annotations

import asyncio

from textual.app import App
from textual.widgets import DataTable

from adapters.sqlite_storage import SQLiteStorage
from core.models import DailyTextRecord
from frontend.tabs import history
from frontend.tabs.history import HistoryTab


class HistoryApp(App):
    def compose(self):
        yield HistoryTab()


def test_history_tab_lists_stored_fetches(monkeypatch, tmp_path) -> None:
    db_path = tmp_path / "dailytext.db"
    storage = SQLiteStorage(str(db_path))
    storage.init_db()
    storage.save_fetch(DailyTextRecord(date="2024-05-01", citation="1 Cor. 13:8."), "Daily/a.md")
    storage.save_fetch(DailyTextRecord(date="2024-05-02", citation="John 3:16"), "Daily/b.md")
    monkeypatch.setattr(history, "DB_PATH", db_path)

    async def run() -> tuple[int, list[dict]]:
        app = HistoryApp()
        async with app.run_test():
            tab = app.query_one(HistoryTab)
            return app.query_one("#history-table", DataTable).row_count, tab._rows

    row_count, rows = asyncio.run(run())

    assert row_count == 2
    assert [row["date"] for row in rows] == ["2024-05-02", "2024-05-01"]
    assert set(rows[0]) == {"date", "scripture", "citation", "commentary", "path", "created_at"}
