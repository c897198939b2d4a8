"""History tab for browsing, fetching and exporting daily texts."""

from __future__ import annotations

import csv
import json
import sqlite3
from dataclasses import asdict
from datetime import date, datetime
from typing import Any

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from adapters.sqlite_storage import SQLiteStorage

from ..constants import DB_PATH, PROJECT_ROOT
from ..modals import FetchDateScreen


class HistoryTab(Container):
    """Fetched daily texts with fetch and JSON/CSV export actions."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._rows: list[dict[str, Any]] = []
        self._table_ready = False

    def compose(self):
        with Vertical(id="history-panel"):
            yield Static("Fetched daily texts", id="history-title")
            yield DataTable(id="history-table", cursor_type="row")
            with Horizontal(id="history-actions"):
                yield Button("Fetch now", id="fetch-today", variant="primary")
                yield Button("Fetch date...", id="fetch-date")
                yield Button("Export JSON", id="export-json", variant="success")
                yield Button("Export CSV", id="export-csv")
            yield Static("", id="history-output")

    def on_mount(self) -> None:
        table = self.query_one("#history-table", DataTable)
        table.add_column("date", key="date", width=12)
        table.add_column("citation", key="citation", width=18)
        table.add_column("scripture", key="scripture", width=40)
        table.add_column("note", key="path", width=36)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self.query_one("#history-actions").styles.height = 3
        self._table_ready = True
        self.load_history()

    @on(Button.Pressed, "#fetch-today")
    def _on_fetch_today(self) -> None:
        self.app.fetch_daily_text(date.today())

    @on(Button.Pressed, "#fetch-date")
    def _on_fetch_date(self) -> None:
        self.app.push_screen(FetchDateScreen(), self._handle_fetch_date)

    def _handle_fetch_date(self, value: str | None) -> None:
        if not value:
            return
        self.app.fetch_daily_text(date.fromisoformat(value))

    @on(Button.Pressed, "#export-json")
    def _on_export_json(self) -> None:
        self._export_rows("json")

    @on(Button.Pressed, "#export-csv")
    def _on_export_csv(self) -> None:
        self._export_rows("csv")

    def load_history(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#history-table", DataTable)
        table.clear()
        if not DB_PATH.exists():
            self._rows = []
            self.set_output(f"db not found: {DB_PATH}")
            return
        try:
            fetches = SQLiteStorage(str(DB_PATH)).list_fetches()
        except sqlite3.Error as exc:
            self._rows = []
            self.set_output(f"db error: {exc}")
            return

        self._rows = [asdict(fetch) for fetch in fetches]
        for fetch in fetches:
            table.add_row(
                fetch.date,
                fetch.citation,
                self._clip_text(fetch.scripture),
                self._clip_text(fetch.path, limit=48),
            )
        self.set_output(f"loaded {len(fetches)} fetches from {DB_PATH}")

    def _export_rows(self, fmt: str) -> None:
        if not self._rows:
            self.set_output("No fetches to export.")
            return
        exports_dir = PROJECT_ROOT / "exports"
        exports_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        path = exports_dir / f"daily-texts-{timestamp}.{fmt}"
        try:
            if fmt == "json":
                path.write_text(json.dumps(self._rows, indent=2, ensure_ascii=False), encoding="utf-8")
            else:
                fieldnames = list(self._rows[0].keys())
                with path.open("w", encoding="utf-8", newline="") as handle:
                    writer = csv.DictWriter(handle, fieldnames=fieldnames)
                    writer.writeheader()
                    writer.writerows(self._rows)
            self.set_output(f"exported {len(self._rows)} fetches to {path}")
        except OSError as exc:
            self.set_output(f"export failed: {exc.strerror or exc}")

    def set_output(self, message: str) -> None:
        self.query_one("#history-output", Static).update(message)

    def set_fetching(self, fetching: bool) -> None:
        self.query_one("#fetch-today", Button).disabled = fetching
        self.query_one("#fetch-date", Button).disabled = fetching

    @staticmethod
    def _clip_text(value: str, limit: int = 64) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."
