"""Main Textual app for the dailytext config panel."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import Button, ContentSwitcher, Footer, Static, Tab, Tabs

import settings
from client import build_processor

from .constants import ACCENT, CONFIG_PATH, DB_PATH
from .modals import ReloadConfirmScreen, UnsavedChangesScreen
from .state import ConfigState
from .tabs.guide import GuideTab
from .tabs.history import HistoryTab
from .tabs.settings import SettingsTab

LOGGER = logging.getLogger(__name__)


class ConfigPanelApp(App):
    """Config panel with global config state and tabs."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config_state = ConfigState()

    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("f", "fetch_today", "Fetch today"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"config: {CONFIG_PATH.name}", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static(f"db: {DB_PATH.name}", classes="subtle")
                    yield Static("", id="header-status")
                    yield Horizontal(
                        Button("Save", id="save-btn"),
                        Button("Reload", id="reload-btn"),
                        id="header-actions",
                    )

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Settings", id="settings"),
                    Tab("History", id="history"),
                    Tab("Guide", id="guide"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield SettingsTab(id="settings")
            yield HistoryTab(id="history")
            yield GuideTab(id="guide")
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()
        self._set_active_tab("settings")

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self._set_active_tab(tab_id)

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save_config()
        elif event.button.id == "reload-btn":
            self.action_reload_config()

    def action_save_config(self) -> None:
        self._save_config()

    def action_reload_config(self) -> None:
        if self.config_state.dirty:
            self.push_screen(ReloadConfirmScreen(), self._handle_reload_choice)
        else:
            self._load_config()

    def action_fetch_today(self) -> None:
        self.fetch_daily_text(date.today())

    def action_request_quit(self) -> None:
        if self.config_state.dirty:
            self.push_screen(UnsavedChangesScreen(), self._handle_exit_choice)
        else:
            self.exit()

    def _handle_exit_choice(self, choice: str | None) -> None:
        if choice == "save":
            if self._save_config():
                self.exit()
        elif choice == "discard":
            self.exit()

    def _handle_reload_choice(self, choice: str | None) -> None:
        if choice == "save":
            if self._save_config():
                self._load_config()
        elif choice == "reload":
            self._load_config()

    def _load_config(self) -> None:
        try:
            self.config_state.data = settings.load_config(str(CONFIG_PATH))
            self.config_state.error = None
        except json.JSONDecodeError as exc:
            self.config_state.data = None
            self.config_state.error = f"config.json error: {exc.msg}"
        except ValueError as exc:
            self.config_state.data = None
            self.config_state.error = str(exc)
        self.config_state.dirty = False
        self._refresh_header()
        self._refresh_settings_tab()

    def _save_config(self) -> bool:
        if self.config_state.data is None:
            self.config_state.error = "Nothing to save"
            self._refresh_header()
            return False
        try:
            CONFIG_PATH.write_text(
                json.dumps(self.config_state.data, indent=2, ensure_ascii=True) + "\n",
                encoding="utf-8",
            )
            self.config_state.dirty = False
            self.config_state.error = None
            self._refresh_header()
            return True
        except OSError as exc:
            self.config_state.error = f"save failed: {exc.strerror or exc}"
            self._refresh_header()
            return False

    def fetch_daily_text(self, target_date: date) -> None:
        """Fetch one day in a worker using the config currently on screen."""
        if self.config_state.fetching:
            return
        if self.config_state.data is None:
            self._history_output("Load a valid config before fetching.")
            return
        self.config_state.fetching = True
        self._refresh_header()
        self._history_tab().set_fetching(True)
        self._history_output(f"fetching {target_date.isoformat()}...")
        self.run_worker(self._fetch_worker(target_date), exclusive=True, group="fetch")

    async def _fetch_worker(self, target_date: date) -> None:
        label = target_date.isoformat()
        try:
            processor = build_processor(settings.merge_defaults(self.config_state.data or {}))
            path = await processor.fetch_and_write(target_date)
        except Exception as exc:
            LOGGER.exception("Fetch from config panel failed for %s", label)
            message = f"fetch failed for {label}: {exc}"
        else:
            if path is None:
                message = f"no daily text found for {label}; nothing written"
            else:
                message = f"{label} written to {path}"
        finally:
            self.config_state.fetching = False
            self._history_tab().set_fetching(False)
            self._refresh_header()

        history = self._history_tab()
        history.load_history()
        history.set_output(message)

    def mark_dirty(self) -> None:
        self.config_state.dirty = True
        self._refresh_header()

    def _refresh_header(self) -> None:
        status = self.query_one("#header-status", Static)
        save_btn = self.query_one("#save-btn", Button)
        reload_btn = self.query_one("#reload-btn", Button)

        status.remove_class("status-loaded", "status-modified", "status-error")
        if self.config_state.error:
            status.update(f"config: {self.config_state.error}")
            status.add_class("status-error")
        elif self.config_state.dirty:
            status.update("config: modified *")
            status.add_class("status-modified")
        elif self.config_state.fetching:
            status.update("fetching...")
            status.add_class("status-loaded")
        else:
            status.update("config: loaded")
            status.add_class("status-loaded")

        save_btn.disabled = self.config_state.data is None or not self.config_state.dirty
        reload_btn.disabled = self.config_state.fetching

    def _refresh_settings_tab(self) -> None:
        self.query_one(SettingsTab).reload_from_config()

    def _history_tab(self) -> HistoryTab:
        return self.query_one(HistoryTab)

    def _history_output(self, message: str) -> None:
        self._history_tab().set_output(message)

    def update_config_section(self, section: str, value: Any) -> None:
        """Update a config section in memory and mark dirty."""
        if self.config_state.data is None:
            self.config_state.data = {}
        self.config_state.data[section] = value
        self.mark_dirty()

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("DAILY ", ACCENT),
            ("TEXT > Config Panel", "bold"),
        )
