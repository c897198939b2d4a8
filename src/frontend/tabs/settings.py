"""Settings tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, ScrollableContainer, Vertical
from textual.widgets import ContentSwitcher, DataTable, Input, Select, Static, Switch, TextArea

from ..validators import (
    check_base_url,
    check_language_path,
    check_path_template,
    check_run_at,
)


class SettingsTab(Container):
    """Settings tab for editing the note target, auto-fetch, feed and logging."""

    NOTE_FORMATS = ["callout", "classic"]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    SECTION_LABELS = [
        ("note", "Note", "Vault, path template, layout"),
        ("auto_fetch", "Auto-fetch", "Daily schedule and catch-up"),
        ("feed", "Feed", "Endpoint and timeout"),
        ("logging", "Logging", "Console/file logging + redaction"),
    ]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False
        self._current_section: Optional[str] = None

    def compose(self):
        with Vertical(id="settings-panel"):
            with Horizontal(id="settings-body"):
                with Container(id="settings-left"):
                    yield DataTable(id="settings-table", cursor_type="row")
                with Container(id="settings-right"):
                    with ContentSwitcher(id="settings-forms"):
                        with ScrollableContainer(id="settings-note"):
                            yield Static("Note", classes="settings-title")
                            yield Static("vault.path", classes="form-label")
                            yield Input(placeholder="~/Obsidian/Vault", id="note-vault")
                            yield Static("path_template ({YYYY}, {MM}, {DD})", classes="form-label")
                            yield Input(
                                placeholder="Daily/Daily Text - {YYYY}-{MM}-{DD}.md",
                                id="note-template",
                            )
                            yield Static("append (off = overwrite)", classes="form-label")
                            yield Switch(id="note-append")
                            yield Static("format", classes="form-label")
                            yield Select(
                                [("callout", "callout"), ("classic", "classic")],
                                id="note-format",
                                allow_blank=False,
                            )
                            yield Static("heading", classes="form-label")
                            yield Input(placeholder="Daily Text", id="note-heading")
                            yield Static("", id="note-error", classes="settings-error")

                        with Container(id="settings-auto-fetch"):
                            yield Static("Auto-fetch", classes="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="autofetch-enabled")
                            yield Static("run_at (local time)", classes="form-label")
                            yield Input(placeholder="00:00:05", id="autofetch-run-at")
                            yield Static("catch_up_on_start", classes="form-label")
                            yield Switch(id="autofetch-catch-up")
                            yield Static("", id="autofetch-error", classes="settings-error")

                        with Container(id="settings-feed"):
                            yield Static("Feed", classes="settings-title")
                            yield Static("base_url", classes="form-label")
                            yield Input(placeholder="https://wol.jw.org", id="feed-base-url")
                            yield Static("language_path", classes="form-label")
                            yield Input(placeholder="r1/lp-e", id="feed-language")
                            yield Static("timeout_seconds", classes="form-label")
                            yield Input(placeholder="30", id="feed-timeout")
                            yield Static("", id="feed-error", classes="settings-error")

                        with ScrollableContainer(id="settings-logging"):
                            yield Static("Logging", classes="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="logging-enabled")
                            yield Static("level", classes="form-label")
                            yield Select(
                                [(level, level) for level in self.LOG_LEVELS],
                                id="logging-level",
                                allow_blank=False,
                            )
                            yield Static("console", classes="form-label")
                            yield Switch(id="logging-console")
                            yield Static("file.enabled", classes="form-label")
                            yield Switch(id="logging-file-enabled")
                            yield Static("file.path", classes="form-label")
                            yield Input(placeholder="logs/dailytext.log", id="logging-file-path")
                            yield Static("file.max_bytes", classes="form-label")
                            yield Input(placeholder="5242880", id="logging-file-max-bytes")
                            yield Static("file.backup_count", classes="form-label")
                            yield Input(placeholder="5", id="logging-file-backup")
                            yield Static("redact.enabled", classes="form-label")
                            yield Switch(id="logging-redact-enabled")
                            yield Static("redact.patterns (env var names, one per line)", classes="form-label")
                            yield TextArea(id="logging-redact-patterns")
                            yield Static("", id="logging-error", classes="settings-error")

    def on_mount(self) -> None:
        table = self.query_one("#settings-table", DataTable)
        table.add_column("section", key="section", width=14)
        table.add_column("description", key="description", width=32)
        for key, label, description in self.SECTION_LABELS:
            table.add_row(label, description, key=key)
        table.zebra_stripes = True
        self._select_section("note")
        self.reload_from_config()

    def reload_from_config(self) -> None:
        self._loading_form = True
        # Changed messages arrive after this returns; prevent keeps them from marking the config dirty.
        with self.prevent(Input.Changed, Switch.Changed, Select.Changed, TextArea.Changed):
            self._load_note()
            self._load_auto_fetch()
            self._load_feed()
            self._load_logging()
        self._loading_form = False

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        section_id = self._coerce_row_key(event.row_key)
        self._select_section(section_id)

    def _select_section(self, section_id: str) -> None:
        self._current_section = section_id
        switcher = self.query_one("#settings-forms", ContentSwitcher)
        switcher.current = f"settings-{section_id.replace('_', '-')}"

    def _get_section(self, key: str) -> dict[str, Any]:
        data = self.app.config_state.data or {}
        section = data.get(key)
        if isinstance(section, dict):
            return section
        return {}

    def _update_section(self, key: str, section: dict[str, Any]) -> None:
        self.app.update_config_section(key, section)

    def _load_note(self) -> None:
        note = self._get_section("note")
        vault = self._get_section("vault")
        note_format = note.get("format", "callout")
        self.query_one("#note-vault", Input).value = str(vault.get("path", ""))
        self.query_one("#note-template", Input).value = str(note.get("path_template", ""))
        self.query_one("#note-append", Switch).value = bool(note.get("append", True))
        self._set_select_value("#note-format", note_format, self.NOTE_FORMATS, "note-error")
        self.query_one("#note-heading", Input).value = str(note.get("heading", "Daily Text"))
        if note_format in self.NOTE_FORMATS:
            self._set_error("note-error", "")

    def _load_auto_fetch(self) -> None:
        auto_fetch = self._get_section("auto_fetch")
        self.query_one("#autofetch-enabled", Switch).value = bool(auto_fetch.get("enabled", False))
        self.query_one("#autofetch-run-at", Input).value = str(auto_fetch.get("run_at", "00:00:05"))
        self.query_one("#autofetch-catch-up", Switch).value = bool(auto_fetch.get("catch_up_on_start", False))
        self._apply_auto_fetch_state(bool(auto_fetch.get("enabled", False)))
        self._set_error("autofetch-error", "")

    def _load_feed(self) -> None:
        feed = self._get_section("feed")
        self.query_one("#feed-base-url", Input).value = str(feed.get("base_url", "https://wol.jw.org"))
        self.query_one("#feed-language", Input).value = str(feed.get("language_path", "r1/lp-e"))
        self.query_one("#feed-timeout", Input).value = str(feed.get("timeout_seconds", 30))
        self._set_error("feed-error", "")

    def _load_logging(self) -> None:
        logging = self._get_section("logging")
        file_cfg = self._get_subdict(logging, "file")
        redact_cfg = self._get_subdict(logging, "redact")
        file_enabled = bool(file_cfg.get("enabled", False))
        redact_enabled = bool(redact_cfg.get("enabled", False))

        self.query_one("#logging-enabled", Switch).value = bool(logging.get("enabled", True))
        self._set_select_value("#logging-level", logging.get("level", "INFO"), self.LOG_LEVELS, "logging-error")
        self.query_one("#logging-console", Switch).value = bool(logging.get("console", True))
        self.query_one("#logging-file-enabled", Switch).value = file_enabled
        self.query_one("#logging-file-path", Input).value = str(file_cfg.get("path", "logs/dailytext.log"))
        self.query_one("#logging-file-max-bytes", Input).value = str(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        self.query_one("#logging-file-backup", Input).value = str(file_cfg.get("backup_count", 5))
        self.query_one("#logging-redact-enabled", Switch).value = redact_enabled
        self.query_one("#logging-redact-patterns", TextArea).text = "\n".join(redact_cfg.get("patterns", []) or [])
        self._apply_logging_state(file_enabled, redact_enabled)

    def _set_select_value(self, selector: str, value: str, allowed: list[str], error_id: str) -> None:
        select = self.query_one(selector, Select)
        if value in allowed:
            select.value = value
            self._set_error(error_id, "")
        else:
            select.value = allowed[0] if allowed else Select.BLANK
            self._set_error(error_id, f"Invalid value: {value}")

    def _set_error(self, error_id: str, message: str) -> None:
        self.query_one(f"#{error_id}", Static).update(message)

    def _apply_auto_fetch_state(self, enabled: bool) -> None:
        self.query_one("#autofetch-run-at", Input).disabled = not enabled
        self.query_one("#autofetch-catch-up", Switch).disabled = not enabled

    def _apply_logging_state(self, file_enabled: bool, redact_enabled: bool) -> None:
        self.query_one("#logging-file-path", Input).disabled = not file_enabled
        self.query_one("#logging-file-max-bytes", Input).disabled = not file_enabled
        self.query_one("#logging-file-backup", Input).disabled = not file_enabled
        self.query_one("#logging-redact-patterns", TextArea).disabled = not redact_enabled

    @on(Input.Changed, "#note-vault")
    def _on_note_vault(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        vault = self._get_section("vault")
        vault["path"] = event.value.strip()
        self._update_section("vault", vault)

    @on(Input.Changed, "#note-template")
    def _on_note_template(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        check = check_path_template(event.value)
        self._update_checked_field("note", "path_template", check.normalized, check.error, "note-error")

    @on(Switch.Changed, "#note-append")
    def _on_note_append(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        note = self._get_section("note")
        note["append"] = bool(event.value)
        self._update_section("note", note)

    @on(Select.Changed, "#note-format")
    def _on_note_format(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        note = self._get_section("note")
        note["format"] = event.value
        self._update_section("note", note)

    @on(Input.Changed, "#note-heading")
    def _on_note_heading(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        note = self._get_section("note")
        note["heading"] = event.value.strip() or "Daily Text"
        self._update_section("note", note)

    @on(Switch.Changed, "#autofetch-enabled")
    def _on_autofetch_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        auto_fetch = self._get_section("auto_fetch")
        auto_fetch["enabled"] = bool(event.value)
        self._update_section("auto_fetch", auto_fetch)
        self._apply_auto_fetch_state(bool(event.value))

    @on(Input.Changed, "#autofetch-run-at")
    def _on_autofetch_run_at(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        check = check_run_at(event.value)
        self._update_checked_field("auto_fetch", "run_at", check.normalized, check.error, "autofetch-error")

    @on(Switch.Changed, "#autofetch-catch-up")
    def _on_autofetch_catch_up(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        auto_fetch = self._get_section("auto_fetch")
        auto_fetch["catch_up_on_start"] = bool(event.value)
        self._update_section("auto_fetch", auto_fetch)

    @on(Input.Changed, "#feed-base-url")
    def _on_feed_base_url(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        check = check_base_url(event.value)
        self._update_checked_field("feed", "base_url", check.normalized, check.error, "feed-error")

    @on(Input.Changed, "#feed-language")
    def _on_feed_language(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        check = check_language_path(event.value)
        self._update_checked_field("feed", "language_path", check.normalized, check.error, "feed-error")

    @on(Input.Changed, "#feed-timeout")
    def _on_feed_timeout(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        self._update_int_field("feed", "timeout_seconds", event.value, "feed-error")

    @on(Switch.Changed, "#logging-enabled")
    def _on_logging_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        logging = self._get_section("logging")
        logging["enabled"] = bool(event.value)
        self._update_section("logging", logging)

    @on(Select.Changed, "#logging-level")
    def _on_logging_level(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        logging = self._get_section("logging")
        logging["level"] = event.value
        self._update_section("logging", logging)

    @on(Switch.Changed, "#logging-console")
    def _on_logging_console(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        logging = self._get_section("logging")
        logging["console"] = bool(event.value)
        self._update_section("logging", logging)

    @on(Switch.Changed, "#logging-file-enabled")
    def _on_logging_file_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._update_nested_value("logging", ("file", "enabled"), bool(event.value))
        redact_enabled = bool(self._get_subdict(self._get_section("logging"), "redact").get("enabled", False))
        self._apply_logging_state(bool(event.value), redact_enabled)

    @on(Input.Changed, "#logging-file-path")
    def _on_logging_file_path(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        self._update_nested_value("logging", ("file", "path"), event.value)

    @on(Input.Changed, "#logging-file-max-bytes")
    def _on_logging_file_max(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        parsed = self._parse_int(event.value, "logging-error")
        if parsed is not None:
            self._update_nested_value("logging", ("file", "max_bytes"), parsed)

    @on(Input.Changed, "#logging-file-backup")
    def _on_logging_file_backup(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        parsed = self._parse_int(event.value, "logging-error")
        if parsed is not None:
            self._update_nested_value("logging", ("file", "backup_count"), parsed)

    @on(Switch.Changed, "#logging-redact-enabled")
    def _on_logging_redact_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._update_nested_value("logging", ("redact", "enabled"), bool(event.value))
        file_enabled = bool(self._get_subdict(self._get_section("logging"), "file").get("enabled", False))
        self._apply_logging_state(file_enabled, bool(event.value))

    @on(TextArea.Changed, "#logging-redact-patterns")
    def _on_logging_redact_patterns(self, event: TextArea.Changed) -> None:
        if self._loading_form:
            return
        patterns = [line.strip() for line in event.text_area.text.splitlines() if line.strip()]
        self._update_nested_value("logging", ("redact", "patterns"), patterns)

    def _update_checked_field(
        self,
        section: str,
        key: str,
        value: Optional[str],
        error: Optional[str],
        error_id: str,
    ) -> None:
        if error or value is None:
            self._set_error(error_id, error or f"{key} is invalid")
            return
        self._set_error(error_id, "")
        config = self._get_section(section)
        config[key] = value
        self._update_section(section, config)

    def _update_int_field(self, section: str, key: str, value: str, error_id: str) -> None:
        parsed = self._parse_int(value, error_id)
        if parsed is None:
            return
        config = self._get_section(section)
        config[key] = parsed
        self._update_section(section, config)

    def _update_nested_value(self, section: str, path: tuple[str, str], value: Any) -> None:
        config = self._get_section(section)
        nested = self._get_subdict(config, path[0])
        nested[path[1]] = value
        config[path[0]] = nested
        self._update_section(section, config)

    def _parse_int(self, value: str, error_id: str) -> Optional[int]:
        stripped = value.strip()
        if not stripped:
            self._set_error(error_id, "")
            return None
        if not stripped.isdigit():
            self._set_error(error_id, "Enter a non-negative integer")
            return None
        self._set_error(error_id, "")
        return int(stripped)

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)

    @staticmethod
    def _get_subdict(parent: dict[str, Any], key: str) -> dict[str, Any]:
        value = parent.get(key)
        if isinstance(value, dict):
            return value
        return {}
