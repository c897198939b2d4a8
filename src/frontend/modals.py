"""Modal dialogs for the Textual config panel."""

from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .validators import check_date


class UnsavedChangesScreen(ModalScreen[str]):
    """Prompt when exiting with unsaved changes."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Unsaved changes", classes="modal-title"),
            Static("Save changes before exit?", classes="modal-body"),
            Horizontal(
                Button("Save", id="unsaved-save", variant="success"),
                Button("Discard", id="unsaved-discard", variant="error"),
                Button("Cancel", id="unsaved-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "unsaved-save":
            self.dismiss("save")
        elif event.button.id == "unsaved-discard":
            self.dismiss("discard")
        else:
            self.dismiss("cancel")


class ReloadConfirmScreen(ModalScreen[str]):
    """Prompt when reloading with unsaved changes."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Reload config?", classes="modal-title"),
            Static("Unsaved changes will be lost.", classes="modal-body"),
            Horizontal(
                Button("Save", id="reload-save"),
                Button("Reload", id="reload-reload", variant="warning"),
                Button("Cancel", id="reload-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "reload-save":
            self.dismiss("save")
        elif event.button.id == "reload-reload":
            self.dismiss("reload")
        else:
            self.dismiss("cancel")


class FetchDateScreen(ModalScreen[str | None]):
    """Modal form asking which day to fetch."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Fetch daily text", classes="modal-title"),
            Static("", id="fetch-date-error", classes="modal-error"),
            Static("date (YYYY-MM-DD)", classes="form-label"),
            Input(value=date.today().isoformat(), id="fetch-date-input"),
            Horizontal(
                Button("Fetch", id="fetch-date-confirm", variant="success"),
                Button("Cancel", id="fetch-date-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "fetch-date-cancel":
            self.dismiss(None)
            return
        if event.button.id != "fetch-date-confirm":
            return
        check = check_date(self.query_one("#fetch-date-input", Input).value)
        if check.error or check.normalized is None:
            self.query_one("#fetch-date-error", Static).update(check.error or "invalid date")
            return
        self.dismiss(check.normalized)
