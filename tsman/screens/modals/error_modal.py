"""Error modal shown when a menu action fails."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from tsman.screens.modals.popup import MenuPopup


class ErrorModal(MenuPopup):
    """Displays the failed action's message until dismissed."""

    DEFAULT_CSS = """
    ErrorModal {
        align: center middle;
    }

    ErrorModal #dialog {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 0 2;
    }

    ErrorModal #title {
        text-style: bold;
        color: $error;
        padding-bottom: 1;
    }

    ErrorModal #footer {
        color: $text-muted;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        yield Vertical(
            Static("Error", id="title"),
            Static("", id="message", markup=False),
            Static("Press Enter or Esc to close", id="footer"),
            id="dialog",
        )

    def refresh_view(self) -> None:
        message = self.controller.state.error_message or ""
        self.query_one("#message", Static).update(message)
