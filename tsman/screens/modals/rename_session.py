"""Rename session modal.

Shows the pending name while it is typed. The name itself lives in the menu
state; this modal only displays it.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from tsman.screens.modals.popup import MenuPopup


class RenameSessionModal(MenuPopup):
    """Modal for renaming the selected session."""

    DEFAULT_CSS = """
    RenameSessionModal {
        align: center middle;
    }

    RenameSessionModal #dialog {
        width: 50;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 0 2;
    }

    RenameSessionModal #title {
        text-style: bold;
        padding-bottom: 1;
    }

    RenameSessionModal #pending-name {
        color: $success;
    }

    RenameSessionModal #hint {
        color: $text-muted;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        yield Vertical(
            Static("Rename Session", id="title", markup=False),
            Static("> ", id="pending-name", markup=False),
            Static("Enter: Rename | Esc: Cancel", id="hint"),
            id="dialog",
        )

    def refresh_view(self) -> None:
        state = self.controller.state
        self.query_one("#title", Static).update(f"Rename {state.rename_target or ''}")
        self.query_one("#pending-name", Static).update(f"> {state.pending_name}")
