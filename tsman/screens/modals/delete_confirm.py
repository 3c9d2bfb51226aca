"""Delete confirmation modal.

Shown when deleting from the menu with confirmation enabled.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from tsman.screens.modals.popup import MenuPopup


class DeleteConfirmModal(MenuPopup):
    """Asks before deleting the selected session.

    y, Y or Enter deletes; n, N, q or Esc cancels.
    """

    DEFAULT_CSS = """
    DeleteConfirmModal {
        align: center middle;
    }

    DeleteConfirmModal #dialog {
        width: 40;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 0 2;
    }

    DeleteConfirmModal #title {
        text-style: bold;
        color: $error;
        text-align: center;
    }

    DeleteConfirmModal #item-name {
        text-style: bold;
        text-align: center;
    }

    DeleteConfirmModal #choices {
        text-align: center;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        yield Vertical(
            Static("Confirm", id="title"),
            Static("", id="item-name", markup=False),
            Static("Y/n", id="choices"),
            id="dialog",
        )

    def refresh_view(self) -> None:
        item = self.controller.state.items.selected_item()
        label = f"Delete {item.name}?" if item is not None else "Delete?"
        self.query_one("#item-name", Static).update(label)
