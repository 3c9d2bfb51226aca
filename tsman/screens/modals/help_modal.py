"""Help modal showing keyboard shortcuts.

Displays all available keyboard shortcuts organized by context.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Grid, Vertical
from textual.widgets import Static

from tsman.screens.modals.popup import MenuPopup


class HelpModal(MenuPopup):
    """Modal showing all keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpModal {
        align: center middle;
    }

    HelpModal > Container {
        width: 64;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 0 1;
    }

    HelpModal #title {
        text-align: center;
        text-style: bold;
        border-bottom: solid $primary;
    }

    HelpModal Grid {
        grid-size: 2;
        grid-gutter: 0 2;
        height: auto;
    }

    HelpModal .section {
        height: auto;
    }

    HelpModal .section-title {
        text-style: bold;
        color: $primary;
        margin-top: 1;
    }

    HelpModal .shortcut-row {
        padding-left: 1;
    }

    HelpModal #footer {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    SHORTCUTS = {
        "Navigation": [
            ("Esc/C-c", "Close"),
            ("↑/C-p", "Previous item"),
            ("↓/C-n", "Next item"),
        ],
        "Session Actions": [
            ("C-e", "Edit session"),
            ("C-d", "Delete/kill"),
            ("C-s", "Save session"),
            ("C-k", "Kill session"),
            ("C-r", "Rename session"),
            ("Enter", "Open session"),
        ],
        "UI Controls": [
            ("C-t", "Toggle preview"),
            ("C-h/F1", "Toggle help"),
            ("C-w", "Delete last word"),
        ],
        "Popup": [
            ("y/Y/Enter", "Confirm"),
            ("n/N/Esc/q", "Abort"),
        ],
    }

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        yield Container(
            Static("Keyboard Shortcuts", id="title"),
            Grid(*self._build_sections()),
            Static("Press Esc, q or C-h to close", id="footer"),
            id="dialog",
        )

    def _build_sections(self) -> list[Vertical]:
        sections = []
        for section_name, shortcuts in self.SHORTCUTS.items():
            rows = [Static(section_name, classes="section-title")]
            rows.extend(
                Static(f"{key:<9} → {description}", classes="shortcut-row", markup=False)
                for key, description in shortcuts
            )
            sections.append(Vertical(*rows, classes="section"))
        return sections
