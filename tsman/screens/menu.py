"""Main menu screen.

Results list, search line, optional preview pane and a hint bar. Every key
press is handed to the app, which runs it through the menu controller and
redraws.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Static

from tsman.screens.modals.popup import chord_from_event
from tsman.widgets import SearchLineWidget, SessionListWidget, SessionPreviewWidget

if TYPE_CHECKING:
    from tsman.menu.controller import MenuController

HINT = "C-h: Help | Esc: Quit"


class MenuScreen(Screen[None]):
    """Browse, filter and act on sessions."""

    DEFAULT_CSS = """
    MenuScreen #content {
        height: 1fr;
    }

    MenuScreen #left {
        width: 1fr;
    }

    MenuScreen #hint {
        height: 1;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(self, controller: MenuController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Horizontal(
            Vertical(
                SessionListWidget(id="results"),
                SearchLineWidget(id="search"),
                id="left",
            ),
            SessionPreviewWidget(id="preview"),
            id="content",
        )
        yield Static(HINT, id="hint", markup=False)

    def on_mount(self) -> None:
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.handle_chord(chord_from_event(event))

    def refresh_view(self) -> None:
        """Redraw every widget from the controller state."""
        state = self.controller.state
        self.query_one("#results", SessionListWidget).show_items(state.items)
        self.query_one("#search", SearchLineWidget).show_input(state.items.input)

        preview = self.query_one("#preview", SessionPreviewWidget)
        preview.display = state.show_preview
        if state.show_preview:
            preview.show_preview(self.controller.preview_text())
