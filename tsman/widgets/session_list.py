"""Session list and search line widgets.

Example display (the selected row is drawn bold reverse):
    * scratch (active)
    work (active)
    notes
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.widgets import Static

from tsman.menu.items import MenuItems

NO_RESULTS = "No results..."
SEARCH_PROMPT = "> "


class SessionListWidget(Static):
    """Displays the filtered sessions and highlights the selected row.

    Unsaved sessions are prefixed with ``*`` and running ones are suffixed
    with ``(active)``.
    """

    DEFAULT_CSS = """
    SessionListWidget {
        height: 1fr;
        border: round $primary;
        border-title-color: $primary;
        padding: 0 1;
    }

    SessionListWidget.empty {
        color: $text-muted;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.border_title = "Results"

    def show_items(self, items: MenuItems) -> None:
        """Render the filtered view of ``items``."""
        self.set_class(not items.filtered, "empty")
        self.update(render_items(items))


def render_items(items: MenuItems) -> Text:
    """Build the list text for the filtered view."""
    if not items.filtered:
        return Text(NO_RESULTS)

    text = Text()
    for row, item in enumerate(items.filtered):
        if row:
            text.append("\n")
        if row == items.selected:
            text.append(item.display(), style="bold reverse")
        else:
            text.append(item.display())
    return text


class SearchLineWidget(Static):
    """The filter input, shown as ``> text``."""

    DEFAULT_CSS = """
    SearchLineWidget {
        height: 3;
        border: round $primary;
        border-title-color: $primary;
        color: $success;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(SEARCH_PROMPT, **kwargs)
        self.border_title = "Search"

    def show_input(self, text: str) -> None:
        self.update(Text(SEARCH_PROMPT + text))
