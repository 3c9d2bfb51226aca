"""Preview pane showing the saved layout of the selected session."""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.widgets import Static


class SessionPreviewWidget(Static):
    """Shows a session tree, or nothing when no session is selected."""

    DEFAULT_CSS = """
    SessionPreviewWidget {
        width: 40%;
        height: 1fr;
        border: round $secondary;
        border-title-color: $secondary;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self.border_title = "Preview"

    def show_preview(self, content: str | None) -> None:
        self.update(Text(content or ""))
