"""Menu widgets."""

from tsman.widgets.preview import SessionPreviewWidget
from tsman.widgets.session_list import SearchLineWidget, SessionListWidget

__all__ = [
    "SearchLineWidget",
    "SessionListWidget",
    "SessionPreviewWidget",
]
