"""tmux integration: queries, process inspection, capture and restore."""

from tsman.tmux.capture import capture_session
from tsman.tmux.client import PaneRecord, TmuxClient, WindowRecord
from tsman.tmux.process import ProcessInspector
from tsman.tmux.restore import build_restore_commands, restore_session

__all__ = [
    "PaneRecord",
    "ProcessInspector",
    "TmuxClient",
    "WindowRecord",
    "build_restore_commands",
    "capture_session",
    "restore_session",
]
