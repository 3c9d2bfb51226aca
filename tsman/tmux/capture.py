"""Build a Session value from a running tmux session."""

from __future__ import annotations

import logging

from tsman.models import Pane, Session, Window
from tsman.tmux.client import TmuxClient
from tsman.tmux.process import ProcessInspector

logger = logging.getLogger(__name__)


def window_target(session_name: str, window_index: str) -> str:
    """Format a ``SESSION:WINDOW`` target for an exact session match."""
    return f"={session_name}:{window_index}"


def capture_session(
    client: TmuxClient,
    inspector: ProcessInspector,
    name: str | None = None,
) -> Session:
    """Capture the layout of a running session.

    Only queries tmux and ``ps``; nothing is changed.

    Args:
        client: tmux client used for the queries.
        inspector: Resolves each pane's foreground command.
        name: Session to capture. Defaults to the attached session.

    Returns:
        A new Session value.

    Raises:
        NoAttachedSessionError: If no name is given and no session is attached.
        ProtocolParseError: If tmux or ps output is malformed.
        CommandFailedError: If a query command fails.
    """
    if name is None:
        name, _ = client.current_session_info()

    work_dir = client.session_path(name)

    windows = []
    for window in client.list_windows(name):
        panes = [
            Pane(
                index=pane.index,
                current_command=inspector.current_command(pane.pid),
                work_dir=pane.work_dir,
            )
            for pane in client.list_panes(window_target(name, window.index))
        ]
        windows.append(
            Window(index=window.index, name=window.name, layout=window.layout, panes=panes)
        )

    logger.info(
        "Captured session %s: %d windows, %d panes",
        name,
        len(windows),
        sum(len(w.panes) for w in windows),
    )
    return Session(name=name, work_dir=work_dir, windows=windows)
