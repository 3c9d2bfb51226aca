"""Testing utilities for tsman.

This package provides a mock tmux server and a recording session service
for unit testing without a running tmux.
"""

from tsman.testing.mock_tmux import MockSessionService, MockTmuxServer

__all__ = [
    "MockSessionService",
    "MockTmuxServer",
]
