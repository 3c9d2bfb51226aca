"""tsman: save and restore tmux sessions.

Captures the layout of a running tmux session (windows, panes, working
directories and foreground commands) to YAML and rebuilds it later. An
interactive menu lists saved and running sessions.

Public API Usage:
    from tsman import ServiceContainer, load_config

    services = ServiceContainer.create(load_config(), inside_tmux=True)
    services.sessions.save_current()
    services.sessions.open("work")

    # Models and serialization
    from tsman import Session, dump_session, load_session
"""

__version__ = "0.1.0"

from tsman.config import TsmanConfig, load_config
from tsman.exceptions import (
    CommandFailedError,
    InvalidSessionNameError,
    NoAttachedSessionError,
    ProtocolParseError,
    RegistryError,
    RestoreFailedError,
    TsmanError,
)
from tsman.models import Pane, Session, Window, dump_session, load_session
from tsman.registry import SessionRegistry
from tsman.services import ServiceContainer, SessionService

__all__ = [
    "__version__",
    # Services
    "ServiceContainer",
    "SessionRegistry",
    "SessionService",
    # Models
    "Pane",
    "Session",
    "Window",
    "dump_session",
    "load_session",
    # Config
    "TsmanConfig",
    "load_config",
    # Exceptions
    "CommandFailedError",
    "InvalidSessionNameError",
    "NoAttachedSessionError",
    "ProtocolParseError",
    "RegistryError",
    "RestoreFailedError",
    "TsmanError",
]
