"""Service container and session operations.

This module provides a ServiceContainer that holds the tmux client, process
inspector and session registry, and the SessionService that both the CLI
and the menu call for every session action.

Every action validates the session names it receives before touching the
registry or tmux.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from tsman.config import TsmanConfig, get_storage_dir
from tsman.editors import open_in_editor, resolve_editor
from tsman.exceptions import NoAttachedSessionError, RegistryError, SessionNotFoundError
from tsman.menu.items import MenuItem, build_menu_items
from tsman.models import Session
from tsman.registry import SessionRegistry
from tsman.security import validate_session_name
from tsman.tmux.capture import capture_session
from tsman.tmux.client import TmuxClient
from tsman.tmux.process import ProcessInspector
from tsman.tmux.restore import restore_session

logger = logging.getLogger(__name__)


class SessionService:
    """Save, open, edit, delete, close and rename sessions.

    Attributes:
        inside_tmux: The process runs inside a tmux client. Decides between
            switch-client and attach-session, and whether there is an
            attached session to save.
    """

    def __init__(
        self,
        tmux: TmuxClient,
        inspector: ProcessInspector,
        registry: SessionRegistry,
        config: TsmanConfig | None = None,
        *,
        inside_tmux: bool = False,
    ) -> None:
        self.tmux = tmux
        self.inspector = inspector
        self.registry = registry
        self.config = config or TsmanConfig()
        self.inside_tmux = inside_tmux

    # -------------------------------------------------------------------------
    # Capture
    # -------------------------------------------------------------------------

    def current_session_name(self) -> str:
        """Name of the attached session.

        Raises:
            NoAttachedSessionError: If not running inside tmux.
        """
        if not self.inside_tmux:
            raise NoAttachedSessionError()
        name, _ = self.tmux.current_session_info()
        return name

    def save_current(self, name: str | None = None) -> Path:
        """Capture the attached session and save it.

        Args:
            name: Save under this name instead of the session's own.

        Returns:
            Path of the saved file.
        """
        if name is not None:
            validate_session_name(name)
        session = capture_session(self.tmux, self.inspector, self.current_session_name())
        if name is not None:
            session = replace(session, name=name)
        return self._save(session)

    def save_target(self, name: str) -> Path:
        """Capture a running session by name and save it."""
        validate_session_name(name)
        return self._save(capture_session(self.tmux, self.inspector, name))

    def _save(self, session: Session) -> Path:
        path = self.registry.save_session(session)
        logger.info("Saved session %s to %s", session.name, path)
        return path

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def open(self, name: str) -> None:
        """Show a session, restoring it from its saved copy if not running."""
        validate_session_name(name)
        if self.tmux.session_exists(name):
            self.tmux.attach_or_switch(name, inside_tmux=self.inside_tmux)
            return

        session = self.registry.load_session(name)
        restore_session(
            session,
            self.tmux,
            inside_tmux=self.inside_tmux,
            temp_prefix=self.config.temp_session_prefix,
        )

    def edit(self, name: str | None = None) -> Path:
        """Open a saved session in the editor.

        Args:
            name: Session to edit. Defaults to the attached session.

        Raises:
            SessionNotFoundError: If the session is not saved.
            EditorError: If the editor is not allowed or fails.
        """
        if name is None:
            name = self.current_session_name()
        path = self.registry.path_for(name)
        if not path.is_file():
            raise SessionNotFoundError(name)

        open_in_editor(path, resolve_editor(self.config))
        return path

    def delete(self, name: str) -> None:
        """Delete a saved session."""
        validate_session_name(name)
        self.registry.delete(name)

    def close(self, name: str) -> None:
        """Kill a running session."""
        validate_session_name(name)
        self.tmux.close(name)

    def rename(self, old_name: str, new_name: str, *, active: bool, saved: bool) -> None:
        """Rename a session everywhere it exists.

        Args:
            old_name: Current name.
            new_name: New name.
            active: Rename the running tmux session.
            saved: Rename the saved copy.
        """
        validate_session_name(new_name)
        if active:
            self.tmux.rename(old_name, new_name)
        if saved:
            try:
                self.registry.rename(old_name, new_name)
            except RegistryError:
                if active:
                    logger.warning(
                        "Saved copy of %s not renamed, renaming tmux session back", old_name
                    )
                    self.tmux.rename(new_name, old_name)
                raise

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def list_menu_items(self) -> list[MenuItem]:
        """Build menu items from saved and running sessions."""
        return build_menu_items(self.registry.list(), self.tmux.list_active_sessions())

    def preview(self, name: str) -> str:
        """Render the saved copy of a session as a tree."""
        return self.registry.load_session(name).preview()


@dataclass
class ServiceContainer:
    """Container for all injectable services.

    Attributes:
        config: Loaded settings.
        tmux: tmux command client.
        inspector: Pane foreground command lookup.
        registry: Saved sessions.
        sessions: Session actions built on the above.
    """

    config: TsmanConfig
    tmux: TmuxClient
    inspector: ProcessInspector
    registry: SessionRegistry
    sessions: SessionService

    @classmethod
    def create(
        cls,
        config: TsmanConfig | None = None,
        *,
        inside_tmux: bool = False,
    ) -> ServiceContainer:
        """Create a new service container with all services initialized.

        Args:
            config: Settings; defaults are used when omitted.
            inside_tmux: Whether the process runs inside a tmux client.

        Returns:
            A new ServiceContainer with all services.
        """
        config = config or TsmanConfig()

        tmux = TmuxClient(socket_path=config.tmux_socket)
        inspector = ProcessInspector()
        registry = SessionRegistry(get_storage_dir(config))
        sessions = SessionService(tmux, inspector, registry, config, inside_tmux=inside_tmux)

        return cls(
            config=config,
            tmux=tmux,
            inspector=inspector,
            registry=registry,
            sessions=sessions,
        )
