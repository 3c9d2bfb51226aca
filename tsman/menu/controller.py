"""Menu controller.

Turns key presses into intents, reduces them against the menu state, and
performs the resulting effects through the SessionService. A failing effect
never escapes: it is logged and shown in the error popup, and the menu keeps
running.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING

from tsman.exceptions import TsmanError, record_error
from tsman.menu.effects import (
    CloseSession,
    DeleteSavedSession,
    EditSession,
    Effect,
    OpenSession,
    RenameSession,
    SaveSession,
    apply_effect,
    reduce,
)
from tsman.menu.intents import Intent
from tsman.menu.items import MenuItems
from tsman.menu.keymap import KeyChord, map_key
from tsman.menu.state import MenuState

if TYPE_CHECKING:
    from tsman.services import SessionService

logger = logging.getLogger(__name__)

Suspend = Callable[[], AbstractContextManager]


class MenuController:
    """Drives the menu state from key presses.

    Attributes:
        state: The menu state, owned by the controller.
        sessions: Performs session actions.
    """

    def __init__(
        self,
        state: MenuState,
        sessions: SessionService,
        *,
        suspend: Suspend = nullcontext,
    ) -> None:
        """Initialize the controller.

        Args:
            state: Initial menu state.
            sessions: Session actions.
            suspend: Context manager factory that hands the terminal to a
                child process, used around attach and the editor.
        """
        self.state = state
        self.sessions = sessions
        self._suspend = suspend

    @classmethod
    def create(
        cls,
        sessions: SessionService,
        *,
        show_preview: bool = False,
        ask_for_confirmation: bool = False,
    ) -> MenuController:
        """Build a controller with items loaded from saved and running sessions."""
        state = MenuState(
            items=MenuItems(sessions.list_menu_items()),
            show_preview=show_preview,
            ask_for_confirmation=ask_for_confirmation,
        )
        return cls(state, sessions)

    def set_suspend(self, suspend: Suspend) -> None:
        self._suspend = suspend

    def handle_key(self, chord: KeyChord) -> None:
        """Handle one key press."""
        self.dispatch(map_key(self.state.mode, chord))

    def dispatch(self, intent: Intent) -> None:
        """Reduce an intent and perform its effects in order.

        The first failing effect stops the rest and switches to the error
        popup; the state is only updated for effects that succeeded.
        """
        for effect in reduce(self.state, intent):
            try:
                self.execute(effect)
            except TsmanError as e:
                logger.error("%s failed: %s", type(effect).__name__, e)
                record_error(e)
                self.state.show_error(e.message)
                return
            apply_effect(self.state, effect)

    def execute(self, effect: Effect) -> None:
        """Perform one effect."""
        logger.debug("Executing %s", effect)
        if isinstance(effect, OpenSession):
            with self._suspend():
                self.sessions.open(effect.name)
        elif isinstance(effect, EditSession):
            with self._suspend():
                self.sessions.edit(effect.name)
        elif isinstance(effect, SaveSession):
            self.sessions.save_target(effect.name)
        elif isinstance(effect, DeleteSavedSession):
            self.sessions.delete(effect.name)
        elif isinstance(effect, CloseSession):
            self.sessions.close(effect.name)
        elif isinstance(effect, RenameSession):
            self.sessions.rename(
                effect.old_name,
                effect.new_name,
                active=effect.active,
                saved=effect.saved,
            )

    def preview_text(self) -> str | None:
        """Preview of the selected item's saved copy.

        Returns:
            The rendered tree, an explanation when the item is not saved or
            cannot be read, or None when nothing is selected.
        """
        item = self.state.items.selected_item()
        if item is None:
            return None
        if not item.saved:
            return f"{item.name} is not saved"
        try:
            return self.sessions.preview(item.name)
        except TsmanError as e:
            logger.warning("Cannot preview %s: %s", item.name, e)
            return f"Cannot preview {item.name}: {e.message}"
