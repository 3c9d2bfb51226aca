"""Main Textual app class.

This module provides the interactive session menu. The app draws the menu
state and feeds key presses to the MenuController; which popup is on screen
always follows the controller's mode.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext

from textual.app import App

from tsman.menu.controller import MenuController
from tsman.menu.keymap import KeyChord
from tsman.menu.state import MenuMode
from tsman.screens.menu import MenuScreen
from tsman.screens.modals import (
    DeleteConfirmModal,
    ErrorModal,
    HelpModal,
    MenuPopup,
    RenameSessionModal,
)

POPUPS: dict[MenuMode, type[MenuPopup]] = {
    MenuMode.HELP: HelpModal,
    MenuMode.CONFIRMATION: DeleteConfirmModal,
    MenuMode.RENAME: RenameSessionModal,
    MenuMode.ERROR: ErrorModal,
}


class TsmanApp(App[None]):
    """Interactive tmux session menu."""

    TITLE = "tsman"

    # ctrl+p moves the selection
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, controller: MenuController) -> None:
        """Initialize the application.

        Args:
            controller: Controller holding the menu state.
        """
        super().__init__()
        self.controller = controller
        self.controller.set_suspend(self.hand_over_terminal)
        self.menu_screen = MenuScreen(controller)

    def on_mount(self) -> None:
        """Show the menu when the app starts."""
        self.push_screen(self.menu_screen)

    def hand_over_terminal(self) -> AbstractContextManager:
        """Suspend the UI while a child process owns the terminal."""
        if self.is_headless:
            return nullcontext()
        return self.suspend()

    def handle_chord(self, chord: KeyChord) -> None:
        """Run a key press through the controller and redraw."""
        self.controller.handle_key(chord)
        self.sync_view()

    def sync_view(self) -> None:
        """Bring the screen stack and widgets in line with the menu state."""
        state = self.controller.state
        if state.should_exit:
            self.exit()
            return

        wanted = POPUPS.get(state.mode)
        current = self.screen
        if isinstance(current, MenuPopup) and type(current) is not wanted:
            self.pop_screen()
            current = None
        if wanted is not None and not isinstance(current, wanted):
            self.push_screen(wanted(self.controller))
        elif isinstance(current, MenuPopup) and current.is_mounted:
            current.refresh_view()

        self.menu_screen.refresh_view()
