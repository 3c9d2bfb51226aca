"""Menu modes and the state aggregate the menu handlers operate on."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tsman.menu.items import MenuItems


class MenuMode(Enum):
    """What the menu is currently doing; decides how keys are read."""

    NORMAL = "normal"  # Browsing and filtering
    RENAME = "rename"  # Editing the pending name
    HELP = "help"
    CONFIRMATION = "confirmation"  # Delete armed, waiting for y/n
    ERROR = "error"


@dataclass
class MenuState:
    """Everything the menu shows.

    Attributes:
        items: Item list, filter input and selection.
        mode: Current mode.
        show_preview: Preview pane visible.
        ask_for_confirmation: Delete asks before acting.
        pending_name: Rename input while in RENAME mode.
        rename_target: Name of the item being renamed.
        error_message: Message shown in ERROR mode.
        should_exit: The menu should close after this event.
    """

    items: MenuItems = field(default_factory=MenuItems)
    mode: MenuMode = MenuMode.NORMAL
    show_preview: bool = False
    ask_for_confirmation: bool = False
    pending_name: str = ""
    rename_target: str | None = None
    error_message: str | None = None
    should_exit: bool = False

    @property
    def show_help(self) -> bool:
        return self.mode is MenuMode.HELP

    @property
    def show_confirmation(self) -> bool:
        return self.mode is MenuMode.CONFIRMATION

    def show_error(self, message: str) -> None:
        self.mode = MenuMode.ERROR
        self.error_message = message

    def reset_mode(self) -> None:
        """Return to browsing, dropping any rename or error payload."""
        self.mode = MenuMode.NORMAL
        self.pending_name = ""
        self.rename_target = None
        self.error_message = None
