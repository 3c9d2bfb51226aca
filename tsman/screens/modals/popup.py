"""Base class for the menu's popups.

Popups own no state. Every key press is handed back to the app, which runs
it through the menu controller and then shows whichever popup the new mode
calls for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import events
from textual.screen import ModalScreen

from tsman.menu.keymap import KeyChord

if TYPE_CHECKING:
    from tsman.menu.controller import MenuController


def chord_from_event(event: events.Key) -> KeyChord:
    """Convert a Textual key event into a KeyChord."""
    return KeyChord(key=event.key, character=event.character)


class MenuPopup(ModalScreen[None]):
    """A modal drawn over the menu while the controller is in its mode."""

    def __init__(self, controller: MenuController) -> None:
        super().__init__()
        self.controller = controller

    def on_mount(self) -> None:
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.handle_chord(chord_from_event(event))

    def refresh_view(self) -> None:
        """Redraw from the controller state. Static popups draw nothing."""
