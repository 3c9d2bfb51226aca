"""Key handling for the menu.

One mapping function per mode turns a key chord into an intent; map_key
dispatches on the current mode. Every chord maps to something, with Nop for
keys a mode ignores.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tsman.menu.intents import (
    AppendToInput,
    Delete,
    DeleteFromInput,
    Dismiss,
    Edit,
    Exit,
    HideConfirmation,
    Intent,
    Kill,
    MoveSelection,
    Nop,
    Open,
    RemoveLastWord,
    Rename,
    Save,
    StartRename,
    ToggleHelp,
    TogglePreview,
)
from tsman.menu.state import MenuMode


@dataclass(frozen=True)
class KeyChord:
    """A key press as reported by the terminal.

    Attributes:
        key: Textual key name, e.g. ``"ctrl+e"``, ``"up"``, ``"a"``.
        character: The printable character, if the key produces one.
    """

    key: str
    character: str | None = None

    @property
    def is_printable(self) -> bool:
        return (
            self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
            and not self.key.startswith("ctrl+")
        )


NORMAL_KEYS: dict[str, Intent] = {
    "up": MoveSelection(-1),
    "ctrl+p": MoveSelection(-1),
    "down": MoveSelection(1),
    "ctrl+n": MoveSelection(1),
    "enter": Open(),
    "escape": Exit(),
    "ctrl+c": Exit(),
    "backspace": DeleteFromInput(),
    "ctrl+w": RemoveLastWord(),
    "ctrl+e": Edit(),
    "ctrl+s": Save(),
    "ctrl+d": Delete(),
    "ctrl+k": Kill(),
    "ctrl+r": StartRename(),
    "ctrl+t": TogglePreview(),
    "ctrl+h": ToggleHelp(),
    "f1": ToggleHelp(),
}

RENAME_KEYS: dict[str, Intent] = {
    "enter": Rename(),
    "escape": Dismiss(),
    "ctrl+c": Dismiss(),
    "backspace": DeleteFromInput(),
    "ctrl+w": RemoveLastWord(),
}

HELP_KEYS: dict[str, Intent] = {
    key: ToggleHelp() for key in ("escape", "q", "enter", "ctrl+h", "f1", "ctrl+c")
}

CONFIRMATION_KEYS: dict[str, Intent] = {
    "y": Delete(),
    "Y": Delete(),
    "enter": Delete(),
    "n": HideConfirmation(),
    "N": HideConfirmation(),
    "q": HideConfirmation(),
    "escape": HideConfirmation(),
    "ctrl+c": HideConfirmation(),
}

ERROR_KEYS: dict[str, Intent] = {
    key: Dismiss() for key in ("escape", "q", "enter", "ctrl+c")
}


def _lookup(table: dict[str, Intent], chord: KeyChord) -> Intent:
    if chord.key in table:
        return table[chord.key]
    if chord.character is not None and chord.character in table:
        return table[chord.character]
    return Nop()


def map_normal(chord: KeyChord) -> Intent:
    if chord.key in NORMAL_KEYS:
        return NORMAL_KEYS[chord.key]
    if chord.is_printable:
        return AppendToInput(chord.character)
    return Nop()


def map_rename(chord: KeyChord) -> Intent:
    if chord.key in RENAME_KEYS:
        return RENAME_KEYS[chord.key]
    if chord.is_printable:
        return AppendToInput(chord.character)
    return Nop()


def map_help(chord: KeyChord) -> Intent:
    return _lookup(HELP_KEYS, chord)


def map_confirmation(chord: KeyChord) -> Intent:
    return _lookup(CONFIRMATION_KEYS, chord)


def map_error(chord: KeyChord) -> Intent:
    return _lookup(ERROR_KEYS, chord)


KEY_MAPS: dict[MenuMode, Callable[[KeyChord], Intent]] = {
    MenuMode.NORMAL: map_normal,
    MenuMode.RENAME: map_rename,
    MenuMode.HELP: map_help,
    MenuMode.CONFIRMATION: map_confirmation,
    MenuMode.ERROR: map_error,
}


def map_key(mode: MenuMode, chord: KeyChord) -> Intent:
    """Translate a key chord into an intent for the given mode."""
    return KEY_MAPS[mode](chord)
