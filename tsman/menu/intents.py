"""Intents: what a key press asks the menu to do."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MoveSelection:
    delta: int


@dataclass(frozen=True)
class AppendToInput:
    char: str


@dataclass(frozen=True)
class DeleteFromInput:
    pass


@dataclass(frozen=True)
class RemoveLastWord:
    pass


@dataclass(frozen=True)
class Open:
    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Edit:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class Kill:
    pass


@dataclass(frozen=True)
class StartRename:
    """Begin editing the selected item's name."""


@dataclass(frozen=True)
class Rename:
    """Apply the pending name to the item being renamed."""


@dataclass(frozen=True)
class TogglePreview:
    pass


@dataclass(frozen=True)
class ToggleHelp:
    pass


@dataclass(frozen=True)
class ShowConfirmation:
    pass


@dataclass(frozen=True)
class HideConfirmation:
    pass


@dataclass(frozen=True)
class Dismiss:
    """Close the rename or error popup."""


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Nop:
    pass


Intent = Union[
    MoveSelection,
    AppendToInput,
    DeleteFromInput,
    RemoveLastWord,
    Open,
    Save,
    Edit,
    Delete,
    Kill,
    StartRename,
    Rename,
    TogglePreview,
    ToggleHelp,
    ShowConfirmation,
    HideConfirmation,
    Dismiss,
    Exit,
    Nop,
]
