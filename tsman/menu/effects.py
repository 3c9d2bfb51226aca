"""Intent reduction and effect application.

reduce() applies an intent to the menu state and returns the side effects
it needs. The controller performs those effects and, for each one that
succeeds, calls apply_effect() to update the state. Neither function touches
tmux or the registry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from tsman.exceptions import InvalidSessionNameError
from tsman.menu import intents
from tsman.menu.items import remove_last_word
from tsman.menu.state import MenuMode, MenuState
from tsman.security import is_valid_session_name

# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class OpenSession:
    name: str


@dataclass(frozen=True)
class SaveSession:
    name: str


@dataclass(frozen=True)
class EditSession:
    name: str


@dataclass(frozen=True)
class DeleteSavedSession:
    name: str


@dataclass(frozen=True)
class CloseSession:
    name: str


@dataclass(frozen=True)
class RenameSession:
    old_name: str
    new_name: str
    active: bool
    saved: bool


Effect = Union[
    OpenSession,
    SaveSession,
    EditSession,
    DeleteSavedSession,
    CloseSession,
    RenameSession,
]


# =============================================================================
# Intent handlers
# =============================================================================


def _move_selection(state: MenuState, intent: intents.MoveSelection) -> list[Effect]:
    state.items.move_selection(intent.delta)
    return []


def _append_to_input(state: MenuState, intent: intents.AppendToInput) -> list[Effect]:
    if state.mode is MenuMode.RENAME:
        state.pending_name += intent.char
    else:
        state.items.append_input(intent.char)
    return []


def _delete_from_input(state: MenuState, intent: intents.DeleteFromInput) -> list[Effect]:
    if state.mode is MenuMode.RENAME:
        state.pending_name = state.pending_name[:-1]
    else:
        state.items.delete_input()
    return []


def _remove_last_word(state: MenuState, intent: intents.RemoveLastWord) -> list[Effect]:
    if state.mode is MenuMode.RENAME:
        state.pending_name = remove_last_word(state.pending_name)
    else:
        state.items.remove_last_word()
    return []


def _open(state: MenuState, intent: intents.Open) -> list[Effect]:
    item = state.items.selected_item()
    if item is None:
        return []
    return [OpenSession(item.name)]


def _save(state: MenuState, intent: intents.Save) -> list[Effect]:
    item = state.items.selected_item()
    if item is None or item.saved:
        return []
    return [SaveSession(item.name)]


def _edit(state: MenuState, intent: intents.Edit) -> list[Effect]:
    item = state.items.selected_item()
    if item is None or not item.saved:
        return []
    return [EditSession(item.name)]


def _delete(state: MenuState, intent: intents.Delete) -> list[Effect]:
    # The first press only arms the confirmation popup
    if state.ask_for_confirmation and state.mode is not MenuMode.CONFIRMATION:
        state.mode = MenuMode.CONFIRMATION
        return []

    state.mode = MenuMode.NORMAL
    item = state.items.selected_item()
    if item is None:
        return []
    if item.saved:
        return [DeleteSavedSession(item.name)]
    return [CloseSession(item.name)]


def _kill(state: MenuState, intent: intents.Kill) -> list[Effect]:
    item = state.items.selected_item()
    if item is None or not item.active:
        return []
    return [CloseSession(item.name)]


def _start_rename(state: MenuState, intent: intents.StartRename) -> list[Effect]:
    item = state.items.selected_item()
    if item is None:
        return []
    state.mode = MenuMode.RENAME
    state.rename_target = item.name
    state.pending_name = item.name
    return []


def _rename(state: MenuState, intent: intents.Rename) -> list[Effect]:
    old_name = state.rename_target
    new_name = state.pending_name
    state.reset_mode()

    item = state.items.find(old_name) if old_name is not None else None
    if item is None or new_name == old_name:
        return []

    if not is_valid_session_name(new_name):
        state.show_error(InvalidSessionNameError(new_name).message)
        return []
    if state.items.find(new_name) is not None:
        state.show_error(f"A session named {new_name!r} already exists")
        return []

    return [RenameSession(old_name, new_name, active=item.active, saved=item.saved)]


def _toggle_preview(state: MenuState, intent: intents.TogglePreview) -> list[Effect]:
    state.show_preview = not state.show_preview
    return []


def _toggle_help(state: MenuState, intent: intents.ToggleHelp) -> list[Effect]:
    state.mode = MenuMode.NORMAL if state.mode is MenuMode.HELP else MenuMode.HELP
    return []


def _show_confirmation(state: MenuState, intent: intents.ShowConfirmation) -> list[Effect]:
    state.mode = MenuMode.CONFIRMATION
    return []


def _hide_confirmation(state: MenuState, intent: intents.HideConfirmation) -> list[Effect]:
    state.mode = MenuMode.NORMAL
    return []


def _dismiss(state: MenuState, intent: intents.Dismiss) -> list[Effect]:
    state.reset_mode()
    return []


def _exit(state: MenuState, intent: intents.Exit) -> list[Effect]:
    state.should_exit = True
    return []


def _nop(state: MenuState, intent: intents.Nop) -> list[Effect]:
    return []


HANDLERS: dict[type, Callable[[MenuState, intents.Intent], list[Effect]]] = {
    intents.MoveSelection: _move_selection,
    intents.AppendToInput: _append_to_input,
    intents.DeleteFromInput: _delete_from_input,
    intents.RemoveLastWord: _remove_last_word,
    intents.Open: _open,
    intents.Save: _save,
    intents.Edit: _edit,
    intents.Delete: _delete,
    intents.Kill: _kill,
    intents.StartRename: _start_rename,
    intents.Rename: _rename,
    intents.TogglePreview: _toggle_preview,
    intents.ToggleHelp: _toggle_help,
    intents.ShowConfirmation: _show_confirmation,
    intents.HideConfirmation: _hide_confirmation,
    intents.Dismiss: _dismiss,
    intents.Exit: _exit,
    intents.Nop: _nop,
}


def reduce(state: MenuState, intent: intents.Intent) -> list[Effect]:
    """Apply an intent to the state and return the effects to perform."""
    return HANDLERS[type(intent)](state, intent)


# =============================================================================
# State updates after a successful effect
# =============================================================================


def apply_effect(state: MenuState, effect: Effect) -> None:
    """Update the state once an effect has been carried out."""
    if isinstance(effect, OpenSession):
        state.should_exit = True
    elif isinstance(effect, SaveSession):
        state.items.update_item(effect.name, saved=True)
    elif isinstance(effect, DeleteSavedSession):
        state.items.update_item(effect.name, saved=False)
    elif isinstance(effect, CloseSession):
        state.items.update_item(effect.name, active=False)
    elif isinstance(effect, RenameSession):
        state.items.rename_item(effect.old_name, effect.new_name)
