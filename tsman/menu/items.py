"""Menu items and the filtered, selectable view over them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

UNSAVED_PREFIX = "* "
ACTIVE_SUFFIX = " (active)"


@dataclass
class MenuItem:
    """A session listed in the menu.

    Attributes:
        name: Session name.
        saved: A saved copy exists in the registry.
        active: A live tmux session with this name is running.
    """

    name: str
    saved: bool
    active: bool

    @property
    def is_orphaned(self) -> bool:
        """True once the item is neither saved nor active."""
        return not (self.saved or self.active)

    def display(self) -> str:
        prefix = "" if self.saved else UNSAVED_PREFIX
        suffix = ACTIVE_SUFFIX if self.active else ""
        return f"{prefix}{self.name}{suffix}"


def build_menu_items(saved: Iterable[str], active: Iterable[str]) -> list[MenuItem]:
    """Build one item per name in the union of saved and active sessions."""
    saved_names = set(saved)
    active_names = set(active)
    return [
        MenuItem(name=name, saved=name in saved_names, active=name in active_names)
        for name in sorted(saved_names | active_names)
    ]


@dataclass
class MenuItems:
    """All items, the filter input, and the selection in the filtered view.

    ``filtered`` is recomputed whenever the input or the item set changes,
    and ``selected`` is always a valid index into it, or None when it is
    empty.
    """

    items: list[MenuItem] = field(default_factory=list)
    input: str = ""
    filtered: list[MenuItem] = field(default_factory=list)
    selected: int | None = None

    def __post_init__(self) -> None:
        self.update_filter_and_reset()

    # -------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------

    def matches(self, item: MenuItem) -> bool:
        return self.input.lower() in item.name.lower()

    def update_filter(self) -> None:
        """Recompute the filtered view and clamp the selection into it."""
        self.filtered = [item for item in self.items if self.matches(item)]
        if not self.filtered:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = min(self.selected, len(self.filtered) - 1)

    def update_filter_and_reset(self) -> None:
        """Recompute the filtered view and select its first row."""
        self.update_filter()
        self.selected = 0 if self.filtered else None

    def append_input(self, char: str) -> None:
        self.input += char
        self.update_filter_and_reset()

    def delete_input(self) -> None:
        self.input = self.input[:-1]
        self.update_filter_and_reset()

    def remove_last_word(self) -> None:
        """Drop the last word of the input, trailing spaces included."""
        if not self.input:
            return
        self.input = remove_last_word(self.input)
        self.update_filter_and_reset()

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def move_selection(self, delta: int) -> None:
        """Move the selection, stopping at the first and last rows."""
        if self.selected is None:
            return
        self.selected = max(0, min(self.selected + delta, len(self.filtered) - 1))

    def selected_item(self) -> MenuItem | None:
        if self.selected is None:
            return None
        return self.filtered[self.selected]

    # -------------------------------------------------------------------------
    # Item set
    # -------------------------------------------------------------------------

    def find(self, name: str) -> MenuItem | None:
        return next((item for item in self.items if item.name == name), None)

    def update_item(
        self,
        name: str,
        *,
        saved: bool | None = None,
        active: bool | None = None,
    ) -> MenuItem | None:
        """Set an item's flags; an item left with neither flag is removed.

        Returns:
            The item, or None if there is no item with that name.
        """
        item = self.find(name)
        if item is None:
            return None
        if saved is not None:
            item.saved = saved
        if active is not None:
            item.active = active
        if item.is_orphaned:
            self.items.remove(item)
        self.update_filter()
        return item

    def rename_item(self, old_name: str, new_name: str) -> MenuItem | None:
        item = self.find(old_name)
        if item is None:
            return None
        item.name = new_name
        self.update_filter()
        return item


def remove_last_word(text: str) -> str:
    """Truncate ``text`` at its last space, ignoring trailing spaces.

    Examples:
        >>> remove_last_word("foo bar")
        'foo'
        >>> remove_last_word("foo bar  ")
        'foo'
        >>> remove_last_word("foo")
        ''
    """
    trimmed = text.rstrip()
    last_space = trimmed.rfind(" ")
    return trimmed[:last_space] if last_space != -1 else ""
