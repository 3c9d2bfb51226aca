"""Interactive menu: items, modes, key mapping and the controller."""

from tsman.menu.items import MenuItem, MenuItems, build_menu_items
from tsman.menu.state import MenuMode, MenuState
from tsman.menu import intents
from tsman.menu.keymap import KeyChord, map_key
from tsman.menu.effects import apply_effect, reduce
from tsman.menu.controller import MenuController

__all__ = [
    "KeyChord",
    "MenuController",
    "MenuItem",
    "MenuItems",
    "MenuMode",
    "MenuState",
    "apply_effect",
    "build_menu_items",
    "intents",
    "map_key",
    "reduce",
]
