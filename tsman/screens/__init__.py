"""Screen components for the TUI.

- MenuScreen: the session list, search line and preview
- modals: popups drawn over the menu for help, delete confirmation,
  renaming and errors
"""

from tsman.screens.menu import MenuScreen

__all__ = ["MenuScreen"]
