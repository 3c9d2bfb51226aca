"""Modal dialogs."""

from .delete_confirm import DeleteConfirmModal
from .error_modal import ErrorModal
from .help_modal import HelpModal
from .popup import MenuPopup, chord_from_event
from .rename_session import RenameSessionModal

__all__ = [
    "DeleteConfirmModal",
    "ErrorModal",
    "HelpModal",
    "MenuPopup",
    "RenameSessionModal",
    "chord_from_event",
]
