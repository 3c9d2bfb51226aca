"""Input validation for tsman.

This module provides centralized validation for:
- Session names, which double as tmux targets and saved file names
- Editor commands, to prevent arbitrary command execution via $EDITOR

Every name accepted from the command line or the menu passes through
validate_session_name() before any storage or tmux mutation.
"""

from __future__ import annotations

import logging
import re
import shlex
from pathlib import PurePath

from tsman.exceptions import EditorError, InvalidSessionNameError

logger = logging.getLogger(__name__)

SESSION_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,30}$")

# Allowlist of known-safe editor executables
ALLOWED_EDITOR_COMMANDS: frozenset[str] = frozenset({
    # Vim family
    "vim",
    "nvim",
    "vi",
    "gvim",
    "mvim",
    # Emacs family
    "emacs",
    "emacsclient",
    # Other terminal editors
    "nano",
    "pico",
    "micro",
    "helix",
    "hx",
    "kak",
    "ed",
    # GUI editors (need a --wait style flag to block)
    "code",
    "cursor",
    "subl",
    "zed",
    "mate",
    "gedit",
    "kate",
})

_DANGEROUS_CHARS = frozenset({";", "&", "|", "$", "`", "(", ")", "{", "}", "<", ">", "\n", "\r"})


def validate_session_name(name: str) -> str:
    """Validate a session name.

    A name is valid iff it is 1-30 characters of ``[A-Za-z0-9_-]``.

    Args:
        name: The candidate session name.

    Returns:
        The name, unchanged.

    Raises:
        InvalidSessionNameError: If the name does not match the rule.

    Examples:
        >>> validate_session_name("valid_name-123")
        'valid_name-123'

        >>> validate_session_name("invalid name")
        Raises InvalidSessionNameError
    """
    if not SESSION_NAME_PATTERN.fullmatch(name):
        raise InvalidSessionNameError(name)
    return name


def is_valid_session_name(name: str) -> bool:
    """Boolean form of validate_session_name()."""
    return SESSION_NAME_PATTERN.fullmatch(name) is not None


def validate_editor_command(command: str) -> list[str]:
    """Validate an editor command line against the allowlist.

    The executable may be given as a bare name or a path; its base name
    must be in ALLOWED_EDITOR_COMMANDS. Plain arguments such as ``--wait``
    are kept.

    Args:
        command: The editor command line (e.g. "vim", "code --wait").

    Returns:
        The command split into argv form.

    Raises:
        EditorError: If the command is empty, contains shell
            metacharacters, or names an executable outside the allowlist.

    Examples:
        >>> validate_editor_command("/usr/bin/nvim")
        ['/usr/bin/nvim']

        >>> validate_editor_command("rm -rf /")
        Raises EditorError
    """
    command = command.strip()

    if not command:
        raise EditorError("Editor command cannot be empty")

    if any(c in command for c in _DANGEROUS_CHARS):
        logger.warning("Editor command contains dangerous characters: %s", command)
        raise EditorError(
            "Editor command contains shell metacharacters",
            command=command,
        )

    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise EditorError("Editor command is not valid shell syntax", command=command, cause=e) from e

    executable = PurePath(argv[0]).name.lower()
    if executable not in ALLOWED_EDITOR_COMMANDS:
        logger.warning("Editor command not in allowlist: %s", command)
        raise EditorError(
            f"Editor '{executable}' is not in the allowed editors list",
            command=command,
        )

    return argv
