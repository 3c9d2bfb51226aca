"""Editor resolution for editing saved sessions.

The editor comes from the config file, then $VISUAL, then $EDITOR, and
falls back to ``vi``. Whatever is chosen is validated against
ALLOWED_EDITOR_COMMANDS in security.py before it runs.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path

from tsman.config import TsmanConfig
from tsman.exceptions import EditorError
from tsman.security import validate_editor_command

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"
EDITOR_ENV_VARS = ("VISUAL", "EDITOR")


def resolve_editor(
    config: TsmanConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Pick the editor command and return it in argv form.

    Raises:
        EditorError: If the chosen command is not an allowed editor.
    """
    environ = os.environ if environ is None else environ

    command = config.editor if config is not None and config.editor else None
    if command is None:
        command = next((environ[var] for var in EDITOR_ENV_VARS if environ.get(var)), DEFAULT_EDITOR)

    return validate_editor_command(command)


def open_in_editor(
    path: Path,
    editor: list[str],
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    """Open a file in the editor and wait for it to exit.

    Raises:
        EditorError: If the editor cannot be started or exits non-zero.
    """
    cmd = [*editor, str(path)]
    logger.info("Opening %s with %s", path, editor[0])
    try:
        result = runner(cmd, check=False)
    except OSError as e:
        raise EditorError(
            f"Failed to start editor '{editor[0]}'",
            command=shlex.join(cmd),
            cause=e,
        ) from e

    if result.returncode != 0:
        raise EditorError(
            f"Editor exited with status {result.returncode}",
            command=shlex.join(cmd),
        )
