"""Recreate a live tmux session from a Session value.

The session is built under a temporary name and renamed to its real name as
the final step, so an existing session with the same name is only touched by
that one command. All commands are written to a script and run with a single
``sh`` invocation.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path

from tsman.config import DEFAULT_TEMP_SESSION_PREFIX
from tsman.exceptions import CommandFailedError, RestoreFailedError, record_error
from tsman.models import Session, Window
from tsman.tmux.client import Runner, TmuxClient

logger = logging.getLogger(__name__)

SCRIPT_HEADER = "set -e"


def temp_session_name(pid: int | None = None, prefix: str = DEFAULT_TEMP_SESSION_PREFIX) -> str:
    """Name of the scratch session used while restoring."""
    return f"{prefix}-{pid if pid is not None else os.getpid()}"


def _window_commands(
    client: TmuxClient, target: str, session: Session, window: Window
) -> list[str]:
    commands = [
        client.command_line("split-window", "-d", "-t", target, "-c", session.work_dir)
        for _ in window.panes[1:]
    ]
    commands.append(client.command_line("select-layout", "-t", target, window.layout))

    for pane in window.panes:
        pane_target = f"{target}.{pane.index}"
        if pane.work_dir != session.work_dir:
            cd = f"cd {shlex.quote(pane.work_dir)}; clear"
            commands.append(client.command_line("send-keys", "-t", pane_target, cd, "C-m"))
        if pane.current_command is not None:
            commands.append(
                client.command_line("send-keys", "-t", pane_target, pane.current_command, "C-m")
            )
    return commands


def build_restore_commands(
    session: Session,
    temp_name: str,
    client: TmuxClient | None = None,
) -> list[str]:
    """Generate the shell commands that rebuild ``session``.

    Args:
        session: The session to rebuild.
        temp_name: Scratch session name; renamed to ``session.name`` last.
        client: Supplies the tmux invocation (socket flags). Defaults to
            the plain ``tmux`` command.

    Returns:
        One shell-quoted command per element, in execution order.
    """
    client = client or TmuxClient()
    first, *rest = session.windows

    commands = [
        client.command_line(
            "new-session", "-d", "-s", temp_name, "-n", first.name, "-c", session.work_dir
        )
    ]
    # new-session puts the first window at base-index, not its captured index.
    # A move onto the index it already has fails and is ignored.
    commands.append(
        client.command_line(
            "move-window", "-d", "-s", f"{temp_name}:^", "-t", f"{temp_name}:{first.index}"
        )
        + " 2>/dev/null || true"
    )
    commands.extend(_window_commands(client, f"{temp_name}:^", session, first))

    for window in rest:
        commands.append(
            client.command_line(
                "new-window",
                "-d",
                "-t",
                f"{temp_name}:{window.index}",
                "-n",
                window.name,
                "-c",
                session.work_dir,
            )
        )
        commands.extend(_window_commands(client, f"{temp_name}:{window.index}", session, window))

    commands.append(client.command_line("rename-session", "-t", temp_name, session.name))
    return commands


def write_restore_script(commands: list[str], directory: Path | None = None) -> Path:
    """Write commands to a scratch shell script and return its path."""
    with tempfile.NamedTemporaryFile(
        "w",
        prefix="tsman-restore-",
        suffix=".sh",
        dir=directory,
        delete=False,
        encoding="utf-8",
    ) as f:
        f.write("\n".join([SCRIPT_HEADER, *commands]) + "\n")
    return Path(f.name)


def restore_session(
    session: Session,
    client: TmuxClient,
    *,
    inside_tmux: bool,
    pid: int | None = None,
    temp_prefix: str = DEFAULT_TEMP_SESSION_PREFIX,
    runner: Runner = subprocess.run,
) -> None:
    """Rebuild ``session`` in tmux and attach or switch to it.

    Args:
        session: The session to rebuild.
        client: tmux client used for cleanup and the final attach.
        inside_tmux: Switch the current client instead of attaching.
        pid: Pid used in the temporary session name. Defaults to this process.
        temp_prefix: Prefix of the temporary session name.
        runner: Runs the generated script.

    Raises:
        RestoreFailedError: If the script fails. The temporary session is
            killed and nothing is attached.
        CommandFailedError: If the final attach or switch fails.
    """
    temp_name = temp_session_name(pid, temp_prefix)
    commands = build_restore_commands(session, temp_name, client)
    script = write_restore_script(commands)
    logger.info("Restoring session %s via %s (%d commands)", session.name, script, len(commands))

    try:
        try:
            result = runner(["sh", str(script)], capture_output=True, text=True, check=False)
        except OSError as e:
            raise RestoreFailedError(
                "Failed to run restore script",
                session_name=session.name,
                cause=e,
            ) from e
    finally:
        script.unlink(missing_ok=True)

    if result.returncode != 0:
        error = RestoreFailedError(
            session_name=session.name,
            returncode=result.returncode,
            context={"stderr": result.stderr.strip()[:200]} if result.stderr else None,
        )
        logger.error("Restore of %s failed: %s", session.name, error)
        record_error(error)
        _kill_temp_session(client, temp_name)
        raise error

    client.attach_or_switch(session.name, inside_tmux=inside_tmux)


def _kill_temp_session(client: TmuxClient, temp_name: str) -> None:
    try:
        result = client.run("kill-session", "-t", f"={temp_name}", check=False)
    except CommandFailedError as e:
        logger.warning("Could not remove temporary session %s: %s", temp_name, e)
        return
    if result.returncode == 0:
        logger.info("Removed temporary session %s", temp_name)
    else:
        logger.warning("Could not remove temporary session %s: %s", temp_name, result.stderr.strip())
