"""Foreground command detection for pane shells.

Each tmux pane runs a shell; whatever the user started in that pane is the
shell's first child. Children are listed with ``ps`` filtered by parent pid.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess

from tsman.exceptions import CommandFailedError, ProtocolParseError
from tsman.tmux.client import LINE_SEP, Runner, split_records

logger = logging.getLogger(__name__)


def parse_process_line(line: str) -> tuple[int, str]:
    """Parse one ``PID ARGS`` line of ``ps -o pid=,args=`` output.

    ``ps`` right-aligns the pid column, so leading padding is dropped.

    Raises:
        ProtocolParseError: If the line has no command or a non-integer pid.
    """
    parts = line.strip().split(maxsplit=1)
    if len(parts) != 2:
        raise ProtocolParseError(
            "Failed to parse process record",
            line=line,
            expected_fields=2,
        )
    pid, args = parts
    try:
        return int(pid), args
    except ValueError as e:
        raise ProtocolParseError(
            "Process pid is not an integer",
            line=line,
            expected_fields=2,
            cause=e,
        ) from e


class ProcessInspector:
    """Lists child processes of pane shells.

    Attributes:
        self_pid: Pid of the inspecting process. A pane whose foreground
            child is this process reports no command.
    """

    def __init__(self, runner: Runner = subprocess.run, self_pid: int | None = None) -> None:
        self._runner = runner
        self.self_pid = self_pid if self_pid is not None else os.getpid()

    def children_of(self, pid: int) -> list[tuple[int, str]]:
        """List the immediate children of a process.

        Returns:
            ``(child_pid, command_line)`` pairs; empty when the shell is idle.

        Raises:
            CommandFailedError: If ``ps`` cannot be started.
            ProtocolParseError: If a line is not ``PID ARGS``.
        """
        cmd = ["ps", "-o", "pid=,args=", "--ppid", str(pid)]
        try:
            result = self._runner(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise CommandFailedError(
                "Failed to run ps",
                command=shlex.join(cmd),
                cause=e,
            ) from e

        # ps exits 1 when nothing matched, which is the idle-shell case
        if result.returncode not in (0, 1):
            raise CommandFailedError(
                "ps failed",
                command=shlex.join(cmd),
                returncode=result.returncode,
                stderr=result.stderr,
            )

        lines = [line for line in split_records(result.stdout) if line.strip()]
        return [parse_process_line(line) for line in lines]

    def foreground_of(self, pid: int) -> tuple[int, str] | None:
        """Return the first child of a process, or None when it has none."""
        children = self.children_of(pid)
        return children[0] if children else None

    def current_command(self, pid: int) -> str | None:
        """Return the command running in the pane whose shell is ``pid``.

        None when the shell is at a prompt, or when the foreground process
        is this inspector itself.
        """
        foreground = self.foreground_of(pid)
        if foreground is None:
            return None

        child_pid, command = foreground
        if child_pid == self.self_pid:
            logger.debug("Ignoring own process %d in pane shell %d", child_pid, pid)
            return None
        return command.rstrip(LINE_SEP)
