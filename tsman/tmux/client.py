"""tmux client for subprocess-based tmux interaction.

Wraps the tmux command line into typed results. Read commands return
newline-separated records whose fields are separated by a single space;
each record kind has one parser that either returns a complete record or
raises ProtocolParseError. Write commands are only observed through their
exit status.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from tsman.exceptions import (
    CommandFailedError,
    NoAttachedSessionError,
    ProtocolParseError,
)

logger = logging.getLogger(__name__)

FIELD_SEP = " "
LINE_SEP = "\n"

SESSION_INFO_FORMAT = FIELD_SEP.join(["#{session_name}", "#{session_path}"])
WINDOW_FORMAT = FIELD_SEP.join(["#{window_index}", "#{window_name}", "#{window_layout}"])
PANE_FORMAT = FIELD_SEP.join(["#{pane_index}", "#{pane_pid}", "#{pane_current_path}"])

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True)
class WindowRecord:
    """One line of ``list-windows`` output."""

    index: str
    name: str
    layout: str


@dataclass(frozen=True)
class PaneRecord:
    """One line of ``list-panes`` output."""

    index: str
    pid: int
    work_dir: str


# =============================================================================
# Parsers
# =============================================================================


def split_records(output: str) -> list[str]:
    """Split command output into record lines, dropping the trailing newline."""
    stripped = output.strip(LINE_SEP)
    if not stripped:
        return []
    return stripped.split(LINE_SEP)


def parse_session_info(output: str) -> tuple[str, str]:
    """Parse ``SESSION_NAME SESSION_PATH``.

    The path is the last field and may itself contain spaces.

    Raises:
        ProtocolParseError: If either field is missing.
    """
    line = output.strip(LINE_SEP)
    name, sep, path = line.partition(FIELD_SEP)
    if not sep or not name or not path or LINE_SEP in line:
        raise ProtocolParseError(
            "Failed to parse session name and path",
            line=line,
            expected_fields=2,
        )
    return name, path


def parse_window_line(line: str) -> WindowRecord:
    """Parse ``INDEX NAME LAYOUT``.

    Layout strings never contain spaces, so the name is everything between
    the first and the last separator.

    Raises:
        ProtocolParseError: If any of the three fields is missing.
    """
    index, sep, rest = line.partition(FIELD_SEP)
    name, name_sep, layout = rest.rpartition(FIELD_SEP)
    if not (sep and name_sep and index and name and layout):
        raise ProtocolParseError(
            "Failed to parse window record",
            line=line,
            expected_fields=3,
        )
    return WindowRecord(index=index, name=name, layout=layout)


def parse_pane_line(line: str) -> PaneRecord:
    """Parse ``INDEX PID WORK_DIR``; the directory may contain spaces.

    Raises:
        ProtocolParseError: If a field is missing or the pid is not an integer.
    """
    parts = line.split(FIELD_SEP, 2)
    if len(parts) != 3 or not all(parts):
        raise ProtocolParseError(
            "Failed to parse pane record",
            line=line,
            expected_fields=3,
        )
    index, pid, work_dir = parts
    try:
        return PaneRecord(index=index, pid=int(pid), work_dir=work_dir)
    except ValueError as e:
        raise ProtocolParseError(
            "Pane pid is not an integer",
            line=line,
            expected_fields=3,
            cause=e,
        ) from e


def exact_target(session_name: str) -> str:
    """Session target that only matches ``session_name`` exactly."""
    return f"={session_name}"


# =============================================================================
# Client
# =============================================================================


class TmuxClient:
    """Client for interacting with tmux via subprocess commands.

    Provides methods for:
    - Listing sessions, windows and panes
    - Reading the attached session's name and path
    - Attaching, switching, renaming and killing sessions
    """

    def __init__(
        self,
        socket_path: str | None = None,
        runner: Runner = subprocess.run,
    ) -> None:
        """Initialize TmuxClient.

        Args:
            socket_path: Optional tmux socket path. If None, uses default socket.
            runner: Callable with the signature of subprocess.run.
        """
        self._socket_path = socket_path
        self._runner = runner

    @property
    def socket_path(self) -> str | None:
        return self._socket_path

    def command(self, *args: str) -> list[str]:
        """Build the argv for a tmux command."""
        cmd = ["tmux"]
        if self._socket_path:
            cmd.extend(["-S", self._socket_path])
        cmd.extend(args)
        return cmd

    def command_line(self, *args: str) -> str:
        """Build a shell-quoted tmux command line."""
        return shlex.join(self.command(*args))

    def run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Execute a tmux command and capture its output.

        Args:
            *args: Command arguments (e.g., "list-windows", "-t", "work").
            check: Raise on a non-zero exit status.

        Returns:
            The completed process with text stdout/stderr.

        Raises:
            CommandFailedError: If tmux cannot be started, or exits non-zero
                while ``check`` is set.
        """
        cmd = self.command(*args)
        logger.debug("Running %s", shlex.join(cmd))
        try:
            result = self._runner(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            logger.error("tmux subprocess error: %s", e)
            raise CommandFailedError(
                "Failed to run tmux",
                command=shlex.join(cmd),
                cause=e,
            ) from e

        if check and result.returncode != 0:
            logger.warning("tmux command failed: %s: %s", shlex.join(cmd), result.stderr)
            raise CommandFailedError(
                f"tmux {args[0]} failed",
                command=shlex.join(cmd),
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result

    def execute(self, *args: str) -> None:
        """Execute a tmux command attached to the controlling terminal.

        Used for attach-session, which takes over the terminal until the
        user detaches.

        Raises:
            CommandFailedError: If tmux cannot be started or exits non-zero.
        """
        cmd = self.command(*args)
        logger.debug("Executing %s", shlex.join(cmd))
        try:
            result = self._runner(cmd, check=False)
        except OSError as e:
            raise CommandFailedError(
                "Failed to run tmux",
                command=shlex.join(cmd),
                cause=e,
            ) from e
        if result.returncode != 0:
            raise CommandFailedError(
                f"tmux {args[0]} failed",
                command=shlex.join(cmd),
                returncode=result.returncode,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_active_sessions(self) -> list[str]:
        """List the names of all running sessions.

        Returns:
            Session names, or an empty list when no tmux server is running.
        """
        if self.run("has-session", check=False).returncode != 0:
            logger.debug("tmux server not running")
            return []

        output = self.run("list-sessions", "-F", "#{session_name}").stdout
        return split_records(output)

    def session_exists(self, name: str) -> bool:
        """Check if a session with exactly this name is running."""
        return name in self.list_active_sessions()

    def current_session_info(self) -> tuple[str, str]:
        """Get the attached session's name and path.

        Raises:
            NoAttachedSessionError: If tmux reports no current session.
            ProtocolParseError: If the output is not ``NAME PATH``.
        """
        result = self.run("display-message", "-p", SESSION_INFO_FORMAT, check=False)
        if result.returncode != 0 or not result.stdout.strip():
            raise NoAttachedSessionError(
                context={"stderr": result.stderr.strip()} if result.stderr.strip() else None,
            )
        return parse_session_info(result.stdout)

    def session_path(self, session_name: str) -> str:
        """Get a session's default working directory.

        Raises:
            CommandFailedError: If the session does not exist.
            ProtocolParseError: If tmux prints nothing.
        """
        # -t names a pane here; a bare =name matches nothing and prints a blank line
        output = self.run(
            "display-message", "-p", "-t", f"{exact_target(session_name)}:", "#{session_path}"
        ).stdout
        path = output.strip(LINE_SEP)
        if not path:
            raise ProtocolParseError("Empty session path", line=output, expected_fields=1)
        return path

    def list_windows(self, session_name: str) -> list[WindowRecord]:
        """List a session's windows in index order.

        Raises:
            CommandFailedError: If tmux fails.
            ProtocolParseError: If any line is malformed or there are no windows.
        """
        output = self.run(
            "list-windows", "-t", exact_target(session_name), "-F", WINDOW_FORMAT
        ).stdout
        lines = split_records(output)
        if not lines:
            raise ProtocolParseError(f"No windows listed for session {session_name!r}")
        return [parse_window_line(line) for line in lines]

    def list_panes(self, window_target: str) -> list[PaneRecord]:
        """List a window's panes in index order.

        Args:
            window_target: ``SESSION:WINDOW_INDEX``.

        Raises:
            CommandFailedError: If tmux fails.
            ProtocolParseError: If any line is malformed or there are no panes.
        """
        output = self.run("list-panes", "-t", window_target, "-F", PANE_FORMAT).stdout
        lines = split_records(output)
        if not lines:
            raise ProtocolParseError(f"No panes listed for window {window_target!r}")
        return [parse_pane_line(line) for line in lines]

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def attach_or_switch(self, session_name: str, *, inside_tmux: bool) -> None:
        """Attach to a session, or switch the current client to it.

        Args:
            session_name: The session to show.
            inside_tmux: True when running inside a tmux client; attaching
                from there would nest clients.
        """
        verb = "switch-client" if inside_tmux else "attach-session"
        logger.info("%s to session %s", verb, session_name)
        self.execute(verb, "-t", exact_target(session_name))

    def close(self, session_name: str) -> None:
        """Kill a session."""
        logger.info("Killing session %s", session_name)
        self.run("kill-session", "-t", exact_target(session_name))

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename a running session."""
        logger.info("Renaming session %s to %s", old_name, new_name)
        self.run("rename-session", "-t", exact_target(old_name), new_name)
