"""Core dataclasses for captured tmux sessions.

A Session owns its Windows and Panes; all three are plain values created
fresh by capture or by loading a saved document. Models are serialized as
YAML and loaded back into dataclasses using dacite.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

import dacite
import yaml

from tsman.exceptions import SessionFormatError

# Placeholder shown in previews for a pane running only its shell
IDLE_PANE_MARKER = "_"


# =============================================================================
# Session Models
# =============================================================================


@dataclass
class Pane:
    """A single pane inside a window."""

    index: str  # tmux pane index, may not start at 0
    current_command: str | None  # Foreground command line, None at a prompt
    work_dir: str  # Absolute path

    def preview(self, show_index: bool) -> str:
        """Render the pane for the session preview tree."""
        command = self.current_command if self.current_command is not None else IDLE_PANE_MARKER
        if show_index:
            return f"({self.index}) {command}"
        return command


@dataclass
class Window:
    """A tmux window and its panes, in creation order."""

    index: str
    name: str
    layout: str  # Opaque tmux layout string, replayed verbatim
    panes: list[Pane]

    def __post_init__(self) -> None:
        if not self.panes:
            raise ValueError(f"Window {self.name!r} must have at least one pane")
        indexes = [pane.index for pane in self.panes]
        if len(set(indexes)) != len(indexes):
            raise ValueError(f"Window {self.name!r} has duplicate pane indexes: {indexes}")

    @property
    def is_split(self) -> bool:
        """True when the window holds more than one pane."""
        return len(self.panes) > 1


@dataclass
class Session:
    """A captured tmux session."""

    name: str  # Also the key the session is saved under
    work_dir: str  # Default directory for new windows and panes
    windows: list[Window]

    def __post_init__(self) -> None:
        if not self.windows:
            raise ValueError(f"Session {self.name!r} must have at least one window")
        indexes = [window.index for window in self.windows]
        if len(set(indexes)) != len(indexes):
            raise ValueError(f"Session {self.name!r} has duplicate window indexes: {indexes}")

    def preview(self) -> str:
        """Render a human-readable tree of the session.

        Example::

            work:
             ╠══ editor: vim
             ╚══╦═ build:
                ║  ╠═ (0) make
                ║  ╚═ (1) _
        """
        lines = [f"{self.name}:"]
        last = len(self.windows) - 1

        for position, window in enumerate(self.windows):
            is_last = position == last
            branch = "╚══" if is_last else "╠══"

            if not window.is_split:
                lines.append(f" {branch} {window.name}: {window.panes[0].preview(False)}")
                continue

            lines.append(f" {branch}╦═ {window.name}:")
            rail = " " if is_last else "║"
            last_pane = len(window.panes) - 1
            for pane_position, pane in enumerate(window.panes):
                pane_branch = "╚═" if pane_position == last_pane else "╠═"
                lines.append(f" {rail}  ║  {pane_branch} {pane.preview(True)}")

        return "\n".join(lines)


# =============================================================================
# Serialization
# =============================================================================


def session_to_dict(session: Session) -> dict:
    """Convert a session to plain dicts and lists."""
    return asdict(session)


def session_from_dict(data: dict) -> Session:
    """Load a session from a dictionary.

    Scalar fields are cast to ``str`` so hand-edited documents with bare
    numeric indexes (``index: 0``) still load.

    Raises:
        SessionFormatError: If the data does not describe a valid session.
    """
    if not isinstance(data, dict):
        raise SessionFormatError(f"Expected a mapping, got {type(data).__name__}")
    try:
        return dacite.from_dict(
            data_class=Session,
            data=data,
            config=dacite.Config(cast=[str], strict=True),
        )
    except (dacite.DaciteError, ValueError) as e:
        raise SessionFormatError(
            f"Invalid session document: {e}",
            session_name=str(data.get("name", "")) or None,
            cause=e,
        ) from e


def dump_session(session: Session) -> str:
    """Serialize a session to a YAML document."""
    return yaml.safe_dump(
        session_to_dict(session),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def load_session(text: str) -> Session:
    """Deserialize a session from a YAML document.

    Raises:
        SessionFormatError: If the text is not valid YAML or not a session.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SessionFormatError(f"Invalid YAML: {e}", cause=e) from e
    return session_from_dict(data)
