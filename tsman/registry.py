"""Saved session storage.

Sessions are stored one per file as ``<storage_dir>/<name>.yaml``. The raw
operations move serialized text; save_session/load_session wrap them with
YAML conversion.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from tsman.exceptions import (
    RegistryReadError,
    RegistryWriteError,
    SessionNotFoundError,
    record_error,
)
from tsman.models import Session, dump_session, load_session
from tsman.security import is_valid_session_name, validate_session_name

logger = logging.getLogger(__name__)

SESSION_FILE_SUFFIX = ".yaml"


class SessionRegistry:
    """Named saved sessions in a directory.

    Every name is validated before it is turned into a path, so a name can
    never point outside the storage directory.
    """

    def __init__(self, storage_dir: Path) -> None:
        self.storage_dir = Path(storage_dir)

    def path_for(self, name: str) -> Path:
        """Return the file a session is (or would be) saved in."""
        validate_session_name(name)
        return self.storage_dir / f"{name}{SESSION_FILE_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def save(self, name: str, text: str) -> None:
        """Write serialized session text, replacing any previous save.

        Raises:
            InvalidSessionNameError: If the name is invalid.
            RegistryWriteError: If the file cannot be written.
        """
        path = self.path_for(name)
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save session %s: %s", name, e)
            record_error(e)
            raise RegistryWriteError(
                f"Failed to save session {name!r}",
                file_path=str(path),
                cause=e,
            ) from e
        logger.debug("Saved session %s to %s", name, path)

    def load(self, name: str) -> str:
        """Read serialized session text.

        Raises:
            InvalidSessionNameError: If the name is invalid.
            SessionNotFoundError: If no session is saved under the name.
            RegistryReadError: If the file exists but cannot be read.
        """
        path = self.path_for(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SessionNotFoundError(name, cause=e) from e
        except OSError as e:
            logger.error("Failed to read session %s: %s", name, e)
            record_error(e)
            raise RegistryReadError(
                f"Failed to read session {name!r}",
                file_path=str(path),
                cause=e,
            ) from e

    def list(self) -> list[str]:
        """List saved session names, sorted.

        A missing storage directory means nothing has been saved yet.
        Files whose stem is not a valid session name are ignored.

        Raises:
            RegistryReadError: If the directory cannot be listed.
        """
        if not self.storage_dir.exists():
            return []
        try:
            paths = list(self.storage_dir.glob(f"*{SESSION_FILE_SUFFIX}"))
        except OSError as e:
            record_error(e)
            raise RegistryReadError(
                "Failed to list saved sessions",
                file_path=str(self.storage_dir),
                cause=e,
            ) from e

        names = []
        for path in paths:
            if is_valid_session_name(path.stem):
                names.append(path.stem)
            else:
                logger.debug("Skipping %s: not a valid session name", path.name)
        return sorted(names)

    def delete(self, name: str) -> None:
        """Remove a saved session.

        Raises:
            InvalidSessionNameError: If the name is invalid.
            SessionNotFoundError: If no session is saved under the name.
            RegistryWriteError: If the file cannot be removed.
        """
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise SessionNotFoundError(name, cause=e) from e
        except OSError as e:
            logger.error("Failed to delete session %s: %s", name, e)
            record_error(e)
            raise RegistryWriteError(
                f"Failed to delete session {name!r}",
                file_path=str(path),
                cause=e,
            ) from e
        logger.info("Deleted saved session %s", name)

    def rename(self, old_name: str, new_name: str) -> None:
        """Move a saved session to a new name.

        The stored document's ``name`` field is rewritten to match, so the
        session restores under its new name.

        Raises:
            InvalidSessionNameError: If either name is invalid.
            SessionNotFoundError: If ``old_name`` is not saved.
            RegistryWriteError: If ``new_name`` is already saved or the
                files cannot be written.
        """
        new_path = self.path_for(new_name)
        if new_path.exists():
            raise RegistryWriteError(
                f"A session named {new_name!r} is already saved",
                file_path=str(new_path),
            )

        session = replace(self.load_session(old_name), name=new_name)
        self.save(new_name, dump_session(session))
        self.delete(old_name)
        logger.info("Renamed saved session %s to %s", old_name, new_name)

    def save_session(self, session: Session) -> Path:
        """Serialize and save a session under its own name."""
        self.save(session.name, dump_session(session))
        return self.path_for(session.name)

    def load_session(self, name: str) -> Session:
        """Load and deserialize a saved session.

        Raises:
            SessionNotFoundError: If nothing is saved under the name.
            SessionFormatError: If the saved document is not a valid session.
        """
        session = load_session(self.load(name))
        if session.name != name:
            logger.warning("Saved session %s is named %r inside the file", name, session.name)
        return session
