"""Tests for saved session storage."""

from pathlib import Path
from unittest.mock import patch

import pytest

from tsman.exceptions import (
    InvalidSessionNameError,
    RegistryReadError,
    RegistryWriteError,
    SessionFormatError,
    SessionNotFoundError,
)
from tsman.models import Pane, Session, Window, dump_session
from tsman.registry import SessionRegistry


def make_session(name: str = "work") -> Session:
    return Session(
        name=name,
        work_dir="/home/user",
        windows=[
            Window(
                index="0",
                name="main",
                layout="b25d,80x24,0,0,0",
                panes=[Pane(index="0", current_command="vim", work_dir="/home/user")],
            )
        ],
    )


@pytest.fixture
def registry(tmp_path: Path) -> SessionRegistry:
    return SessionRegistry(tmp_path / "sessions")


class TestRawOperations:
    """Test save/load/list/delete on serialized text."""

    def test_save_creates_directory(self, registry: SessionRegistry) -> None:
        """Saving into a missing directory creates it."""
        registry.save("work", "text")
        assert registry.storage_dir.is_dir()
        assert (registry.storage_dir / "work.yaml").read_text(encoding="utf-8") == "text"

    def test_save_overwrites(self, registry: SessionRegistry) -> None:
        registry.save("work", "first")
        registry.save("work", "second")
        assert registry.load("work") == "second"

    def test_load_missing(self, registry: SessionRegistry) -> None:
        with pytest.raises(SessionNotFoundError) as exc_info:
            registry.load("work")
        assert exc_info.value.context["session"] == "work"

    def test_list_missing_directory(self, registry: SessionRegistry) -> None:
        """A storage directory that was never created lists as empty."""
        assert registry.list() == []

    def test_list_sorted(self, registry: SessionRegistry) -> None:
        for name in ["zeta", "alpha", "mid"]:
            registry.save(name, "x")
        assert registry.list() == ["alpha", "mid", "zeta"]

    def test_list_ignores_other_files(self, registry: SessionRegistry) -> None:
        registry.save("good", "x")
        (registry.storage_dir / "notes.txt").write_text("x")
        (registry.storage_dir / "bad name.yaml").write_text("x")
        assert registry.list() == ["good"]

    def test_delete(self, registry: SessionRegistry) -> None:
        registry.save("work", "x")
        registry.delete("work")
        assert not registry.exists("work")
        assert registry.list() == []

    def test_delete_missing(self, registry: SessionRegistry) -> None:
        with pytest.raises(SessionNotFoundError):
            registry.delete("work")

    @pytest.mark.parametrize("name", ["../escape", "a/b", "", "x" * 31])
    def test_invalid_names_never_touch_disk(self, registry: SessionRegistry, name: str) -> None:
        """Names are validated before any path is built."""
        with pytest.raises(InvalidSessionNameError):
            registry.save(name, "x")
        assert not registry.storage_dir.exists()

    def test_write_failure(self, registry: SessionRegistry) -> None:
        with patch.object(Path, "write_text", side_effect=PermissionError("denied")):
            with pytest.raises(RegistryWriteError) as exc_info:
                registry.save("work", "x")
        assert isinstance(exc_info.value.cause, PermissionError)

    def test_read_failure(self, registry: SessionRegistry) -> None:
        registry.save("work", "x")
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(RegistryReadError):
                registry.load("work")


class TestSessionOperations:
    """Test save_session/load_session/rename."""

    def test_round_trip(self, registry: SessionRegistry) -> None:
        path = registry.save_session(make_session())
        assert path == registry.storage_dir / "work.yaml"
        assert registry.load_session("work") == make_session()

    def test_load_invalid_document(self, registry: SessionRegistry) -> None:
        registry.save("work", "name: work\n")
        with pytest.raises(SessionFormatError):
            registry.load_session("work")

    def test_load_name_mismatch_keeps_document(self, registry: SessionRegistry) -> None:
        """A file whose inner name differs still loads as written."""
        registry.save("alias", dump_session(make_session("work")))
        assert registry.load_session("alias").name == "work"

    def test_rename_moves_file_and_rewrites_name(self, registry: SessionRegistry) -> None:
        registry.save_session(make_session("old"))
        registry.rename("old", "new")
        assert registry.list() == ["new"]
        assert registry.load_session("new") == make_session("new")

    def test_rename_missing(self, registry: SessionRegistry) -> None:
        with pytest.raises(SessionNotFoundError):
            registry.rename("old", "new")

    def test_rename_onto_existing(self, registry: SessionRegistry) -> None:
        registry.save_session(make_session("old"))
        registry.save_session(make_session("new"))
        with pytest.raises(RegistryWriteError, match="already saved"):
            registry.rename("old", "new")
        assert registry.list() == ["new", "old"]

    def test_rename_invalid_target(self, registry: SessionRegistry) -> None:
        registry.save_session(make_session("old"))
        with pytest.raises(InvalidSessionNameError):
            registry.rename("old", "bad name")
        assert registry.list() == ["old"]
