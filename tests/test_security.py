"""Tests for security utilities (name and editor validation)."""

import pytest

from tsman.exceptions import EditorError, InvalidSessionNameError
from tsman.security import (
    ALLOWED_EDITOR_COMMANDS,
    is_valid_session_name,
    validate_editor_command,
    validate_session_name,
)


class TestValidateSessionName:
    """Test the session name rule."""

    @pytest.mark.parametrize("name", ["abc-1_Z", "a", "A" * 30, "work", "my_session-2"])
    def test_valid_names(self, name: str) -> None:
        assert validate_session_name(name) == name
        assert is_valid_session_name(name)

    @pytest.mark.parametrize("name", ["", "a b", "a" * 31, "a/b", "../etc", "tab\t", "naïve", "a.b"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(InvalidSessionNameError) as exc_info:
            validate_session_name(name)
        assert exc_info.value.name == name
        assert not is_valid_session_name(name)

    def test_trailing_newline_rejected(self) -> None:
        assert not is_valid_session_name("abc\n")

    def test_error_message(self) -> None:
        with pytest.raises(InvalidSessionNameError) as exc_info:
            validate_session_name("a b")
        assert "1-30 characters" in exc_info.value.message


class TestValidateEditorCommand:
    """Test editor allowlist validation."""

    def test_plain_editor(self) -> None:
        assert validate_editor_command("vim") == ["vim"]

    def test_editor_with_arguments(self) -> None:
        assert validate_editor_command("code --wait") == ["code", "--wait"]

    def test_editor_by_path(self) -> None:
        assert validate_editor_command("/usr/bin/nvim") == ["/usr/bin/nvim"]

    def test_surrounding_whitespace_ignored(self) -> None:
        assert validate_editor_command("  nano  ") == ["nano"]

    def test_empty_command(self) -> None:
        with pytest.raises(EditorError, match="empty"):
            validate_editor_command("   ")

    def test_unknown_executable(self) -> None:
        with pytest.raises(EditorError, match="not in the allowed"):
            validate_editor_command("rm -rf /")

    @pytest.mark.parametrize("command", ["vim; rm -rf /", "vim && ls", "vim $(id)", "vim `id`", "vim | cat"])
    def test_shell_metacharacters(self, command: str) -> None:
        with pytest.raises(EditorError, match="metacharacters"):
            validate_editor_command(command)

    def test_unbalanced_quotes(self) -> None:
        with pytest.raises(EditorError):
            validate_editor_command("vim 'unterminated")

    def test_allowlist_is_lowercase(self) -> None:
        for name in ALLOWED_EDITOR_COMMANDS:
            assert name == name.lower()
