"""Tests for editor resolution and launching."""

import subprocess
from pathlib import Path

import pytest

from tsman.config import TsmanConfig
from tsman.editors import DEFAULT_EDITOR, open_in_editor, resolve_editor
from tsman.exceptions import EditorError


class TestResolveEditor:
    """Test resolve_editor() precedence."""

    def test_config_wins(self):
        """The config file editor beats the environment."""
        config = TsmanConfig(editor="nvim")
        assert resolve_editor(config, {"VISUAL": "emacs", "EDITOR": "nano"}) == ["nvim"]

    def test_visual_before_editor(self):
        assert resolve_editor(None, {"VISUAL": "emacs", "EDITOR": "nano"}) == ["emacs"]

    def test_editor_variable(self):
        assert resolve_editor(None, {"EDITOR": "code --wait"}) == ["code", "--wait"]

    def test_empty_variable_skipped(self):
        assert resolve_editor(None, {"VISUAL": "", "EDITOR": "nano"}) == ["nano"]

    def test_default(self):
        """Falls back to vi when nothing is configured."""
        assert resolve_editor(TsmanConfig(), {}) == [DEFAULT_EDITOR]

    def test_disallowed_editor(self):
        with pytest.raises(EditorError):
            resolve_editor(None, {"EDITOR": "sh -c ls"})


class TestOpenInEditor:
    """Test open_in_editor()."""

    def test_runs_editor_with_path(self, tmp_path: Path):
        calls = []

        def runner(args, **kwargs):
            calls.append(args)
            return subprocess.CompletedProcess(args, 0)

        path = tmp_path / "work.yaml"
        open_in_editor(path, ["code", "--wait"], runner=runner)
        assert calls == [["code", "--wait", str(path)]]

    def test_nonzero_exit(self, tmp_path: Path):
        def runner(args, **kwargs):
            return subprocess.CompletedProcess(args, 2)

        with pytest.raises(EditorError, match="status 2"):
            open_in_editor(tmp_path / "work.yaml", ["vim"], runner=runner)

    def test_editor_missing(self, tmp_path: Path):
        def runner(args, **kwargs):
            raise FileNotFoundError("vim")

        with pytest.raises(EditorError, match="Failed to start editor"):
            open_in_editor(tmp_path / "work.yaml", ["vim"], runner=runner)
