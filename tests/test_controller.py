"""Tests for MenuController."""

from contextlib import contextmanager

from tsman.exceptions import CommandFailedError, SessionFormatError
from tsman.menu.controller import MenuController
from tsman.menu.effects import OpenSession
from tsman.menu.intents import Delete, Open
from tsman.menu.keymap import KeyChord
from tsman.menu.state import MenuMode
from tsman.testing import MockSessionService


def make_controller(**kwargs) -> tuple[MenuController, MockSessionService]:
    sessions = MockSessionService(saved={"api", "web"}, active={"web", "live"})
    return MenuController.create(sessions, **kwargs), sessions


def press(controller: MenuController, key: str, character: str | None = None) -> None:
    controller.handle_key(KeyChord(key, character))


class TestCreate:
    """Tests for MenuController.create()."""

    def test_items_loaded(self):
        controller, _ = make_controller()
        names = [item.name for item in controller.state.items.filtered]
        assert names == ["api", "live", "web"]
        assert controller.state.items.selected == 0

    def test_flags(self):
        controller, _ = make_controller(show_preview=True, ask_for_confirmation=True)
        assert controller.state.show_preview
        assert controller.state.ask_for_confirmation


class TestKeys:
    """Key presses drive the state and the session service."""

    def test_typing_filters(self):
        controller, _ = make_controller()
        for char in "li":
            press(controller, char, char)
        assert [i.name for i in controller.state.items.filtered] == ["live"]

    def test_open_selected(self):
        controller, sessions = make_controller()
        press(controller, "down")
        press(controller, "enter")
        assert sessions.calls == [("open", ("live",))]
        assert controller.state.should_exit

    def test_open_runs_inside_suspend(self):
        events = []

        @contextmanager
        def suspend():
            events.append("suspend")
            yield
            events.append("resume")

        controller, sessions = make_controller()
        controller.set_suspend(suspend)
        press(controller, "enter")
        assert events == ["suspend", "resume"]
        assert sessions.calls == [("open", ("api",))]

    def test_edit_runs_inside_suspend(self):
        events = []

        @contextmanager
        def suspend():
            events.append("suspend")
            yield

        controller, sessions = make_controller()
        controller.set_suspend(suspend)
        press(controller, "ctrl+e")
        assert events == ["suspend"]
        assert sessions.calls == [("edit", ("api",))]
        assert not controller.state.should_exit

    def test_save_unsaved(self):
        controller, sessions = make_controller()
        press(controller, "down")
        press(controller, "ctrl+s")
        assert sessions.calls == [("save_target", ("live",))]
        assert controller.state.items.find("live").saved

    def test_delete_saved_and_active(self):
        controller, sessions = make_controller()
        press(controller, "down")
        press(controller, "down")
        press(controller, "ctrl+d")
        assert sessions.calls == [("delete", ("web",))]
        assert controller.state.items.find("web").active

    def test_delete_unsaved_kills(self):
        controller, sessions = make_controller()
        press(controller, "down")
        press(controller, "ctrl+d")
        assert sessions.calls == [("close", ("live",))]
        assert controller.state.items.find("live") is None

    def test_delete_with_confirmation(self):
        controller, sessions = make_controller(ask_for_confirmation=True)
        press(controller, "ctrl+d")
        assert controller.state.mode is MenuMode.CONFIRMATION
        assert sessions.calls == []
        press(controller, "y", "y")
        assert sessions.calls == [("delete", ("api",))]
        assert controller.state.items.find("api") is None

    def test_delete_confirmation_cancelled(self):
        controller, sessions = make_controller(ask_for_confirmation=True)
        press(controller, "ctrl+d")
        press(controller, "n", "n")
        assert controller.state.mode is MenuMode.NORMAL
        assert sessions.calls == []

    def test_rename(self):
        controller, sessions = make_controller()
        press(controller, "ctrl+r")
        assert controller.state.mode is MenuMode.RENAME
        press(controller, "ctrl+w")
        for char in "rest":
            press(controller, char, char)
        press(controller, "enter")
        assert sessions.calls == [("rename", ("api", "rest", False, True))]
        assert controller.state.items.find("rest") is not None
        assert controller.state.mode is MenuMode.NORMAL

    def test_escape_exits(self):
        controller, sessions = make_controller()
        press(controller, "escape")
        assert controller.state.should_exit
        assert sessions.calls == []


class TestErrors:
    """A failing effect switches to the error popup."""

    def test_failure_shows_error(self):
        controller, sessions = make_controller()
        sessions.fail_with["open"] = CommandFailedError("tmux attach-session failed")
        press(controller, "enter")
        assert controller.state.mode is MenuMode.ERROR
        assert controller.state.error_message == "tmux attach-session failed"
        assert not controller.state.should_exit

    def test_failed_effect_leaves_items(self):
        controller, sessions = make_controller()
        sessions.fail_with["delete"] = CommandFailedError("nope")
        press(controller, "ctrl+d")
        assert controller.state.items.find("api").saved

    def test_dismiss_error(self):
        controller, sessions = make_controller()
        sessions.fail_with["open"] = CommandFailedError("nope")
        press(controller, "enter")
        press(controller, "escape")
        assert controller.state.mode is MenuMode.NORMAL
        assert controller.state.error_message is None
        assert not controller.state.should_exit

    def test_dispatch_directly(self):
        controller, sessions = make_controller()
        controller.dispatch(Open())
        assert sessions.calls == [("open", ("api",))]

    def test_execute_single_effect(self):
        controller, sessions = make_controller()
        controller.execute(OpenSession("web"))
        assert sessions.calls == [("open", ("web",))]

    def test_dispatch_delete_without_selection(self):
        sessions = MockSessionService()
        controller = MenuController.create(sessions)
        controller.dispatch(Delete())
        assert sessions.calls == []


class TestPreviewText:
    """Tests for preview_text()."""

    def test_saved_item(self):
        controller, sessions = make_controller()
        sessions.previews["api"] = "api:\n ╚══ main: _"
        assert controller.preview_text() == "api:\n ╚══ main: _"

    def test_unsaved_item(self):
        controller, _ = make_controller()
        press(controller, "down")
        assert controller.preview_text() == "live is not saved"

    def test_no_selection(self):
        controller = MenuController.create(MockSessionService())
        assert controller.preview_text() is None

    def test_unreadable_saved_copy(self):
        controller, sessions = make_controller()
        sessions.fail_with["preview"] = SessionFormatError("Invalid YAML")
        assert controller.preview_text() == "Cannot preview api: Invalid YAML"
