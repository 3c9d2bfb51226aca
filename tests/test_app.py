"""Tests for the main Textual app."""

import pytest

from tsman.app import POPUPS, TsmanApp
from tsman.exceptions import CommandFailedError
from tsman.menu.controller import MenuController
from tsman.menu.state import MenuMode
from tsman.screens.menu import MenuScreen
from tsman.screens.modals import (
    DeleteConfirmModal,
    ErrorModal,
    HelpModal,
    RenameSessionModal,
)
from tsman.testing import MockSessionService
from tsman.widgets import SessionPreviewWidget


def make_app(**kwargs) -> tuple[TsmanApp, MockSessionService]:
    sessions = MockSessionService(saved={"api", "web"}, active={"web"})
    controller = MenuController.create(sessions, **kwargs)
    return TsmanApp(controller), sessions


class TestTsmanApp:
    """Tests for TsmanApp."""

    def test_app_has_title(self) -> None:
        """Test that app has TITLE configured."""
        assert TsmanApp.TITLE == "tsman"

    def test_command_palette_disabled(self) -> None:
        assert TsmanApp.ENABLE_COMMAND_PALETTE is False

    def test_every_popup_mode_has_a_modal(self) -> None:
        assert set(POPUPS) == set(MenuMode) - {MenuMode.NORMAL}


@pytest.mark.asyncio
class TestTsmanAppAsync:
    """Async tests for TsmanApp."""

    async def test_app_shows_menu_on_start(self) -> None:
        """Test that the menu screen is shown on start."""
        app, _ = make_app()
        async with app.run_test():
            assert isinstance(app.screen, MenuScreen)

    async def test_typing_filters(self) -> None:
        app, _ = make_app()
        async with app.run_test() as pilot:
            await pilot.press("w", "e")
            await pilot.pause()
            state = app.controller.state
            assert state.items.input == "we"
            assert [item.name for item in state.items.filtered] == ["web"]

    async def test_help_popup(self) -> None:
        """F1 opens the help popup and Escape closes it."""
        app, _ = make_app()
        async with app.run_test() as pilot:
            await pilot.press("f1")
            await pilot.pause()
            assert isinstance(app.screen, HelpModal)

            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, MenuScreen)
            assert app.controller.state.mode is MenuMode.NORMAL

    async def test_delete_confirmation_popup(self) -> None:
        app, sessions = make_app(ask_for_confirmation=True)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+d")
            await pilot.pause()
            assert isinstance(app.screen, DeleteConfirmModal)

            await pilot.press("y")
            await pilot.pause()
            assert isinstance(app.screen, MenuScreen)
            assert sessions.calls == [("delete", ("api",))]

    async def test_rename_popup(self) -> None:
        app, sessions = make_app()
        async with app.run_test() as pilot:
            await pilot.press("ctrl+r")
            await pilot.pause()
            assert isinstance(app.screen, RenameSessionModal)

            await pilot.press("2", "enter")
            await pilot.pause()
            assert isinstance(app.screen, MenuScreen)
            assert sessions.calls == [("rename", ("api", "api2", False, True))]

    async def test_error_popup(self) -> None:
        app, sessions = make_app()
        sessions.fail_with["open"] = CommandFailedError("attach failed")
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, ErrorModal)
            assert app.controller.state.error_message == "attach failed"

            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, MenuScreen)

    async def test_preview_toggle(self) -> None:
        app, _ = make_app()
        async with app.run_test() as pilot:
            preview = app.menu_screen.query_one("#preview", SessionPreviewWidget)
            assert not preview.display

            await pilot.press("ctrl+t")
            await pilot.pause()
            assert app.controller.state.show_preview
            assert preview.display

    async def test_open_exits(self) -> None:
        app, sessions = make_app()
        async with app.run_test() as pilot:
            await pilot.press("enter")
        assert sessions.calls == [("open", ("api",))]
        assert app.controller.state.should_exit

    async def test_escape_exits(self) -> None:
        app, sessions = make_app()
        async with app.run_test() as pilot:
            await pilot.press("escape")
        assert app.controller.state.should_exit
        assert sessions.calls == []
