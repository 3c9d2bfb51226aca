"""Tests for session models and YAML serialization."""

import pytest
import yaml

from tsman.exceptions import SessionFormatError
from tsman.models import (
    IDLE_PANE_MARKER,
    Pane,
    Session,
    Window,
    dump_session,
    load_session,
    session_from_dict,
    session_to_dict,
)


def make_work_session() -> Session:
    return Session(
        name="work",
        work_dir="/home/user/work",
        windows=[
            Window(
                index="0",
                name="editor",
                layout="b25d,80x24,0,0,0",
                panes=[Pane(index="0", current_command="vim", work_dir="/home/user/work")],
            ),
            Window(
                index="1",
                name="build",
                layout="a1b2,80x24,0,0{40x24,0,0,1,39x24,41,0,2}",
                panes=[
                    Pane(index="0", current_command="make", work_dir="/home/user/work"),
                    Pane(index="1", current_command=None, work_dir="/home/user/work/src"),
                ],
            ),
        ],
    )


class TestPane:
    """Tests for Pane."""

    def test_preview_with_command(self) -> None:
        pane = Pane(index="2", current_command="htop", work_dir="/")
        assert pane.preview(False) == "htop"
        assert pane.preview(True) == "(2) htop"

    def test_preview_idle_pane(self) -> None:
        pane = Pane(index="0", current_command=None, work_dir="/")
        assert pane.preview(False) == IDLE_PANE_MARKER
        assert pane.preview(True) == "(0) _"


class TestInvariants:
    """Tests for model construction checks."""

    def test_window_requires_panes(self) -> None:
        with pytest.raises(ValueError, match="at least one pane"):
            Window(index="0", name="empty", layout="x", panes=[])

    def test_window_rejects_duplicate_pane_indexes(self) -> None:
        pane = Pane(index="0", current_command=None, work_dir="/")
        with pytest.raises(ValueError, match="duplicate pane"):
            Window(index="0", name="dup", layout="x", panes=[pane, pane])

    def test_session_requires_windows(self) -> None:
        with pytest.raises(ValueError, match="at least one window"):
            Session(name="empty", work_dir="/", windows=[])

    def test_session_rejects_duplicate_window_indexes(self) -> None:
        window = Window(
            index="1",
            name="w",
            layout="x",
            panes=[Pane(index="0", current_command=None, work_dir="/")],
        )
        with pytest.raises(ValueError, match="duplicate window"):
            Session(name="dup", work_dir="/", windows=[window, window])

    def test_is_split(self) -> None:
        session = make_work_session()
        assert not session.windows[0].is_split
        assert session.windows[1].is_split


class TestPreview:
    """Tests for Session.preview()."""

    def test_two_window_example(self) -> None:
        expected = (
            "work:\n"
            " ╠══ editor: vim\n"
            " ╚══╦═ build:\n"
            "    ║  ╠═ (0) make\n"
            "    ║  ╚═ (1) _"
        )
        assert make_work_session().preview() == expected

    def test_split_window_before_last_keeps_rail(self) -> None:
        session = make_work_session()
        session = Session(
            name="work",
            work_dir=session.work_dir,
            windows=[session.windows[1], session.windows[0]],
        )
        assert session.preview().splitlines() == [
            "work:",
            " ╠══╦═ build:",
            " ║  ║  ╠═ (0) make",
            " ║  ║  ╚═ (1) _",
            " ╚══ editor: vim",
        ]

    def test_single_window_single_pane(self) -> None:
        session = Session(
            name="solo",
            work_dir="/",
            windows=[
                Window(
                    index="1",
                    name="shell",
                    layout="x",
                    panes=[Pane(index="1", current_command=None, work_dir="/")],
                )
            ],
        )
        assert session.preview() == "solo:\n ╚══ shell: _"

    def test_preview_is_pure(self) -> None:
        session = make_work_session()
        assert session.preview() == session.preview()


class TestSerialization:
    """Tests for YAML round-trips and validation."""

    def test_round_trip(self) -> None:
        session = make_work_session()
        assert load_session(dump_session(session)) == session

    def test_round_trip_preserves_unusual_values(self) -> None:
        session = Session(
            name="odd",
            work_dir="/tmp/with space",
            windows=[
                Window(
                    index="3",
                    name="my window",
                    layout="c0d1,200x50,0,0,5",
                    panes=[
                        Pane(
                            index="7",
                            current_command="python -c 'print(1)'",
                            work_dir="/tmp/with space/ünï",
                        )
                    ],
                )
            ],
        )
        assert load_session(dump_session(session)) == session

    def test_dump_keeps_field_order(self) -> None:
        data = yaml.safe_load(dump_session(make_work_session()))
        assert list(data) == ["name", "work_dir", "windows"]
        assert list(data["windows"][0]) == ["index", "name", "layout", "panes"]
        assert list(data["windows"][0]["panes"][0]) == ["index", "current_command", "work_dir"]

    def test_idle_pane_serializes_as_null(self) -> None:
        data = session_to_dict(make_work_session())
        assert data["windows"][1]["panes"][1]["current_command"] is None

    def test_numeric_indexes_are_cast_to_strings(self) -> None:
        text = """
name: num
work_dir: /srv
windows:
- index: 0
  name: main
  layout: abcd,80x24,0,0,0
  panes:
  - index: 0
    current_command: null
    work_dir: /srv
"""
        session = load_session(text)
        assert session.windows[0].index == "0"
        assert session.windows[0].panes[0].index == "0"

    def test_missing_field_is_format_error(self) -> None:
        with pytest.raises(SessionFormatError):
            session_from_dict({"name": "x", "windows": []})

    def test_empty_windows_is_format_error(self) -> None:
        with pytest.raises(SessionFormatError):
            session_from_dict({"name": "x", "work_dir": "/", "windows": []})

    def test_unknown_field_is_format_error(self) -> None:
        data = session_to_dict(make_work_session())
        data["extra"] = True
        with pytest.raises(SessionFormatError):
            session_from_dict(data)

    def test_non_mapping_document(self) -> None:
        with pytest.raises(SessionFormatError):
            load_session("- just\n- a list\n")

    def test_invalid_yaml(self) -> None:
        with pytest.raises(SessionFormatError, match="Invalid YAML"):
            load_session("name: [unclosed")
