from __future__ import annotations

import io
import os

import pytest

from play2048.terminal import Terminal


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


def test_cursor_movement_sequences(out: io.StringIO) -> None:
    term = Terminal(output=out, input_fd=-1)
    term.move_up(3)
    term.move_down(1)
    term.move_right(5)
    term.move_to_column(0)
    term.move_to_column(15)
    assert out.getvalue() == "\x1b[3A\x1b[1B\x1b[5C\x1b[1G\x1b[16G"


def test_zero_moves_emit_nothing(out: io.StringIO) -> None:
    term = Terminal(output=out, input_fd=-1)
    term.move_up(0)
    term.move_down(0)
    term.move_right(0)
    assert out.getvalue() == ""


def test_style_sequences(out: io.StringIO) -> None:
    term = Terminal(output=out, input_fd=-1)
    term.set_background((1, 2, 3))
    term.set_foreground("black")
    term.set_bold()
    term.reset_style()
    term.hide_cursor()
    term.show_cursor()
    assert out.getvalue() == "\x1b[48;2;1;2;3m\x1b[30m\x1b[1m\x1b[0m\x1b[?25l\x1b[?25h"


def test_unknown_foreground_is_rejected(out: io.StringIO) -> None:
    term = Terminal(output=out, input_fd=-1)
    with pytest.raises(KeyError):
        term.set_foreground("mauve")


def test_raw_mode_is_skipped_when_input_is_not_a_tty() -> None:
    read_fd, write_fd = os.pipe()
    try:
        term = Terminal(output=io.StringIO(), input_fd=read_fd)
        term.enable_raw_mode()
        assert not term.raw
        term.disable_raw_mode()
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_size_reports_columns_and_rows(monkeypatch) -> None:
    monkeypatch.setenv("COLUMNS", "123")
    monkeypatch.setenv("LINES", "45")
    assert Terminal(output=io.StringIO(), input_fd=-1).size() == (123, 45)
