from __future__ import annotations

import io

import pytest

from play2048.terminal import Terminal


class RecordingTerminal(Terminal):
    """Terminal that records logical operations instead of emitting escapes."""

    def __init__(self, size=(80, 24)) -> None:
        super().__init__(output=io.StringIO(), input_fd=-1)
        self.ops: list[tuple] = []
        self._size = size

    def write(self, text):
        self.ops.append(("write", text))

    def flush(self):
        self.ops.append(("flush",))

    def move_up(self, n):
        self.ops.append(("move_up", n))

    def move_down(self, n):
        self.ops.append(("move_down", n))

    def move_right(self, n):
        self.ops.append(("move_right", n))

    def move_to_column(self, col):
        self.ops.append(("move_to_column", col))

    def set_background(self, rgb):
        self.ops.append(("set_background", rgb))

    def set_foreground(self, colour):
        self.ops.append(("set_foreground", colour))

    def set_bold(self):
        self.ops.append(("set_bold",))

    def reset_style(self):
        self.ops.append(("reset_style",))

    def hide_cursor(self):
        self.ops.append(("hide_cursor",))

    def show_cursor(self):
        self.ops.append(("show_cursor",))

    def enable_raw_mode(self):
        self.ops.append(("enable_raw_mode",))

    def disable_raw_mode(self):
        self.ops.append(("disable_raw_mode",))

    def size(self):
        return self._size


@pytest.fixture
def terminal() -> RecordingTerminal:
    return RecordingTerminal()
