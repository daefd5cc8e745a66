"""Terminal-control primitives used by the renderer.

:class:`Terminal` exposes the logical operations the renderer needs (cursor
movement, colours, raw input mode) and turns them into ANSI escape sequences.
Cursor and style codes come from :mod:`colorama.ansi`; 24-bit colours and
column addressing are not covered by colorama and are spelled out with its
``CSI`` prefix.  Output is queued on the wrapped stream and only becomes
visible on :meth:`Terminal.flush`.
"""

from __future__ import annotations

import os
import shutil
import sys
from typing import List, Optional, TextIO, Tuple

from colorama.ansi import CSI, Cursor, Fore, Style

try:
    import termios
    import tty
except ImportError:  # Windows: no raw mode
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]


RGB = Tuple[int, int, int]

FOREGROUNDS = {
    "black": Fore.BLACK,
    "white": Fore.WHITE,
}


class Terminal:
    """Thin wrapper around an output stream and the controlling TTY."""

    def __init__(self, output: Optional[TextIO] = None, input_fd: Optional[int] = None) -> None:
        self.output: TextIO = output if output is not None else sys.stdout
        self._input_fd = input_fd
        self._saved_attrs: Optional[List] = None

    def fileno(self) -> int:
        """Return the file descriptor keys are read from."""

        if self._input_fd is None:
            self._input_fd = sys.stdin.fileno()
        return self._input_fd

    # Output -----------------------------------------------------------
    def write(self, text: str) -> None:
        self.output.write(text)

    def flush(self) -> None:
        self.output.flush()

    def move_up(self, n: int) -> None:
        if n > 0:
            self.write(Cursor.UP(n))

    def move_down(self, n: int) -> None:
        if n > 0:
            self.write(Cursor.DOWN(n))

    def move_right(self, n: int) -> None:
        if n > 0:
            self.write(Cursor.FORWARD(n))

    def move_to_column(self, col: int) -> None:
        """Move to the zero-based column ``col`` on the current line."""

        self.write(f"{CSI}{col + 1}G")

    def set_background(self, rgb: RGB) -> None:
        r, g, b = rgb
        self.write(f"{CSI}48;2;{r};{g};{b}m")

    def set_foreground(self, colour: str) -> None:
        """Set a named foreground colour (``"black"`` or ``"white"``)."""

        self.write(FOREGROUNDS[colour])

    def set_bold(self) -> None:
        self.write(Style.BRIGHT)

    def reset_style(self) -> None:
        self.write(Style.RESET_ALL)

    def hide_cursor(self) -> None:
        self.write(f"{CSI}?25l")

    def show_cursor(self) -> None:
        self.write(f"{CSI}?25h")

    def size(self) -> Tuple[int, int]:
        """Return ``(columns, rows)`` of the terminal window."""

        size = shutil.get_terminal_size()
        return size.columns, size.lines

    # Input mode -------------------------------------------------------
    @property
    def raw(self) -> bool:
        return self._saved_attrs is not None

    def enable_raw_mode(self) -> None:
        """Switch the input TTY to raw mode, remembering the old settings.

        Does nothing when input is not a TTY or the platform has no
        ``termios``.
        """

        if termios is None or self.raw:
            return
        fd = self.fileno()
        if not os.isatty(fd):
            return
        self._saved_attrs = termios.tcgetattr(fd)
        tty.setraw(fd)

    def disable_raw_mode(self) -> None:
        """Restore the TTY settings saved by :meth:`enable_raw_mode`."""

        if self._saved_attrs is None:
            return
        attrs, self._saved_attrs = self._saved_attrs, None
        termios.tcsetattr(self.fileno(), termios.TCSADRAIN, attrs)
