"""Incremental terminal renderer for the 2048 board.

The renderer remembers the last board it drew and, on the next draw, only
touches the cells whose content changed.  Vertical cursor movement is
computed from the row the cursor actually sits on, which is tracked across
frames.  Rows are numbered relative to board row ``0``; row ``-1`` is the
blank line just above the board and row ``SIZE`` the line just below it.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .board import SIZE, Board
from .terminal import RGB, Terminal
from .tile import Tile


LOGGER = logging.getLogger(__name__)

# Width of one cell on screen; enough for "65536".
MAX_DIGIT_WIDTH = 5

LOSE_MESSAGE = "Game over"

# Background colour and whether the tile uses dark text, indexed by exponent.
PALETTE: Tuple[Tuple[RGB, bool], ...] = (
    ((238, 228, 218), True),  # 2
    ((237, 224, 200), True),  # 4
    ((242, 177, 121), False),  # 8
    ((245, 149, 99), False),  # 16
    ((246, 124, 95), False),  # 32
    ((246, 94, 59), False),  # 64
    ((237, 207, 114), True),  # 128
    ((237, 204, 97), False),  # 256
    ((237, 200, 80), False),  # 512
    ((237, 197, 63), False),  # 1024
    ((237, 194, 68), False),  # 2048
    ((181, 134, 180), False),  # 4096
    ((168, 97, 171), False),  # 8192
    ((160, 72, 163), False),  # 16384
    ((128, 0, 128), False),  # 32768
    ((96, 0, 70), False),  # 65536
)


class TerminalTooSmall(RuntimeError):
    """The terminal window cannot fit the board."""

    def __init__(self, size: Tuple[int, int]) -> None:
        self.size = size
        self.required = (SIZE * MAX_DIGIT_WIDTH, SIZE)
        super().__init__(
            "Window too small to draw the game board: "
            f"need {self.required[0]}x{self.required[1]}, got {size[0]}x{size[1]}"
        )


class Renderer:
    """Draw boards on a terminal, redrawing only what changed.

    Use as a context manager so the terminal is restored on every exit
    path::

        with Renderer(Terminal()) as renderer:
            renderer.draw_board(board)
    """

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self.size: Tuple[int, int] = (0, 0)
        self.cursor_row = SIZE
        # What's currently on the screen, if anything
        self.old_board: Optional[Board] = None
        self.full_redraws = 0
        self._open = False

    # Lifecycle --------------------------------------------------------
    def open(self) -> "Renderer":
        """Reserve screen space, enter raw mode and hide the cursor."""

        # Push the screen down before raw mode so the board has room at the
        # bottom of the terminal.
        self.terminal.write("\n" * (SIZE + 1))
        self.cursor_row = SIZE
        self._open = True
        self.terminal.enable_raw_mode()
        self.terminal.hide_cursor()
        self.resize(self.terminal.size())
        return self

    def close(self) -> None:
        """Leave raw mode, show the cursor and end the line.

        Safe to call more than once.  Errors are logged rather than raised so
        that an exception already propagating is not replaced.
        """

        if not self._open:
            return
        self._open = False
        for step in (
            self.terminal.flush,
            self.terminal.disable_raw_mode,
            self.terminal.show_cursor,
            lambda: self.terminal.write("\n"),
            self.terminal.flush,
        ):
            try:
                step()
            except Exception:
                LOGGER.debug("Terminal teardown step failed", exc_info=True)

    def __enter__(self) -> "Renderer":
        try:
            return self.open()
        except BaseException:
            self.close()
            raise

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # State ------------------------------------------------------------
    def resize(self, new_size: Tuple[int, int]) -> None:
        """Record a new window size; the next draw repaints everything."""

        self.size = new_size
        self.old_board = None

    # Drawing ----------------------------------------------------------
    def _draw_cell(self, cell: Tile) -> None:
        background, is_dark = PALETTE[cell.exponent]
        self.terminal.set_background(background)
        if is_dark:
            self.terminal.set_foreground("black")
        else:
            self.terminal.set_foreground("white")
            self.terminal.set_bold()
        self.terminal.write(f"{cell.value:>{MAX_DIGIT_WIDTH}}")
        self.terminal.reset_style()

    def _move_to_row(self, row: int) -> None:
        if row < self.cursor_row:
            self.terminal.move_up(self.cursor_row - row)
        elif row > self.cursor_row:
            self.terminal.move_down(row - self.cursor_row)
        self.cursor_row = row

    def _full_redraw(self, board: Board) -> None:
        self._move_to_row(-1)
        for row in range(SIZE):
            self.terminal.move_down(1)
            self.terminal.move_to_column(0)
            for cell in board.row(row):
                if cell is None:
                    self.terminal.move_right(MAX_DIGIT_WIDTH)
                else:
                    self._draw_cell(cell)
        self.cursor_row = SIZE - 1
        self.full_redraws += 1
        LOGGER.debug("Full redraw (%d tiles)", board.tile_count())

    def _incremental_redraw(self, old_board: Board, board: Board) -> None:
        changed = 0
        for row in range(SIZE):
            for col, (old, new) in enumerate(zip(old_board.row(row), board.row(row))):
                if old == new:
                    continue
                changed += 1
                self._move_to_row(row)
                self.terminal.move_to_column(MAX_DIGIT_WIDTH * col)
                if new is None:
                    # Spaces rather than a move so the old tile is erased.
                    self.terminal.write(" " * MAX_DIGIT_WIDTH)
                else:
                    self._draw_cell(new)
        LOGGER.debug("Incremental redraw of %d cell(s)", changed)

    def _check_size(self) -> None:
        columns, rows = self.size
        if columns < SIZE * MAX_DIGIT_WIDTH or rows < SIZE:
            raise TerminalTooSmall(self.size)

    def draw_board(self, board: Board) -> None:
        """Draw ``board``, repainting only cells that differ from the last frame.

        Raises:
            TerminalTooSmall: If the window cannot fit the board.  Nothing is
                written in that case.
        """

        self._check_size()
        if self.old_board is None:
            self._full_redraw(board)
        else:
            self._incremental_redraw(self.old_board, board)

        self.old_board = board.copy()
        self.terminal.flush()

    def lose(self) -> None:
        """Write the game-over message centred below the board.

        Raises:
            TerminalTooSmall: If the window cannot fit the board.
        """

        self._check_size()
        self._move_to_row(SIZE)
        self.terminal.move_to_column((SIZE * MAX_DIGIT_WIDTH - len(LOSE_MESSAGE)) // 2)
        self.terminal.write(LOSE_MESSAGE)
        self.terminal.flush()
