"""Board representation and move logic for 2048."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .tile import Tile


LOGGER = logging.getLogger(__name__)

# Side length of the square board.
SIZE = 4

# Probability that a spawned tile is a 4 rather than a 2.  The classic game
# uses one in ten; this implementation defaults to an even split.
DEFAULT_FOUR_PROBABILITY = 0.5
CLASSIC_FOUR_PROBABILITY = 0.1

Grid = NDArray[np.uint8]
Coord = Tuple[int, int]  # (col, row)


class Direction(str, Enum):
    """Direction in which the tiles slide."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class RandomSource(Protocol):
    """The subset of :class:`random.Random` used by the spawner."""

    def randrange(self, stop: int) -> int: ...

    def random(self) -> float: ...


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((SIZE, SIZE), dtype=np.uint8)


class Board:
    """A 4x4 grid of optional tiles.

    Cells are stored in ``grid[row, col]`` where ``0`` marks an empty cell
    and any other value is the tile exponent plus one.  The public accessors
    take ``(col, row)`` pairs.
    """

    size: int = SIZE

    def __init__(self, grid: Optional[Grid] = None) -> None:
        self.grid: Grid = create_empty_grid() if grid is None else grid

    @classmethod
    def from_values(cls, rows: Iterable[Iterable[int]]) -> "Board":
        """Build a board from displayed values, ``0`` meaning empty."""

        board = cls()
        for row, values in enumerate(rows):
            for col, value in enumerate(values):
                if value:
                    board.set_cell(col, row, Tile.from_value(value))
        return board

    def to_values(self) -> List[List[int]]:
        """Return the displayed values row by row, ``0`` meaning empty."""

        return [
            [0 if cell is None else cell.value for cell in self.row(row)]
            for row in range(self.size)
        ]

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    def _check(self, col: int, row: int) -> None:
        if not (0 <= col < self.size and 0 <= row < self.size):
            raise IndexError("Cell out of bounds")

    def get_cell(self, col: int, row: int) -> Optional[Tile]:
        """Return the tile at ``(col, row)`` or ``None`` when empty.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        self._check(col, row)
        raw = int(self.grid[row, col])
        return Tile(raw - 1) if raw else None

    def set_cell(self, col: int, row: int, tile: Optional[Tile]) -> None:
        """Set or clear the cell at ``(col, row)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        self._check(col, row)
        self.grid[row, col] = np.uint8(0 if tile is None else tile.exponent + 1)

    def is_empty(self, col: int, row: int) -> bool:
        self._check(col, row)
        return bool(self.grid[row, col] == 0)

    def row(self, row: int) -> List[Optional[Tile]]:
        return [self.get_cell(col, row) for col in range(self.size)]

    def empty_cells(self) -> List[Coord]:
        """Return the empty cells in row-major order."""

        rows, cols = np.nonzero(self.grid == 0)
        return [(int(c), int(r)) for r, c in zip(rows, cols)]

    def tile_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def apply_move(self, direction: Direction) -> "Board":
        return apply_move(self, direction)

    def add_square(self, rng: RandomSource, four_probability: float = DEFAULT_FOUR_PROBABILITY) -> None:
        add_square(self, rng, four_probability)

    def is_alive(self) -> bool:
        return is_alive(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board.from_values({self.to_values()!r})"

    def __str__(self) -> str:
        return "\n".join(
            "".join(f"{value if value else '.':>6}" for value in values)
            for values in self.to_values()
        )


def line_coords(direction: Direction, offset: int) -> List[Coord]:
    """Return the cells of one line in travel order.

    Travel order starts at the edge the tiles slide towards, so ``LEFT``
    visits column ``0`` first and ``RIGHT`` visits column ``3`` first.
    ``offset`` selects the column for vertical moves and the row for
    horizontal ones.
    """

    if direction in (Direction.UP, Direction.LEFT):
        steps = range(SIZE)
    else:
        steps = range(SIZE - 1, -1, -1)
    if direction in (Direction.UP, Direction.DOWN):
        return [(offset, i) for i in steps]
    return [(i, offset) for i in steps]


def collapse(tiles: Sequence[Tile]) -> List[Tile]:
    """Merge equal neighbours of an already compacted line.

    ``tiles`` holds the occupied cells of a line in travel order.  Pairs merge
    from the front of the sequence and a tile produced by a merge never merges
    again in the same pass, so ``[2, 2, 2, 2]`` becomes ``[4, 4]``.
    """

    out: List[Tile] = []
    pending: Optional[Tile] = None
    for i in range(len(tiles)):
        current = tiles[i]
        if pending is None:
            pending = current
        elif current == pending:
            out.append(pending.inc())
            pending = None
        else:
            out.append(pending)
            pending = current
    if pending is not None:
        out.append(pending)
    return out


def apply_move(board: Board, direction: Direction) -> Board:
    """Return the board obtained by sliding every line towards ``direction``.

    The input board is left untouched.  A move that changes nothing returns a
    board equal to the input; callers compare with ``==`` to detect it.
    """

    output = Board()
    for offset in range(SIZE):
        coords = line_coords(direction, offset)
        occupied = [
            tile for tile in (board.get_cell(col, row) for col, row in coords) if tile is not None
        ]
        collapsed = collapse(occupied)
        if len(collapsed) > len(coords):
            raise RuntimeError("Too many cells post-collapse")
        for (col, row), tile in zip(coords, collapsed):
            output.set_cell(col, row, tile)
    return output


def add_square(
    board: Board,
    rng: RandomSource,
    four_probability: float = DEFAULT_FOUR_PROBABILITY,
) -> None:
    """Place a new ``2`` or ``4`` on a random empty cell of ``board``.

    A full board is left unchanged.
    """

    free_spaces = board.empty_cells()
    if not free_spaces:
        return

    col, row = free_spaces[rng.randrange(len(free_spaces))]
    tile = Tile(1) if rng.random() < four_probability else Tile(0)
    board.set_cell(col, row, tile)
    LOGGER.debug("Spawned %d at (%d, %d)", tile.value, col, row)


def is_alive(board: Board) -> bool:
    """Return ``True`` if at least one direction changes ``board``."""

    return any(apply_move(board, direction) != board for direction in Direction)
