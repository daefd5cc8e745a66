from __future__ import annotations

import random

import pytest

from play2048.board import CLASSIC_FOUR_PROBABILITY, Board, add_square
from play2048.tile import Tile


class FixedRandom:
    """Random source returning scripted values."""

    def __init__(self, index: int, roll: float) -> None:
        self.index = index
        self.roll = roll
        self.ranges: list[int] = []

    def randrange(self, stop: int) -> int:
        self.ranges.append(stop)
        return self.index

    def random(self) -> float:
        return self.roll


def test_two_spawns_on_empty_board() -> None:
    board = Board()
    rng = random.Random(7)
    add_square(board, rng)
    add_square(board, rng)
    assert board.tile_count() == 2
    values = [v for row in board.to_values() for v in row if v]
    assert all(v in (2, 4) for v in values)


@pytest.mark.parametrize("seed", range(10))
def test_spawn_adds_exactly_one_tile_and_keeps_the_rest(seed: int) -> None:
    rng = random.Random(seed)
    board = Board.from_values(
        [[rng.choice([0, 2, 8]) for _ in range(4)] for _ in range(4)]
    )
    before = board.copy()
    occupied = [(c, r) for r in range(4) for c in range(4) if not before.is_empty(c, r)]
    add_square(board, rng)
    if len(occupied) == 16:
        assert board == before
        return
    assert board.tile_count() == before.tile_count() + 1
    for col, row in occupied:
        assert board.get_cell(col, row) == before.get_cell(col, row)


def test_full_board_is_unchanged() -> None:
    board = Board.from_values([[2, 4, 2, 4], [4, 2, 4, 2]] * 2)
    before = board.copy()
    rng = FixedRandom(0, 0.0)
    add_square(board, rng)
    assert board == before
    assert rng.ranges == []


def test_spawn_picks_among_empty_cells_in_row_major_order() -> None:
    board = Board.from_values([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 2]])
    rng = FixedRandom(3, 0.9)
    add_square(board, rng)
    assert rng.ranges == [14]
    assert board.get_cell(0, 1) == Tile(0)


@pytest.mark.parametrize(
    "roll, probability, expected",
    [
        (0.49, 0.5, Tile(1)),
        (0.5, 0.5, Tile(0)),
        (0.05, CLASSIC_FOUR_PROBABILITY, Tile(1)),
        (0.2, CLASSIC_FOUR_PROBABILITY, Tile(0)),
    ],
)
def test_four_probability(roll: float, probability: float, expected: Tile) -> None:
    board = Board()
    board.add_square(FixedRandom(0, roll), probability)
    assert board.get_cell(0, 0) == expected
