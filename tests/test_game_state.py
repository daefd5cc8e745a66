from __future__ import annotations

import random

from play2048.board import Board, Direction
from play2048.game_state import GameState


def test_reset_spawns_two_tiles() -> None:
    state = GameState(rng=random.Random(1))
    state.reset_game()
    assert state.board.tile_count() == 2
    assert state.moves == 0
    assert state.alive


def test_seed_makes_games_repeatable() -> None:
    first = GameState()
    first.seed(42)
    first.reset_game()
    second = GameState()
    second.seed(42)
    second.reset_game()
    assert first.board == second.board


def test_step_spawns_after_a_real_move() -> None:
    state = GameState(rng=random.Random(3))
    state.board = Board.from_values([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    assert state.step(Direction.LEFT)
    assert state.board.get_cell(0, 0).value == 4
    assert state.board.tile_count() == 2
    assert state.moves == 1


def test_noop_step_neither_moves_nor_spawns() -> None:
    state = GameState(rng=random.Random(3))
    board = Board.from_values([[2, 4, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    state.board = board.copy()
    assert not state.step(Direction.LEFT)
    assert state.board == board
    assert state.moves == 0


def test_stuck_board_is_not_alive() -> None:
    state = GameState()
    state.board = Board.from_values([[2, 4, 2, 4], [4, 2, 4, 2]] * 2)
    assert not state.alive
