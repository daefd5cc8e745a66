"""High level game state container."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .board import DEFAULT_FOUR_PROBABILITY, Board, Direction, add_square, apply_move, is_alive


LOGGER = logging.getLogger(__name__)


@dataclass
class GameState:
    """Mutable state for a 2048 game session."""

    board: Board = field(default_factory=Board)
    rng: random.Random = field(default_factory=random.Random)
    four_probability: float = DEFAULT_FOUR_PROBABILITY
    moves: int = 0

    def seed(self, seed: Optional[int] = None) -> None:
        """Seed the spawn RNG."""

        self.rng.seed(seed)

    def reset_game(self) -> None:
        """Start a new game with two spawned tiles."""

        self.board = Board()
        self.moves = 0
        self.spawn()
        self.spawn()

    def spawn(self) -> None:
        add_square(self.board, self.rng, self.four_probability)

    def step(self, direction: Direction) -> bool:
        """Apply ``direction`` and spawn a tile if anything moved.

        Returns ``False`` for a no-op move, in which case the board is left
        as it was and nothing is spawned.
        """

        new_board = apply_move(self.board, direction)
        if new_board == self.board:
            LOGGER.debug("No-op move %s", direction.value)
            return False
        self.board = new_board
        self.spawn()
        self.moves += 1
        LOGGER.debug("Move %d: %s", self.moves, direction.value)
        return True

    @property
    def alive(self) -> bool:
        """``True`` while at least one move would change the board."""

        return is_alive(self.board)
