"""The driving loop: read events, apply moves, redraw."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from .board import Board
from .events import Event, ResizeEvent, direction_for, is_exit_request
from .game_state import GameState
from .render import Renderer, TerminalTooSmall


LOGGER = logging.getLogger(__name__)


class EventSource(Protocol):
    def read(self) -> Iterable[Event]: ...


def draw(renderer: Renderer, board: Board) -> bool:
    """Draw ``board``, returning ``False`` if the window is too small.

    The game keeps running in that case and is repainted on the next resize.
    """

    try:
        renderer.draw_board(board)
    except TerminalTooSmall as exc:
        LOGGER.warning("%s", exc)
        return False
    return True


def run(state: GameState, renderer: Renderer, events: EventSource) -> bool:
    """Play until the player quits or loses.

    Returns ``True`` if the game ended because no move was left.
    """

    draw(renderer, state.board)
    while True:
        for event in events.read():
            if isinstance(event, ResizeEvent):
                renderer.resize((event.columns, event.rows))
                draw(renderer, state.board)
                continue
            if is_exit_request(event):
                LOGGER.info("Exit requested after %d move(s)", state.moves)
                return False
            direction = direction_for(event)
            if direction is None or not state.step(direction):
                continue
            drawn = draw(renderer, state.board)
            if not state.alive:
                if drawn:
                    renderer.lose()
                LOGGER.info("Game over after %d move(s)", state.moves)
                return True
