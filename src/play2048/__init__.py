"""2048 on a 4x4 board, drawn incrementally in a text terminal."""

from .tile import Tile
from .board import Board, Direction, add_square, apply_move, collapse, is_alive
from .game_state import GameState
from .terminal import Terminal
from .render import Renderer, TerminalTooSmall
from .events import EventReader, KeyDecoder, KeyEvent, ResizeEvent, decode_keys, direction_for, is_exit_request
from .runner import run

__all__ = [
    "Tile",
    "Board",
    "Direction",
    "apply_move",
    "add_square",
    "collapse",
    "is_alive",
    "GameState",
    "Terminal",
    "Renderer",
    "TerminalTooSmall",
    "EventReader",
    "KeyDecoder",
    "KeyEvent",
    "ResizeEvent",
    "decode_keys",
    "direction_for",
    "is_exit_request",
    "run",
]
