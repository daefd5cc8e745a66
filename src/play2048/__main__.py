"""Play 2048 in the terminal.

Run with: `python -m play2048`

Use the arrow keys or WASD to slide the tiles; Escape, Ctrl+C or Ctrl+D
quits.  The screen is the game board, so diagnostics only go to the file
given with ``--log-file``.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

import colorama

from .board import CLASSIC_FOUR_PROBABILITY, DEFAULT_FOUR_PROBABILITY
from .events import EventReader
from .game_state import GameState
from .render import Renderer
from .runner import run
from .terminal import Terminal


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="play2048", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for tile spawning.")
    parser.add_argument(
        "--classic-spawn",
        action="store_true",
        help="Spawn 4s one time in ten, as in classic 2048, instead of half the time.",
    )
    parser.add_argument("--log-file", default=None, help="Write diagnostics to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level: str) -> None:
    if log_file is None:
        # Keep the last-resort stderr handler from writing over the board.
        logging.getLogger("play2048").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    colorama.just_fix_windows_console()

    state = GameState(
        rng=random.Random(args.seed),
        four_probability=CLASSIC_FOUR_PROBABILITY if args.classic_spawn else DEFAULT_FOUR_PROBABILITY,
    )
    state.reset_game()
    LOGGER.info("Game started (seed=%s)", args.seed)

    terminal = Terminal()
    try:
        with Renderer(terminal) as renderer, EventReader(terminal) as reader:
            run(state, renderer, reader)
    except Exception:
        LOGGER.exception("Game aborted")
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
