"""Command line entry point.

Run with: `python -m termtris`

Opens the pygame window by default.  ``--ascii`` prints a single frame of a
freshly started game instead, useful as a smoke test without a display.
"""

from __future__ import annotations

import argparse
import logging
import random

from .board import HEIGHT, WIDTH
from .game_state import TICK_MS, GameState
from .utils import format_grid


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description=__doc__)
    parser.add_argument("--width", type=int, default=WIDTH, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=HEIGHT, help="Board height in cells.")
    parser.add_argument(
        "--tick-ms", type=int, default=TICK_MS, help="Milliseconds between gravity steps."
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece selection.")
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print one text frame instead of opening a window.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(name)s: %(message)s",
    )
    state = GameState(width=args.width, height=args.height, rng=random.Random(args.seed))
    state.reset_game()
    if args.ascii:
        print(format_grid(state.board))
        return

    # pygame is only needed for the window
    from .run_pygame import main as run_window

    run_window(state, tick_ms=args.tick_ms)


if __name__ == "__main__":
    main()
