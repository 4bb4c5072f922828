"""Play headless games with random inputs.

Run with::

    PYTHONPATH=src python examples/simulate.py

Pass ``--help`` to see options for the number of games, board size and how
often to log a summary.
"""

from __future__ import annotations

import argparse
import logging
import random

from termtris.game_state import GameState


LOGGER = logging.getLogger(__name__)

ACTIONS = ("move_left", "move_right", "rotate", "hard_drop", "tick")


def play_game(state: GameState, rng: random.Random, max_steps: int) -> int:
    """Feed random actions into ``state`` until game over or ``max_steps``.

    Returns the number of steps taken.
    """

    state.reset_game()
    steps = 0
    while not state.over and steps < max_steps:
        getattr(state, rng.choice(ACTIONS))()
        steps += 1
    return steps


def log_summary(results: list[dict[str, int]], *, index: int) -> dict[str, float]:
    """Log aggregate statistics for ``results`` and return them."""

    games = len(results)
    summary = {
        "games": games,
        "rows": sum(r["rows"] for r in results),
        "pieces": sum(r["pieces"] for r in results),
        "average_rows": sum(r["rows"] for r in results) / games if games else 0.0,
    }
    LOGGER.info(
        "Game %d summary: games=%d, rows=%d, pieces=%d, avg_rows=%.2f",
        index,
        summary["games"],
        summary["rows"],
        summary["pieces"],
        summary["average_rows"],
    )
    return summary


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--games", type=int, default=10, help="How many games to play.")
    parser.add_argument("--max-steps", type=int, default=5000, help="Step limit per game.")
    parser.add_argument("--width", type=int, default=10, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=20, help="Board height in cells.")
    parser.add_argument("--seed", type=int, default=42, help="Seed for pieces and inputs.")
    parser.add_argument(
        "--log-interval",
        type=int,
        default=5,
        help="Emit a summary every N games (0 logs only at the end).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    rng = random.Random(args.seed)
    state = GameState(width=args.width, height=args.height, rng=random.Random(args.seed))
    results: list[dict[str, int]] = []
    for game_idx in range(1, args.games + 1):
        steps = play_game(state, rng, args.max_steps)
        results.append({"rows": state.score, "pieces": state.pieces, "steps": steps})
        if (args.log_interval > 0 and game_idx % args.log_interval == 0) or game_idx == args.games:
            log_summary(results, index=game_idx)


if __name__ == "__main__":
    main()
