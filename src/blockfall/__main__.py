"""Command line entry point.

Run with: `python -m blockfall`

Without arguments this opens the pygame window.  ``--headless`` instead
plays a seeded game by ticking it manually and prints the final frame, useful
as a smoke test on machines without a display.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from .controller import GameController
from .grid import DEFAULT_HEIGHT, DEFAULT_WIDTH
from .scheduler import ManualScheduler
from .view import TextView


def run_headless(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    seed: Optional[int] = None,
    ticks: int = 200,
    echo: bool = False,
    stream: Optional[TextIO] = None,
) -> GameController:
    """Tick a game up to ``ticks`` times, or until it ends, then print it."""

    stream = stream or sys.stdout
    view = TextView(stream, echo=echo)
    scheduler = ManualScheduler()
    game = GameController(width, height, view=view, scheduler=scheduler, seed=seed)
    game.start()
    for _ in range(ticks):
        if not scheduler.tick():
            break
    stream.write(view.frame() + "\n")
    return game


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Board height in cells.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece and column selection.")
    parser.add_argument("--headless", action="store_true", help="Tick a game without opening a window.")
    parser.add_argument("--ticks", type=int, default=200, help="Maximum ticks for a headless game.")
    parser.add_argument("--echo", action="store_true", help="Print every frame of a headless game.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    if args.headless:
        game = run_headless(args.width, args.height, seed=args.seed, ticks=args.ticks, echo=args.echo)
        logging.getLogger(__name__).info("Finished in state %s", game.state.value)
        return 0

    from .run_pygame import main as run_window

    run_window(args.width, args.height, args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
