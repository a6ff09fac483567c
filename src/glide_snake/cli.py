"""Command-line tools for Glide Snake."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glide-snake",
        description="Glide Snake headless simulation and high-score tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play headless runs with random input.",
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument("--seed", type=int, default=0)
    sim_p.add_argument(
        "--frame-ms", type=float, default=1000.0 / 60.0,
        help="Synthetic frame interval in milliseconds.",
    )
    sim_p.add_argument("--max-frames", type=int, default=20_000)
    sim_p.add_argument("--turn-chance", type=float, default=0.1)
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument(
        "--highscores", type=str, default=None,
        help="Record finished runs into this high-score file.",
    )

    # --- highscores ---
    hs_p = sub.add_parser("highscores", help="Print a high-score table.")
    hs_p.add_argument("path", help="Path to the high-score JSON file.")
    hs_p.add_argument(
        "--config", type=str, default=None,
        help="Config whose highscore_limit the table was saved with.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a config file.")
    cfg_p.add_argument("output", help="Destination JSON path.")
    cfg_p.add_argument(
        "--config", type=str, default=None,
        help="Start from this config instead of the defaults.",
    )

    return parser


def _load_config(path: str | None):
    from glide_snake.config import GameConfig

    return GameConfig.load(path) if path else GameConfig()


def _run_simulate(args: argparse.Namespace) -> int:
    from glide_snake.highscores import HighScoreTable
    from glide_snake.simulation import simulate

    config = _load_config(args.config)
    table = (
        HighScoreTable(args.highscores, limit=config.highscore_limit)
        if args.highscores else None
    )
    result = simulate(
        games=args.games,
        seed=args.seed,
        frame_ms=args.frame_ms,
        max_frames=args.max_frames,
        turn_chance=args.turn_chance,
        config=config,
        highscores=table,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_highscores(args: argparse.Namespace) -> int:
    from glide_snake.highscores import HighScoreTable, format_time

    config = _load_config(args.config)
    table = HighScoreTable(args.path, limit=config.highscore_limit)
    entries = table.entries()
    if not entries:
        print("No high scores yet.")  # noqa: T201
        return 0
    for rank, entry in enumerate(entries, start=1):
        marker = " *" if table.is_last(entry) else ""
        print(f"#{rank}  {entry.score:>4}  {format_time(entry.time_ms)}{marker}")  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    _load_config(args.config).save(args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``glide-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "highscores": _run_highscores,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
