"""Application entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace

from chesstable.core.enums import Color
from chesstable.ui.dialogs.settings_dialog import AppSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesstable",
        description="Play chess against the computer.",
    )
    parser.add_argument("--black", action="store_true", help="play the black pieces")
    parser.add_argument("--fen", help="start from this FEN instead of the initial position")
    parser.add_argument("--depth", type=int, help="maximum search depth in plies")
    parser.add_argument("--time-ms", type=int, help="search time per move in milliseconds")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        type=str.upper,
        help="root logger level",
    )
    return parser


def settings_from_args(
    args: argparse.Namespace,
    base: AppSettings | None = None,
) -> AppSettings:
    """Overlay command-line options on *base* (environment settings by default)."""
    settings = base if base is not None else AppSettings.from_env()
    overrides: dict[str, object] = {}
    if args.black:
        overrides["human_color"] = Color.BLACK
    if args.fen:
        overrides["start_fen"] = args.fen
    if args.depth is not None:
        overrides["engine_depth"] = max(1, args.depth)
    if args.time_ms is not None:
        overrides["engine_time_ms"] = max(1, args.time_ms)
    if args.log_level:
        overrides["log_level"] = args.log_level
    return replace(settings, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Launch the Chesstable application."""
    from chesstable.ui.bootstrap import configure_logging, run_application

    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.log_level)
    sys.exit(run_application(settings, [sys.argv[0]]))


if __name__ == "__main__":
    main()
