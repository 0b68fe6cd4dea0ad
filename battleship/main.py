"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence
from dataclasses import replace

from battleship.game.app.loop import ConsoleSession
from battleship.game.core.errors import ConfigError
from battleship.game.infra.app_data import apply_runtime_path_defaults
from battleship.game.infra.config import (
    load_console_settings,
    load_default_env_files,
    load_game_rules,
    validate_rules,
)
from battleship.game.infra.logging import setup_logging, shutdown_logging
from battleship.game.ui.console import ConsoleIO

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="battleship", description="Two-player console Battleship.")
    parser.add_argument("--width", type=int, help="grid columns")
    parser.add_argument("--height", type=int, help="grid rows (at most 26)")
    parser.add_argument("--ship-length", type=int, help="cells per ship")
    parser.add_argument("--max-ships", type=int, help="ships per player")
    parser.add_argument("--max-shots", type=int, help="shot budget per player and round")
    parser.add_argument("--no-countdown", action="store_true", help="skip the pre-battle countdown")
    parser.add_argument("--no-clear", action="store_true", help="never clear the terminal")
    parser.add_argument(
        "--auto-place",
        action="store_true",
        help="place every fleet at random instead of prompting",
    )
    parser.add_argument("--seed", type=int, help="seed for --auto-place")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Battleship console application."""
    args = build_parser().parse_args(argv)
    load_default_env_files()
    paths = apply_runtime_path_defaults()
    setup_logging()
    logger.info("app_data_paths root=%s logs=%s", paths["root"], paths["logs"])

    try:
        rules = load_game_rules()
        overrides = {
            name: value
            for name, value in (
                ("width", args.width),
                ("height", args.height),
                ("ship_length", args.ship_length),
                ("max_ships", args.max_ships),
                ("max_shots", args.max_shots),
            )
            if value is not None
        }
        rules = replace(rules, **overrides)
        validate_rules(rules)
        settings = load_console_settings()
    except ConfigError as exc:
        logger.error("config_invalid error=%s", exc)
        print(f"Invalid configuration: {exc}")
        shutdown_logging()
        return 2

    if args.no_countdown:
        settings = replace(settings, countdown_seconds=0)
    if args.no_clear:
        settings = replace(settings, clear_screen=False)
    rng = random.Random(args.seed) if args.auto_place else None

    session = ConsoleSession(ConsoleIO(settings=settings), rules, auto_place_rng=rng)
    try:
        game = session.run()
        logger.info("session_finished rounds=%d", game.round_number)
    except EOFError:
        logger.info("session_aborted reason=eof")
        return 0
    except KeyboardInterrupt:
        logger.info("session_aborted reason=interrupt")
        return 130
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
