from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import GameConfig
from .errors import ConfigurationError
from .input import Action
from .logging_config import configure_logging, level_from_verbosity

logger = logging.getLogger(__name__)

# A short walk for --headless runs
_HEADLESS_WALK = (
    [Action.MOVE_RIGHT] * 3
    + [Action.MOVE_DOWN] * 3
    + [Action.MOVE_LEFT] * 3
    + [Action.MOVE_UP] * 3
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="delve",
        description="Turn-based dungeon crawler",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file overriding defaults")
    parser.add_argument("--seed", type=int, default=None, help="Seed for level generation")
    parser.add_argument("--headless", action="store_true", help="Play a scripted walk and print the final frame")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    configure_logging(level_from_verbosity(args.verbose))

    try:
        config = GameConfig.load(args.config)
        if args.seed is not None:
            config.seed = args.seed
        if args.headless:
            from .app.loop import run_headless

            for line in run_headless(config, _HEADLESS_WALK):
                print(line)
            return 0

        from .app.arcade_app import run_gui

        return run_gui(config)
    except ConfigurationError as ex:
        logger.error("%s", ex)
        print(f"delve: {ex}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
