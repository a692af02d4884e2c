"""Headless driver: run an animation session for a number of ticks."""

import argparse
import logging
import sys
from typing import List, Optional

from .common.exceptions import LedChainError
from .core.config import SessionConfig, SystemDefaults
from .core.models import load_config
from .patterns.engine import AnimationSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LED chain animation simulator")
    parser.add_argument("--config", help="YAML session configuration file")
    parser.add_argument(
        "--mode",
        choices=SystemDefaults.MODES,
        help="Animation mode (overrides config)",
    )
    parser.add_argument(
        "--ticks", type=int, default=300, help="Number of ticks to simulate"
    )
    parser.add_argument("--length", type=int, help="Number of LEDs (overrides config)")
    parser.add_argument("--seed", type=int, help="Random seed for flares")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else SessionConfig()
        overrides = {
            name: value
            for name, value in (
                ("mode", args.mode),
                ("length", args.length),
                ("seed", args.seed),
            )
            if value is not None
        }
        if overrides:
            config.update(overrides)

        session = AnimationSession(config)
        frames = session.run(args.ticks)
    except LedChainError as e:
        logger.error(f"Simulation failed: {e}")
        return 1

    state = session.get_state()
    logger.info(
        f"Ran {args.ticks} ticks in {session.mode} mode: {frames} frames latched, "
        f"{state['chain']['lit_modules']}/{state['length']} LEDs lit, "
        f"{state['metrics']['error_count']} errors"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
