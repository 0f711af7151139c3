"""Entry point for goalkick package."""

import argparse
from dataclasses import replace
from typing import List, Optional


AIM_CHOICES = ("center", "left", "right", "random")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Goalkick - penalty kick simulation",
        prog="goalkick",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random aim and jitter (default: GOALKICK_SEED or unseeded)",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=1.0 / 60.0,
        help="Seconds per tick (default: 1/60)",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=500,
        help="Give up after this many ticks (default: 500)",
    )
    parser.add_argument(
        "--aim",
        choices=AIM_CHOICES,
        default="center",
        help="Aim spot, or 'random' for a seeded pick with jitter (default: center)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the tick log for every tick with events",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: GOALKICK_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one kick and print the summary."""
    args = build_parser().parse_args(argv)

    from goalkick.config import get_config
    from goalkick.logging_config import setup_logging
    from goalkick.simulation.testing.scenario import SCENARIOS, penalty_random, run_scenario
    from goalkick.ui.console import ConsoleView

    config = get_config()
    setup_logging(args.log_level or config.log_level)

    if args.aim == "random":
        seed = args.seed if args.seed is not None else config.seed
        scenario = penalty_random(seed)
    else:
        scenario = SCENARIOS[args.aim]
    scenario = replace(scenario, dt=args.dt, max_ticks=args.max_ticks)

    result = run_scenario(scenario, config=config, record=args.verbose)

    view = ConsoleView()
    if args.verbose and result.log is not None:
        view.show_log(result.log.format(only_events=True))
    view.show_scenario(result)
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
