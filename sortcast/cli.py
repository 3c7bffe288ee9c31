"""Command line entry point.

Usage::

    sortcast                                  # open the window
    sortcast --algorithm merge --speed 10     # preselect algorithm and pace
    sortcast --headless --instant -a heap     # sort once, print metrics
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time

from sortcast import settings
from sortcast.app import run_app
from sortcast.catalog import ALGORITHMS, describe, get_algorithm
from sortcast.controller import RunController, RunState, shuffled_range
from sortcast.errors import SortcastError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    keys = ", ".join(key for _, key in ALGORITHMS)
    parser = argparse.ArgumentParser(prog="sortcast", description="Instrumented sorting algorithm engine.")
    parser.add_argument("-a", "--algorithm", default="quick", help=f"one of: {keys} (default: quick)")
    parser.add_argument("-n", "--size", type=int, default=settings.DATASET_SIZE,
                        help=f"number of values, a shuffled 1..N (default: {settings.DATASET_SIZE})")
    parser.add_argument("-s", "--speed", type=float, default=settings.DEFAULT_SPEED,
                        help=f"pace; each step waits max(1, 100/speed) ms (default: {settings.DEFAULT_SPEED:g})")
    parser.add_argument("--seed", type=int, default=None, help="shuffle seed")
    parser.add_argument("--headless", action="store_true", help="sort once without a window and print metrics")
    parser.add_argument("--instant", action="store_true", help="skip pacing delays (headless only)")
    parser.add_argument("--mute", action="store_true", help="disable tones")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _no_sleep(_seconds: float) -> None:
    pass


def run_headless(algorithm: str, size: int, speed: float, seed=None, instant: bool = False) -> int:
    info = get_algorithm(algorithm)
    controller = RunController(
        shuffled_range(size, random.Random(seed)),
        speed=speed,
        sleep=_no_sleep if instant else time.sleep,
    )
    before = controller.dataset
    state = controller.run(info.key)
    snap = controller.snapshot()
    print(describe(info.key))
    print()
    print(f"input:  {before}")
    print(f"output: {controller.dataset}")
    print(snap.describe())
    return 0 if state is RunState.COMPLETED else 1


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
    )
    logger.debug("Args: %s", vars(args))
    try:
        get_algorithm(args.algorithm)
        if args.headless:
            return run_headless(args.algorithm, args.size, args.speed, args.seed, args.instant)
        return run_app(args.algorithm, args.size, args.speed, args.seed, sound=settings.ENABLE_SOUND and not args.mute)
    except SortcastError as e:
        print(f"sortcast: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
