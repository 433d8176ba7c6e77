"""Command line entry point.

Examples:
    aoc-runner 1 2.1          # day 1 both parts, day 2 part one
    aoc-runner 0 -m bench     # benchmark every day
    aoc-runner 5 -m s -t 1    # save answers for day 5's first example
    aoc-runner 0 -m v -e      # validate all days, stop at the first mismatch
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import RunnerConfig, configure_logging
from .days import DAYS
from .errors import AocError
from .modes import Mode
from .runner import Runner, Settings
from .store import MAX_VARIANT


def _mode(value: str) -> Mode:
    try:
        return Mode.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _variant(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid test number {value!r}") from None
    if not 0 <= n <= MAX_VARIANT:
        raise argparse.ArgumentTypeError(f"test number must be in 0..{MAX_VARIANT}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="aoc-runner", description="Run, benchmark, save or validate daily puzzle solvers.")
    p.add_argument(
        "days",
        nargs="*",
        help="Days to run. 0 runs all 25. Use day.part to pick parts, e.g. 2.1 or 2.1.2.",
    )
    p.add_argument("-m", "--mode", type=_mode, default=Mode.RUN, help="run (r), bench (b), save (s) or validate (v)")
    p.add_argument(
        "-s", "--bench-time", type=int, default=1000,
        help="Milliseconds to benchmark each day for. Overridden by --bench-count.",
    )
    p.add_argument("-c", "--bench-count", type=int, default=0, help="Fixed number of benchmark iterations.")
    p.add_argument("-a", "--hide-answers", action="store_true", help="Hide answers in output.")
    p.add_argument("-e", "--exit-on-incorrect", action="store_true", help="Stop at the first incorrect answer in validate mode.")
    p.add_argument("-d", "--debug", action="count", default=0, help="Debug level passed to solvers; repeat for more.")
    p.add_argument("-t", "--test", type=_variant, default=0, help="Use example input N instead of the real input (0).")
    p.add_argument("-r", "--runner-debug", action="count", default=0, help="Debug output for the runner itself.")
    p.add_argument("--metrics-file", type=Path, default=None, help="Write prometheus metrics to this file after the run.")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = RunnerConfig.from_env()
    configure_logging(config.log_level, args.runner_debug)

    settings = Settings(
        days=args.days,
        mode=args.mode,
        bench_time=args.bench_time,
        bench_count=args.bench_count,
        hide_answers=args.hide_answers,
        exit_on_incorrect=args.exit_on_incorrect,
        debug=args.debug,
        test=args.test,
        runner_debug=args.runner_debug,
        metrics_file=args.metrics_file,
    )
    try:
        DAYS.discover()
        Runner(settings, config).run()
    except (AocError, OSError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
