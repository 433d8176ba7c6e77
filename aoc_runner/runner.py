from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO

import httpx

from .bench.engine import BenchConfig, BenchmarkEngine
from .bench.metrics import RunnerMetrics
from .client import PuzzleClient
from .config import RunnerConfig
from .days import DAYS, DayRegistry
from .golden import GoldenFileEngine
from .inputs import InputAcquirer
from .modes import Mode
from .selector import FIRST_DAY, LAST_DAY, DaySpec, parse_days
from .solver import TimedSolver
from .store import InputStore
from .timing import readable_time

logger = logging.getLogger("aoc_runner.runner")


@dataclass
class Settings:
    """Command-line level settings for one invocation."""

    days: List[str] = field(default_factory=list)
    mode: Mode = Mode.RUN
    # Bench duration budget in milliseconds; ignored when bench_count > 0.
    bench_time: int = 1000
    bench_count: int = 0
    hide_answers: bool = False
    exit_on_incorrect: bool = False
    # Passed through to solvers.
    debug: int = 0
    # 0 is the real input, 1..255 an example from the prompt.
    test: int = 0
    runner_debug: int = 0
    metrics_file: Optional[Path] = None


class Runner:
    def __init__(
        self,
        settings: Settings,
        config: Optional[RunnerConfig] = None,
        *,
        registry: DayRegistry = DAYS,
        out: Optional[TextIO] = None,
        transport: Optional[httpx.BaseTransport] = None,
        now: Optional[Callable[[], datetime]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.settings = settings
        self.config = config or RunnerConfig.from_env()
        self.registry = registry
        self.out = out or sys.stdout
        self.store = InputStore(self.config.inputs_dir)
        self.metrics = RunnerMetrics()
        self._transport = transport
        self._now = now
        self._sleep = sleep
        self._acquirer: Optional[InputAcquirer] = None

    @property
    def acquirer(self) -> InputAcquirer:
        # Created on first use so runs served entirely from the local store never build a client.
        if self._acquirer is None:
            client = PuzzleClient(
                self.config.api_key_file,
                year=self.config.year,
                base_url=self.config.base_url,
                timeout=self.config.http_timeout,
                transport=self._transport,
            )
            kwargs = {}
            if self._now is not None:
                kwargs["now"] = self._now
            if self._sleep is not None:
                kwargs["sleep"] = self._sleep
            self._acquirer = InputAcquirer(self.store, client, year=self.config.year, **kwargs)
        return self._acquirer

    def get_input(self, day: int, variant: Optional[int] = None) -> bytes:
        return self.acquirer.acquire(day, self.settings.test if variant is None else variant)

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def run(self) -> float:
        """Run the selected mode over the selected days; returns total solver seconds."""
        runner_start = time.perf_counter()
        logger.debug("%r", self.settings)
        logger.debug("Starting runner")

        specs = self._select(parse_days(self.settings.days))
        handlers: Dict[Mode, Callable[[List[DaySpec]], float]] = {
            Mode.RUN: self.run_days,
            Mode.BENCH: self.benchmark,
            Mode.SAVE: self.save,
            Mode.VALIDATE: self.validate,
        }
        try:
            solver_time = handlers[self.settings.mode](specs)
        finally:
            if self._acquirer is not None:
                self._acquirer.close()
            if self.settings.metrics_file is not None:
                self.metrics.write(self.settings.metrics_file)

        runner_time = time.perf_counter() - runner_start
        logger.debug(
            "Total time: %s\nRunner time: %s",
            readable_time(runner_time),
            readable_time(max(0.0, runner_time - solver_time)),
        )
        return solver_time

    def _select(self, specs: List[DaySpec]) -> List[DaySpec]:
        selected = []
        for spec in specs:
            if not (FIRST_DAY <= spec.day <= LAST_DAY) or spec.day not in self.registry:
                logger.warning("Day %d not found, skipping", spec.day)
                continue
            selected.append(spec)
        return selected

    def _answer_text(self, answer: str) -> str:
        return "" if self.settings.hide_answers else answer

    def _print_part(self, day: int, part: int, answer: str, seconds: float) -> None:
        line = f"d{day:02}p{part:02}: ({readable_time(seconds)})"
        text = self._answer_text(answer)
        self._print(f"{line} {text}" if text else line)

    def run_days(self, specs: List[DaySpec]) -> float:
        all_time = 0.0
        for spec in specs:
            day = spec.day
            logger.debug("Starting day %d", day)
            data = self.get_input(day)
            day_time, solver = TimedSolver.initialize(self.registry.get(day), data, self.settings.debug)
            self._print_part(day, 0, "", day_time)

            for part in spec.parts or (1, 2):
                elapsed, answer = solver.run_part(part)
                self.metrics.observe_part(day, part, elapsed)
                day_time += elapsed
                self._print_part(day, part, answer, elapsed)

            self._print(f"d{day:02} total: {readable_time(day_time)}")
            self._print()
            all_time += day_time
        self._print(f"All: {readable_time(all_time)}")
        return all_time

    def benchmark(self, specs: List[DaySpec]) -> float:
        if hasattr(sys, "gettotalrefcount"):
            logger.warning("Running benchmark on a debug build of Python")

        cfg = BenchConfig(
            duration_seconds=self.settings.bench_time / 1000.0,
            fixed_iterations=self.settings.bench_count,
        )
        engine = BenchmarkEngine(metrics=self.metrics)
        avg_sum = 0.0
        total_time = 0.0
        for spec in specs:
            data = self.get_input(spec.day)
            sample = engine.run(spec.day, self.registry.get(spec.day), data, cfg, self.settings.debug)
            line = (
                f"d{spec.day:02}: ran {sample.iterations:>7} times over "
                f"{readable_time(sample.total_seconds):>10} for avg of "
                f"{readable_time(sample.average_seconds):>10}, median "
                f"{readable_time(sample.median_seconds):>10}, min "
                f"{readable_time(sample.min_seconds):>10}"
            )
            if not self.settings.hide_answers:
                line += " " + json.dumps(list(sample.answers), ensure_ascii=False)
            self._print(line)
            self._check_bench_answers(spec.day, sample.answers)
            avg_sum += sample.average_seconds
            total_time += sample.total_seconds

        self._print(f"All: run avg of {readable_time(avg_sum):>22}")
        return total_time

    def _check_bench_answers(self, day: int, answers) -> None:
        record = self.store.load_answers(day, self.settings.test)
        if record is None:
            return
        for part, answer in enumerate(answers, start=1):
            saved = record.get(part)
            if saved and saved != answer:
                logger.warning(
                    "d%02dp%02d: benchmarked answer %s does not match saved answer %s",
                    day, part, json.dumps(answer), json.dumps(saved),
                )

    def _golden(self) -> GoldenFileEngine:
        return GoldenFileEngine(
            self.store,
            self.get_input,
            self.registry,
            debug=self.settings.debug,
            out=self.out,
            metrics=self.metrics,
        )

    def save(self, specs: List[DaySpec]) -> float:
        return self._golden().save_days(specs, self.settings.test)

    def validate(self, specs: List[DaySpec]) -> float:
        return self._golden().validate_days(specs, self.settings.test, self.settings.exit_on_incorrect)
