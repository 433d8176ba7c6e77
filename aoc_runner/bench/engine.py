from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..solver import SolverFactory, run_both
from .metrics import RunnerMetrics

logger = logging.getLogger("aoc_runner.bench")


@dataclass(frozen=True)
class BenchConfig:
    duration_seconds: float = 1.0
    # Overrides duration_seconds when > 0.
    fixed_iterations: int = 0
    warmup: int = 10
    batch: int = 10


@dataclass
class BenchmarkSample:
    day: int
    iterations: int
    total_seconds: float
    answers: Tuple[str, str]
    samples: List[float] = field(default_factory=list, repr=False)

    @property
    def average_seconds(self) -> float:
        if self.iterations == 0:
            return 0.0
        return self.total_seconds / self.iterations

    @property
    def median_seconds(self) -> float:
        return statistics.median(self.samples) if self.samples else 0.0

    @property
    def min_seconds(self) -> float:
        return min(self.samples) if self.samples else 0.0


class BenchmarkEngine:
    """Repeatedly runs a day end to end (initialize + part one + part two).

    Every run initializes a fresh solver from immutable input bytes, so nothing
    carries over between iterations. Runs are strictly sequential.
    """

    def __init__(self, metrics: Optional[RunnerMetrics] = None):
        self.metrics = metrics

    def run(self, day: int, factory: SolverFactory, data: bytes, config: BenchConfig, debug: int = 0) -> BenchmarkSample:
        for _ in range(config.warmup):
            run_both(factory, bytes(data), debug)

        samples: List[float] = []
        answers = ("", "")

        def _one() -> None:
            nonlocal answers
            elapsed, p1, p2 = run_both(factory, bytes(data), debug)
            answers = (p1, p2)
            samples.append(elapsed)
            if self.metrics is not None:
                self.metrics.observe_iteration(day, elapsed)

        total = 0.0
        if config.fixed_iterations > 0:
            for _ in range(config.fixed_iterations):
                _one()
                total += samples[-1]
        else:
            batch = max(1, config.batch)
            # Budget is a floor: keep going in whole batches until it is met.
            while total < config.duration_seconds or not samples:
                for _ in range(batch):
                    _one()
                    total += samples[-1]

        logger.debug("d%02d: %d timed runs after %d warm-up runs", day, len(samples), config.warmup)
        return BenchmarkSample(
            day=day,
            iterations=len(samples),
            total_seconds=total,
            answers=answers,
            samples=samples,
        )
