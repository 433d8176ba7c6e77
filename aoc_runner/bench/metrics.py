from __future__ import annotations

from pathlib import Path
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, write_to_textfile

# Solver runs span microseconds to minutes.
ITERATION_BUCKETS = (
    1e-6, 1e-5, 1e-4, 5e-4, 1e-3, 5e-3, 1e-2, 5e-2, 0.1, 0.5, 1.0, 5.0, 30.0, 120.0,
)


class RunnerMetrics:
    """Prometheus metrics for one runner invocation.

    Lives in its own CollectorRegistry so repeated runs in one process (tests)
    never collide on the global default registry.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.bench_iteration_seconds = Histogram(
            "aoc_bench_iteration_seconds",
            "Duration of one end-to-end solver run (initialize + both parts) in seconds",
            ["day"],
            buckets=ITERATION_BUCKETS,
            registry=self.registry,
        )
        self.bench_iterations_total = Counter(
            "aoc_bench_iterations_total",
            "Timed benchmark iterations",
            ["day"],
            registry=self.registry,
        )
        self.answers_total = Counter(
            "aoc_answers_total",
            "Answer file reconciliation outcomes",
            ["mode", "outcome"],
            registry=self.registry,
        )
        self.part_seconds = Histogram(
            "aoc_part_seconds",
            "Duration of a single part in seconds",
            ["day", "part"],
            buckets=ITERATION_BUCKETS,
            registry=self.registry,
        )

    def observe_iteration(self, day: int, seconds: float) -> None:
        self.bench_iteration_seconds.labels(day=str(day)).observe(seconds)
        self.bench_iterations_total.labels(day=str(day)).inc()

    def observe_part(self, day: int, part: int, seconds: float) -> None:
        self.part_seconds.labels(day=str(day), part=str(part)).observe(seconds)

    def count_answer(self, mode: str, outcome: str) -> None:
        self.answers_total.labels(mode=mode, outcome=outcome).inc()

    def sample(self, name: str, labels: dict) -> float:
        val = self.registry.get_sample_value(name, labels)
        return float(val) if val is not None else 0.0

    def write(self, path: Path) -> None:
        write_to_textfile(str(path), self.registry)
