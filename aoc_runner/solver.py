from __future__ import annotations

from typing import Any, Callable, Protocol, Tuple

from .errors import NonUtf8InSolution, PartNotFound
from .timing import time_fn


class Solver(Protocol):
    """State produced by a day's initialize step.

    part_one/part_two may be called in either order, each at most once per
    initialize. run_any handles part numbers other than 1 and 2 and raises
    PartNotFound for anything it does not implement. Answers can be any
    value with a sensible str(); bytes are decoded as UTF-8.
    """

    def part_one(self, debug: int) -> Any:
        ...

    def part_two(self, debug: int) -> Any:
        ...

    def run_any(self, part: int, debug: int) -> Any:
        ...


# initialize(input, debug) -> Solver. The input is the caller's own copy and
# may be kept or mutated by the solver.
SolverFactory = Callable[[bytes, int], Solver]


def format_answer(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            raise NonUtf8InSolution() from None
    return str(value)


def run_both(factory: SolverFactory, data: bytes, debug: int = 0) -> Tuple[float, str, str]:
    """Initialize and run both parts as one timed unit (used for benchmarks)."""

    def _both():
        solver = factory(data, debug)
        return solver.part_one(debug), solver.part_two(debug)

    elapsed, (p1, p2) = time_fn(_both)
    return elapsed, format_answer(p1), format_answer(p2)


class TimedSolver:
    """Wraps a Solver so each part returns (elapsed seconds, answer text)."""

    def __init__(self, solver: Solver, debug: int = 0):
        self.solver = solver
        self.debug = debug

    @classmethod
    def initialize(cls, factory: SolverFactory, data: bytes, debug: int = 0) -> Tuple[float, "TimedSolver"]:
        elapsed, solver = time_fn(lambda: factory(data, debug))
        return elapsed, cls(solver, debug)

    def part_one(self) -> Tuple[float, str]:
        elapsed, ans = time_fn(lambda: self.solver.part_one(self.debug))
        return elapsed, format_answer(ans)

    def part_two(self) -> Tuple[float, str]:
        elapsed, ans = time_fn(lambda: self.solver.part_two(self.debug))
        return elapsed, format_answer(ans)

    def run_part(self, part: int) -> Tuple[float, str]:
        if part == 1:
            return self.part_one()
        if part == 2:
            return self.part_two()
        if part < 1:
            raise PartNotFound(part)
        elapsed, ans = time_fn(lambda: self.solver.run_any(part, self.debug))
        return elapsed, format_answer(ans)
