import sys
import os
from pathlib import Path

import pytest

# Ensure project root is on sys.path for `import aoc_runner.*`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep a developer's .env / shell settings out of the tests
for _name in ("AOC_YEAR", "AOC_INPUTS_DIR", "AOC_API_KEY_FILE", "AOC_BASE_URL", "AOC_HTTP_TIMEOUT_SECONDS"):
    os.environ.pop(_name, None)

from aoc_runner.config import RunnerConfig  # noqa: E402
from aoc_runner.days import DayRegistry  # noqa: E402
from aoc_runner.errors import PartNotFound  # noqa: E402
from aoc_runner.store import InputStore  # noqa: E402


class EchoSolver:
    """Part one: input length. Part two: stripped input upper-cased. Part three: fixed."""

    def __init__(self, data: bytes, debug: int):
        self.data = data
        self.debug = debug

    @classmethod
    def initialize(cls, data: bytes, debug: int) -> "EchoSolver":
        return cls(data, debug)

    def part_one(self, debug: int):
        return len(self.data)

    def part_two(self, debug: int):
        return self.data.decode().strip().upper()

    def run_any(self, part: int, debug: int):
        if part == 3:
            return "three"
        raise PartNotFound(part)


class FixedSolver:
    """Returns configurable answers and records which parts ran."""

    def __init__(self, answers, calls):
        self.answers = answers
        self.calls = calls

    def part_one(self, debug):
        self.calls.append(1)
        return self.answers[1]

    def part_two(self, debug):
        self.calls.append(2)
        return self.answers[2]

    def run_any(self, part, debug):
        self.calls.append(part)
        if part in self.answers:
            return self.answers[part]
        raise PartNotFound(part)


@pytest.fixture
def store(tmp_path: Path) -> InputStore:
    return InputStore(tmp_path / "inputs")


@pytest.fixture
def config(tmp_path: Path) -> RunnerConfig:
    return RunnerConfig(
        year=2023,
        inputs_dir=tmp_path / "inputs",
        api_key_file=tmp_path / "API_KEY",
        base_url="https://puzzles.test",
    )


@pytest.fixture
def echo_registry() -> DayRegistry:
    reg = DayRegistry("TEST")
    reg.register(1, EchoSolver)
    reg.register(2, EchoSolver)
    return reg


@pytest.fixture
def fixed():
    """Factory for a registry entry whose answers can be changed between runs."""

    class _Fixed:
        def __init__(self):
            self.answers = {1: "1", 2: "2"}
            self.calls = []

        def __call__(self, data: bytes, debug: int) -> FixedSolver:
            return FixedSolver(self.answers, self.calls)

    return _Fixed()


@pytest.fixture
def write_input(store: InputStore):
    def _write(day: int, text: str, variant: int = 0) -> Path:
        path = store.input_path(day, variant)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
