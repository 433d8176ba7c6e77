"""Save/validate answer files ("golden files").

Save overwrites the stored answer of every requested part. Validate compares
fresh answers against stored ones, records answers for empty slots and counts
mismatches. The answer file is rewritten after each day in both modes.
"""
from __future__ import annotations

import enum
import json
import logging
import sys
from typing import Callable, Iterable, Optional, Sequence, TextIO, Tuple

from .bench.metrics import RunnerMetrics
from .days import DayRegistry
from .errors import IncorrectAnswer, MultipleIncorrect
from .modes import Mode
from .selector import DaySpec
from .solver import TimedSolver
from .store import AnswerRecord, InputStore

logger = logging.getLogger("aoc_runner.golden")

DEFAULT_PARTS: Tuple[int, ...] = (1, 2)


class Outcome(enum.Enum):
    SAVED = "saved"
    UNCHANGED = "unchanged"
    REPLACED = "replaced"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _label(variant: int) -> str:
    return f"test {variant:02} answer" if variant > 0 else "main answer"


class GoldenFileEngine:
    def __init__(
        self,
        store: InputStore,
        load_input: Callable[[int, int], bytes],
        solvers: DayRegistry,
        *,
        debug: int = 0,
        out: Optional[TextIO] = None,
        metrics: Optional[RunnerMetrics] = None,
    ):
        self.store = store
        self.load_input = load_input
        self.solvers = solvers
        self.debug = debug
        self.out = out or sys.stdout
        self.metrics = metrics

    def _emit(self, day: int, part: int, message: str) -> None:
        print(f"d{day:02}p{part:02}: {message}", file=self.out)

    def _count(self, mode: Mode, outcome: Outcome) -> None:
        if self.metrics is not None:
            self.metrics.count_answer(mode.value, outcome.value)

    def reconcile(
        self,
        day: int,
        variant: int,
        parts: Sequence[int],
        mode: Mode,
        exit_on_incorrect: bool = False,
    ) -> Tuple[float, int]:
        """Run the requested parts of `day` and save or check their answers.

        Returns (solver seconds, incorrect count). Raises IncorrectAnswer on the
        first mismatch when exit_on_incorrect is set.
        """
        if mode not in (Mode.SAVE, Mode.VALIDATE):
            raise ValueError(f"reconcile does not handle mode {mode.value!r}")

        record = self.store.load_answers(day, variant)
        if record is None:
            if mode is Mode.VALIDATE:
                logger.debug(
                    "Answer file %s missing, saving current answers",
                    self.store.answer_path(day, variant),
                )
                elapsed, _ = self.reconcile(day, variant, parts, Mode.SAVE)
                return elapsed, 0
            record = AnswerRecord()

        data = self.load_input(day, variant)
        total, solver = TimedSolver.initialize(self.solvers.get(day), data, self.debug)
        incorrect = 0

        for part in parts or DEFAULT_PARTS:
            elapsed, answer = solver.run_part(part)
            total += elapsed
            saved = record.get(part)

            if mode is Mode.SAVE:
                outcome = self._save_part(day, part, variant, saved, answer)
                record.set(part, answer)
            elif not saved:
                outcome = Outcome.SAVED
                self._emit(day, part, f"Saving {_label(variant)} {_q(answer)}")
                record.set(part, answer)
            elif saved == answer:
                outcome = Outcome.CORRECT
                if variant > 0:
                    self._emit(day, part, f"Test {variant:02} answer is correct: {_q(answer)}")
                else:
                    self._emit(day, part, f"Answer is correct: {_q(answer)}")
            else:
                outcome = Outcome.INCORRECT
                label = f"Test {variant:02} answer" if variant > 0 else "main answer"
                self._emit(day, part, f"{label} {_q(answer)} did not match saved answer {_q(saved)}")
                self._count(mode, outcome)
                if exit_on_incorrect:
                    raise IncorrectAnswer(day=day, part=part, expected=saved, actual=answer)
                incorrect += 1
                continue

            self._count(mode, outcome)

        path = self.store.save_answers(day, variant, record)
        logger.debug("Wrote %s", path)
        return total, incorrect

    def _save_part(self, day: int, part: int, variant: int, saved: str, answer: str) -> Outcome:
        if not saved:
            self._emit(day, part, f"Saving {_label(variant)} {_q(answer)}")
            return Outcome.SAVED
        if saved == answer:
            if variant > 0:
                self._emit(day, part, f"Test {variant:02} answer is still {_q(answer)}")
            else:
                self._emit(day, part, f"Answer is still {_q(answer)}")
            return Outcome.UNCHANGED
        if variant > 0:
            self._emit(day, part, f"Replacing test {variant:02} answer {_q(saved)} with {_q(answer)}")
        else:
            self._emit(day, part, f"Replacing main answer {_q(saved)} with {_q(answer)}")
        return Outcome.REPLACED

    def save_days(self, specs: Iterable[DaySpec], variant: int = 0) -> float:
        total = 0.0
        for spec in specs:
            elapsed, _ = self.reconcile(spec.day, variant, spec.parts, Mode.SAVE)
            total += elapsed
        return total

    def validate_days(self, specs: Iterable[DaySpec], variant: int = 0, exit_on_incorrect: bool = False) -> float:
        total = 0.0
        incorrect = 0
        for spec in specs:
            elapsed, bad = self.reconcile(spec.day, variant, spec.parts, Mode.VALIDATE, exit_on_incorrect)
            total += elapsed
            incorrect += bad
        if incorrect:
            raise MultipleIncorrect(incorrect)
        print("All answers were correct!", file=self.out)
        return total
