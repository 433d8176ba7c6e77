"""Local input/answer store.

Layout under the store root (default ./inputs):

    dayNN/input.txt       real puzzle input (variant 0)
    dayNN/inputKK.txt     example KK extracted from the prompt
    dayNN/answer.txt      saved answers for the real input, one part per line
    dayNN/answerKK.txt    saved answers for example KK
    dayNN/prompt.html     raw prompt page
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

REAL_INPUT = 0
MAX_VARIANT = 255


class InputStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def day_dir(self, day: int) -> Path:
        return self.root / f"day{day:02}"

    def input_path(self, day: int, variant: int = REAL_INPUT) -> Path:
        if variant > 0:
            return self.day_dir(day) / f"input{variant:02}.txt"
        return self.day_dir(day) / "input.txt"

    def answer_path(self, day: int, variant: int = REAL_INPUT) -> Path:
        if variant > 0:
            return self.day_dir(day) / f"answer{variant:02}.txt"
        return self.day_dir(day) / "answer.txt"

    def prompt_path(self, day: int) -> Path:
        return self.day_dir(day) / "prompt.html"

    def has_input(self, day: int) -> bool:
        return self.input_path(day, REAL_INPUT).exists()

    def load_answers(self, day: int, variant: int = REAL_INPUT) -> Optional["AnswerRecord"]:
        path = self.answer_path(day, variant)
        if not path.exists():
            return None
        return AnswerRecord.parse(path.read_text(encoding="utf-8"))

    def save_answers(self, day: int, variant: int, record: "AnswerRecord") -> Path:
        path = self.answer_path(day, variant)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(record.dump(), encoding="utf-8")
        return path


@dataclass
class AnswerRecord:
    """Per-part answers; slot i holds part i+1. Empty slot means nothing saved."""

    slots: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "AnswerRecord":
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return cls([line[:-1] if line.endswith("\r") else line for line in lines])

    def get(self, part: int) -> str:
        idx = part - 1
        if 0 <= idx < len(self.slots):
            return self.slots[idx]
        return ""

    def set(self, part: int, answer: str) -> None:
        idx = part - 1
        if idx >= len(self.slots):
            self.slots.extend([""] * (idx + 1 - len(self.slots)))
        self.slots[idx] = answer

    def dump(self) -> str:
        return "\n".join(self.slots) + "\n"
