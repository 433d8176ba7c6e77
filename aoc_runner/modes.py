from __future__ import annotations

import enum


class Mode(enum.Enum):
    RUN = "run"
    BENCH = "bench"
    SAVE = "save"
    VALIDATE = "validate"

    @classmethod
    def parse(cls, value: str) -> "Mode":
        """Accept full names and their one-letter short forms (r/b/s/v)."""
        v = (value or "").strip().lower()
        for mode in cls:
            if v in (mode.value, mode.value[0]):
                return mode
        raise ValueError(f"invalid mode {value!r}; choose from run, bench, save, validate")
