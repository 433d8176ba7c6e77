from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import EmptyPart, NoDaySpecified, ParseError

ALL_DAYS = 0
FIRST_DAY = 1
LAST_DAY = 25


@dataclass(frozen=True)
class DaySpec:
    day: int
    # Empty means both canonical parts.
    parts: Tuple[int, ...] = ()


def _parse_number(segment: str, arg: str) -> int:
    # u32 semantics: ascii digits with at most one leading '+', no whitespace
    digits = segment[1:] if segment.startswith("+") else segment
    if not (digits.isascii() and digits.isdigit()):
        raise ParseError(part=segment, arg=arg)
    value = int(digits)
    if value > 0xFFFFFFFF:
        raise ParseError(part=segment, arg=arg)
    return value


def parse_day(word: str) -> List[DaySpec]:
    """Parse one selector token.

    `5` runs both parts of day 5, `5.1` only part one, `5.1.2` both parts
    explicitly and `0` (optionally with parts) every day 1..25.
    """
    first, *rest = word.split(".")
    if not first:
        raise NoDaySpecified(arg=word)
    day = _parse_number(first, word)

    parts = []
    for segment in rest:
        if not segment:
            raise EmptyPart(arg=word)
        parts.append(_parse_number(segment, word))

    if day == ALL_DAYS:
        return [DaySpec(d, tuple(parts)) for d in range(FIRST_DAY, LAST_DAY + 1)]
    return [DaySpec(day, tuple(parts))]


def parse_days(words: Iterable[str]) -> List[DaySpec]:
    specs: List[DaySpec] = []
    for word in words:
        specs.extend(parse_day(word))
    return specs
