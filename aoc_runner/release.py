from __future__ import annotations

import enum
from datetime import datetime, timedelta, timezone
from typing import Optional

from .config import DEFAULT_YEAR

# Puzzles unlock at midnight US-Eastern. This is the winter (EST) offset; if
# the platform ever moves to a permanent -4 the computed waits will be one
# hour late, so change it here rather than special-casing.
PUZZLE_UTC_OFFSET_HOURS = -5
PUZZLE_TZ = timezone(timedelta(hours=PUZZLE_UTC_OFFSET_HOURS))

# Further out than this and acquisition refuses instead of sleeping.
MAX_WAIT = timedelta(hours=1)
# Margin past the nominal release instant before fetching.
RELEASE_MARGIN = timedelta(seconds=5)


class GateDecision(enum.Enum):
    REFUSE = "refuse"
    WAIT = "wait"
    PROCEED = "proceed"


def release_instant(day: int, year: int = DEFAULT_YEAR) -> datetime:
    return datetime(year, 12, day, tzinfo=PUZZLE_TZ)


def time_until_release(day: int, now: Optional[datetime] = None, year: Optional[int] = None) -> timedelta:
    """Signed time until `day` unlocks; negative once it is out.

    A naive `now` is taken to be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return release_instant(day, year if year is not None else DEFAULT_YEAR) - now


def gate_decision(remaining: timedelta) -> GateDecision:
    if remaining > MAX_WAIT:
        return GateDecision.REFUSE
    if remaining > -RELEASE_MARGIN:
        return GateDecision.WAIT
    return GateDecision.PROCEED


def wait_seconds(remaining: timedelta) -> float:
    return max(0.0, (remaining + RELEASE_MARGIN).total_seconds())
