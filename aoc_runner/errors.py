from __future__ import annotations

from datetime import timedelta
from typing import Optional


class AocError(Exception):
    """Base class for every error the runner raises on purpose."""


class PartNotFound(AocError):
    def __init__(self, part: Optional[int] = None):
        self.part = part
        if part is None:
            super().__init__("Part not found")
        else:
            super().__init__(f"Part {part} not found")


class HasNotReleasedYet(AocError):
    def __init__(self, day: int, duration: timedelta):
        self.day = day
        self.duration = duration
        total = int(duration.total_seconds())
        days, rem = divmod(total, 86400)
        hours, rem = divmod(rem, 3600)
        minutes, seconds = divmod(rem, 60)
        super().__init__(
            f"Day {day} hasn't released yet. "
            f"It releases {days}:{hours:02}:{minutes:02}:{seconds:02} from now."
        )


class NoTestInputFound(AocError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No test input found with the name {path}")


class MissingApiKey(AocError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"API key file {path} is missing or empty")


class RequestFailed(AocError):
    """Transport-level failure (DNS, connect, read) talking to the puzzle site."""

    def __init__(self, url: str, source: Exception):
        self.url = url
        self.source = source
        super().__init__(f"Request to {url} failed: {source}")


class InputResponse(AocError):
    def __init__(self, status: int, response: str):
        self.status = status
        self.response = response
        super().__init__(f"Couldn't fetch input from network. Status: {status}\nContent:\n{response}")


class PromptResponse(AocError):
    def __init__(self, status: int, response: str):
        self.status = status
        self.response = response
        super().__init__(f"Couldn't fetch prompt from network. Status {status}, content:\n{response}")


class NoDaySpecified(AocError):
    def __init__(self, arg: str):
        self.arg = arg
        super().__init__(f"No day specified in argument `{arg}`")


class ParseError(AocError):
    def __init__(self, part: str, arg: str):
        self.part = part
        self.arg = arg
        super().__init__(f"Could not parse `{part}` as integer in argument `{arg}`")


class EmptyPart(AocError):
    def __init__(self, arg: str):
        self.arg = arg
        super().__init__(f"Part was empty in {arg}")


class NonUtf8InPromptCodeBlock(AocError):
    def __init__(self):
        super().__init__("Non-UTF-8 data found in code block on the prompt page")


class NonUtf8InSolution(AocError):
    def __init__(self):
        super().__init__("Non-UTF-8 data found in solution")


class DayNotFound(AocError):
    def __init__(self, day: int):
        self.day = day
        super().__init__(f"Day {day} not found")


class TooManyTestCases(AocError):
    def __init__(self):
        super().__init__("Too many test cases were generated from the prompt")


class IncorrectAnswer(AocError):
    def __init__(self, day: int, part: int, expected: str, actual: str):
        self.day = day
        self.part = part
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Answers did not match, exiting run (d{day:02}p{part:02}: "
            f"expected {expected!r}, got {actual!r})"
        )


class MultipleIncorrect(AocError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"{count} answers were incorrect.")
