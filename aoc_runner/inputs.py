from __future__ import annotations

import html
import logging
import re
import time
from datetime import datetime, timezone
from typing import Callable, List

from .client import PuzzleClient
from .config import DEFAULT_YEAR
from .errors import HasNotReleasedYet, NonUtf8InPromptCodeBlock, NoTestInputFound, TooManyTestCases
from .release import GateDecision, gate_decision, time_until_release, wait_seconds
from .store import MAX_VARIANT, REAL_INPUT, InputStore
from .timing import readable_time

logger = logging.getLogger("aoc_runner.inputs")

CODE_BLOCK_RE = re.compile(rb"<pre>\s*<code>([^<]+)</code>\s*</pre>")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _decode_block(raw: bytes) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise NonUtf8InPromptCodeBlock() from None
    return html.unescape(text)


def extract_test_cases(prompt: bytes) -> List[str]:
    """Return the decoded text of every <pre><code> block, in page order."""
    return [_decode_block(match.group(1)) for match in CODE_BLOCK_RE.finditer(prompt)]


class InputAcquirer:
    """Returns input bytes for a day, fetching and caching them on first use."""

    def __init__(
        self,
        store: InputStore,
        client: PuzzleClient,
        *,
        year: int = DEFAULT_YEAR,
        now: Callable[[], datetime] = _utc_now,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.client = client
        self.year = year
        self._now = now
        self._sleep = sleep

    def acquire(self, day: int, variant: int = REAL_INPUT) -> bytes:
        # Example files are written together with the real input, so the real
        # input's presence decides whether the network is needed at all.
        if not self.store.has_input(day):
            self._wait_for_release(day)
            self.fetch(day)

        path = self.store.input_path(day, variant)
        if variant != REAL_INPUT and not path.exists():
            raise NoTestInputFound(str(path))
        return path.read_bytes()

    def _wait_for_release(self, day: int) -> None:
        remaining = time_until_release(day, self._now(), self.year)
        decision = gate_decision(remaining)
        if decision is GateDecision.REFUSE:
            raise HasNotReleasedYet(day=day, duration=remaining)
        if decision is GateDecision.WAIT:
            delay = wait_seconds(remaining)
            logger.warning(
                "Puzzle releases in %s, waiting %s",
                readable_time(max(0.0, remaining.total_seconds()), 0),
                readable_time(delay, 0),
            )
            self._sleep(delay)

    def fetch(self, day: int) -> int:
        """Download input and prompt for `day`, overwriting local copies.

        Returns the number of example inputs written.
        """
        data = self.client.fetch_input(day)
        day_dir = self.store.day_dir(day)
        day_dir.mkdir(parents=True, exist_ok=True)
        self.store.input_path(day).write_bytes(data)

        prompt = self.client.fetch_prompt(day)
        self.store.prompt_path(day).write_bytes(prompt)

        # One block at a time: examples written before a bad block are kept.
        written = 0
        for i, match in enumerate(CODE_BLOCK_RE.finditer(prompt), start=1):
            if i > MAX_VARIANT:
                logger.warning("%s, skipping the rest", TooManyTestCases())
                break
            case = _decode_block(match.group(1))
            logger.debug("Got a code match, making test %d", i)
            self.store.input_path(day, i).write_bytes(case.encode("utf-8"))
            written += 1
        return written

    def close(self) -> None:
        self.client.close()
