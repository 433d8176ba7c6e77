from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import httpx

from . import __version__
from .config import DEFAULT_BASE_URL, DEFAULT_YEAR
from .errors import InputResponse, MissingApiKey, PromptResponse, RequestFailed

logger = logging.getLogger("aoc_runner.client")

USER_AGENT = f"aoc-runner/{__version__} (+https://github.com/aoc-runner/aoc-runner)"


def read_api_key(path: Path) -> str:
    try:
        key = Path(path).read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        raise MissingApiKey(str(path)) from None
    if not key:
        raise MissingApiKey(str(path))
    return key


def _success(status: int) -> bool:
    return 200 <= status < 300


class PuzzleClient:
    """Fetches puzzle inputs and prompt pages.

    The underlying httpx.Client is created on first use and reused for every
    request until close(). Pass `transport` to swap the network out (tests use
    httpx.MockTransport).
    """

    def __init__(
        self,
        api_key_file: Path = Path("API_KEY"),
        *,
        year: int = DEFAULT_YEAR,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key_file = Path(api_key_file)
        self.year = year
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _http(self) -> httpx.Client:
        if self._client is None:
            kwargs = {
                "headers": {"User-Agent": USER_AGENT},
                "follow_redirects": True,
                "transport": self._transport,
            }
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            self._client = httpx.Client(**kwargs)
        return self._client

    def input_url(self, day: int) -> str:
        return f"{self.base_url}/{self.year}/day/{day}/input"

    def prompt_url(self, day: int) -> str:
        return f"{self.base_url}/{self.year}/day/{day}"

    def _get(self, url: str, headers: Optional[dict] = None) -> httpx.Response:
        try:
            resp = self._http().get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(json.dumps({"event": "fetch_error", "url": url, "error": type(e).__name__}))
            raise RequestFailed(url, e) from e
        logger.debug(json.dumps({"event": "fetch_done", "url": url, "status": resp.status_code, "bytes": len(resp.content)}))
        return resp

    def fetch_input(self, day: int) -> bytes:
        url = self.input_url(day)
        api_key = read_api_key(self.api_key_file)
        logger.info("Fetching %s", url)
        resp = self._get(url, headers={"Cookie": f"session={api_key}"})
        if not _success(resp.status_code):
            raise InputResponse(status=resp.status_code, response=resp.text)
        return resp.content

    def fetch_prompt(self, day: int) -> bytes:
        # The prompt page is public; no session cookie.
        url = self.prompt_url(day)
        logger.debug("Fetching %s", url)
        resp = self._get(url)
        if not _success(resp.status_code):
            raise PromptResponse(status=resp.status_code, response=resp.text)
        return resp.content

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
