from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env, but avoid during pytest to keep tests deterministic
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv()

LOGGER_NAME = "aoc_runner"

DEFAULT_YEAR = 2023
DEFAULT_BASE_URL = "https://adventofcode.com"


def _env_str(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _env_bool(name: str, default: bool) -> bool:
    try:
        v = os.getenv(name, "1" if default else "0").strip().lower()
        return v in ("1", "true", "yes", "on")
    except Exception:
        return default


@dataclass(frozen=True)
class RunnerConfig:
    """Settings that come from the environment rather than the command line.

    Env:
      - AOC_YEAR: puzzle year (default 2023)
      - AOC_INPUTS_DIR: local input/answer store (default ./inputs)
      - AOC_API_KEY_FILE: file holding the session cookie value (default ./API_KEY)
      - AOC_BASE_URL: puzzle site root
      - AOC_HTTP_TIMEOUT_SECONDS: optional; unset keeps httpx's default timeout
      - LOG_LEVEL: runner log level (default INFO)
    """

    year: int = DEFAULT_YEAR
    inputs_dir: Path = Path("inputs")
    api_key_file: Path = Path("API_KEY")
    base_url: str = DEFAULT_BASE_URL
    http_timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RunnerConfig":
        return cls(
            year=_env_int("AOC_YEAR", DEFAULT_YEAR),
            inputs_dir=Path(_env_str("AOC_INPUTS_DIR") or "inputs"),
            api_key_file=Path(_env_str("AOC_API_KEY_FILE") or "API_KEY"),
            base_url=(_env_str("AOC_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            http_timeout=_env_float("AOC_HTTP_TIMEOUT_SECONDS", None),
            log_level=(_env_str("LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level_name: str = "INFO", runner_debug: int = 0) -> logging.Logger:
    """Configure the package logger.

    - honor LOG_LEVEL (default INFO), forced to DEBUG when runner debug is on
    - attach a stderr StreamHandler if none present
    - disable propagate to avoid duplicate lines with root handlers
    """
    logger = logging.getLogger(LOGGER_NAME)
    lvl = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    if runner_debug > 0:
        lvl = logging.DEBUG
    logger.setLevel(lvl)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(h)
    for h in logger.handlers:
        h.setLevel(lvl)
    logger.propagate = False
    return logger
