"""Environment settings for the Gemini hint integration and the share link."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 20.0
DEFAULT_SHARE_URL = "https://github.com/neon-tictactoe/neon-tictactoe"


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    share_url: str = DEFAULT_SHARE_URL

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("ignoring %s=%r, expected seconds; using %s", name, raw, default)
        return default


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Read settings from the environment, after merging a `.env` file if present.

    Values already set in the process environment win over the `.env` file.
    """
    load_dotenv(dotenv_path)
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
    return Settings(
        api_key=api_key.strip(),
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        connect_timeout=_float_env("GEMINI_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
        read_timeout=_float_env("GEMINI_READ_TIMEOUT", DEFAULT_READ_TIMEOUT),
        share_url=os.getenv("NEON_TTT_SHARE_URL", DEFAULT_SHARE_URL),
    )


def resolve_log_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give `default`."""
    if name is None or not name.strip():
        return default
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        logger.warning("ignoring log level %r; using %s", name, logging.getLevelName(default))
        return default
    return level
