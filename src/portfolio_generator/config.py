"""Runtime settings for the portfolio generator client."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from portfolio_generator.themes import DEFAULT_THEME, list_themes

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080/generate"
DEFAULT_TIMEOUT_SECONDS = 90.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True, slots=True)
class Settings:
    """Client configuration.

    Attributes:
        api_url: Generation endpoint that accepts the resume upload.
        timeout: Seconds to wait for the service before giving up.
        theme: Theme selected at start-up.
        log_level: Level name passed to ``logging.basicConfig``.
    """

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    theme: str = DEFAULT_THEME
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    """Build ``Settings`` from the environment and any ``.env`` file."""
    load_dotenv()

    api_url = os.environ.get("PORTFOLIO_API_URL", "").strip() or DEFAULT_API_URL

    timeout = DEFAULT_TIMEOUT_SECONDS
    raw_timeout = os.environ.get("PORTFOLIO_API_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            logger.warning(
                "Invalid PORTFOLIO_API_TIMEOUT %r; using %s seconds",
                raw_timeout,
                DEFAULT_TIMEOUT_SECONDS,
            )
        else:
            if not math.isfinite(timeout) or timeout <= 0:
                logger.warning(
                    "PORTFOLIO_API_TIMEOUT must be a positive finite number; using default"
                )
                timeout = DEFAULT_TIMEOUT_SECONDS

    theme = os.environ.get("PORTFOLIO_THEME", "").strip().lower() or DEFAULT_THEME
    if theme not in list_themes():
        logger.warning("Unknown PORTFOLIO_THEME %r; falling back to %s", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME

    log_level = os.environ.get("PORTFOLIO_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL

    return Settings(api_url=api_url, timeout=timeout, theme=theme, log_level=log_level)
