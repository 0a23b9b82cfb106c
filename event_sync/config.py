from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

TRUTHY = {"1", "true", "TRUE", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    token_file: Optional[str] = None
    log_level: str = "INFO"
    log_format: str = "text"
    http_timeout: float = 60.0
    metrics_file: Optional[str] = None


def get_settings() -> Settings:
    # .env loading is opt-in and never overrides the real environment
    if os.getenv("EVENT_SYNC_LOAD_DOTENV") in TRUTHY:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    timeout = os.getenv("EVENT_SYNC_HTTP_TIMEOUT", "60")
    try:
        http_timeout = float(timeout)
    except ValueError:
        raise ValueError(f"EVENT_SYNC_HTTP_TIMEOUT must be a number of seconds, got {timeout!r}")
    return Settings(
        token_file=os.getenv("EVENT_SYNC_TOKEN_FILE") or None,
        log_level=os.getenv("EVENT_SYNC_LOG_LEVEL", "INFO"),
        log_format=os.getenv("EVENT_SYNC_LOG_FORMAT", "text"),
        http_timeout=http_timeout,
        metrics_file=os.getenv("EVENT_SYNC_METRICS_FILE") or None,
    )
