from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

PRACTICE_URL = "https://api-fxpractice.oanda.com"
LIVE_URL = "https://api-fxtrade.oanda.com"

ENVIRONMENT_URLS = {
    "practice": PRACTICE_URL,
    "live": LIVE_URL,
}


@dataclass(frozen=True)
class Config:
    credentials_path: str
    environment: str
    base_url: str
    timeout: float | None
    log_level: str


def _load_dotenv() -> None:
    """Pull variables from a local .env file, if present, into the environment."""
    load_dotenv()


def load_config() -> Config:
    _load_dotenv()

    credentials_path = os.getenv("OANDA_CREDENTIALS_PATH", "config.json")
    environment = os.getenv("OANDA_ENVIRONMENT", "practice").strip().lower()
    if environment not in ENVIRONMENT_URLS:
        raise ValueError(f"OANDA_ENVIRONMENT must be one of {sorted(ENVIRONMENT_URLS)}, got {environment!r}")

    base_url = os.getenv("OANDA_BASE_URL") or ENVIRONMENT_URLS[environment]
    raw_timeout = os.getenv("OANDA_TIMEOUT")
    timeout = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"OANDA_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    return Config(
        credentials_path=credentials_path,
        environment=environment,
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        log_level=log_level,
    )
