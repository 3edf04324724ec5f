"""
Application settings.

Responsibilities:
- Load configuration from environment variables and the project .env file.
- Validate required settings (API_URL, NETWORK, ACCOUNT, API_KEY, DEBUG) and
  provide defaults for optional ones.
- Expose an immutable Settings value, read once per run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from backend_txstats.config.env import (
    REQUIRED_KEYS,
    is_true,
    load_txstats_env,
    mask_secret,
    read_env,
    redact_url,
)
from backend_txstats.core.exceptions import ConfigError

DEFAULT_REQUEST_TIMEOUT_SEC = 30.0


@dataclass(frozen=True)
class Settings:
    """Run configuration for the history client and CLI."""

    api_url: str
    network: str
    account: str
    api_key: str
    debug: bool = False
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    log_format: str = "console"
    show_memo_stats: bool = False

    def redacted(self) -> dict[str, Any]:
        """Loggable view with the API key masked."""
        return {
            "api_url": redact_url(self.api_url),
            "network": self.network,
            "account": self.account,
            "api_key": mask_secret(self.api_key),
            "debug": self.debug,
            "request_timeout_sec": self.request_timeout_sec,
            "log_format": self.log_format,
            "show_memo_stats": self.show_memo_stats,
        }


def _parse_timeout(raw: str) -> float:
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT_SEC
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"REQUEST_TIMEOUT_SEC must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"REQUEST_TIMEOUT_SEC must be positive, got {raw!r}")
    return value


def load_settings(env_path: Path | None = None) -> Settings:
    """
    Read settings from the environment (after loading .env).

    Raises:
        ConfigError: one or more required keys are missing or blank, or an
            optional key has an invalid value. The message names every
            missing key at once.
    """
    load_txstats_env(env_path)
    values = {key: read_env(key) for key in REQUIRED_KEYS}
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigError(
            "Environment variable(s) not set: " + ", ".join(missing)
        )

    log_format = read_env("LOG_FORMAT").lower() or "console"
    if log_format not in ("console", "json"):
        raise ConfigError(f"LOG_FORMAT must be 'console' or 'json', got {log_format!r}")

    return Settings(
        api_url=values["API_URL"],
        network=values["NETWORK"],
        account=values["ACCOUNT"],
        api_key=values["API_KEY"],
        debug=is_true(values["DEBUG"]),
        request_timeout_sec=_parse_timeout(read_env("REQUEST_TIMEOUT_SEC")),
        log_format=log_format,
        show_memo_stats=is_true(read_env("SHOW_MEMO_STATS")),
    )
