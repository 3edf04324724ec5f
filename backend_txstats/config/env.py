"""
Environment variable loading for TxStats.

- API_URL: transaction-history endpoint (e.g. https://api.shyft.to/sol/v1/transaction/history)
- NETWORK: mainnet-beta | devnet | testnet
- ACCOUNT: base58 address whose history is analyzed
- API_KEY: sent as the x-api-key header
- DEBUG: "true" enables debug (progress) logging
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv

# Project root: config is backend_txstats/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

REQUIRED_KEYS = ("API_URL", "NETWORK", "ACCOUNT", "API_KEY", "DEBUG")

# Query parameters that may carry credentials when users paste a full URL
_SECRET_PARAMS = frozenset({"api-key", "api_key", "apikey", "key", "token"})


def load_txstats_env(env_path: Path | None = None) -> None:
    """Load .env from project root. Safe to call multiple times; real env vars win."""
    load_dotenv(env_path or _ENV_PATH, override=False)


def read_env(key: str) -> str:
    """Return the stripped value of key, or "" when unset."""
    return (os.getenv(key) or "").strip()


def is_true(value: str) -> bool:
    """DEBUG-style flag: only the exact literal "true" enables it."""
    return value.strip() == "true"


def redact_url(url: str) -> str:
    """Mask credential-looking query parameters so the URL can be logged."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (k, "***" if k.lower() in _SECRET_PARAMS else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


def mask_secret(value: str) -> str:
    """Keep the first 4 characters of a secret for identification."""
    if len(value) <= 4:
        return "***"
    return value[:4] + "***"
