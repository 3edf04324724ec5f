"""
Transaction-history API client — one authenticated GET per batch.

Responsibilities:
- Build the history request (network, account, tx_num, raw + events enabled,
  optional before_tx_signature cursor) with the x-api-key header.
- Decode the {success, message, result} envelope into Transaction models.
- Map every failure to a TxStats exception carrying the redacted URL.

No retries here: a failed request fails the run.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import requests
from pydantic import ValidationError

from backend_txstats.config.env import redact_url
from backend_txstats.config.settings import Settings
from backend_txstats.core.exceptions import DecodeError, RemoteError, TransportError
from backend_txstats.history_client.models import HistoryResponse, Transaction
from backend_txstats.txstats_logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-api-key"
MAX_TX_NUM = 100


class HistoryClient:
    """
    Synchronous client for the account transaction-history endpoint.

    One instance per run; the session (connection pool) is reused across
    batches. Results come back newest-first, as the server sends them.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: requests.Session | None = None,
    ) -> None:
        if not settings.api_url.strip():
            raise ValueError("api_url must be non-empty")
        self._settings = settings
        self._session = session or requests.Session()
        self._timeout = settings.request_timeout_sec
        self.api_calls = 0

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HistoryClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def build_params(self, before: str | None, tx_num: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "network": self._settings.network,
            "account": self._settings.account,
            "tx_num": tx_num,
            "enable_raw": "true",
            "enable_events": "true",
        }
        if before is not None:
            params["before_tx_signature"] = before
        return params

    def display_url(self, params: dict[str, Any]) -> str:
        """Full request URL, safe to log (the key travels in a header)."""
        prepared = requests.Request("GET", self._settings.api_url, params=params).prepare()
        return redact_url(prepared.url or self._settings.api_url)

    def fetch(self, before: str | None = None, tx_num: int = MAX_TX_NUM) -> list[Transaction]:
        """
        Fetch up to tx_num transactions older than `before` (newest first).

        Raises:
            TransportError: connection failure or timeout.
            RemoteError: HTTP status other than 200, or success=false.
            DecodeError: body is not JSON or not a valid envelope.
        """
        if not (1 <= tx_num <= MAX_TX_NUM):
            raise ValueError(f"tx_num must be between 1 and {MAX_TX_NUM}")
        params = self.build_params(before, tx_num)
        url = self.display_url(params)
        self.api_calls += 1
        logger.debug("history_request", api_call=self.api_calls, url=url)

        try:
            resp = self._session.get(
                self._settings.api_url,
                params=params,
                headers={API_KEY_HEADER: self._settings.api_key},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        if resp.status_code != 200:
            raise RemoteError(
                f"History API returned HTTP {resp.status_code} for {url}",
                url=url,
                status_code=resp.status_code,
            )

        try:
            data = resp.json(parse_float=Decimal)
        except ValueError as e:
            raise DecodeError(f"Error decoding JSON from {url}: {e}", url=url) from e

        try:
            envelope = HistoryResponse.model_validate(data)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected response shape from {url}: {e.error_count()} validation error(s)",
                url=url,
            ) from e

        if not envelope.success:
            raise RemoteError(
                f"Failed to fetch transactions from {url}: {envelope.message}",
                url=url,
                status_code=resp.status_code,
                server_message=envelope.message,
            )

        logger.debug("history_response", api_call=self.api_calls, tx_count=len(envelope.result))
        return envelope.result
