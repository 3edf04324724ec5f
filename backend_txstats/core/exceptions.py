"""
Application-level exceptions.

Every failure of a run is one of these; they propagate unchanged to the CLI
entry point, which logs a single diagnostic line and exits non-zero. No layer
retries or recovers: re-running the command is the recovery strategy.
"""

from __future__ import annotations


class TxStatsError(Exception):
    """Base class; carries a stable error code for log aggregation."""

    code = "txstats_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(TxStatsError):
    """Required environment setting missing or invalid at startup."""

    code = "config_error"


class TransportError(TxStatsError):
    """Network failure talking to the history API (DNS, connect, timeout)."""

    code = "transport_error"

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class RemoteError(TxStatsError):
    """The API answered, but with a non-200 status or success=false."""

    code = "remote_error"

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.server_message = server_message


class DecodeError(TxStatsError):
    """Response body is not JSON or does not match the envelope shape."""

    code = "decode_error"

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class EmptyHistoryError(TxStatsError):
    """The account has no transactions, so there is no anchor to page from."""

    code = "empty_history"


class InternalError(TxStatsError):
    """Unexpected state, e.g. a batch whose cursor cannot advance."""

    code = "internal_error"
