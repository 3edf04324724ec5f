"""
Transaction-history client package.

Fetches an account's transaction history from the history API, walks it
backwards inside a time window, and normalizes each transaction into a flat
record for the analytics layer.
"""

from backend_txstats.history_client.client import HistoryClient
from backend_txstats.history_client.models import HistoryResponse, Token, Transaction
from backend_txstats.history_client.normalizer import ParsedRecord, normalize
from backend_txstats.history_client.pager import (
    DEFAULT_TIME_DELTA,
    FetchWindow,
    fetch_transactions_in_window,
)

__all__ = [
    "DEFAULT_TIME_DELTA",
    "FetchWindow",
    "HistoryClient",
    "HistoryResponse",
    "ParsedRecord",
    "Token",
    "Transaction",
    "fetch_transactions_in_window",
    "normalize",
]
