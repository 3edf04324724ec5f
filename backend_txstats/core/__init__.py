"""
Core utilities — exceptions shared by config, history client, analytics and CLI.
"""

from backend_txstats.core.exceptions import (
    ConfigError,
    DecodeError,
    EmptyHistoryError,
    InternalError,
    RemoteError,
    TransportError,
    TxStatsError,
)

__all__ = [
    "ConfigError",
    "DecodeError",
    "EmptyHistoryError",
    "InternalError",
    "RemoteError",
    "TransportError",
    "TxStatsError",
]
