"""
Structured logging for Backend TxStats.

Use get_logger() in all modules; call configure_structlog() once at startup
to switch level (DEBUG) or renderer (LOG_FORMAT).
"""

from backend_txstats.txstats_logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
