"""
Command-line entry point: fetch the last 30 days of history and print stats.

Env: API_URL, NETWORK, ACCOUNT, API_KEY, DEBUG (required); REQUEST_TIMEOUT_SEC,
LOG_FORMAT, SHOW_MEMO_STATS (optional). Exit code 0 on success, 1 on any error.
"""

from __future__ import annotations

from datetime import timedelta

from backend_txstats.analytics import aggregate, memo_breakdown, render_report
from backend_txstats.config import load_settings
from backend_txstats.core.exceptions import TxStatsError
from backend_txstats.history_client import HistoryClient, fetch_transactions_in_window
from backend_txstats.txstats_logging import configure_structlog, get_logger

logger = get_logger("cli")

TIME_DELTA = timedelta(days=30)


def run() -> None:
    """Load settings, walk the window, aggregate and render. Raises TxStatsError on failure."""
    settings = load_settings()
    configure_structlog(
        level="DEBUG" if settings.debug else None,
        log_format=settings.log_format,
    )
    logger.debug("cli_settings_loaded", **settings.redacted())
    logger.info("cli_fetch_start", account=settings.account, network=settings.network, days=TIME_DELTA.days)

    with HistoryClient(settings) as client:
        transactions = fetch_transactions_in_window(client, TIME_DELTA)

    counters, ledger = aggregate(transactions)
    memo_stats = memo_breakdown(transactions) if settings.show_memo_stats else None
    render_report(counters, ledger, memo_stats)


def main() -> int:
    try:
        run()
    except TxStatsError as e:
        logger.error("cli_failed", error_code=e.code, error=str(e))
        return 1
    except Exception as e:
        logger.exception("cli_unexpected_error", error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
