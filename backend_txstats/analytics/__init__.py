"""
TxStats analytics.

Aggregates windowed transactions into totals, a per-token SOL ledger and a
memo-type breakdown, and renders them as tables.
Modules: aggregator, memo_stats, report.
"""

from backend_txstats.analytics.aggregator import Counters, TokenLedgerEntry, aggregate
from backend_txstats.analytics.memo_stats import MemoStats, memo_breakdown
from backend_txstats.analytics.report import render_report

__all__ = [
    "Counters",
    "MemoStats",
    "TokenLedgerEntry",
    "aggregate",
    "memo_breakdown",
    "render_report",
]
