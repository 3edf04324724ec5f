"""
Report rendering: summary, per-token profit/loss and memo tables (rich).

Input shapes: Counters and TokenLedger from the aggregator, MemoStats rows
from memo_stats. Amounts are in SOL with 8 fractional digits.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from backend_txstats.analytics.aggregator import Counters, TokenLedger
from backend_txstats.analytics.memo_stats import MemoStats
from backend_txstats.history_client.normalizer import format_fee

SUMMARY_COLUMNS = ("Total Transactions", "Total Fees", "Total Compute Units")
TOKEN_COLUMNS = ("Token", "Total SOL Bought", "Total SOL Sold", "Profit/Loss (SOL)")
MEMO_COLUMNS = ("Memo Type", "Total", "Success", "Fail", "Success %", "Fail %")


def summary_row(counters: Counters) -> tuple[str, str, str]:
    return (
        str(counters.total_txs),
        format_fee(counters.total_fee),
        str(counters.total_compute_units),
    )


def token_rows(ledger: TokenLedger) -> list[tuple[str, str, str, str]]:
    """(symbol, bought, sold, profit) per token, sorted by symbol."""
    return [
        (
            symbol,
            f"{entry.total_bought_reference:.8f}",
            f"{entry.total_sold_reference:.8f}",
            f"{entry.profit:.8f}",
        )
        for symbol, entry in sorted(ledger.items())
    ]


def build_summary_table(counters: Counters) -> Table:
    table = Table(title="Transaction Summary")
    for column in SUMMARY_COLUMNS:
        table.add_column(column, justify="right")
    table.add_row(*summary_row(counters))
    return table


def build_token_table(ledger: TokenLedger) -> Table:
    table = Table(title="Token Profit/Loss")
    table.add_column(TOKEN_COLUMNS[0], style="cyan")
    for column in TOKEN_COLUMNS[1:]:
        table.add_column(column, justify="right")
    for symbol, bought, sold, profit in token_rows(ledger):
        style = "red" if profit.startswith("-") else "green"
        table.add_row(escape(symbol), bought, sold, Text(profit, style=style))
    return table


def build_memo_table(stats: list[MemoStats]) -> Table:
    table = Table(title="Memo Types")
    table.add_column(MEMO_COLUMNS[0], style="magenta")
    for column in MEMO_COLUMNS[1:]:
        table.add_column(column, justify="right")
    for row in stats:
        name, *counts = row.as_row()
        table.add_row(escape(name), *counts)
    return table


def render_report(
    counters: Counters,
    ledger: TokenLedger,
    memo_stats: list[MemoStats] | None = None,
    *,
    console: Console | None = None,
) -> None:
    """Print the tables to stdout (or the given console)."""
    console = console or Console()
    if ledger:
        console.print(build_token_table(ledger))
    else:
        console.print("[yellow]No SOL swaps in window.[/yellow]")
    console.print(build_summary_table(counters))
    if memo_stats is not None:
        console.print(build_memo_table(memo_stats))
