"""
Aggregator: totals and per-token SOL ledger over the windowed transactions.

Counters: transaction count, fee sum (raw.meta.fee), compute-unit sum, and
the number of transactions that carry a swap. Ledger, keyed by the non-SOL
token symbol: SOL -> TOKEN credits bought (SOL spent), TOKEN -> SOL credits
sold (SOL received). Swaps with both or neither leg in SOL are ignored; the
transaction status is not consulted. All sums are order-independent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from backend_txstats.history_client.models import Transaction
from backend_txstats.history_client.normalizer import ParsedRecord, normalize
from backend_txstats.txstats_logging import get_logger

logger = get_logger(__name__)


@dataclass
class Counters:
    total_txs: int = 0
    total_fee: Decimal = Decimal("0")
    total_compute_units: int = 0
    swap_count: int = 0


@dataclass
class TokenLedgerEntry:
    """SOL flows for one token; updated in place as swaps are seen."""

    total_bought_reference: Decimal = Decimal("0")
    total_sold_reference: Decimal = Decimal("0")

    @property
    def profit(self) -> Decimal:
        return self.total_sold_reference - self.total_bought_reference


TokenLedger = dict[str, TokenLedgerEntry]


def parsed_record(tx: Transaction) -> ParsedRecord:
    """Record attached by the pager, or normalize now for unpaged input."""
    if isinstance(tx.parsed_transaction, ParsedRecord):
        return tx.parsed_transaction
    return normalize(tx)


def record_swap(ledger: TokenLedger, record: ParsedRecord) -> None:
    token_in, token_out = record.token_in, record.token_out
    if token_in.is_reference and not token_out.is_reference:
        entry = ledger.setdefault(token_out.symbol, TokenLedgerEntry())
        entry.total_bought_reference += token_in.amount
    elif not token_in.is_reference and token_out.is_reference:
        entry = ledger.setdefault(token_in.symbol, TokenLedgerEntry())
        entry.total_sold_reference += token_out.amount


def aggregate(transactions: Iterable[Transaction]) -> tuple[Counters, TokenLedger]:
    """Reduce the sequence into (counters, ledger)."""
    counters = Counters()
    ledger: TokenLedger = {}

    for tx in transactions:
        record = parsed_record(tx)
        meta = tx.raw.meta
        counters.total_txs += 1
        counters.total_fee += meta.fee
        counters.total_compute_units += meta.compute_units_consumed
        if record.token_in.token_address:
            counters.swap_count += 1
        record_swap(ledger, record)

    logger.debug(
        "aggregate_done",
        total_txs=counters.total_txs,
        swap_count=counters.swap_count,
        tokens=len(ledger),
    )
    return counters, ledger
