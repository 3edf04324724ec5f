"""
Memo-type breakdown: success/fail rates per transaction memo.

Senders tag transactions with a memo naming the route they were submitted
through. Rows: TOTAL (all records), N/A (no memo), then one per distinct memo.
Memos that do not mention "RPC" went through a bundle relay and are shown
with a " (jito)" suffix; plain memos sort first, suffixed ones after, each
group alphabetically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from backend_txstats.analytics.aggregator import parsed_record
from backend_txstats.history_client.models import Transaction
from backend_txstats.history_client.normalizer import NOT_AVAILABLE

TOTAL_BUCKET = "TOTAL"
NA_BUCKET = NOT_AVAILABLE
JITO_SUFFIX = " (jito)"
STATUS_SUCCESS = "Success"
STATUS_FAIL = "Fail"


@dataclass(frozen=True)
class MemoStats:
    display_name: str
    total: int
    success: int
    fail: int

    @property
    def success_rate(self) -> float:
        return self.success / self.total * 100 if self.total else 0.0

    @property
    def fail_rate(self) -> float:
        return self.fail / self.total * 100 if self.total else 0.0

    def as_row(self) -> list[str]:
        return [
            self.display_name,
            str(self.total),
            str(self.success),
            str(self.fail),
            f"{self.success_rate:.2f}%",
            f"{self.fail_rate:.2f}%",
        ]


def display_name(memo_type: str) -> str:
    if memo_type in (TOTAL_BUCKET, NA_BUCKET) or "RPC" in memo_type:
        return memo_type
    return memo_type + JITO_SUFFIX


def _in_bucket(memo: str, memo_type: str) -> bool:
    if memo_type == TOTAL_BUCKET:
        return True
    if memo_type == NA_BUCKET:
        return memo in ("", NA_BUCKET)
    return memo == memo_type


def analyze_memo_type(pairs: list[tuple[str, str]], memo_type: str) -> MemoStats:
    """Count (memo, status) pairs falling in one bucket. Other statuses count only toward total."""
    total = success = fail = 0
    for memo, status in pairs:
        if not _in_bucket(memo, memo_type):
            continue
        total += 1
        if status == STATUS_SUCCESS:
            success += 1
        elif status == STATUS_FAIL:
            fail += 1
    return MemoStats(display_name(memo_type), total, success, fail)


def _sort_key(stats: MemoStats) -> tuple[bool, str]:
    return (stats.display_name.endswith(JITO_SUFFIX), stats.display_name)


def memo_breakdown(transactions: Iterable[Transaction]) -> list[MemoStats]:
    """TOTAL, N/A, then per-memo rows in display order."""
    pairs: list[tuple[str, str]] = []
    for tx in transactions:
        record = parsed_record(tx)
        pairs.append((record.memo.strip(), record.status))

    memo_types = sorted({memo for memo, _ in pairs if memo and memo != NA_BUCKET})
    rows = [analyze_memo_type(pairs, memo_type) for memo_type in memo_types]
    rows.sort(key=_sort_key)
    return [
        analyze_memo_type(pairs, TOTAL_BUCKET),
        analyze_memo_type(pairs, NA_BUCKET),
        *rows,
    ]
