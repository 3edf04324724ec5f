"""
Backward pager — walk the account history from the newest transaction.

Algorithm:
- Anchor: fetch the single newest transaction. Its block time is the window
  end and its signature the first cursor. The anchor itself is not part of
  the result (the first page is requested *before* it).
- Window start is end - delta; delta == 0 leaves the window unbounded below.
- Page with before_tx_signature = cursor, 100 per call. Within a batch
  (newest first) stop at the first transaction older than the window start,
  skip anything newer than the window end, normalize the rest.
- Advance the cursor to the last (oldest) transaction of the batch until the
  window start is crossed or the server returns an empty batch.
- Return the collected transactions oldest-first.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol

from backend_txstats.core.exceptions import EmptyHistoryError, InternalError
from backend_txstats.history_client.models import Transaction
from backend_txstats.history_client.normalizer import attach_parsed
from backend_txstats.txstats_logging import get_logger

logger = get_logger(__name__)

ANCHOR_BATCH_SIZE = 1
PAGE_BATCH_SIZE = 100
DEFAULT_TIME_DELTA = timedelta(days=30)


class HistorySource(Protocol):
    """Anything that can fetch a newest-first batch before a cursor (HistoryClient, fakes)."""

    def fetch(self, before: str | None = None, tx_num: int = PAGE_BATCH_SIZE) -> list[Transaction]:
        ...


@dataclass(frozen=True)
class FetchWindow:
    """Block-time window; start_time None means unbounded below."""

    start_time: int | None
    end_time: int

    @classmethod
    def ending_at(cls, end_time: int, delta: timedelta) -> "FetchWindow":
        seconds = int(delta.total_seconds())
        if seconds < 0:
            raise ValueError("time delta must not be negative")
        if seconds == 0:
            return cls(start_time=None, end_time=end_time)
        return cls(start_time=end_time - seconds, end_time=end_time)

    def is_before_start(self, block_time: int) -> bool:
        return self.start_time is not None and block_time < self.start_time

    def is_after_end(self, block_time: int) -> bool:
        return block_time > self.end_time

    def describe(self) -> dict[str, str]:
        start = "unbounded" if self.start_time is None else _iso(self.start_time)
        return {"start": start, "end": _iso(self.end_time)}


@dataclass(frozen=True)
class PagerState:
    """Explicit loop state threaded through iterations."""

    cursor: str
    terminated: bool = False


def _iso(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def fetch_anchor(source: HistorySource) -> Transaction:
    """Newest transaction of the account; raises EmptyHistoryError if there is none."""
    batch = source.fetch(None, ANCHOR_BATCH_SIZE)
    if not batch:
        raise EmptyHistoryError("Failed to fetch the latest transaction: account history is empty")
    anchor = batch[0]
    if anchor.first_signature is None:
        raise InternalError("Latest transaction has no signature; cannot start paging")
    return anchor


def _scan_batch(
    batch: list[Transaction],
    window: FetchWindow,
    collected: list[Transaction],
) -> bool:
    """Append in-window transactions; return True when the window start was crossed."""
    for tx in batch:
        block_time = tx.block_time
        if window.is_before_start(block_time):
            return True
        if window.is_after_end(block_time):
            continue
        collected.append(attach_parsed(tx))
    return False


def _next_state(
    state: PagerState,
    batch: list[Transaction],
    crossed_start: bool,
    used_cursors: set[str],
) -> PagerState:
    if crossed_start:
        return PagerState(cursor=state.cursor, terminated=True)
    cursor = batch[-1].first_signature
    if cursor is None:
        raise InternalError("Oldest transaction in batch has no signature; cannot advance cursor")
    if cursor in used_cursors:
        raise InternalError(f"Cursor {cursor} was already used; history did not advance")
    return PagerState(cursor=cursor)


def fetch_transactions_in_window(
    source: HistorySource,
    time_delta: timedelta = DEFAULT_TIME_DELTA,
) -> list[Transaction]:
    """
    Collect every transaction with end - time_delta <= block_time <= end, oldest first.

    end is the block time of the newest transaction (the anchor), which is
    itself excluded. Each returned Transaction has parsed_transaction set.
    Any fetch error propagates; no partial result is returned.
    """
    anchor = fetch_anchor(source)
    window = FetchWindow.ending_at(anchor.block_time, time_delta)
    logger.debug("pager_window", **window.describe(), anchor_signature=anchor.first_signature)

    state = PagerState(cursor=anchor.first_signature)
    used_cursors: set[str] = set()
    collected: list[Transaction] = []
    api_calls = 0

    while not state.terminated:
        api_calls += 1
        used_cursors.add(state.cursor)
        logger.debug("pager_request", api_call=api_calls, before_tx_signature=state.cursor)
        batch = source.fetch(state.cursor, PAGE_BATCH_SIZE)
        if not batch:
            logger.debug("pager_no_more_transactions", api_call=api_calls)
            break

        crossed_start = _scan_batch(batch, window, collected)
        logger.debug(
            "pager_batch",
            api_call=api_calls,
            batch_size=len(batch),
            batch_start=_iso(batch[-1].block_time),
            batch_end=_iso(batch[0].block_time),
            collected=len(collected),
        )
        state = _next_state(state, batch, crossed_start, used_cursors)

    collected.reverse()
    logger.info(
        "pager_done",
        api_calls=api_calls + 1,
        transactions=len(collected),
        **window.describe(),
    )
    return collected
