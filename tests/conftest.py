"""
Pytest fixtures for TxStats tests: transaction payload factories, an in-memory
history source that honours before_tx_signature cursors, and Settings.
"""

from __future__ import annotations

from typing import Any

import pytest

VALID_ACCOUNT = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"


def _token(symbol: str, amount: Any, address: str | None = None) -> dict[str, Any]:
    return {
        "token_address": address or f"{symbol}-mint",
        "name": symbol.title(),
        "symbol": symbol,
        "image_uri": "",
        "amount": amount,
        "amount_raw": 0,
    }


def build_payload(
    block_time: int,
    signature: str | None = None,
    *,
    fee: Any = 0.0005,
    compute_units: int = 1000,
    status: str = "Success",
    swap: tuple[tuple[str, Any], tuple[str, Any]] | None = None,
    instructions: list[dict[str, Any]] | None = None,
    slot: int = 250_000_000,
) -> dict[str, Any]:
    """API-shaped transaction dict; swap is ((in_symbol, in_amount), (out_symbol, out_amount))."""
    sig = signature if signature is not None else f"sig-{block_time}"
    actions: list[dict[str, Any]] = []
    if swap is not None:
        (in_symbol, in_amount), (out_symbol, out_amount) = swap
        actions.append({
            "info": {
                "swapper": VALID_ACCOUNT,
                "tokens_swapped": {
                    "in": _token(in_symbol, in_amount),
                    "out": _token(out_symbol, out_amount),
                },
                "swaps": [],
            },
            "source_protocol": {"address": "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4", "name": "JUPITER"},
            "type": "SWAP",
        })
    return {
        "timestamp": "",
        "fee": fee,
        "fee_payer": VALID_ACCOUNT,
        "signers": [VALID_ACCOUNT],
        "signatures": [sig] if sig else [],
        "protocol": {"address": "", "name": ""},
        "type": "SWAP" if swap else "UNKNOWN",
        "status": status,
        "actions": actions,
        "events": [],
        "raw": {
            "blockTime": block_time,
            "slot": slot,
            "meta": {
                "computeUnitsConsumed": compute_units,
                "err": None,
                "fee": fee,
                "innerInstructions": [],
                "logMessages": [],
                "status": {"Ok": None},
            },
            "transaction": {
                "message": {
                    "accountKeys": [],
                    "instructions": instructions or [],
                    "recentBlockhash": "",
                },
                "signatures": [sig] if sig else [],
            },
            "version": 0,
        },
    }


class FakeHistorySource:
    """
    In-memory history (newest first) served like the API: fetch(before, tx_num)
    returns up to tx_num transactions strictly older than `before`.
    """

    def __init__(self, history: list[Any]) -> None:
        from backend_txstats.history_client.models import Transaction

        self.history = [
            tx if isinstance(tx, Transaction) else Transaction.model_validate(tx)
            for tx in history
        ]
        self.calls: list[tuple[str | None, int]] = []

    def fetch(self, before: str | None = None, tx_num: int = 100) -> list[Any]:
        self.calls.append((before, tx_num))
        start = 0
        if before is not None:
            sigs = [tx.first_signature for tx in self.history]
            start = sigs.index(before) + 1
        return self.history[start:start + tx_num]


class ScriptedHistorySource:
    """Returns pre-built batches in order, regardless of cursor."""

    def __init__(self, batches: list[list[dict[str, Any]]]) -> None:
        from backend_txstats.history_client.models import Transaction

        self.batches = [[Transaction.model_validate(p) for p in batch] for batch in batches]
        self.calls: list[tuple[str | None, int]] = []

    def fetch(self, before: str | None = None, tx_num: int = 100) -> list[Any]:
        self.calls.append((before, tx_num))
        if not self.batches:
            return []
        return self.batches.pop(0)


@pytest.fixture
def payload():
    """Factory: payload(block_time, signature=None, **kwargs) -> API-shaped dict."""
    return build_payload


@pytest.fixture
def make_tx():
    """Factory returning a validated Transaction model."""
    from backend_txstats.history_client.models import Transaction

    def _make(*args: Any, **kwargs: Any) -> Any:
        return Transaction.model_validate(build_payload(*args, **kwargs))

    return _make


@pytest.fixture
def history_source():
    """Factory: history_source(list of payloads newest-first) -> FakeHistorySource."""
    return FakeHistorySource


@pytest.fixture
def scripted_source():
    return ScriptedHistorySource


@pytest.fixture
def settings():
    from backend_txstats.config.settings import Settings

    return Settings(
        api_url="https://api.example.com/sol/v1/transaction/history",
        network="mainnet-beta",
        account=VALID_ACCOUNT,
        api_key="secret-api-key",
        debug=False,
    )
