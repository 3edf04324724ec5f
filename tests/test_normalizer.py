"""
Normalizer tests: formatting, swap pair, memo selection and totality on
incomplete payloads.
"""

from __future__ import annotations

from decimal import Decimal

import pytest


def test_normalize_formats_fields(make_tx):
    from backend_txstats.history_client.normalizer import normalize

    tx = make_tx(
        1700000000,
        "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnb",
        fee=5000,
        compute_units=42_000,
        status="Fail",
        slot=231_415_926,
    )

    record = normalize(tx)

    assert record.blocktime_utc == "2023-11-14 22:13:20"
    assert record.signature == "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnb"
    assert record.slot_str == "231415926"
    assert record.status == "Fail"
    assert record.fee_str == "5000.00"
    assert record.compute_unit == "42000"
    assert record.memo == "N/A"


def test_fee_str_two_decimals(make_tx):
    from backend_txstats.history_client.normalizer import normalize

    assert normalize(make_tx(1, fee=0.0005)).fee_str == "0.00"
    assert normalize(make_tx(1, fee=1.234)).fee_str == "1.23"


@pytest.mark.parametrize(
    ("fee", "expected"),
    [(0.005, "0.01"), (0.015, "0.01"), (0.025, "0.03")],
)
def test_fee_str_rounds_ties_like_printf(make_tx, fee, expected):
    from backend_txstats.history_client.normalizer import normalize

    assert normalize(make_tx(1, fee=fee)).fee_str == expected
    assert expected == "%.2f" % fee


def test_swap_pair_from_first_action(make_tx):
    from backend_txstats.history_client.normalizer import normalize

    record = normalize(make_tx(100, swap=(("SOL", 1.0), ("FOO", 100.0))))

    assert record.token_in.symbol == "SOL"
    assert record.token_in.amount == Decimal("1.0")
    assert record.token_out.symbol == "FOO"
    assert record.token_out.amount == Decimal("100.0")


def test_no_actions_gives_empty_tokens(make_tx):
    from backend_txstats.history_client.models import Token
    from backend_txstats.history_client.normalizer import normalize

    record = normalize(make_tx(100))

    assert record.token_in == Token()
    assert record.token_out == Token()
    assert record.token_in.is_empty


# --- Memo selection ---


def test_memo_skips_structured_instruction(make_tx):
    """parsed object first, plain string second -> the string is the memo."""
    from backend_txstats.history_client.normalizer import normalize

    tx = make_tx(100, instructions=[
        {"parsed": {"type": "transfer"}, "program": "system", "programId": "11111111111111111111111111111111"},
        {"parsed": "trade-tag", "program": "spl-memo", "programId": "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"},
    ])

    assert normalize(tx).memo == "trade-tag"


def test_memo_first_string_wins_and_empty_is_skipped(make_tx):
    from backend_txstats.history_client.normalizer import normalize

    tx = make_tx(100, instructions=[{"parsed": ""}, {"parsed": "RPC-1"}, {"parsed": "RPC-2"}])

    assert normalize(tx).memo == "RPC-1"


def test_memo_all_structured_is_na(make_tx):
    from backend_txstats.history_client.normalizer import normalize

    tx = make_tx(100, instructions=[
        {"parsed": {"type": "transfer", "info": {"lamports": 1}}},
        {"parsed": {"type": "createAccount"}},
        {"program": "unknown"},
    ])

    assert normalize(tx).memo == "N/A"


# --- Totality ---


def test_normalize_empty_payload():
    """A payload with nothing in it still yields a record of defaults."""
    from backend_txstats.history_client.models import Transaction
    from backend_txstats.history_client.normalizer import normalize

    record = normalize(Transaction.model_validate({}))

    assert record.blocktime_utc == "1970-01-01 00:00:00"
    assert record.signature == "N/A"
    assert record.memo == "N/A"
    assert record.slot_str == "0"
    assert record.fee_str == "0.00"
    assert record.compute_unit == "0"
    assert record.status == ""


def test_normalize_null_nested_fields():
    from backend_txstats.history_client.models import Transaction
    from backend_txstats.history_client.normalizer import normalize

    tx = Transaction.model_validate({
        "signatures": None,
        "status": None,
        "actions": [{"info": None}],
        "raw": {
            "blockTime": 1700000000,
            "meta": None,
            "transaction": {"message": {"instructions": [{"parsed": None}]}},
        },
        "unknown_future_field": {"nested": True},
    })

    record = normalize(tx)

    assert record.signature == "N/A"
    assert record.memo == "N/A"
    assert record.token_in.is_empty and record.token_out.is_empty
    assert record.fee_str == "0.00"
    assert record.blocktime_utc == "2023-11-14 22:13:20"


def test_parsed_record_flat_dict(make_tx):
    from backend_txstats.history_client.normalizer import normalize

    row = normalize(make_tx(100, swap=(("FOO", 100.0), ("SOL", 1.5)))).to_dict()

    assert row["token_in_symbol"] == "FOO"
    assert row["token_in_amount"] == "100.0"
    assert row["token_out_symbol"] == "SOL"
    assert row["token_out_amount"] == "1.5"
    assert row["signature"] == "sig-100"


def test_token_json_roundtrip():
    from backend_txstats.history_client.models import Token

    token = Token(token_address="mintX", name="Foo", symbol="FOO", amount="12.5", amount_raw=12_500_000)

    decoded = Token.from_json(token.to_json())

    assert decoded == token
    assert decoded.amount == Decimal("12.5")
