"""
Transaction normalizer — API envelope to a flat, display-ready record.

Pure and total: missing nested fields degrade to "N/A" / zero defaults, so
normalization never raises. The swap pair comes from the first action; the
memo is the first instruction whose parsed payload is a plain string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from backend_txstats.history_client.models import Token, Transaction

NOT_AVAILABLE = "N/A"
BLOCKTIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ParsedRecord:
    """
    Flat view of one transaction.

    Strings are display-ready; token_in/token_out are empty Tokens when the
    transaction carries no swap action.
    """

    blocktime_utc: str
    status: str
    slot_str: str
    fee_str: str
    compute_unit: str
    token_in: Token = field(default_factory=Token)
    token_out: Token = field(default_factory=Token)
    memo: str = NOT_AVAILABLE
    signature: str = NOT_AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        """Flat JSON-serializable row; token amounts as strings to keep precision."""
        return {
            "blocktime_utc": self.blocktime_utc,
            "status": self.status,
            "slot_str": self.slot_str,
            "fee_str": self.fee_str,
            "compute_unit": self.compute_unit,
            "memo": self.memo,
            "token_in_name": self.token_in.name,
            "token_in_symbol": self.token_in.symbol,
            "token_in_amount": str(self.token_in.amount),
            "token_in_address": self.token_in.token_address,
            "token_out_name": self.token_out.name,
            "token_out_symbol": self.token_out.symbol,
            "token_out_amount": str(self.token_out.amount),
            "token_out_address": self.token_out.token_address,
            "signature": self.signature,
        }


def format_fee(fee: Decimal) -> str:
    """Fee with two decimals, rounded as "%.2f" rounds the float value."""
    return "%.2f" % float(fee)


def format_blocktime(block_time: int) -> str:
    """Unix seconds -> "YYYY-MM-DD HH:MM:SS" in UTC."""
    return datetime.fromtimestamp(block_time, tz=timezone.utc).strftime(BLOCKTIME_FORMAT)


def memo_text(parsed: Any) -> str | None:
    """
    Return the memo when an instruction's parsed payload is a non-empty string.

    Structured payloads (dicts from the token/system programs) and empty
    strings are not memos.
    """
    if isinstance(parsed, str) and parsed:
        return parsed
    return None


def extract_memo(tx: Transaction) -> str:
    for instruction in tx.raw.transaction.message.instructions:
        text = memo_text(instruction.parsed)
        if text is not None:
            return text
    return NOT_AVAILABLE


def swap_pair(tx: Transaction) -> tuple[Token, Token]:
    """(in, out) of the first action's tokens_swapped; empty Tokens otherwise."""
    if not tx.actions:
        return Token(), Token()
    swapped = tx.actions[0].info.tokens_swapped
    return swapped.in_, swapped.out


def normalize(tx: Transaction) -> ParsedRecord:
    """Project one envelope into a ParsedRecord."""
    meta = tx.raw.meta
    token_in, token_out = swap_pair(tx)
    return ParsedRecord(
        blocktime_utc=format_blocktime(tx.raw.block_time),
        status=tx.status,
        slot_str=str(tx.raw.slot),
        fee_str=format_fee(meta.fee),
        compute_unit=str(meta.compute_units_consumed),
        token_in=token_in,
        token_out=token_out,
        memo=extract_memo(tx),
        signature=tx.first_signature or NOT_AVAILABLE,
    )


def attach_parsed(tx: Transaction) -> Transaction:
    """Return a copy of tx with parsed_transaction set to its normalized record."""
    return tx.model_copy(update={"parsed_transaction": normalize(tx)})
