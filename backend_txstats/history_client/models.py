"""
Data models for the transaction-history API.

Responsibilities:
- Decode the response envelope {success, message, result: [Transaction]}.
- Keep every field of the transaction payload the API documents, accepting
  unknown keys so a newer API version does not break decoding.
- Degrade missing or null nested fields to empty defaults; only the top-level
  envelope shape is validated strictly.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

REFERENCE_SYMBOL = "SOL"


def _to_decimal(value: Any) -> Any:
    """Floats go through str() so 0.0005 stays 0.0005, not its binary expansion."""
    if value is None:
        return Decimal("0")
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str) and value.strip():
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return value
    return value


class _Lenient(BaseModel):
    """Base for payload models: extra keys kept, explicit nulls fall back to defaults."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Protocol(_Lenient):
    address: str = ""
    name: str = ""


class Token(_Lenient):
    """One side of a swap. Empty Token() means "no token"."""

    token_address: str = ""
    name: str = ""
    symbol: str = ""
    image_uri: str = ""
    amount: Decimal = Decimal("0")
    amount_raw: int = 0

    coerce_amount = field_validator("amount", mode="before")(_to_decimal)

    @property
    def is_empty(self) -> bool:
        return not self.token_address and not self.symbol

    @property
    def is_reference(self) -> bool:
        return self.symbol == REFERENCE_SYMBOL

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, payload: str) -> "Token":
        return cls.model_validate_json(payload)


class TokensSwapped(_Lenient):
    in_: Token = Field(default_factory=Token, alias="in")
    out: Token = Field(default_factory=Token)


class Swap(_Lenient):
    liquidity_pool_address: str = ""
    name: str = ""
    source: str = ""
    in_: Token = Field(default_factory=Token, alias="in")
    out: Token = Field(default_factory=Token)


class ActionInfo(_Lenient):
    sender: str = ""
    receiver: str = ""
    amount: Decimal = Decimal("0")
    amount_raw: Decimal = Decimal("0")
    message: str = ""
    swapper: str = ""
    tokens_swapped: TokensSwapped = Field(default_factory=TokensSwapped)
    swaps: list[Swap] = Field(default_factory=list)

    coerce_amounts = field_validator("amount", "amount_raw", mode="before")(_to_decimal)


class Action(_Lenient):
    info: ActionInfo = Field(default_factory=ActionInfo)
    source_protocol: Protocol = Field(default_factory=Protocol)
    type: str = ""
    ix_index: int = 0


class Instruction(_Lenient):
    # "parsed" is either a plain string (memo program) or an object; not modeled
    parsed: Any = None
    program: str = ""
    program_id: str = Field(default="", alias="programId")
    stack_height: Any = Field(default=None, alias="stackHeight")


class RawMessage(_Lenient):
    account_keys: list[Any] = Field(default_factory=list, alias="accountKeys")
    address_table_lookups: list[Any] = Field(default_factory=list, alias="addressTableLookups")
    instructions: list[Instruction] = Field(default_factory=list)
    recent_blockhash: str = Field(default="", alias="recentBlockhash")


class RawTransaction(_Lenient):
    message: RawMessage = Field(default_factory=RawMessage)
    signatures: list[str] = Field(default_factory=list)


class Meta(_Lenient):
    compute_units_consumed: int = Field(default=0, alias="computeUnitsConsumed")
    err: Any = None
    fee: Decimal = Decimal("0")
    inner_instructions: list[Any] = Field(default_factory=list, alias="innerInstructions")
    log_messages: list[Any] = Field(default_factory=list, alias="logMessages")
    pre_balances: list[Any] = Field(default_factory=list, alias="preBalances")
    post_balances: list[Any] = Field(default_factory=list, alias="postBalances")
    pre_token_balances: list[Any] = Field(default_factory=list, alias="preTokenBalances")
    post_token_balances: list[Any] = Field(default_factory=list, alias="postTokenBalances")
    rewards: list[Any] = Field(default_factory=list)
    status: dict[str, Any] = Field(default_factory=dict)

    coerce_fee = field_validator("fee", mode="before")(_to_decimal)


class RawData(_Lenient):
    block_time: int = Field(default=0, alias="blockTime")
    meta: Meta = Field(default_factory=Meta)
    slot: int = 0
    transaction: RawTransaction = Field(default_factory=RawTransaction)
    version: Any = None


class Transaction(_Lenient):
    """
    One transaction as returned by the history API (newest-first in a batch).

    parsed_transaction is not part of the API payload; the pager fills it in
    with the normalized record so downstream code can use both.
    """

    timestamp: str = ""
    fee: Decimal = Decimal("0")
    fee_payer: str = ""
    signers: list[str] = Field(default_factory=list)
    signatures: list[str] = Field(default_factory=list)
    protocol: Protocol = Field(default_factory=Protocol)
    type: str = ""
    status: str = ""
    actions: list[Action] = Field(default_factory=list)
    events: list[Any] = Field(default_factory=list)
    raw: RawData = Field(default_factory=RawData)
    parsed_transaction: Any = None

    coerce_fee = field_validator("fee", mode="before")(_to_decimal)

    @property
    def block_time(self) -> int:
        return self.raw.block_time

    @property
    def first_signature(self) -> str | None:
        """Canonical signature: the first one, or None when the list is empty."""
        return self.signatures[0] if self.signatures else None


class HistoryResponse(BaseModel):
    """Response envelope. success is required; result may be missing on failure."""

    model_config = ConfigDict(extra="allow")

    success: bool
    message: str = ""
    result: list[Transaction] = Field(default_factory=list)

    @field_validator("message", mode="before")
    @classmethod
    def _message_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("result", mode="before")
    @classmethod
    def _result_list(cls, value: Any) -> Any:
        return [] if value is None else value
