"""Domain types for the merged transfer ledger and balance delta series."""

from datetime import datetime
from decimal import Decimal
from typing import NamedTuple

from pydantic import BaseModel

from ledgerview.domain.enums.transfer_source import TransferSource


class NativeTransfer(BaseModel):
    """Value carried by a whole transaction (or, in activity listings, any transaction of an address)."""

    transaction_hash: str
    from_address_hash: str
    to_address_hash: str | None = None  # None = contract creation
    value: Decimal
    transaction_index: int
    block_number: int
    created_contract_address_hash: str | None = None


class InternalCallTransfer(BaseModel):
    """Value moved by a nested call inside a transaction."""

    transaction_hash: str
    from_address_hash: str
    to_address_hash: str | None = None
    value: Decimal
    call_index: int
    call_type: str | None = None
    transaction_index: int  # of the enclosing transaction
    block_number: int


class TokenTransferRow(BaseModel):
    """Transfer emitted by a token contract log."""

    transaction_hash: str
    from_address_hash: str
    to_address_hash: str
    amount: Decimal | None  # None for non-fungible transfers
    log_index: int
    block_number: int
    token_symbol: str | None = None
    token_contract_address_hash: str | None = None


class OrderingKey(NamedTuple):
    """Shared sort key across sources. Compared as a plain tuple, larger = more recent."""

    block_number: int
    source_rank: int
    position: int
    sub_position: int
    leg_rank: int


class TransferEvent(BaseModel):
    """One row of a merged ledger."""

    transaction_hash: str
    from_address_hash: str
    to_address_hash: str | None = None
    value: Decimal
    secondary_value: Decimal | None = None  # only set by the dual-currency merge, never negative
    currency: str
    block_number: int
    source: TransferSource
    ordering_key: OrderingKey


class BalanceSnapshot(BaseModel):
    address_hash: str
    block_number: int
    value: Decimal | None = None
    block_timestamp: datetime


class BalanceDelta(BalanceSnapshot):
    value: Decimal
    delta: Decimal


class AddressActivity(BaseModel):
    """Per-kind activity of an address. Each list keeps its own ordering."""

    address_hash: str
    transactions: list[NativeTransfer] = []
    internal_transfers: list[InternalCallTransfer] = []
    token_transfers: list[TokenTransferRow] = []


class TransactionParticipant(BaseModel):
    """An address on either side of a qualifying transfer in a transaction."""

    transaction_hash: str
    address_hash: str
