"""Transfer merge engine. Pure functions, no DB dependency.

Unions native, internal-call and token transfers into one ledger ordered by
``OrderingKey`` descending. Two flavours:

* single currency: one token symbol plus the native value movements.
* dual currency: adds a second token symbol as its own leg. Every row carries a
  ``secondary_value`` that is the second currency's view of the row, clamped
  to zero, so one stream answers "how much of A moved" and "how much of B
  moved".
"""

import logging
from decimal import Decimal
from typing import Iterable

from ledgerview.domain.enums import CallType, TransferSource
from ledgerview.domain.models.ledger import (
    InternalCallTransfer,
    NativeTransfer,
    TokenTransferRow,
    TransactionParticipant,
    TransferEvent,
)
from ledgerview.exceptions import OrderingInvariantViolation
from ledgerview.ledger.keys import (
    PRIMARY_LEG,
    SECONDARY_LEG,
    internal_key,
    internal_qualifies,
    native_key,
    native_qualifies,
    token_key,
    token_qualifies,
)

logger = logging.getLogger(__name__)


def _native_event(t: NativeTransfer, currency: str, secondary_value: Decimal | None = None) -> TransferEvent:
    return TransferEvent(
        transaction_hash=t.transaction_hash,
        from_address_hash=t.from_address_hash,
        to_address_hash=t.to_address_hash,
        value=t.value,
        secondary_value=secondary_value,
        currency=currency,
        block_number=t.block_number,
        source=TransferSource.NATIVE,
        ordering_key=native_key(t),
    )


def _internal_event(t: InternalCallTransfer, currency: str, secondary_value: Decimal | None = None) -> TransferEvent:
    return TransferEvent(
        transaction_hash=t.transaction_hash,
        from_address_hash=t.from_address_hash,
        to_address_hash=t.to_address_hash,
        value=t.value,
        secondary_value=secondary_value,
        currency=currency,
        block_number=t.block_number,
        source=TransferSource.INTERNAL,
        ordering_key=internal_key(t),
    )


def _token_event(
    t: TokenTransferRow,
    currency: str,
    value: Decimal,
    secondary_value: Decimal | None = None,
    leg_rank: int = PRIMARY_LEG,
) -> TransferEvent:
    return TransferEvent(
        transaction_hash=t.transaction_hash,
        from_address_hash=t.from_address_hash,
        to_address_hash=t.to_address_hash,
        value=value,
        secondary_value=secondary_value,
        currency=currency,
        block_number=t.block_number,
        source=TransferSource.TOKEN,
        ordering_key=token_key(t, leg_rank),
    )


def _clamp(raw: Decimal) -> Decimal:
    return max(Decimal(0), raw)


def order_events(events: Iterable[TransferEvent]) -> list[TransferEvent]:
    """Sort by ordering key descending and reject same-source key collisions."""
    ordered = sorted(events, key=lambda e: e.ordering_key, reverse=True)
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.ordering_key == cur.ordering_key and prev.source == cur.source:
            logger.error(
                "Ordering key collision at block %d between %s and %s",
                cur.block_number, prev.transaction_hash, cur.transaction_hash,
            )
            raise OrderingInvariantViolation(prev, cur)
    return ordered


def merge_single_currency_transfers(
    native: Iterable[NativeTransfer],
    internal: Iterable[InternalCallTransfer],
    tokens: Iterable[TokenTransferRow],
    currency: str,
    excluded_call_type: str = CallType.DELEGATECALL.value,
) -> list[TransferEvent]:
    """Merge one currency's token transfers with native and internal value movements.

    Args:
        native: Whole-transaction transfers. Non-positive values are dropped.
        internal: Internal-call transfers. Only qualifying calls are kept.
        tokens: Token transfers already scoped to ``currency``.
        currency: Symbol recorded on every resulting row.

    Returns:
        Events ordered most recent first, ``secondary_value`` unset.
    """
    events: list[TransferEvent] = [
        _token_event(t, currency, t.amount) for t in tokens if token_qualifies(t)
    ]
    events.extend(_native_event(t, currency) for t in native if native_qualifies(t))
    events.extend(
        _internal_event(t, currency) for t in internal if internal_qualifies(t, excluded_call_type)
    )
    return order_events(events)


def merge_dual_currency_transfers(
    native: Iterable[NativeTransfer],
    internal: Iterable[InternalCallTransfer],
    primary_tokens: Iterable[TokenTransferRow],
    secondary_tokens: Iterable[TokenTransferRow],
    primary_currency: str,
    secondary_currency: str,
    excluded_call_type: str = CallType.DELEGATECALL.value,
) -> list[TransferEvent]:
    """Merge two currencies into one ledger.

    Primary-currency rows (native, internal, primary tokens) record the raw
    secondary value as the negated value; secondary token rows record
    ``value = -amount`` and the amount as secondary value. The projection
    clamps the secondary value at zero, so it is non-zero only on secondary
    legs.
    """
    events: list[TransferEvent] = [
        _token_event(t, primary_currency, t.amount, secondary_value=_clamp(Decimal(0)))
        for t in primary_tokens
        if token_qualifies(t)
    ]
    events.extend(
        _token_event(t, secondary_currency, -t.amount, secondary_value=_clamp(t.amount), leg_rank=SECONDARY_LEG)
        for t in secondary_tokens
        if token_qualifies(t)
    )
    events.extend(
        _native_event(t, primary_currency, secondary_value=_clamp(-t.value))
        for t in native
        if native_qualifies(t)
    )
    events.extend(
        _internal_event(t, primary_currency, secondary_value=_clamp(-t.value))
        for t in internal
        if internal_qualifies(t, excluded_call_type)
    )
    return order_events(events)


def collect_participants(
    native: Iterable[NativeTransfer],
    internal: Iterable[InternalCallTransfer],
    primary_tokens: Iterable[TokenTransferRow],
    secondary_tokens: Iterable[TokenTransferRow],
    excluded_call_type: str = CallType.DELEGATECALL.value,
) -> list[TransactionParticipant]:
    """Every (transaction, address) pair on either side of a qualifying transfer, first occurrence kept."""
    rows: list[tuple[str, str | None]] = []
    for t in primary_tokens:
        rows += [(t.transaction_hash, t.from_address_hash), (t.transaction_hash, t.to_address_hash)]
    for t in secondary_tokens:
        rows += [(t.transaction_hash, t.from_address_hash), (t.transaction_hash, t.to_address_hash)]
    for t in native:
        if native_qualifies(t):
            rows += [(t.transaction_hash, t.from_address_hash), (t.transaction_hash, t.to_address_hash)]
    for t in internal:
        if internal_qualifies(t, excluded_call_type):
            rows += [(t.transaction_hash, t.from_address_hash), (t.transaction_hash, t.to_address_hash)]

    unique = dict.fromkeys((tx_hash, addr) for tx_hash, addr in rows if addr is not None)
    return [TransactionParticipant(transaction_hash=tx_hash, address_hash=addr) for tx_hash, addr in unique]
