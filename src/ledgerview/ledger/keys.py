"""Key normalizer: places every event source in one ordering-key space.

Each source is a tag with its own rank; the position fields only ever compare
against events of the same tag, so a transaction index can never collide with
a call index or a log index. Within a block, sorting descending yields native
transfers, then internal-call transfers, then token transfers.
"""

from decimal import Decimal

from ledgerview.domain.enums import CallType, TransferSource
from ledgerview.domain.models.ledger import InternalCallTransfer, NativeTransfer, OrderingKey, TokenTransferRow

SOURCE_RANK: dict[TransferSource, int] = {
    TransferSource.NATIVE: 2,
    TransferSource.INTERNAL: 1,
    TransferSource.TOKEN: 0,
}

PRIMARY_LEG = 1
SECONDARY_LEG = 0

# Index 0 is the top-level call: its value is already reported by the transaction itself.
TOP_LEVEL_CALL_INDEX = 0


def native_key(transfer: NativeTransfer) -> OrderingKey:
    return OrderingKey(
        block_number=transfer.block_number,
        source_rank=SOURCE_RANK[TransferSource.NATIVE],
        position=transfer.transaction_index,
        sub_position=0,
        leg_rank=PRIMARY_LEG,
    )


def internal_key(transfer: InternalCallTransfer) -> OrderingKey:
    return OrderingKey(
        block_number=transfer.block_number,
        source_rank=SOURCE_RANK[TransferSource.INTERNAL],
        position=transfer.transaction_index,
        sub_position=transfer.call_index,
        leg_rank=PRIMARY_LEG,
    )


def token_key(transfer: TokenTransferRow, leg_rank: int = PRIMARY_LEG) -> OrderingKey:
    """Log indexes are unique within a block, so they order token transfers on their own."""
    return OrderingKey(
        block_number=transfer.block_number,
        source_rank=SOURCE_RANK[TransferSource.TOKEN],
        position=transfer.log_index,
        sub_position=0,
        leg_rank=leg_rank,
    )


def native_qualifies(transfer: NativeTransfer) -> bool:
    return transfer.value > Decimal(0)


def internal_qualifies(
    transfer: InternalCallTransfer,
    excluded_call_type: str = CallType.DELEGATECALL.value,
) -> bool:
    """Positive value, not the top-level call, and not a delegatecall.

    A call without a call type is dropped as well, the same way a SQL
    ``call_type != 'delegatecall'`` predicate drops NULL.
    """
    if transfer.value <= Decimal(0):
        return False
    if transfer.call_index == TOP_LEVEL_CALL_INDEX:
        return False
    if transfer.call_type is None:
        return False
    return transfer.call_type != excluded_call_type


def token_qualifies(transfer: TokenTransferRow) -> bool:
    """Non-fungible transfers carry no amount and have no ledger value."""
    return transfer.amount is not None
