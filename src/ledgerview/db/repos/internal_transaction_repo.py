from decimal import Decimal
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerview.db.models.internal_transaction import InternalTransaction
from ledgerview.db.models.transaction import Transaction
from ledgerview.domain.enums import CallType
from ledgerview.domain.models.ledger import InternalCallTransfer


def _to_internal(it: InternalTransaction, transaction_index: int) -> InternalCallTransfer:
    return InternalCallTransfer(
        transaction_hash=it.transaction_hash,
        from_address_hash=it.from_address_hash,
        to_address_hash=it.to_address_hash,
        value=it.value,
        call_index=it.index,
        call_type=it.call_type,
        transaction_index=transaction_index,
        block_number=it.block_number,
    )


class InternalTransactionRepo:
    """Internal-call source. Rows are joined to their transaction for its block position."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _base(self):
        return (
            select(InternalTransaction, Transaction.index)
            .join(Transaction, InternalTransaction.transaction_hash == Transaction.hash)
            .where(InternalTransaction.block_number.is_not(None), Transaction.index.is_not(None))
        )

    async def fetch_internal_call_transfers(
        self,
        min_value: Decimal = Decimal(0),
        exclude_call_type: str = CallType.DELEGATECALL.value,
        exclude_index: int = 0,
        address_hash: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ) -> list[InternalCallTransfer]:
        stmt = (
            self._base()
            .where(InternalTransaction.value > min_value)
            .where(InternalTransaction.index != exclude_index)
            .where(InternalTransaction.call_type != exclude_call_type)
        )
        if address_hash is not None:
            stmt = stmt.where(or_(
                InternalTransaction.from_address_hash == address_hash,
                InternalTransaction.to_address_hash == address_hash,
            ))
        if transaction_hash is not None:
            stmt = stmt.where(InternalTransaction.transaction_hash == transaction_hash)

        result = await self._session.execute(
            stmt.order_by(
                InternalTransaction.block_number.desc(),
                Transaction.index.desc(),
                InternalTransaction.index.desc(),
            )
        )
        return [_to_internal(it, tx_index) for it, tx_index in result.all()]

    async def get(self, transaction_hash: str, index: int) -> Optional[InternalCallTransfer]:
        result = await self._session.execute(
            self._base().where(
                InternalTransaction.transaction_hash == transaction_hash,
                InternalTransaction.index == index,
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        return _to_internal(row[0], row[1])

    async def list_for_transaction(self, transaction_hash: str) -> list[InternalCallTransfer]:
        """Internal transactions of one transaction by ascending index.

        Empty when the only trace is the top-level call, which restates the transaction.
        """
        count_result = await self._session.execute(
            select(func.count())
            .select_from(InternalTransaction)
            .where(InternalTransaction.transaction_hash == transaction_hash)
        )
        if count_result.scalar_one() <= 1:
            return []

        result = await self._session.execute(
            self._base()
            .where(InternalTransaction.transaction_hash == transaction_hash)
            .order_by(InternalTransaction.index.asc())
        )
        return [_to_internal(it, tx_index) for it, tx_index in result.all()]

    async def list_for_address(self, address_hash: str) -> list[InternalCallTransfer]:
        """Internal transactions belonging to transactions the address took part in."""
        participated = select(Transaction.hash).where(or_(
            Transaction.from_address_hash == address_hash,
            Transaction.to_address_hash == address_hash,
            Transaction.created_contract_address_hash == address_hash,
        ))
        result = await self._session.execute(
            self._base()
            .where(InternalTransaction.transaction_hash.in_(participated))
            .order_by(
                InternalTransaction.block_number.desc(),
                Transaction.index.desc(),
                InternalTransaction.index.desc(),
            )
        )
        return [_to_internal(it, tx_index) for it, tx_index in result.all()]
