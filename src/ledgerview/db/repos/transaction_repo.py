from decimal import Decimal
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerview.db.models.transaction import Transaction
from ledgerview.domain.models.ledger import NativeTransfer


def _to_native(tx: Transaction) -> NativeTransfer:
    return NativeTransfer(
        transaction_hash=tx.hash,
        from_address_hash=tx.from_address_hash,
        to_address_hash=tx.to_address_hash,
        value=tx.value,
        transaction_index=tx.index,
        block_number=tx.block_number,
        created_contract_address_hash=tx.created_contract_address_hash,
    )


class TransactionRepo:
    """Native-transfer source: value carried by whole transactions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def fetch_native_transfers(
        self,
        min_value: Decimal = Decimal(0),
        address_hash: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ) -> list[NativeTransfer]:
        """Collated transactions moving strictly more than ``min_value``."""
        stmt = (
            select(Transaction)
            .where(Transaction.block_number.is_not(None), Transaction.index.is_not(None))
            .where(Transaction.value > min_value)
        )
        if address_hash is not None:
            stmt = stmt.where(or_(
                Transaction.from_address_hash == address_hash,
                Transaction.to_address_hash == address_hash,
            ))
        if transaction_hash is not None:
            stmt = stmt.where(Transaction.hash == transaction_hash)

        result = await self._session.execute(
            stmt.order_by(Transaction.block_number.desc(), Transaction.index.desc())
        )
        return [_to_native(tx) for tx in result.scalars().all()]

    async def list_for_address(self, address_hash: str) -> list[NativeTransfer]:
        """Transactions the address sent, received, or created a contract in. Pending ones are skipped."""
        result = await self._session.execute(
            select(Transaction)
            .where(Transaction.block_number.is_not(None), Transaction.index.is_not(None))
            .where(or_(
                Transaction.to_address_hash == address_hash,
                Transaction.from_address_hash == address_hash,
                Transaction.created_contract_address_hash == address_hash,
            ))
            .order_by(Transaction.block_number.desc(), Transaction.index.desc())
        )
        return [_to_native(tx) for tx in result.scalars().all()]
