from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerview.db.models.block import Block
from ledgerview.db.models.coin_balance import CoinBalance
from ledgerview.domain.models.ledger import BalanceSnapshot


class CoinBalanceRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def fetch_balance_snapshots(self, address_hash: str) -> list[BalanceSnapshot]:
        """Recorded snapshots of an address with their block timestamps, including unfetched values."""
        result = await self._session.execute(
            select(CoinBalance, Block.timestamp)
            .join(Block, CoinBalance.block_number == Block.number)
            .where(CoinBalance.address_hash == address_hash)
            .order_by(CoinBalance.block_number.asc())
        )
        return [
            BalanceSnapshot(
                address_hash=cb.address_hash,
                block_number=cb.block_number,
                value=cb.value,
                block_timestamp=ts,
            )
            for cb, ts in result.all()
        ]
