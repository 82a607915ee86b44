from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerview.db.models.token import Token
from ledgerview.db.models.token_transfer import TokenTransfer
from ledgerview.db.models.transaction import Transaction
from ledgerview.domain.models.ledger import TokenTransferRow


def _to_row(tt: TokenTransfer, symbol: Optional[str]) -> TokenTransferRow:
    return TokenTransferRow(
        transaction_hash=tt.transaction_hash,
        from_address_hash=tt.from_address_hash,
        to_address_hash=tt.to_address_hash,
        amount=tt.amount,
        log_index=tt.log_index,
        block_number=tt.block_number,
        token_symbol=symbol,
        token_contract_address_hash=tt.token_contract_address_hash,
    )


class TokenTransferRepo:
    """Token-transfer source.

    Rows without an amount (non-fungible transfers) are kept by lookups and
    listings but never reach the ledger fetch.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _base(self):
        return (
            select(TokenTransfer, Token.symbol)
            .outerjoin(Token, TokenTransfer.token_contract_address_hash == Token.contract_address_hash)
            .where(TokenTransfer.block_number.is_not(None))
        )

    async def fetch_token_transfers(
        self,
        currency_symbol: str,
        address_hash: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ) -> list[TokenTransferRow]:
        stmt = self._base().where(Token.symbol == currency_symbol, TokenTransfer.amount.is_not(None))
        if address_hash is not None:
            stmt = stmt.where(or_(
                TokenTransfer.from_address_hash == address_hash,
                TokenTransfer.to_address_hash == address_hash,
            ))
        if transaction_hash is not None:
            stmt = stmt.where(TokenTransfer.transaction_hash == transaction_hash)

        result = await self._session.execute(
            stmt.order_by(TokenTransfer.block_number.desc(), TokenTransfer.log_index.desc())
        )
        return [_to_row(tt, symbol) for tt, symbol in result.all()]

    async def get(self, transaction_hash: str, log_index: int) -> Optional[TokenTransferRow]:
        result = await self._session.execute(
            self._base().where(
                TokenTransfer.transaction_hash == transaction_hash,
                TokenTransfer.log_index == log_index,
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        return _to_row(row[0], row[1])

    async def list_for_address(self, address_hash: str) -> list[TokenTransferRow]:
        result = await self._session.execute(
            self._base()
            .where(or_(
                TokenTransfer.from_address_hash == address_hash,
                TokenTransfer.to_address_hash == address_hash,
            ))
            .order_by(TokenTransfer.block_number.desc(), TokenTransfer.log_index.desc())
        )
        return [_to_row(tt, symbol) for tt, symbol in result.all()]

    async def list_for_contract(self, contract_address_hash: str) -> list[TokenTransferRow]:
        """Transfers of one token: newest block first, then transaction index desc, log index asc."""
        result = await self._session.execute(
            self._base()
            .join(Transaction, TokenTransfer.transaction_hash == Transaction.hash)
            .where(TokenTransfer.token_contract_address_hash == contract_address_hash)
            .order_by(
                TokenTransfer.block_number.desc(),
                Transaction.index.desc(),
                TokenTransfer.log_index.asc(),
            )
        )
        return [_to_row(tt, symbol) for tt, symbol in result.all()]
