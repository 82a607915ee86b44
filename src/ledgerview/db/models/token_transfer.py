from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ledgerview.db.session import Base, TimestampMixin


class TokenTransfer(TimestampMixin, Base):
    """Transfer emitted by a token contract log. Keyed by (transaction_hash, log_index)."""

    __tablename__ = "token_transfers"
    __table_args__ = (
        Index("ix_token_transfers_block_number_log_index", "block_number", "log_index"),
    )

    transaction_hash: Mapped[str] = mapped_column(String(66), ForeignKey("transactions.hash"), primary_key=True)
    log_index: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    token_contract_address_hash: Mapped[str] = mapped_column(
        String(42), ForeignKey("tokens.contract_address_hash"), index=True
    )
    from_address_hash: Mapped[str] = mapped_column(String(42), index=True)
    to_address_hash: Mapped[str] = mapped_column(String(42), index=True)
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(100, 0), default=None)
    block_number: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)
