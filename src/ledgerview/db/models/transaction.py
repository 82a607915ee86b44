from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ledgerview.db.session import Base, TimestampMixin


class Transaction(TimestampMixin, Base):
    """Collated transaction. ``block_number``/``index`` stay NULL while pending."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_block_number_index", "block_number", "index"),
    )

    hash: Mapped[str] = mapped_column(String(66), primary_key=True)
    block_number: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("blocks.number"), default=None)
    index: Mapped[Optional[int]] = mapped_column(Integer, default=None)
    from_address_hash: Mapped[str] = mapped_column(String(42), index=True)
    to_address_hash: Mapped[Optional[str]] = mapped_column(String(42), default=None, index=True)
    created_contract_address_hash: Mapped[Optional[str]] = mapped_column(String(42), default=None, index=True)
    value: Mapped[Decimal] = mapped_column(Numeric(100, 0), default=Decimal(0))
