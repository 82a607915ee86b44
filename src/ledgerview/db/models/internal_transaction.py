from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ledgerview.db.session import Base, TimestampMixin


class InternalTransaction(TimestampMixin, Base):
    """Trace of a nested call. Index 0 is the top-level call of the enclosing transaction."""

    __tablename__ = "internal_transactions"

    transaction_hash: Mapped[str] = mapped_column(String(66), ForeignKey("transactions.hash"), primary_key=True)
    index: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    block_number: Mapped[Optional[int]] = mapped_column(BigInteger, default=None, index=True)
    call_type: Mapped[Optional[str]] = mapped_column(String(20), default=None)
    from_address_hash: Mapped[str] = mapped_column(String(42), index=True)
    to_address_hash: Mapped[Optional[str]] = mapped_column(String(42), default=None, index=True)
    value: Mapped[Decimal] = mapped_column(Numeric(100, 0), default=Decimal(0))
