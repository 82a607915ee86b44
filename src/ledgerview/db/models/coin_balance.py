from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ledgerview.db.session import Base, TimestampMixin


class CoinBalance(TimestampMixin, Base):
    """Native balance of an address as of a block. ``value`` is NULL until fetched."""

    __tablename__ = "address_coin_balances"

    address_hash: Mapped[str] = mapped_column(String(42), primary_key=True)
    block_number: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    value: Mapped[Optional[Decimal]] = mapped_column(Numeric(100, 0), default=None)
    value_fetched_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), default=None)
