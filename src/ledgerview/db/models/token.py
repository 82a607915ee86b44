from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ledgerview.db.session import Base, TimestampMixin


class Token(TimestampMixin, Base):
    """Token contract metadata. ``symbol`` selects the currency of a token transfer."""

    __tablename__ = "tokens"

    contract_address_hash: Mapped[str] = mapped_column(String(42), primary_key=True)
    symbol: Mapped[Optional[str]] = mapped_column(String(20), default=None, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    decimals: Mapped[Optional[int]] = mapped_column(Integer, default=None)
