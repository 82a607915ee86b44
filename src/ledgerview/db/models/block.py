from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from ledgerview.db.session import Base, TimestampMixin


class Block(TimestampMixin, Base):
    """Consensus block. Only the number and timestamp matter to the ledger view."""

    __tablename__ = "blocks"

    number: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    hash: Mapped[str] = mapped_column(String(66), unique=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True))
