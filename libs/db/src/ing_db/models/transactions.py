from __future__ import annotations

from sqlalchemy import REAL, PrimaryKeyConstraint, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# Core: transactions
# ---------------------------


class Transaction(Base):
    __tablename__ = "transactions"

    # ISO calendar date (YYYY-MM-DD). Which statement date lands here is chosen
    # by the importer (accounting date by default).
    date: Mapped[str] = mapped_column(Text, nullable=False)
    party: Mapped[str] = mapped_column(Text, nullable=False)
    kind: Mapped[str] = mapped_column(Text, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    # Account balance after the transaction.
    balance: Mapped[float] = mapped_column(REAL, nullable=False)
    sum: Mapped[float] = mapped_column(REAL, nullable=False)

    # Natural key used for deduplication. Two distinct transactions sharing
    # date/party/comment collide; the second one is dropped on insert.
    __table_args__ = (PrimaryKeyConstraint("date", "party", "comment", name="pk_transactions"),)


__all__ = [
    "Base",
    "Transaction",
]
