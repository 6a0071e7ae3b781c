"""SQLAlchemy models registry for the statement database."""

from .transactions import Base, Transaction

__all__ = [
    "Base",
    "Transaction",
]
