"""Persistence integration for ing_import.

Functions here write transaction records to the SQLite database owned by
``ing_db``. They rely on the SQLAlchemy model in ``ing_db.models.transactions``
and engines provided by ``ing_db.client``.

Scope:
- Open an existing database file (never create one).
- Create the ``transactions`` table when it is missing.
- Insert records, ignoring rows whose natural key already exists.
"""

from __future__ import annotations

from os import PathLike

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ing_db import Transaction, metadata
from ing_db.client import get_engine

from .errors import StoreOpenError, StoreWriteError
from .logging_setup import get_logger
from .models import TransactionRecord

logger = get_logger("ing_import.persistence")


def open_store(database_path: str | PathLike[str]) -> Engine:
    """Open the existing SQLite file at ``database_path`` read/write."""

    try:
        engine = get_engine(database_path)
    except (OSError, SQLAlchemyError) as exc:
        raise StoreOpenError(f"failed to open database connection: {exc}") from exc
    logger.info("opened database %s", database_path)
    return engine


def ensure_schema(engine: Engine) -> None:
    """Create the ``transactions`` table unless it already exists."""

    try:
        metadata.create_all(bind=engine, tables=[Transaction.__table__], checkfirst=True)
    except SQLAlchemyError as exc:
        raise StoreOpenError(f"failed to init transactions table: {exc}") from exc


def insert_transaction(session: Session, record: TransactionRecord) -> None:
    """Insert ``record`` unless a row with the same natural key exists.

    A single ``INSERT ... ON CONFLICT DO NOTHING`` statement: the existing row
    is left untouched and no error is raised.
    """

    stmt = sqlite_insert(Transaction).values(**record.model_dump(mode="json"))
    stmt = stmt.on_conflict_do_nothing(
        index_elements=[Transaction.date, Transaction.party, Transaction.comment]
    )
    session.execute(stmt)


def save_transaction(session: Session, record: TransactionRecord) -> None:
    """Insert ``record`` and commit it as its own unit of work."""

    try:
        insert_transaction(session, record)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreWriteError(f"failed to save transaction {record.natural_key}: {exc}") from exc


__all__ = [
    "ensure_schema",
    "insert_transaction",
    "open_store",
    "save_transaction",
]
