"""SQLAlchemy engine/session helpers for an existing SQLite statement database.

Usage
-----
from ing_db.client import get_engine, session_scope

engine = get_engine("statements.db")
with session_scope(engine) as s:
    s.execute(...)
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from os import PathLike
from pathlib import Path
from urllib.parse import quote

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import Session, sessionmaker


def sqlite_url(database_path: str | PathLike[str]) -> URL:
    """Return a read/write URL for ``database_path`` that never creates the file.

    Uses an SQLite URI filename with ``mode=rw``; a plain path would make
    SQLite create a fresh, empty database when the file is missing.
    """

    filename = "file:" + quote(os.fspath(database_path))
    return URL.create(
        "sqlite+pysqlite",
        database=filename,
        query={"mode": "rw", "uri": "true"},
    )


def get_engine(database_path: str | PathLike[str], *, echo: bool = False) -> Engine:
    """Open an engine on an existing SQLite file and verify it can connect.

    Raises ``FileNotFoundError`` when ``database_path`` is not an existing
    file; driver errors (permissions, not a database) propagate from the
    connection check.
    """

    path = Path(database_path)
    if path.exists() and not path.is_file():
        raise FileNotFoundError(f"database path is not a regular file: {path}")
    if not path.is_file():
        raise FileNotFoundError(f"database file does not exist: {path}")

    engine = create_engine(sqlite_url(path), echo=echo)
    try:
        # Connect eagerly so open failures surface here, not on first insert.
        with engine.connect():
            pass
    except Exception:
        engine.dispose()
        raise
    return engine


def get_session(engine: Engine) -> Session:
    """Return a new SQLAlchemy session bound to ``engine``."""

    return sessionmaker(bind=engine, expire_on_commit=False, class_=Session)()


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = get_session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "sqlite_url",
]
