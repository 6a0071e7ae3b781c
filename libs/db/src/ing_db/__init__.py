"""ing_db: database library for imported bank statements (SQLAlchemy/SQLite).

Public exports
--------------
- ``Base`` and ``metadata`` for schema creation
- ORM models in ``ing_db.models.transactions`` (re-exported for convenience)
- Engine/session helpers in ``ing_db.client``
"""

from __future__ import annotations

from .models.transactions import Base, Transaction

metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "Transaction",
]
