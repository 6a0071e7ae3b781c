"""Public interface for the ``ing_import`` package.

This module exposes the package's API functions, models and exception types
as the stable import surface. There is no runtime logic here, only symbol
re-exports.
"""

from .api import import_statement, print_statement
from .errors import (
    AmountParseError,
    DateParseError,
    IngestError,
    PreambleTruncatedError,
    RowShapeError,
    StoreOpenError,
    StoreWriteError,
)
from .ingest.adapters.ing_csv import normalize_amount, parse_date
from .models import DateField, ImportSummary, StatementRow, TransactionRecord

__all__ = [
    # API
    "import_statement",
    "print_statement",
    "normalize_amount",
    "parse_date",
    # Models / types
    "DateField",
    "ImportSummary",
    "StatementRow",
    "TransactionRecord",
    # Errors
    "IngestError",
    "PreambleTruncatedError",
    "RowShapeError",
    "DateParseError",
    "AmountParseError",
    "StoreOpenError",
    "StoreWriteError",
]
