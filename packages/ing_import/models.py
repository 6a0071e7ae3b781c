"""Data models for ING statement rows and the transaction records built from them.

Two shapes flow through the pipeline:

- :class:`StatementRow`: one data line of the export bound by position. Dates
  are already parsed; amounts are still the raw European-formatted strings.
- :class:`TransactionRecord`: the normalized entity that is persisted (or
  printed), keyed on ``(date, party, comment)``.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

# Column order of the export's tabular section. The header row names both
# currency columns "Währung", so binding is by position only.
STATEMENT_COLUMNS: tuple[str, ...] = (
    "accounting_date",
    "availability_date",
    "party",
    "kind",
    "comment",
    "balance",
    "balance_currency",
    "sum",
    "sum_currency",
)


class DateField(str, Enum):
    """Which statement date becomes the canonical ``date`` of a record."""

    ACCOUNTING = "accounting"
    AVAILABILITY = "availability"


@dataclass(frozen=True, slots=True)
class StatementRow:
    """A single data row of an ING CSV export.

    ``line`` is the 1-based physical line number in the decoded input (the
    preamble included), kept for diagnostics only.
    """

    accounting_date: dt.date
    availability_date: dt.date
    party: str
    kind: str
    comment: str
    balance: str
    balance_currency: str
    sum: str
    sum_currency: str
    line: int | None = None

    def date_for(self, field: DateField) -> dt.date:
        if field is DateField.AVAILABILITY:
            return self.availability_date
        return self.accounting_date


class TransactionRecord(BaseModel):
    """A normalized transaction as written to the ``transactions`` table.

    Text fields are carried verbatim from the export (no trimming or case
    folding). ``balance`` and ``sum`` are finite floats.
    """

    model_config = ConfigDict(strict=True, frozen=True, allow_inf_nan=False)

    date: dt.date
    party: str
    kind: str
    comment: str
    balance: float
    sum: float

    @property
    def natural_key(self) -> tuple[dt.date, str, str]:
        return (self.date, self.party, self.comment)


@dataclass(frozen=True, slots=True)
class ImportSummary:
    """Outcome of one import run.

    ``rows`` counts data rows read and submitted to the store. Rows dropped
    as duplicates of an existing natural key are not distinguished.
    """

    rows: int


__all__ = [
    "STATEMENT_COLUMNS",
    "DateField",
    "ImportSummary",
    "StatementRow",
    "TransactionRecord",
]
