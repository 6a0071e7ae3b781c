"""Adapter for mapping the tabular section of an ING CSV export to records.

Columns (fixed order, ``;``-delimited):
Buchung, Valuta, Auftraggeber/Empfänger, Buchungstext, Verwendungszweck,
Saldo, Währung, Betrag, Währung

The header names both currency columns "Währung", so no row is treated as a
header and fields are bound by position. A row must have exactly nine fields.

Output :class:`~ing_import.models.TransactionRecord` fields:
``date, party, kind, comment, balance, sum``
"""

from __future__ import annotations

import csv
import math
import re
from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime
from typing import TextIO

from ...errors import AmountParseError, DateParseError, RowShapeError
from ...models import STATEMENT_COLUMNS, DateField, StatementRow, TransactionRecord

DELIMITER = ";"
DATE_FORMAT = "%d.%m.%Y"

# What a European amount must look like once separators are swapped: an
# optional sign and digits with at most one decimal point.
_PLAIN_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def parse_date(value: str, field: str | None = None, *, line: int | None = None) -> date:
    """Parse a ``DD.MM.YYYY`` literal into a calendar date."""

    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise DateParseError(value, field, line=line) from exc


def normalize_amount(value: str, field: str | None = None, *, line: int | None = None) -> float:
    """Convert a European-formatted amount (``-1.234,56``) into a float.

    Thousands separators are removed before the decimal comma becomes a
    point; swapping the order would turn ``1.234,56`` into ``1.23456``.
    """

    text = value.replace(".", "").replace(",", ".")
    if not _PLAIN_DECIMAL.fullmatch(text):
        raise AmountParseError(value, field, "not a decimal literal", line=line)
    number = float(text)
    if not math.isfinite(number):
        raise AmountParseError(value, field, "out of range", line=line)
    return number


def bind_row(fields: Sequence[str], *, line: int | None = None) -> StatementRow:
    """Bind one delimited row to the positional column layout."""

    if len(fields) != len(STATEMENT_COLUMNS):
        raise RowShapeError(
            f"expected {len(STATEMENT_COLUMNS)} fields, found {len(fields)}", line=line
        )
    values = dict(zip(STATEMENT_COLUMNS, fields, strict=True))
    return StatementRow(
        accounting_date=parse_date(values["accounting_date"], "accounting_date", line=line),
        availability_date=parse_date(values["availability_date"], "availability_date", line=line),
        party=values["party"],
        kind=values["kind"],
        comment=values["comment"],
        balance=values["balance"],
        balance_currency=values["balance_currency"],
        sum=values["sum"],
        sum_currency=values["sum_currency"],
        line=line,
    )


def _delimited_rows(text: TextIO, first_line: int) -> Iterator[tuple[int, list[str]]]:
    reader = csv.reader(text, delimiter=DELIMITER)
    try:
        for fields in reader:
            # ``line_num`` counts physical lines consumed, so a quoted field
            # spanning lines reports the line the row ends on.
            yield first_line - 1 + reader.line_num, fields
    except csv.Error as exc:
        raise RowShapeError(str(exc), line=first_line - 1 + reader.line_num) from exc


def read_statement_rows(text: TextIO, *, first_line: int = 1) -> Iterator[StatementRow]:
    """Parse ``;``-delimited rows from ``text`` into :class:`StatementRow`.

    ``first_line`` is the physical line number of the first line of ``text``
    and only affects diagnostics. Blank lines are skipped.
    """

    for line, fields in _delimited_rows(text, first_line):
        if not fields:
            continue
        yield bind_row(fields, line=line)


def to_record(row: StatementRow, date_field: DateField = DateField.ACCOUNTING) -> TransactionRecord:
    """Map a statement row to a normalized transaction record."""

    return TransactionRecord(
        date=row.date_for(date_field),
        party=row.party,
        kind=row.kind,
        comment=row.comment,
        balance=normalize_amount(row.balance, "balance", line=row.line),
        sum=normalize_amount(row.sum, "sum", line=row.line),
    )


def to_records(
    rows: Iterable[StatementRow], date_field: DateField = DateField.ACCOUNTING
) -> Iterator[TransactionRecord]:
    for row in rows:
        yield to_record(row, date_field)


__all__ = [
    "DATE_FORMAT",
    "DELIMITER",
    "bind_row",
    "normalize_amount",
    "parse_date",
    "read_statement_rows",
    "to_record",
    "to_records",
]
