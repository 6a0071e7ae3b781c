"""Plain-text rendering of statement rows for the ``print`` command.

Nothing is normalized or deduplicated here: balance and sum are shown as the
raw export strings, and ``id`` is a fixed ``0`` placeholder.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from .models import DateField, StatementRow

PLACEHOLDER_ID = 0


def format_row(row: StatementRow, date_field: DateField = DateField.ACCOUNTING) -> str:
    return (
        f"id={PLACEHOLDER_ID} date={row.date_for(date_field).isoformat()} "
        f"party={row.party!r} kind={row.kind!r} comment={row.comment!r} "
        f"balance={row.balance!r} sum={row.sum!r}"
    )


def print_rows(
    rows: Iterable[StatementRow],
    out: TextIO,
    *,
    date_field: DateField = DateField.ACCOUNTING,
) -> int:
    """Write one formatted line per row to ``out``; return the row count."""

    count = 0
    for row in rows:
        out.write(format_row(row, date_field) + "\n")
        count += 1
    return count


__all__ = ["PLACEHOLDER_ID", "format_row", "print_rows"]
