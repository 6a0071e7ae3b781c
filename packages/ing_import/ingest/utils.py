"""Ingest utilities shared by the CLI commands and the API.

Composes the decoder, the preamble skipper and the ING adapter into row and
record iterators over a raw byte stream.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

from ..models import DateField, StatementRow, TransactionRecord
from .adapters.ing_csv import read_statement_rows, to_records
from .decoding import PREAMBLE_LINES, decode_statement, skip_preamble


def iter_statement_rows(stream: BinaryIO) -> Iterator[StatementRow]:
    """Yield statement rows from a raw ING export, one at a time."""

    text = decode_statement(stream)
    try:
        skip_preamble(text, PREAMBLE_LINES)
        yield from read_statement_rows(text, first_line=PREAMBLE_LINES + 1)
    finally:
        text.close()


def iter_records(
    stream: BinaryIO, *, date_field: DateField = DateField.ACCOUNTING
) -> Iterator[TransactionRecord]:
    """Yield normalized transaction records from a raw ING export."""

    return to_records(iter_statement_rows(stream), date_field)


__all__ = ["iter_records", "iter_statement_rows"]
