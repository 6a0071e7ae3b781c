"""Public API for importing ING statement exports.

Both entrypoints consume a raw byte stream one row at a time and raise an
:class:`~ing_import.errors.IngestError` subclass at the first failure. Rows
already written before a failure stay written; there is no cross-row
transaction.
"""

from __future__ import annotations

from typing import BinaryIO, TextIO

from sqlalchemy.engine import Engine

from ing_db.client import get_session

from .ingest.utils import iter_records, iter_statement_rows
from .logging_setup import get_logger
from .models import DateField, ImportSummary
from .persistence import ensure_schema, save_transaction
from .printing import print_rows

logger = get_logger("ing_import.api")


def import_statement(
    stream: BinaryIO,
    engine: Engine,
    *,
    date_field: DateField = DateField.ACCOUNTING,
) -> ImportSummary:
    """Import every row of ``stream`` into the ``transactions`` table.

    Parameters
    ----------
    stream:
        Raw bytes of an ING CSV export (Windows-1252, metadata preamble
        included).
    engine:
        Engine on an existing SQLite database, typically from
        :func:`ing_import.persistence.open_store`.
    date_field:
        Which statement date becomes the record's ``date``.

    Returns
    -------
    ImportSummary
        The number of data rows processed. Rows whose ``(date, party,
        comment)`` already existed are included and not reported separately.
    """

    ensure_schema(engine)

    rows = 0
    with get_session(engine) as session:
        for record in iter_records(stream, date_field=date_field):
            save_transaction(session, record)
            rows += 1
            logger.debug("saved transaction %s", record.natural_key)

    logger.info("processed %d statement rows", rows)
    return ImportSummary(rows=rows)


def print_statement(
    stream: BinaryIO,
    out: TextIO,
    *,
    date_field: DateField = DateField.ACCOUNTING,
) -> int:
    """Print every row of ``stream`` to ``out``; return the number printed."""

    return print_rows(iter_statement_rows(stream), out, date_field=date_field)


__all__ = ["import_statement", "print_statement"]
