"""Exception types raised by the import pipeline.

Each failure point of the pipeline raises its own type; all of them derive
from :class:`IngestError` so entrypoints can abort on the first one with a
single ``except`` clause. Nothing below the CLI decides to terminate.
"""

from __future__ import annotations

import csv


class IngestError(Exception):
    """Base class for every import failure."""


class PreambleTruncatedError(IngestError):
    """The input ended before the fixed metadata preamble was consumed."""

    def __init__(self, expected: int, read: int) -> None:
        super().__init__(
            f"failed to discard the first {expected} lines of the statement: "
            f"input ended after {read} line(s)"
        )
        self.expected = expected
        self.read = read


class RowShapeError(IngestError, csv.Error):
    """A delimited row could not be bound to the positional column layout."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(prefix + message)
        self.line = line


class DateParseError(IngestError, ValueError):
    """A date literal was not in ``DD.MM.YYYY`` form."""

    def __init__(self, value: str, field: str | None = None, *, line: int | None = None) -> None:
        where = f" in {field}" if field else ""
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(f"{prefix}invalid DD.MM.YYYY date{where}: {value!r}")
        self.value = value
        self.field = field
        self.line = line


class AmountParseError(IngestError, ValueError):
    """A European-formatted amount literal could not be parsed."""

    def __init__(
        self,
        value: str,
        field: str | None = None,
        reason: str | None = None,
        *,
        line: int | None = None,
    ) -> None:
        what = field or "amount"
        detail = f": {reason}" if reason else ""
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(f"{prefix}failed to parse {what} {value!r} as a number{detail}")
        self.value = value
        self.field = field
        self.line = line


class StoreOpenError(IngestError):
    """The database could not be opened or its schema initialized."""


class StoreWriteError(IngestError):
    """A transaction could not be written to the database."""


__all__ = [
    "AmountParseError",
    "DateParseError",
    "IngestError",
    "PreambleTruncatedError",
    "RowShapeError",
    "StoreOpenError",
    "StoreWriteError",
]
