"""Byte-level handling of ING statement exports: decoding and preamble skipping.

ING ships its CSV exports in Windows-1252 with a block of account metadata
lines above the tabular section. This module turns the raw byte stream into a
text stream positioned at the first tabular line.

Decoding never fails. The five bytes Windows-1252 leaves undefined (0x81,
0x8D, 0x8F, 0x90, 0x9D) map to the Latin-1 code point with the same value,
which is what browsers (WHATWG ``windows-1252``) do. A leading UTF-8 or UTF-16
byte order mark wins over the legacy encoding and is stripped.
"""

from __future__ import annotations

import codecs
import io
from typing import BinaryIO, TextIO

from ..errors import PreambleTruncatedError

LEGACY_ENCODING = "cp1252"

# Number of metadata lines preceding the tabular section of an export.
PREAMBLE_LINES = 14

_LATIN1_FALLBACK = "ing_import.latin1-fallback"

# Longest byte order mark we recognize.
_BOM_MAX_LEN = 3

_BOM_ENCODINGS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _latin1_fallback(exc: UnicodeError) -> tuple[str, int]:
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    return exc.object[exc.start : exc.end].decode("latin-1"), exc.end


codecs.register_error(_LATIN1_FALLBACK, _latin1_fallback)


class _PrefixedReader(io.RawIOBase):
    """Raw stream replaying ``head`` before reading on from ``stream``.

    Closing it never closes ``stream``; the caller keeps ownership.
    """

    def __init__(self, head: bytes, stream: BinaryIO) -> None:
        super().__init__()
        self._head = head
        self._read = getattr(stream, "read1", stream.read)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        if self._head:
            data, self._head = self._head[: len(buffer)], self._head[len(buffer) :]
        else:
            data = self._read(len(buffer)) or b""
        buffer[: len(data)] = data
        return len(data)


def _read_head(stream: BinaryIO, size: int) -> bytes:
    # Pipes may deliver fewer bytes per read than requested.
    head = b""
    while len(head) < size:
        chunk = stream.read(size - len(head))
        if not chunk:
            break
        head += chunk
    return head


def _sniff_encoding(head: bytes) -> tuple[str, str]:
    """Return ``(encoding, errors)`` for a stream starting with ``head``."""

    for bom, encoding in _BOM_ENCODINGS:
        if head.startswith(bom):
            # Unicode encodings replace malformed sequences instead of failing.
            return encoding, "replace"
    return LEGACY_ENCODING, _LATIN1_FALLBACK


def decode_statement(stream: BinaryIO) -> TextIO:
    """Wrap a binary stream in a text stream decoding the statement encoding.

    The returned wrapper uses ``newline=''`` as required by :mod:`csv`, so
    quoted fields keep their embedded line breaks. Closing (or collecting)
    the wrapper leaves ``stream`` open.
    """

    head = _read_head(stream, _BOM_MAX_LEN)
    encoding, errors = _sniff_encoding(head)
    buffered = io.BufferedReader(_PrefixedReader(head, stream))
    return io.TextIOWrapper(buffered, encoding=encoding, errors=errors, newline="")


def skip_preamble(text: TextIO, lines: int = PREAMBLE_LINES) -> int:
    """Consume and discard exactly ``lines`` lines from ``text``.

    Raises :class:`PreambleTruncatedError` when the stream ends first; a
    statement without its full metadata block is not an ING export.
    """

    for read in range(lines):
        if text.readline() == "":
            raise PreambleTruncatedError(expected=lines, read=read)
    return lines


__all__ = [
    "LEGACY_ENCODING",
    "PREAMBLE_LINES",
    "decode_statement",
    "skip_preamble",
]
