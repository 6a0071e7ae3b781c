# ruff: noqa: E501
from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from ing_import.errors import AmountParseError, DateParseError, IngestError, RowShapeError
from ing_import.ingest.adapters.ing_csv import (
    bind_row,
    normalize_amount,
    parse_date,
    read_statement_rows,
    to_record,
)
from ing_import.ingest.utils import iter_records, iter_statement_rows
from ing_import.models import DateField, TransactionRecord
from tests.helpers.statements import ACME_ROW, build_statement


@pytest.mark.parametrize(
    ("literal", "expected"),
    [
        ("-1.234,56", -1234.56),
        ("0,00", 0.0),
        ("12,5", 12.5),
        ("1.234.567,89", 1234567.89),
        ("+3,10", 3.1),
        ("42", 42.0),
    ],
)
def test_normalize_amount(literal: str, expected: float):
    assert normalize_amount(literal) == expected


@pytest.mark.parametrize("literal", ["", "-", "abc", "1,2,3", "1e5", "inf", "NaN", " 1,00", "1,00 EUR"])
def test_normalize_amount_rejects_malformed_literals(literal: str):
    with pytest.raises(AmountParseError) as excinfo:
        normalize_amount(literal, "sum")

    assert excinfo.value.value == literal
    assert repr(literal) in str(excinfo.value)


def test_amount_error_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_amount("x")


def test_parse_date():
    assert parse_date("31.12.2020") == date(2020, 12, 31)


@pytest.mark.parametrize("literal", ["2020-12-31", "31/12/2020", "32.12.2020", "", "31.12.2020 "])
def test_parse_date_rejects_other_forms(literal: str):
    with pytest.raises(DateParseError):
        parse_date(literal)


def test_bind_row_is_positional():
    fields = ACME_ROW.split(";")

    row = bind_row(fields, line=15)

    assert row.accounting_date == date(2020, 12, 31)
    assert row.availability_date == date(2020, 12, 31)
    assert (row.party, row.kind, row.comment) == ("ACME", "CREDIT", "Invoice 42")
    assert (row.balance, row.balance_currency) == ("1.234,56", "EUR")
    assert (row.sum, row.sum_currency) == ("-100,00", "EUR")
    assert row.line == 15


@pytest.mark.parametrize("n_fields", [8, 10])
def test_bind_row_rejects_wrong_field_count(n_fields: int):
    fields = (ACME_ROW.split(";") + ["extra"])[:n_fields]

    with pytest.raises(RowShapeError) as excinfo:
        bind_row(fields, line=20)

    assert "expected 9 fields" in str(excinfo.value)
    assert excinfo.value.line == 20
    # Row shape problems are still CSV errors for callers catching csv.Error.
    assert isinstance(excinfo.value, csv.Error)


def test_bind_row_validates_availability_date_too():
    fields = ACME_ROW.split(";")
    fields[1] = "2020-12-31"

    with pytest.raises(DateParseError) as excinfo:
        bind_row(fields)

    assert excinfo.value.field == "availability_date"


def test_read_statement_rows_skips_blank_lines_and_tracks_line_numbers():
    text = io.StringIO(ACME_ROW + "\r\n\r\n" + ACME_ROW.replace("ACME", "Globex") + "\r\n")

    rows = list(read_statement_rows(text, first_line=15))

    assert [r.party for r in rows] == ["ACME", "Globex"]
    assert [r.line for r in rows] == [15, 17]


def test_read_statement_rows_keeps_quoted_semicolons_and_whitespace():
    line = '01.02.2021;02.02.2021;"Müller; Söhne";Lastschrift;"  Miete  ";10,00;EUR;-5,00;EUR'

    (row,) = read_statement_rows(io.StringIO(line + "\n"))

    assert row.party == "Müller; Söhne"
    assert row.comment == "  Miete  "


def test_read_statement_rows_reports_short_row_with_line():
    text = io.StringIO(ACME_ROW + "\n" + "01.01.2021;01.01.2021;too short\n")

    rows = read_statement_rows(text, first_line=15)

    assert next(rows).party == "ACME"
    with pytest.raises(RowShapeError, match="line 16"):
        next(rows)


def test_to_record_uses_accounting_date_by_default():
    row = bind_row(
        "30.12.2020;04.01.2021;ACME;Gutschrift;Invoice 42;1.234,56;EUR;-100,00;EUR".split(";")
    )

    assert to_record(row).date == date(2020, 12, 30)
    assert to_record(row, DateField.AVAILABILITY).date == date(2021, 1, 4)


def test_to_record_normalizes_amounts_and_copies_text_verbatim():
    row = bind_row(ACME_ROW.split(";"))

    record = to_record(row)

    assert record == TransactionRecord(
        date=date(2020, 12, 31),
        party="ACME",
        kind="CREDIT",
        comment="Invoice 42",
        balance=1234.56,
        sum=-100.0,
    )
    assert record.natural_key == (date(2020, 12, 31), "ACME", "Invoice 42")


def test_to_record_names_the_bad_amount_field():
    row = bind_row(ACME_ROW.replace("-100,00", "n/a").split(";"), line=15)

    with pytest.raises(AmountParseError) as excinfo:
        to_record(row)

    assert excinfo.value.field == "sum"
    assert "line 15" in str(excinfo.value)


def test_iter_statement_rows_starts_after_the_preamble():
    raw = build_statement([ACME_ROW, ACME_ROW.replace("ACME", "Ümläut GmbH")])

    rows = list(iter_statement_rows(io.BytesIO(raw)))

    assert [r.party for r in rows] == ["ACME", "Ümläut GmbH"]
    assert rows[0].line == 15


def test_iter_records_propagates_the_first_error():
    raw = build_statement([ACME_ROW, "garbage", ACME_ROW])

    records = iter_records(io.BytesIO(raw))

    assert next(records).party == "ACME"
    with pytest.raises(IngestError):
        next(records)


def test_unterminated_quote_is_a_row_shape_error():
    raw = build_statement(['31.12.2020;31.12.2020;"ACME'], newline="\n")

    with pytest.raises(RowShapeError):
        list(iter_statement_rows(io.BytesIO(raw)))
