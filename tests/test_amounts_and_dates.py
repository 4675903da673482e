from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from amex_statement.amounts import format_amount, parse_amount
from amex_statement.dates import parse_statement_date
from amex_statement.errors import (
    AmountError,
    AmountParseFailure,
    InvalidAmountChar,
    InvalidDate,
    InvalidDateFormat,
    MalformedAmount,
    TrailingGarbage,
)

# ---- Amounts -----------------------------------------------------------------


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("1,50", Decimal("1.50")),
        ("-1234,56 extra", Decimal("-1234.56")),
        ("12.345,67", Decimal("12345.67")),
        ("250", Decimal("250")),
        ("1.234.567,00 kr", Decimal("1234567.00")),
    ],
)
def test_parse_amount_swedish_locale(token: str, expected: Decimal):
    assert parse_amount(token) == expected


def test_parse_amount_rejects_unexpected_character():
    with pytest.raises(InvalidAmountChar):
        parse_amount("12x")


def test_parse_amount_minus_only_allowed_first():
    with pytest.raises(InvalidAmountChar):
        parse_amount("12-3")


@pytest.mark.parametrize("token", ["kr", ",50", "+12,00", ".5"])
def test_parse_amount_rejects_bad_leading_character(token: str):
    with pytest.raises(MalformedAmount):
        parse_amount(token)


@pytest.mark.parametrize("token", ["-", "", "- 12"])
def test_parse_amount_without_digits_fails_conversion(token: str):
    with pytest.raises(AmountParseFailure):
        parse_amount(token)


def test_parse_amount_two_decimal_commas_leave_garbage():
    # "1,2,3" normalizes to "1.2.3": "1.2" converts, ".3" is left over.
    with pytest.raises(TrailingGarbage):
        parse_amount("1,2,3")


def test_amount_errors_share_a_base_class():
    with pytest.raises(AmountError):
        parse_amount("abc")


def test_format_amount_two_decimals_half_up():
    assert format_amount(Decimal("1234.5")) == "1234.50"
    assert format_amount(Decimal("-0.005")) == "-0.01"
    assert format_amount(Decimal("7")) == "7.00"


# ---- Dates -------------------------------------------------------------------


@pytest.mark.parametrize(
    ("token", "ymd"),
    [
        ("08.06.21", (2021, 6, 8)),
        ("29.02.24", (2024, 2, 29)),
        ("31.12.99", (2099, 12, 31)),
        ("01.01.00", (2000, 1, 1)),
    ],
)
def test_parse_statement_date_round_trip(token: str, ymd: tuple[int, int, int]):
    dt = parse_statement_date(token)
    assert (dt.year, dt.month, dt.day) == ymd
    assert f"{dt.day:02d}.{dt.month:02d}.{dt.year - 2000:02d}" == token


def test_parse_statement_date_is_noon_and_ignores_trailing_text():
    assert parse_statement_date("08.06.21 09.06.21 ICA") == datetime(2021, 6, 8, 12, 0, 0)


@pytest.mark.parametrize("token", ["8.6.21", "08-06-21", "ab.cd.ef", "", "08.06."])
def test_parse_statement_date_invalid_format(token: str):
    with pytest.raises(InvalidDateFormat):
        parse_statement_date(token)


@pytest.mark.parametrize("token", ["31.04.21", "29.02.23", "00.01.21", "12.13.21"])
def test_parse_statement_date_not_a_calendar_date(token: str):
    with pytest.raises(InvalidDate):
        parse_statement_date(token)
