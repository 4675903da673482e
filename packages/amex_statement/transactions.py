"""Recognize and decode transaction lines.

A transaction line starts with two ``DD.MM.YY`` dates (transaction date and
posting date) and ends with the amount after the last space::

    08.06.21 09.06.21 RESTAURANG PELIKAN STOCKHOLM 1.234,50

Between them is the merchant text, which may end with a location. Because the
text export sometimes wraps the location onto its own line, the line after a
transaction is checked against the location table first (one-line lookahead).
When it matches it is claimed by the transaction and must not be processed on
its own; :class:`ParsedTransaction` reports this through ``consumed``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import NamedTuple

from .amounts import parse_amount
from .dates import DATE_TOKEN_LENGTH, parse_statement_date
from .errors import DateError, MalformedTransactionLine
from .locations import LocationTable
from .logging_setup import get_logger
from .models import Transaction

_logger = get_logger("amex_statement.transactions")

# Width of one date column: the ``DD.MM.YY`` token plus its separating space.
DATE_FIELD_WIDTH = DATE_TOKEN_LENGTH + 1


def read_transaction_dates(line: str) -> tuple[datetime, datetime] | None:
    """Return ``(date, posting_date)`` if ``line`` starts with two valid dates."""

    if len(line) < DATE_FIELD_WIDTH * 2:
        return None
    try:
        date = parse_statement_date(line[:DATE_FIELD_WIDTH])
        posting_date = parse_statement_date(line[DATE_FIELD_WIDTH : DATE_FIELD_WIDTH * 2])
    except DateError:
        return None
    return date, posting_date


def is_transaction_line(line: str) -> bool:
    return read_transaction_dates(line) is not None


class ParsedTransaction(NamedTuple):
    """A decoded transaction and the number of input lines it used (1 or 2)."""

    transaction: Transaction
    consumed: int


class TransactionParser:
    """Decode transaction lines, resolving locations through a lookup table."""

    def __init__(self, locations: Mapping[str, str] | None = None) -> None:
        self.locations = (
            locations if isinstance(locations, LocationTable) else LocationTable(locations)
        )

    def parse(self, line: str, next_line: str | None = None) -> ParsedTransaction:
        """Decode ``line``; ``next_line`` is the following input line, if any.

        Raises
        ------
        MalformedTransactionLine
            ``line`` is not a transaction or has no space before the amount.
        AmountError
            The amount token is not a valid amount.
        """

        dates = read_transaction_dates(line)
        if dates is None:
            raise MalformedTransactionLine(f"not a valid transaction line: {line!r}")
        date, posting_date = dates

        rest = line[DATE_FIELD_WIDTH * 2 :]
        remainder, sep, amount_token = rest.rpartition(" ")
        if not sep:
            raise MalformedTransactionLine("malformed line, missing amount separator")
        amount = parse_amount(amount_token)

        details, location, consumed = self.resolve_details(remainder, next_line)
        tx = Transaction(
            date=date,
            posting_date=posting_date,
            amount=amount,
            details=details,
            location=location,
        )
        _logger.debug(
            "transactions:parsed date=%s amount=%s location=%s details=%r",
            date.date().isoformat(),
            amount,
            location or "unknown",
            details,
        )
        return ParsedTransaction(transaction=tx, consumed=consumed)

    def resolve_details(
        self, remainder: str, next_line: str | None = None
    ) -> tuple[str, str | None, int]:
        """Split the merchant text into ``(details, location, consumed)``.

        Precedence: a following line that is a known location wins; then a
        known location as the last word of ``remainder``; otherwise the whole
        text is the details and the location is unknown.
        """

        text = remainder.strip()
        location = self.locations.resolve(next_line) if next_line is not None else None
        consumed = 2 if location is not None else 1

        tokens = text.split(" ")
        if len(tokens) <= 1:
            if location is None:
                _logger.warning("transactions:single_word_details text=%r", text)
            return text, location, consumed

        if location is not None:
            words = [t for t in tokens if t]
            if words[-1] == location:
                words.pop()
            return " ".join(words), location, consumed

        location = self.locations.resolve(tokens[-1])
        if location is not None:
            return " ".join(t for t in tokens[:-1] if t), location, consumed
        return text, None, consumed


__all__ = [
    "DATE_FIELD_WIDTH",
    "ParsedTransaction",
    "TransactionParser",
    "is_transaction_line",
    "read_transaction_dates",
]
