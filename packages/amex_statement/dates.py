"""``DD.MM.YY`` date tokens as printed on the statement."""

from __future__ import annotations

import re
from datetime import datetime

from .errors import InvalidDate, InvalidDateFormat

# Two-digit years are always in this century.
CENTURY_OFFSET = 2000

# Length of the ``DD.MM.YY`` token itself (without the separating space).
DATE_TOKEN_LENGTH = 8

_DATE_TOKEN = re.compile(r"(\d{2})\.(\d{2})\.(\d{2})")


def parse_statement_date(token: str) -> datetime:
    """Decode the ``DD.MM.YY`` token at the start of ``token``.

    Only the first :data:`DATE_TOKEN_LENGTH` characters are examined, so the
    token may be followed by arbitrary text. The result is a naive
    ``datetime`` at noon, which keeps the calendar day stable under any
    later timezone conversion.
    """

    m = _DATE_TOKEN.match(token)
    if m is None:
        raise InvalidDateFormat(f"invalid date format: {token[:DATE_TOKEN_LENGTH]!r}")
    day, month, year = (int(g) for g in m.groups())
    try:
        return datetime(CENTURY_OFFSET + year, month, day, 12, 0, 0)
    except ValueError as exc:
        raise InvalidDate(f"not a calendar date: {m.group(0)!r}") from exc


__all__ = ["CENTURY_OFFSET", "DATE_TOKEN_LENGTH", "parse_statement_date"]
