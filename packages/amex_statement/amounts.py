"""Amount parsing for Swedish-locale statement values.

Statement amounts use a comma as the decimal separator and a dot as the
thousands separator (``12.345,67``), with an optional leading minus for
credits. Whatever follows the first space (currency noise such as ``kr``) is
ignored.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import AmountParseFailure, InvalidAmountChar, MalformedAmount, TrailingGarbage

_CENTS = Decimal("0.01")

# Longest numeric prefix of the normalized buffer (ASCII dot decimal).
_NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def _normalize(token: str) -> str:
    buf: list[str] = []
    for i, ch in enumerate(token):
        if "0" <= ch <= "9":
            buf.append(ch)
        elif i == 0:
            if ch != "-":
                raise MalformedAmount(f"value {token!r} is malformed")
            buf.append(ch)
        elif ch == ".":
            continue
        elif ch == ",":
            buf.append(".")
        elif ch == " ":
            break
        else:
            raise InvalidAmountChar(f"invalid character {ch!r} in value {token!r}")
    return "".join(buf)


def parse_amount(token: str) -> Decimal:
    """Parse a statement amount token into a signed ``Decimal``.

    >>> parse_amount("12.345,67")
    Decimal('12345.67')
    >>> parse_amount("-1234,56 kr")
    Decimal('-1234.56')
    """

    buf = _normalize(token)
    m = _NUMBER_PREFIX.match(buf)
    if m is None:
        raise AmountParseFailure(f"could not convert amount {buf!r} to a number")
    try:
        value = Decimal(m.group(0))
    except InvalidOperation as exc:
        raise AmountParseFailure(f"could not convert amount {buf!r} to a number") from exc
    if m.end() != len(buf) or not value.is_finite():
        raise TrailingGarbage(f"got garbage after amount in {buf!r}")
    return value


def format_amount(value: Decimal) -> str:
    """Exactly two decimals, ASCII dot, leading minus for negatives."""

    return f"{value.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}"


__all__ = ["format_amount", "parse_amount"]
