"""Exception hierarchy for statement parsing.

Every failure raised by the parser derives from :class:`StatementError`, so
callers (the CLI in particular) can catch one type and print the chain.
File-system failures are not wrapped: they surface as the builtin
``OSError`` subclasses (``FileNotFoundError``, ``PermissionError``).
"""

from __future__ import annotations


class StatementError(Exception):
    """Base class for all parser errors."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(StatementError):
    """Invalid settings detected before any parsing starts."""


class InvalidSplitWidth(ConfigurationError):
    pass


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------


class PageMarkerParseError(StatementError):
    """A page marker line did not contain two page numbers."""


class NotAStatement(StatementError):
    """No page marker was found anywhere in the input."""


class StatementDecodeError(StatementError):
    """An input file is not valid UTF-8 text."""


class UnexpectedSessionEnd(StatementError):
    """A card-end marker appeared while no card session was open."""


class MalformedTransactionLine(StatementError):
    """A transaction line has no space separating the amount."""


class LocationTableFormatError(StatementError):
    pass


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class DateError(StatementError):
    pass


class InvalidDateFormat(DateError):
    """Token is not three dot-separated two-digit integers."""


class InvalidDate(DateError):
    """Token is well formed but not a real calendar date."""


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


class AmountError(StatementError):
    pass


class MalformedAmount(AmountError):
    """First character is neither a digit nor a minus sign."""


class InvalidAmountChar(AmountError):
    pass


class AmountParseFailure(AmountError):
    pass


class TrailingGarbage(AmountError):
    pass


# ---------------------------------------------------------------------------
# Line context
# ---------------------------------------------------------------------------


class StatementLineError(StatementError):
    """A fatal error tied to one line of input.

    ``line_number`` is 1-based. The underlying error is available as
    ``__cause__`` (the wrapper is always raised with ``from``).
    """

    def __init__(self, line_number: int, line: str, message: str) -> None:
        super().__init__(f"L{line_number}: {message}")
        self.line_number = line_number
        self.line = line


def describe_error(exc: BaseException) -> str:
    """Render ``exc`` and its ``__cause__`` chain as ``outer: inner: ...``."""

    parts: list[str] = []
    seen: set[int] = set()
    cur: BaseException | None = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        text = str(cur) or cur.__class__.__name__
        if not parts or text not in parts[-1]:
            parts.append(text)
        cur = cur.__cause__
    return ": ".join(parts)


__all__ = [
    "AmountError",
    "AmountParseFailure",
    "ConfigurationError",
    "DateError",
    "InvalidAmountChar",
    "InvalidDate",
    "InvalidDateFormat",
    "InvalidSplitWidth",
    "LocationTableFormatError",
    "MalformedAmount",
    "MalformedTransactionLine",
    "NotAStatement",
    "PageMarkerParseError",
    "StatementDecodeError",
    "StatementError",
    "StatementLineError",
    "TrailingGarbage",
    "UnexpectedSessionEnd",
    "describe_error",
]
