"""Locale markers and run settings.

The statement is matched against fixed locale strings (page markers, card
session headers, OCR and due-date labels). They are kept together in
:class:`StatementMarkers` so a different export language only needs a new
instance, never code changes. :data:`SWEDISH_MARKERS` is the default since
that is the language the bills are printed in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigurationError, InvalidSplitWidth

DEFAULT_SPLIT_WIDTH = 80
MIN_SPLIT_WIDTH = 10


def check_split_width(width: int) -> int:
    """Return ``width`` when usable as a column split, else raise."""

    if isinstance(width, bool) or not isinstance(width, int):
        raise InvalidSplitWidth(f"split width must be an integer, got {width!r}")
    if width < MIN_SPLIT_WIDTH:
        raise InvalidSplitWidth(
            f"invalid line split width {width}; minimum is {MIN_SPLIT_WIDTH}"
        )
    return width


class StatementMarkers(BaseModel):
    """Fixed strings that identify structural lines of the statement.

    ``page_prefix`` and ``page_separator`` together describe the page marker
    ``<page_prefix><n><page_separator><m>``. All other markers are matched as
    line prefixes, except ``supplementary_card`` which is searched for inside
    the card-begin line.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    page_prefix: str
    page_separator: str
    card_begin: str
    card_end: str
    supplementary_card: str
    ocr: str
    due_date: str

    @field_validator("*")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("markers must be non-empty")
        return v


SWEDISH_MARKERS = StatementMarkers(
    page_prefix="Sida ",
    page_separator=" av ",
    card_begin="Nya köp för ",
    card_end="Summa nya köp för ",
    supplementary_card="Extrakort som slutar på ",
    ocr="OCR: ",
    due_date="Förfallodag",
)

ENGLISH_MARKERS = StatementMarkers(
    page_prefix="Page ",
    page_separator=" of ",
    card_begin="New purchases for ",
    card_end="Total new purchases for ",
    supplementary_card="Supplementary card ending in ",
    ocr="OCR: ",
    due_date="Due date",
)

MarkerLocale = Literal["sv", "en"]

MARKERS_BY_LOCALE: dict[str, StatementMarkers] = {
    "sv": SWEDISH_MARKERS,
    "en": ENGLISH_MARKERS,
}


class ParserSettings(BaseModel):
    """Validated configuration for one parser run.

    Built by the CLI from options (with ``AMEX_*`` environment fallbacks) and
    by :func:`amex_statement.api.parse_statement_file` from keyword arguments.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_path: Path
    outfile: Path | None = None
    location_file: Path | None = None
    split_width: int = DEFAULT_SPLIT_WIDTH
    locale: MarkerLocale = "sv"

    @field_validator("split_width")
    @classmethod
    def _split_width_minimum(cls, v: int) -> int:
        try:
            return check_split_width(v)
        except InvalidSplitWidth as exc:
            raise ValueError(str(exc)) from exc

    @property
    def markers(self) -> StatementMarkers:
        return MARKERS_BY_LOCALE[self.locale]

    @classmethod
    def build(cls, **values: object) -> ParserSettings:
        """Validate ``values``; report problems as :class:`ConfigurationError`."""

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
                for err in exc.errors()
            )
            if any(err["loc"] == ("split_width",) for err in exc.errors()):
                raise InvalidSplitWidth(f"invalid configuration: {problems}") from exc
            raise ConfigurationError(f"invalid configuration: {problems}") from exc


__all__ = [
    "DEFAULT_SPLIT_WIDTH",
    "ENGLISH_MARKERS",
    "MARKERS_BY_LOCALE",
    "MIN_SPLIT_WIDTH",
    "MarkerLocale",
    "ParserSettings",
    "SWEDISH_MARKERS",
    "StatementMarkers",
    "check_split_width",
]
