"""Public entry points for parsing a statement text export.

``parse_statement_text`` works on text already in memory;
``parse_statement_file`` adds reading the input and the optional location
file. The split width is validated before any input is read. Both reconstruct
the reading order of the two-column layout and run one
:class:`~amex_statement.processor.StatementProcessor` pass.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from os import PathLike

from .columns import reconstruct_lines
from .config import DEFAULT_SPLIT_WIDTH, SWEDISH_MARKERS, ParserSettings, StatementMarkers
from .errors import StatementDecodeError
from .locations import LocationTable
from .logging_setup import get_logger
from .models import StatementDocument
from .processor import StatementProcessor

_logger = get_logger("amex_statement.api")


def parse_statement_lines(
    raw_lines: Iterable[str],
    *,
    locations: Mapping[str, str] | None = None,
    split_width: int = DEFAULT_SPLIT_WIDTH,
    markers: StatementMarkers = SWEDISH_MARKERS,
) -> StatementDocument:
    """Parse raw export lines (still in two-column form)."""

    text = reconstruct_lines(raw_lines, split_width=split_width, markers=markers)
    processor = StatementProcessor(
        locations=locations, markers=markers, page_total=text.page_total
    )
    return processor.process(text.lines)


def parse_statement_text(
    text: str,
    *,
    locations: Mapping[str, str] | None = None,
    split_width: int = DEFAULT_SPLIT_WIDTH,
    markers: StatementMarkers = SWEDISH_MARKERS,
) -> StatementDocument:
    """Parse the full text of a statement export.

    Raises
    ------
    InvalidSplitWidth
        ``split_width`` is below the minimum.
    NotAStatement
        The text has no page markers.
    StatementLineError
        A page marker or transaction line could not be parsed; the original
        error is chained as ``__cause__``.
    """

    return parse_statement_lines(
        text.splitlines(), locations=locations, split_width=split_width, markers=markers
    )


def parse_statement_file(
    path: str | PathLike[str],
    *,
    location_file: str | PathLike[str] | None = None,
    split_width: int = DEFAULT_SPLIT_WIDTH,
    locale: str = "sv",
) -> StatementDocument:
    """Read and parse the statement export at ``path``.

    ``location_file`` is loaded with :meth:`LocationTable.from_path` when
    given. Settings are validated before any file is opened.

    Raises
    ------
    ConfigurationError
        Invalid split width (:class:`InvalidSplitWidth`) or unknown locale.
    StatementDecodeError
        The export is not valid UTF-8.
    OSError
        The export or the location file could not be read.
    """

    settings = ParserSettings.build(
        input_path=path, location_file=location_file, split_width=split_width, locale=locale
    )
    locations = (
        LocationTable.from_path(settings.location_file)
        if settings.location_file is not None
        else LocationTable()
    )

    p = settings.input_path
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise StatementDecodeError(
            f"{p} is not valid UTF-8 (byte 0x{exc.object[exc.start]:02x} at offset {exc.start})"
        ) from exc
    _logger.info("api:read path=%s bytes=%d", p, len(text.encode("utf-8")))
    return parse_statement_text(
        text, locations=locations, split_width=settings.split_width, markers=settings.markers
    )


__all__ = ["parse_statement_file", "parse_statement_lines", "parse_statement_text"]
