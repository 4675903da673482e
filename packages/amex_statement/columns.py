"""Undo the two-column layout of the statement text export.

Each printed page holds two columns of text side by side. The text export
keeps them on the same physical line, so a single raw line carries the left
column up to a fixed width and the right column after it. This module splits
every line at that width, collects the left and right halves of one page
group separately, and emits the group as "all left lines, then all right
lines" when the next page starts (and once more at end of input).

Page groups are delimited by page-marker lines (``Sida 2 av 4``). Everything
before the first marker (address block, logo text) is dropped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import NamedTuple

from .config import DEFAULT_SPLIT_WIDTH, SWEDISH_MARKERS, StatementMarkers, check_split_width
from .errors import NotAStatement, PageMarkerParseError, StatementLineError
from .logging_setup import get_logger

_logger = get_logger("amex_statement.columns")


class ReconstructedText(NamedTuple):
    """Logical lines in reading order plus the page count from the markers."""

    lines: list[str]
    page_total: int


def _page_marker_pattern(markers: StatementMarkers) -> re.Pattern[str]:
    return re.compile(
        re.escape(markers.page_prefix)
        + r"\s*([+-]?\d+)"
        + re.escape(markers.page_separator)
        + r"\s*([+-]?\d+)"
    )


def parse_page_marker(
    line: str, markers: StatementMarkers = SWEDISH_MARKERS
) -> tuple[int, int] | None:
    """Return ``(page, total_pages)`` when ``line`` is a page marker.

    ``None`` means the line carries no page prefix at all. A line that has the
    prefix but not two page numbers raises :class:`PageMarkerParseError`.
    """

    pos = line.find(markers.page_prefix)
    if pos < 0:
        return None
    m = _page_marker_pattern(markers).match(line, pos)
    if m is None:
        raise PageMarkerParseError(
            f"could not parse page number from {line[pos:].strip()!r} "
            f"(expected '{markers.page_prefix}<n>{markers.page_separator}<m>')"
        )
    return int(m.group(1)), int(m.group(2))


def split_columns(line: str, width: int) -> tuple[str, str]:
    """Split ``line`` into stripped ``(left, right)`` halves.

    The character at ``width - 1`` is the column gutter and belongs to
    neither half. Lines shorter than ``width`` are left column only.
    ``;`` is replaced with ``?`` since the CSV export uses it as separator.
    """

    line = line.replace(";", "?")
    if len(line) >= width:
        return line[: width - 1].strip(), line[width:].strip()
    return line.strip(), ""


def reconstruct_lines(
    raw_lines: Iterable[str],
    *,
    split_width: int = DEFAULT_SPLIT_WIDTH,
    markers: StatementMarkers = SWEDISH_MARKERS,
) -> ReconstructedText:
    """Turn raw two-column export lines into one reading-order sequence.

    Raises
    ------
    InvalidSplitWidth
        ``split_width`` is below the minimum; checked before reading input.
    StatementLineError
        A page marker could not be parsed (cause: ``PageMarkerParseError``).
    NotAStatement
        No page marker was found in the whole input.
    """

    width = check_split_width(split_width)

    lines: list[str] = []
    left: list[str] = []
    right: list[str] = []
    page_total = 0
    last_page = 0

    def flush() -> None:
        _logger.debug("columns:flush left=%d right=%d", len(left), len(right))
        lines.extend(left)
        lines.extend(right)
        left.clear()
        right.clear()

    for lineno, raw in enumerate(raw_lines, start=1):
        try:
            marker = parse_page_marker(raw, markers)
        except PageMarkerParseError as exc:
            raise StatementLineError(lineno, raw, str(exc)) from exc

        if marker is not None:
            page, page_total = marker
            if page > 1 and page != last_page:
                flush()
                last_page = page
            _logger.info("columns:page page=%d total=%d", page, page_total)
            continue
        if not page_total:
            continue

        lhs, rhs = split_columns(raw, width)
        if lhs:
            left.append(lhs)
        if rhs:
            right.append(rhs)

    if not page_total:
        raise NotAStatement("could not find a page marker (is this an AmEx statement?)")

    flush()
    _logger.info("columns:done pages=%d lines=%d", page_total, len(lines))
    return ReconstructedText(lines=lines, page_total=page_total)


__all__ = ["ReconstructedText", "parse_page_marker", "reconstruct_lines", "split_columns"]
