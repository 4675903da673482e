from __future__ import annotations

import pytest

from amex_statement.columns import parse_page_marker, reconstruct_lines, split_columns
from amex_statement.config import ENGLISH_MARKERS
from amex_statement.errors import (
    InvalidSplitWidth,
    NotAStatement,
    PageMarkerParseError,
    StatementLineError,
)
from tests.helpers.statement import two_column_page


def test_single_page_short_lines_keep_order_without_right_column():
    raw = ["Sida 1 av 1", "first", "  second  ", "third"]
    result = reconstruct_lines(raw)
    assert result.lines == ["first", "second", "third"]
    assert result.page_total == 1


def test_lines_before_first_page_marker_are_discarded():
    raw = ["AMERICAN EXPRESS", "address line", "Sida 1 av 1", "kept"]
    assert reconstruct_lines(raw).lines == ["kept"]


def test_left_column_then_right_column_per_page():
    raw = [
        "Sida 1 av 2",
        *two_column_page(["L1a", "L1b", "L1c"], ["R1a", "R1b"]),
        "Sida 2 av 2",
        *two_column_page(["L2a"], ["R2a"]),
    ]
    lines = reconstruct_lines(raw).lines
    assert lines == ["L1a", "L1b", "L1c", "R1a", "R1b", "L2a", "R2a"]


def test_page_one_is_flushed_before_any_page_two_line():
    raw = [
        "Sida 1 av 2",
        *two_column_page(["p1 left"], ["p1 right"]),
        "Sida 2 av 2",
        *two_column_page(["p2 left"], ["p2 right"]),
    ]
    lines = reconstruct_lines(raw).lines
    last_p1 = max(i for i, line in enumerate(lines) if line.startswith("p1"))
    first_p2 = min(i for i, line in enumerate(lines) if line.startswith("p2"))
    assert last_p1 < first_p2


def test_final_page_group_is_flushed_at_end_of_input():
    raw = ["Sida 1 av 3", "a", "Sida 2 av 3", "b", "Sida 3 av 3", *two_column_page(["c"], ["d"])]
    assert reconstruct_lines(raw).lines == ["a", "b", "c", "d"]


def test_repeated_marker_for_same_page_does_not_split_the_group():
    raw = [
        "Sida 1 av 2",
        "Sida 2 av 2",
        *two_column_page(["L1"], ["R1"]),
        "Sida 2 av 2",
        *two_column_page(["L2"], ["R2"]),
    ]
    assert reconstruct_lines(raw).lines == ["L1", "L2", "R1", "R2"]


def test_page_marker_may_sit_anywhere_on_the_line():
    assert parse_page_marker(f"{'':<70}Sida 3 av 7") == (3, 7)
    assert parse_page_marker("no marker here") is None


def test_unparsable_page_marker_is_fatal_with_line_number():
    raw = ["intro", "Sida 1 av 2", "text", "Sida x av 2"]
    with pytest.raises(StatementLineError) as excinfo:
        reconstruct_lines(raw)
    assert excinfo.value.line_number == 4
    assert isinstance(excinfo.value.__cause__, PageMarkerParseError)


def test_document_without_page_marker_is_not_a_statement():
    with pytest.raises(NotAStatement):
        reconstruct_lines(["just", "some", "text"])


def test_split_width_minimum_is_enforced_before_reading():
    def never_read():
        raise AssertionError("input must not be read")
        yield ""  # pragma: no cover

    with pytest.raises(InvalidSplitWidth):
        reconstruct_lines(never_read(), split_width=9)


def test_split_drops_gutter_character_and_strips_halves():
    assert split_columns("abc      X  def", 10) == ("abc", "def")
    assert split_columns("short", 10) == ("short", "")
    assert split_columns("  short  ", 10) == ("short", "")
    assert split_columns("123456789", 10) == ("123456789", "")
    assert split_columns("1234567890", 10) == ("123456789", "")


def test_semicolons_are_replaced_before_split():
    raw = ["Sida 1 av 1", *two_column_page(["A;B"], ["C;D"], width=20)]
    assert reconstruct_lines(raw, split_width=20).lines == ["A?B", "C?D"]


def test_empty_segments_are_dropped():
    raw = ["Sida 1 av 1", "", "   ", f"{'':<80}right only"]
    assert reconstruct_lines(raw).lines == ["right only"]


def test_custom_markers():
    raw = ["Page 1 of 2", *two_column_page(["a"], ["b"]), "Page 2 of 2", "c"]
    result = reconstruct_lines(raw, markers=ENGLISH_MARKERS)
    assert result.lines == ["a", "b", "c"]
    assert result.page_total == 2
