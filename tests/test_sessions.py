from __future__ import annotations

import pytest

from amex_statement.config import ENGLISH_MARKERS
from amex_statement.errors import UnexpectedSessionEnd
from amex_statement.models import StatementDocument
from amex_statement.sessions import CardSessionTracker


@pytest.fixture
def tracker() -> CardSessionTracker:
    return CardSessionTracker(StatementDocument(), ENGLISH_MARKERS)


def test_same_holder_reuses_card(tracker: CardSessionTracker):
    first = tracker.begin("New purchases for Jane Doe")
    tracker.end("Total new purchases for Jane Doe")
    second = tracker.begin("New purchases for Jane Doe")
    assert second is first
    assert tracker.document.cards == [first]


def test_supplementary_card_is_distinct(tracker: CardSessionTracker):
    primary = tracker.begin("New purchases for Jane Doe")
    extra = tracker.begin("New purchases for Jane Doe Supplementary card ending in 12345")
    assert extra is not primary
    assert (extra.holder, extra.suffix) == ("Jane Doe", "12345")
    assert extra.label == "Jane Doe-12345"
    assert tracker.active_card is extra
    assert len(tracker.document.cards) == 2


def test_supplementary_card_reused_by_suffix(tracker: CardSessionTracker):
    tracker.begin("New purchases for Jane Doe")
    extra = tracker.begin("New purchases for Jane Doe Supplementary card ending in 12345")
    other = tracker.begin("New purchases for Jane Doe Supplementary card ending in 99999")
    again = tracker.begin("New purchases for Jane Doe Supplementary card ending in 12345 ")
    assert again is extra
    assert other is not extra
    assert len(tracker.document.cards) == 3


def test_lookup_without_suffix_reuses_first_card_of_holder(tracker: CardSessionTracker):
    extra = tracker.begin("New purchases for Jane Doe Supplementary card ending in 12345")
    tracker.end("Total new purchases for Jane Doe")
    again = tracker.begin("New purchases for Jane Doe")
    assert again is extra
    assert again.suffix == "12345"
    assert tracker.document.cards == [extra]


def test_lookup_without_suffix_prefers_first_registered(tracker: CardSessionTracker):
    primary = tracker.begin("New purchases for Jane Doe")
    tracker.begin("New purchases for Jane Doe Supplementary card ending in 12345")
    assert tracker.begin("New purchases for Jane Doe") is primary
    assert len(tracker.document.cards) == 2


def test_holder_is_stripped(tracker: CardSessionTracker):
    card = tracker.begin("New purchases for   John Smith  ")
    assert card.holder == "John Smith"
    assert card.suffix is None


def test_end_clears_active_card(tracker: CardSessionTracker):
    card = tracker.begin("New purchases for Jane Doe")
    assert tracker.end("Total new purchases for Jane Doe") is card
    assert tracker.active_card is None


def test_end_without_active_card_is_an_error(tracker: CardSessionTracker):
    with pytest.raises(UnexpectedSessionEnd):
        tracker.end("Total new purchases for Jane Doe")


def test_marker_classification(tracker: CardSessionTracker):
    assert tracker.is_begin("New purchases for Jane Doe")
    assert not tracker.is_begin("Total new purchases for Jane Doe")
    assert tracker.is_end("Total new purchases for Jane Doe 1.234,00")
    assert not tracker.is_end("New purchases for Jane Doe")
