"""Card session tracking.

Transactions on the statement are grouped in sessions opened by a line like
``Nya köp för JANE DOE`` and closed by ``Summa nya köp för JANE DOE``. A
supplementary card names its number suffix in the opening line
(``Nya köp för JANE DOE Extrakort som slutar på 12345``). The same card can
have several sessions (one per page it spans), so cards are looked up in the
document registry before a new one is created.
"""

from __future__ import annotations

from .config import SWEDISH_MARKERS, StatementMarkers
from .errors import UnexpectedSessionEnd
from .logging_setup import get_logger
from .models import Card, StatementDocument

_logger = get_logger("amex_statement.sessions")


class CardSessionTracker:
    """Track the active card while walking the reconstructed lines.

    The tracker registers new cards on ``document.cards``; the document stays
    the sole owner of every card.
    """

    def __init__(
        self, document: StatementDocument, markers: StatementMarkers = SWEDISH_MARKERS
    ) -> None:
        self.document = document
        self.markers = markers
        self.active_card: Card | None = None

    def is_begin(self, line: str) -> bool:
        return line.startswith(self.markers.card_begin)

    def is_end(self, line: str) -> bool:
        return line.startswith(self.markers.card_end)

    def split_holder(self, text: str) -> tuple[str, str | None]:
        """Split the text after the begin marker into ``(holder, suffix)``."""

        holder, sep, suffix = text.partition(self.markers.supplementary_card)
        if not sep:
            return text.strip(), None
        return holder.strip(), suffix.strip()

    def begin(self, line: str) -> Card:
        """Open a session for the card named on ``line`` and make it active."""

        holder, suffix = self.split_holder(line[len(self.markers.card_begin) :])
        card = self.document.find_card(holder, suffix)
        if card is not None:
            _logger.info("sessions:reuse card=%r", card.label)
        else:
            card = Card(holder=holder, suffix=suffix)
            self.document.cards.append(card)
            _logger.info(
                "sessions:new card=%r supplementary=%s", card.label, suffix is not None
            )
        self.active_card = card
        return card

    def end(self, line: str) -> Card:
        """Close the active session; returns the card that was active."""

        card = self.active_card
        if card is None:
            raise UnexpectedSessionEnd(f"got card end {line!r} but no card session is open")
        _logger.info(
            "sessions:closed card=%r transactions=%d", card.label, len(card.transactions)
        )
        self.active_card = None
        return card


__all__ = ["CardSessionTracker"]
