"""Data model for a parsed statement.

Ownership is strictly top-down: a :class:`StatementDocument` owns its
:class:`Card` objects in statement order, and each card owns its
:class:`Transaction` records in statement order. Nothing points back up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """One purchase, credit or fee line from a card session.

    Attributes
    ----------
    date:
        Transaction date (first date column), at noon.
    posting_date:
        Date the charge was booked (second date column), at noon.
    amount:
        Signed amount in SEK with minor-unit precision. Credits are negative.
    details:
        Free-text merchant description with the location removed.
    location:
        Canonical location from the location table, or ``None``.
    """

    date: datetime
    posting_date: datetime
    amount: Decimal
    details: str
    location: str | None = None


@dataclass(slots=True, eq=False)
class Card:
    """A primary or supplementary card and its transactions.

    Identity is ``(holder, suffix)``; equality is object identity so the same
    holder appearing in two sessions resolves to one shared instance.
    """

    holder: str
    suffix: str | None = None
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def label(self) -> str:
        """``holder`` or ``holder-suffix`` as printed in reports and CSV."""
        return f"{self.holder}-{self.suffix}" if self.suffix else self.holder

    @property
    def total(self) -> Decimal:
        return sum((t.amount for t in self.transactions), Decimal("0"))


# ---------------------------------------------------------------------------
# Run-level state
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Statistics:
    """Counters maintained during the single processing pass.

    ``total_lines`` counts every reconstructed line looked at, including a
    location line claimed by lookahead, so ``consumed_lines`` plus
    ``skipped_lines`` always equals ``total_lines``.
    """

    total_lines: int = 0
    skipped_lines: int = 0
    transaction_count: int = 0

    @property
    def consumed_lines(self) -> int:
        return self.total_lines - self.skipped_lines


@dataclass(slots=True)
class StatementDocument:
    cards: list[Card] = field(default_factory=list)
    ocr_reference: str | None = None
    due_date: datetime | None = None
    statistics: Statistics = field(default_factory=Statistics)
    page_total: int = 0

    @property
    def transaction_count(self) -> int:
        return sum(len(c.transactions) for c in self.cards)

    @property
    def total(self) -> Decimal:
        return sum((c.total for c in self.cards), Decimal("0"))

    def find_card(self, holder: str, suffix: str | None) -> Card | None:
        """Return the registered card matching ``(holder, suffix)``.

        A lookup without a suffix matches the first registered card of that
        holder, supplementary or not; a lookup with a suffix only matches a
        card carrying the same suffix.
        """

        for card in self.cards:
            if card.holder == holder and (suffix is None or card.suffix == suffix):
                return card
        return None


__all__ = ["Card", "StatementDocument", "Statistics", "Transaction"]
