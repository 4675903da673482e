"""Single-pass processing of reconstructed statement lines.

:class:`StatementProcessor` owns all mutable state for one run: the read
cursor, the card session tracker and the document being built. For every line
it tries, in order: card-begin marker, card-end marker, transaction line,
OCR reference (first one only), due date; anything else is counted as
skipped.

Fatal errors are re-raised as :class:`~amex_statement.errors.StatementLineError`
carrying the 1-based index of the offending line, with the original error as
``__cause__``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .config import SWEDISH_MARKERS, StatementMarkers
from .dates import parse_statement_date
from .errors import DateError, StatementError, StatementLineError
from .logging_setup import get_logger
from .models import StatementDocument, Statistics
from .sessions import CardSessionTracker
from .transactions import TransactionParser, is_transaction_line

_logger = get_logger("amex_statement.processor")


class StatementProcessor:
    """Build a :class:`StatementDocument` from reconstructed lines.

    An instance processes exactly one statement; create a new one per run.
    """

    def __init__(
        self,
        *,
        locations: Mapping[str, str] | None = None,
        markers: StatementMarkers = SWEDISH_MARKERS,
        page_total: int = 0,
    ) -> None:
        self.markers = markers
        self.document = StatementDocument(page_total=page_total)
        self.sessions = CardSessionTracker(self.document, markers)
        self.parser = TransactionParser(locations)
        self._processed = False

    @property
    def statistics(self) -> Statistics:
        return self.document.statistics

    def process(self, lines: Sequence[str]) -> StatementDocument:
        if self._processed:
            raise RuntimeError("StatementProcessor instances process a single statement")
        self._processed = True

        idx = 0
        while idx < len(lines):
            line = lines[idx]
            next_line = lines[idx + 1] if idx + 1 < len(lines) else None
            try:
                consumed = self.process_line(line, next_line)
            except StatementError as exc:
                _logger.error("processor:failed line=%d text=%r", idx + 1, line)
                raise StatementLineError(idx + 1, line, f"could not process line: {exc}") from exc
            self.statistics.total_lines += consumed
            idx += consumed

        stats = self.statistics
        _logger.info(
            "processor:done cards=%d transactions=%d lines=%d skipped=%d",
            len(self.document.cards),
            stats.transaction_count,
            stats.total_lines,
            stats.skipped_lines,
        )
        return self.document

    def process_line(self, line: str, next_line: str | None = None) -> int:
        """Handle one line and return how many lines were used (1 or 2)."""

        markers = self.markers
        if self.sessions.is_begin(line):
            self.sessions.begin(line)
            return 1
        if self.sessions.is_end(line):
            self.sessions.end(line)
            return 1
        if is_transaction_line(line):
            return self._process_transaction(line, next_line)
        if line.startswith(markers.ocr) and self.document.ocr_reference is None:
            self.document.ocr_reference = line[len(markers.ocr) :].strip()
            _logger.info("processor:ocr reference=%s", self.document.ocr_reference)
            return 1
        if line.startswith(markers.due_date):
            self._process_due_date(line)
            return 1

        _logger.debug("processor:skip text=%r", line)
        self.statistics.skipped_lines += 1
        return 1

    def _process_transaction(self, line: str, next_line: str | None) -> int:
        card = self.sessions.active_card
        if card is None:
            _logger.warning("processor:transaction_without_card text=%r", line)
            return 1
        parsed = self.parser.parse(line, next_line)
        card.transactions.append(parsed.transaction)
        self.statistics.transaction_count += 1
        tx = parsed.transaction
        _logger.info(
            "processor:transaction card=%r date=%s amount=%s location=%s",
            card.label,
            tx.date.date().isoformat(),
            tx.amount,
            tx.location or "unknown",
        )
        return parsed.consumed

    def _process_due_date(self, line: str) -> None:
        text = line[len(self.markers.due_date) :].strip()
        try:
            due = parse_statement_date(text)
        except DateError as exc:
            _logger.warning("processor:due_date_unparsable text=%r error=%s", text, exc)
            return
        if self.document.due_date is None:
            self.document.due_date = due
            _logger.info("processor:due_date date=%s", due.date().isoformat())


__all__ = ["StatementProcessor"]
