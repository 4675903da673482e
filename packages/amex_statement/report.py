"""Plain-text report and CSV export of a parsed statement.

CSV layout (``;`` separated, one block per card)::

    AMEX JANE DOE
    Datum;Bokfört;Specifikation;Ort;Valuta;Utl.belopp/moms;Belopp
    06-08;06-09;RESTAURANG PELIKAN;STOCKHOLM;;;1234.50
    <blank line>

The header row matches the column names of the bank's own export so the file
can be pasted next to it. Details never contain ``;``: the column splitter
replaces it with ``?`` before parsing.
"""

from __future__ import annotations

from collections.abc import Iterator
from os import PathLike
from pathlib import Path

from .amounts import format_amount
from .logging_setup import get_logger
from .models import StatementDocument

_logger = get_logger("amex_statement.report")

CSV_SEPARATOR = ";"
CSV_HEADER = "Datum;Bokfört;Specifikation;Ort;Valuta;Utl.belopp/moms;Belopp"
CSV_UNKNOWN_LOCATION = "unknown"

_RULE = "-" * 70
_CARD_RULE = "-" * 109
_TOTAL_RULE = "=" * 109


def _csv_lines(document: StatementDocument) -> Iterator[str]:
    for card in document.cards:
        yield f"AMEX {card.label}"
        yield CSV_HEADER
        for tx in card.transactions:
            yield CSV_SEPARATOR.join(
                (
                    tx.date.strftime("%m-%d"),
                    tx.posting_date.strftime("%m-%d"),
                    tx.details,
                    tx.location or CSV_UNKNOWN_LOCATION,
                    "",
                    "",
                    format_amount(tx.amount),
                )
            )
        yield ""


def format_csv(document: StatementDocument) -> str:
    return "".join(f"{line}\n" for line in _csv_lines(document))


def write_csv(document: StatementDocument, path: str | PathLike[str]) -> int:
    """Write the CSV export to ``path`` and return the transaction count."""

    p = Path(path)
    p.write_text(format_csv(document), encoding="utf-8")
    count = document.transaction_count
    _logger.info("report:csv_written path=%s transactions=%d", p, count)
    return count


def format_report(document: StatementDocument) -> str:
    """Human-readable summary: per-card transaction tables and totals."""

    out: list[str] = [
        _RULE,
        f" Total cards: {len(document.cards):03d}",
        _RULE,
    ]
    for i, card in enumerate(document.cards):
        out.append(f"Card {i:03d}: {card.label}")
        out.append(_CARD_RULE)
        if not card.transactions:
            out.append("No transactions for card")
            out.append("")
            continue
        for tx in card.transactions:
            out.append(
                f"{tx.date:%Y-%m-%d} {tx.posting_date:%Y-%m-%d} "
                f"{tx.details:<40} {tx.location or 'Unknown':<30} "
                f"{format_amount(tx.amount) + ' kr':<20}".rstrip()
            )
        out.append(_TOTAL_RULE)
        out.append(f"Total purchases for {card.label}: {format_amount(card.total)} SEK")
        out.append(_TOTAL_RULE)
        out.append("")

    due = document.due_date.strftime("%Y-%m-%d") if document.due_date else "(unknown)"
    out.append(f"Total for all cards: {format_amount(document.total)} SEK")
    out.append(f"   Faktura due date: {due}")
    out.append(f"        Faktura OCR: {document.ocr_reference or '(unknown)'}")
    out.append("")
    return "\n".join(out) + "\n"


__all__ = ["CSV_HEADER", "format_csv", "format_report", "write_csv"]
