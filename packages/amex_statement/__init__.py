"""Public interface for the ``amex_statement`` package.

Parses the plain-text export of an American Express statement PDF into
per-card transactions. This module only re-exports the stable import surface;
see :mod:`amex_statement.api` for the entry points.
"""

__version__ = "0.2.0"

from .amounts import format_amount, parse_amount
from .api import parse_statement_file, parse_statement_lines, parse_statement_text
from .columns import ReconstructedText, reconstruct_lines
from .config import (
    ENGLISH_MARKERS,
    SWEDISH_MARKERS,
    ParserSettings,
    StatementMarkers,
)
from .dates import parse_statement_date
from .errors import StatementError, StatementLineError
from .locations import LocationTable
from .models import Card, StatementDocument, Statistics, Transaction
from .processor import StatementProcessor
from .report import format_csv, format_report, write_csv
from .sessions import CardSessionTracker
from .transactions import ParsedTransaction, TransactionParser, is_transaction_line

__all__ = [
    "__version__",
    # API
    "parse_statement_file",
    "parse_statement_lines",
    "parse_statement_text",
    # Components
    "CardSessionTracker",
    "LocationTable",
    "StatementProcessor",
    "TransactionParser",
    "is_transaction_line",
    "parse_amount",
    "parse_statement_date",
    "reconstruct_lines",
    # Output
    "format_amount",
    "format_csv",
    "format_report",
    "write_csv",
    # Models / config
    "Card",
    "ENGLISH_MARKERS",
    "ParsedTransaction",
    "ParserSettings",
    "ReconstructedText",
    "SWEDISH_MARKERS",
    "StatementDocument",
    "StatementError",
    "StatementLineError",
    "StatementMarkers",
    "Statistics",
    "Transaction",
]
