"""CLI for the ``amex_statement`` package.

The Typer app exposes ``parse`` (print the report and optionally write the
CSV export) and ``version``. Settings not given on the command line fall back
to ``AMEX_*`` environment variables, which may come from a local ``.env``
loaded with ``python-dotenv`` by the root callback. Parsing logic lives in
``amex_statement.api`` and the modules it drives; this module only wires
options, files and error messages together.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo, OptionInfo

from . import __version__
from .config import DEFAULT_SPLIT_WIDTH, MIN_SPLIT_WIDTH, ParserSettings
from .errors import ConfigurationError, LocationTableFormatError, StatementError, describe_error
from .logging_setup import configure_logging, get_logger

_logger = get_logger("amex_statement.cli")


def cmd_parse(
    input_path: str,
    *,
    outfile: str | None = None,
    location_file: str | None = None,
    split_width: int = DEFAULT_SPLIT_WIDTH,
    locale: str = "sv",
) -> int:
    """Parse ``input_path``, print the report and optionally write the CSV.

    Behavior
    --------
    - Validates all settings first; an invalid split width or locale fails
      before any file is read.
    - Loads the location table when ``location_file`` is given.
    - Prints the plain-text report to stdout.
    - Writes the CSV export to ``outfile`` when given.

    Errors are written to stderr as ``Error: ...`` (with the nested cause
    chain) and a non-zero status is returned. On success, returns ``0``.
    """

    from .api import parse_statement_text
    from .locations import LocationTable
    from .report import format_report, write_csv

    try:
        settings = ParserSettings.build(
            input_path=input_path,
            outfile=outfile,
            location_file=location_file,
            split_width=split_width,
            locale=locale,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _logger.info(
        "cli:settings split_width=%d%s locale=%s",
        settings.split_width,
        " (default)" if settings.split_width == DEFAULT_SPLIT_WIDTH else "",
        settings.locale,
    )

    locations = LocationTable()
    if settings.location_file is not None:
        try:
            locations = LocationTable.from_path(settings.location_file)
        except FileNotFoundError:
            print(f"Error: Location file not found: {settings.location_file}", file=sys.stderr)
            return 1
        except LocationTableFormatError as e:
            print(f"Error: Could not parse location file: {e}", file=sys.stderr)
            return 1
        except OSError as e:
            print(f"Error: Could not read location file: {e}", file=sys.stderr)
            return 1

    try:
        text = settings.input_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Error: File not found: {settings.input_path}", file=sys.stderr)
        return 1
    except PermissionError:
        print(f"Error: Permission denied: {settings.input_path}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Unexpected failure reading '{settings.input_path}': {e}", file=sys.stderr)
        return 1

    try:
        document = parse_statement_text(
            text,
            locations=locations,
            split_width=settings.split_width,
            markers=settings.markers,
        )
    except StatementError as e:
        print(f"Error: Could not parse input file: {describe_error(e)}", file=sys.stderr)
        return 1

    sys.stdout.write(format_report(document))

    if settings.outfile is not None:
        try:
            write_csv(document, settings.outfile)
        except OSError as e:
            print(f"Error: Could not write CSV: {e}", file=sys.stderr)
            return 1

    stats = document.statistics
    _logger.info(
        "cli:done lines=%d skipped=%d transactions=%d",
        stats.total_lines,
        stats.skipped_lines,
        stats.transaction_count,
    )
    return 0


# ---- Typer-based console interface -------------------------------------------


# Module-level option objects keep calls out of parameter defaults (ruff B008).
INPUT_ARGUMENT: ArgumentInfo = typer.Argument(
    help="Text export of the statement PDF",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)

OUTFILE_OPTION: OptionInfo = typer.Option(
    "--outfile", "-o", help="CSV file to write; not written when omitted", dir_okay=False
)

LOCATION_FILE_OPTION: OptionInfo = typer.Option(
    "--location-file",
    "-l",
    envvar="AMEX_LOCATION_FILE",
    help="Location table (one NAME or ALIAS->CANONICAL per line)",
    dir_okay=False,
)

SPLIT_WIDTH_OPTION: OptionInfo = typer.Option(
    "--split-width",
    "-s",
    envvar="AMEX_SPLIT_WIDTH",
    help=f"Column split width (minimum {MIN_SPLIT_WIDTH})",
)

LOCALE_OPTION: OptionInfo = typer.Option(
    "--locale",
    envvar="AMEX_MARKER_LOCALE",
    help="Language of the statement markers (sv or en)",
)

VERBOSE_OPTION: OptionInfo = typer.Option("--verbose", "-v", help="Enable debug logging.")


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Parse the text export of an American Express statement into per-card "
        "transactions. Loads AMEX_* settings from a local .env before running."
    ),
)


@app.command("parse")
def parse_cmd(
    input_path: Annotated[Path, INPUT_ARGUMENT],
    outfile: Annotated[Path | None, OUTFILE_OPTION] = None,
    location_file: Annotated[Path | None, LOCATION_FILE_OPTION] = None,
    split_width: Annotated[int, SPLIT_WIDTH_OPTION] = DEFAULT_SPLIT_WIDTH,
    locale: Annotated[str, LOCALE_OPTION] = "sv",
    verbose: Annotated[bool, VERBOSE_OPTION] = False,
) -> None:
    """Print the statement report and optionally write the CSV export."""

    if verbose:
        configure_logging("DEBUG")
    code = cmd_parse(
        str(input_path),
        outfile=str(outfile) if outfile is not None else None,
        location_file=str(location_file) if location_file is not None else None,
        split_width=split_width,
        locale=locale,
    )
    if code:
        raise typer.Exit(code)


@app.command("version")
def version_cmd() -> None:
    """Print the program version."""

    typer.echo(f"amex-statement {__version__}")


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    verbose: Annotated[bool, VERBOSE_OPTION] = False,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging before any
    subcommand runs.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging("DEBUG" if verbose else None)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    app()
