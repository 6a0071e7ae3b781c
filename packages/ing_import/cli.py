"""CLI for the ``ing_import`` package.

A Typer-based console interface with two commands, both reading an ING CSV
export from standard input:

- ``import DB_PATH``: write transactions into an existing SQLite file.
- ``print``: write one formatted line per transaction to stdout.

Environment variables are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in
``ing_import.api``; this module only maps failures to exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo, OptionInfo

from .errors import IngestError
from .logging_setup import configure_logging
from .models import DateField


# Module-level parameter objects to satisfy ruff B008 (no calls in parameter
# defaults).
DATABASE_ARGUMENT: ArgumentInfo = typer.Argument(
    help="Path to an existing SQLite database file (opened read/write, never created).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports a missing file as a store error
)

DATE_FIELD_OPTION: OptionInfo = typer.Option(
    "--date-field",
    envvar="ING_IMPORT_DATE_FIELD",
    case_sensitive=False,
    help="Statement date used as the transaction date.",
)

LOG_LEVEL_OPTION: OptionInfo = typer.Option(
    "--log-level",
    help="Logging level (falls back to ING_IMPORT_LOG_LEVEL, then INFO).",
)


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Import ING bank CSV exports (read from stdin) into SQLite or print them.",
)


@app.command("import")
def import_cmd(
    database: Annotated[Path, DATABASE_ARGUMENT],
    date_field: Annotated[DateField, DATE_FIELD_OPTION] = DateField.ACCOUNTING,
) -> None:
    """Import stdin into DATABASE, ignoring already-known transactions."""

    # Deferred imports to keep CLI startup fast
    from .api import import_statement
    from .persistence import open_store

    try:
        engine = open_store(database)
        try:
            import_statement(typer.get_binary_stream("stdin"), engine, date_field=date_field)
        finally:
            engine.dispose()
    except IngestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


@app.command("print")
def print_cmd(
    date_field: Annotated[DateField, DATE_FIELD_OPTION] = DateField.ACCOUNTING,
) -> None:
    """Print stdin as one line per transaction, without persisting anything."""

    from .api import print_statement

    try:
        print_statement(
            typer.get_binary_stream("stdin"),
            typer.get_text_stream("stdout"),
            date_field=date_field,
        )
    except IngestError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e


@app.callback()
def _root(
    log_level: Annotated[str | None, LOG_LEVEL_OPTION] = None,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m ing_import.cli`
    app()
