"""Common CLI options for the CLI."""

import typer

DB_ENV = "SQLITEOPS_DB"
LOG_LEVEL_ENV = "SQLITEOPS_LOG_LEVEL"

DbOpt = typer.Option(
    ...,
    "--db",
    "-d",
    envvar=DB_ENV,
    help="Path to the SQLite database (or a file: URI)",
)

LogLevelOpt = typer.Option(
    "WARNING",
    "--log-level",
    envvar=LOG_LEVEL_ENV,
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)

NameOpt = typer.Option(
    None,
    "--name",
    help="Regex on object name",
)

InternalOpt = typer.Option(
    False,
    "--internal",
    help="Include internal sqlite_* tables",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Print the generated statement, but don't execute anything",
)

YesOpt = typer.Option(
    False,
    "--yes",
    help="Skip confirmation prompt",
)

IfExistsOpt = typer.Option(
    False,
    "--if-exists",
    help="Don't fail if the object doesn't exist",
)

IfNotExistsOpt = typer.Option(
    False,
    "--if-not-exists",
    help="Don't fail if the object already exists",
)
