"""CLI application for SQLite schema tooling."""

import typer

from sqliteops.cli.commands.catalog import catalog_app
from sqliteops.cli.commands.ddl import ddl_app
from sqliteops.cli.common.log import configure_logging
from sqliteops.cli.common.options import LogLevelOpt

app = typer.Typer(
    help="sqliteops - SQLite schema inspection and DDL tooling",
    no_args_is_help=True,
)


@app.callback()
def _init(log_level: str = LogLevelOpt):
    """Configure logging before any command runs."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


app.add_typer(catalog_app, name="catalog", help="Inspect the database catalog.")
app.add_typer(ddl_app, name="ddl", help="Create, alter and drop tables and indexes.")


if __name__ == "__main__":
    app()
