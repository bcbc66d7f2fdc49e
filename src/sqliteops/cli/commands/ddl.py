from __future__ import annotations

import typer

from sqliteops.cli.commands.catalog import compile_regex_or_exit
from sqliteops.cli.common.context import SQLiteAppContext, build_context
from sqliteops.cli.common.exits import exit_from_exc
from sqliteops.cli.common.options import (
    DbOpt,
    DryRunOpt,
    IfExistsOpt,
    IfNotExistsOpt,
    InternalOpt,
    NameOpt,
    YesOpt,
)
from sqliteops.cli.common.output import out
from sqliteops.core import ddl
from sqliteops.core.catalog import read_schema
from sqliteops.core.connection import QueryError
from sqliteops.core.operations import drop_tables, filter_table_names

ddl_app = typer.Typer(
    help="Create, alter and drop tables and indexes.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@ddl_app.callback()
def _init(ctx: typer.Context, db: str = DbOpt):
    """Open the database for DDL commands. Only table-create may create it."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
    ctx.obj = build_context(db, create=ctx.invoked_subcommand == "table-create")
    ctx.call_on_close(ctx.obj.adapter.close)


def _run_or_preview(
    appctx: SQLiteAppContext,
    statement: str,
    *,
    dry_run: bool,
    success: str,
) -> None:
    """Print the statement, then execute it unless this is a dry run."""
    out.statement(statement)
    if dry_run:
        out.warn("DRY RUN: no changes will be made.")
        raise typer.Exit(0)

    try:
        appctx.adapter.execute(statement)
    except QueryError as exc:
        exit_from_exc(exc, message=str(exc), code=1)

    out.success(success)


def _confirm_or_exit(message: str, *, yes: bool) -> None:
    if yes:
        return
    if not out.confirm(message):
        out.warn("Cancelled.")
        raise typer.Exit(0)


@ddl_app.command("table-create")
def table_create(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
    definitions: list[str] = typer.Option(
        ...,
        "--def",
        help="Column or constraint definition, e.g. 'name TEXT NOT NULL'. Repeatable.",
    ),
    if_not_exists: bool = IfNotExistsOpt,
    dry_run: bool = DryRunOpt,
):
    """Create a table."""
    statement = ddl.create_table(table, definitions, if_not_exists=if_not_exists)
    _run_or_preview(
        ctx.obj, statement, dry_run=dry_run, success=f"Created table '{table}'."
    )


@ddl_app.command("table-rename")
def table_rename(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Current table name"),
    new_name: str = typer.Argument(..., help="New table name"),
    dry_run: bool = DryRunOpt,
):
    """Rename a table."""
    statement = ddl.rename_table(table, new_name)
    _run_or_preview(
        ctx.obj,
        statement,
        dry_run=dry_run,
        success=f"Renamed table '{table}' to '{new_name}'.",
    )


@ddl_app.command("column-add")
def column_add(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
    definition: str = typer.Argument(
        ..., help="Column definition, e.g. \"email TEXT NOT NULL DEFAULT ''\""
    ),
    dry_run: bool = DryRunOpt,
):
    """Add a column to a table."""
    statement = ddl.add_column(table, definition)
    _run_or_preview(
        ctx.obj, statement, dry_run=dry_run, success=f"Added column to '{table}'."
    )


@ddl_app.command("tables-drop")
def tables_drop(
    ctx: typer.Context,
    tables: list[str] | None = typer.Argument(
        None, help="Tables to drop. If omitted, pick from the tables in the database."
    ),
    name: str | None = NameOpt,
    all_: bool = typer.Option(
        False, "--all", help="Drop all matched tables without selection UI"
    ),
    internal: bool = InternalOpt,
    if_exists: bool = IfExistsOpt,
    dry_run: bool = DryRunOpt,
    yes: bool = YesOpt,
):
    """Drop one or more tables."""
    appctx: SQLiteAppContext = ctx.obj

    name_rx = compile_regex_or_exit(name, option_name="--name")

    if tables:
        selected = [t for t in tables if not name_rx or name_rx.search(t)]
        if len(selected) < len(tables):
            skipped = ", ".join(t for t in tables if t not in selected)
            out.warn(f"Skipping tables not matching --name: {skipped}")
    else:
        with out.status("Reading tables..."):
            schema = read_schema(appctx.adapter)
        matched = filter_table_names(
            schema.table_names, name, include_internal=internal
        )
        if not matched:
            out.warn("No tables found.")
            raise typer.Exit(0)

        out.header("Matched tables")
        out.tables_table(matched, title="Matched tables")
        selected = matched if all_ else out.select_many("Select tables to drop:", matched)

    if not selected:
        out.warn("No tables selected.")
        raise typer.Exit(0)

    out.header("Selected tables")
    out.tables_table(selected, title="Selected tables")

    if dry_run:
        out.warn("DRY RUN: no changes will be made.")
        for result in drop_tables(
            appctx.adapter, selected, if_exists=if_exists, dry_run=True
        ):
            out.statement(result.statement)
        raise typer.Exit(0)

    _confirm_or_exit("Proceed with dropping the selected tables?", yes=yes)

    with out.status("Dropping tables..."):
        results = drop_tables(appctx.adapter, selected, if_exists=if_exists)
    out.drop_results_table(results, title="Drop results")

    failed = [r for r in results if r.error]
    if failed:
        out.error(f"Failed to drop {len(failed)} table(s).")
        raise typer.Exit(1)

    out.success(f"Dropped {len(results)} table(s).")


@ddl_app.command("index-create")
def index_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Index name"),
    table: str = typer.Option(..., "--table", help="Table to index"),
    columns: list[str] = typer.Option(
        ..., "--column", help="Indexed column or expression. Repeatable."
    ),
    unique: bool = typer.Option(False, "--unique", help="Create a UNIQUE index"),
    where: str | None = typer.Option(
        None, "--where", help="Predicate for a partial index"
    ),
    if_not_exists: bool = IfNotExistsOpt,
    dry_run: bool = DryRunOpt,
):
    """Create an index on a table."""
    statement = ddl.create_index(
        name,
        table,
        columns,
        partial_expr=where,
        unique=unique,
        if_not_exists=if_not_exists,
    )
    _run_or_preview(
        ctx.obj, statement, dry_run=dry_run, success=f"Created index '{name}'."
    )


@ddl_app.command("index-drop")
def index_drop(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Index name"),
    if_exists: bool = IfExistsOpt,
    dry_run: bool = DryRunOpt,
    yes: bool = YesOpt,
):
    """Drop an index."""
    statement = ddl.drop_index(name, if_exists=if_exists)
    if not dry_run:
        _confirm_or_exit(f"Proceed with dropping index '{name}'?", yes=yes)
    _run_or_preview(
        ctx.obj, statement, dry_run=dry_run, success=f"Dropped index '{name}'."
    )
