from __future__ import annotations

import re

import typer

from sqliteops.cli.common.context import SQLiteAppContext, build_context
from sqliteops.cli.common.exits import die, exit_from_exc
from sqliteops.cli.common.options import DbOpt, DryRunOpt, InternalOpt, NameOpt
from sqliteops.cli.common.output import out
from sqliteops.core.catalog import (
    get_user_version,
    read_schema,
    read_table,
    read_tables,
    set_user_version,
)
from sqliteops.core.connection import QueryError
from sqliteops.core.schema import SchemaEntryKind

catalog_app = typer.Typer(
    help="Inspect the database catalog.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@catalog_app.callback()
def _init(ctx: typer.Context, db: str = DbOpt):
    """Open an existing database for catalog commands."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
    ctx.obj = build_context(db)
    ctx.call_on_close(ctx.obj.adapter.close)


def compile_regex_or_exit(pattern: str | None, *, option_name: str) -> re.Pattern | None:
    """Compile a regex pattern and convert invalid syntax into CLI input errors."""
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        out.error(f"Invalid regex for {option_name}: {exc}")
        raise typer.Exit(2) from exc


def _parse_kind_or_exit(type_: str | None) -> SchemaEntryKind | None:
    """Validate the --type option against the known entry kinds."""
    if not type_:
        return None
    try:
        return SchemaEntryKind(type_.lower())
    except ValueError as exc:
        choices = ", ".join(k.value for k in SchemaEntryKind)
        out.error(f"Invalid --type '{type_}'. Expected one of: {choices}.")
        raise typer.Exit(2) from exc


@catalog_app.command("entries-list")
def entries_list(
    ctx: typer.Context,
    type_: str | None = typer.Option(
        None, "--type", help="Filter by entry type (table, index, view, trigger)"
    ),
    name: str | None = NameOpt,
):
    """List catalog entries (tables, indexes, views, triggers)."""
    appctx: SQLiteAppContext = ctx.obj
    kind = _parse_kind_or_exit(type_)
    name_rx = compile_regex_or_exit(name, option_name="--name")

    with out.status("Reading catalog..."):
        schema = read_schema(appctx.adapter)

    entries = schema.entries_of_kind(kind) if kind else list(schema)
    if name_rx:
        entries = [e for e in entries if name_rx.search(e.name)]

    if not entries:
        out.warn("No entries found.")
        raise typer.Exit(0)

    out.header("Catalog")
    out.info(f"Database: {appctx.db} | Entries: {len(entries)}")
    out.entries_table(entries, title="Entries")


@catalog_app.command("tables-list")
def tables_list(
    ctx: typer.Context,
    name: str | None = NameOpt,
    internal: bool = InternalOpt,
):
    """List tables with their column and index counts."""
    appctx: SQLiteAppContext = ctx.obj
    name_rx = compile_regex_or_exit(name, option_name="--name")

    try:
        with out.status("Reading tables..."):
            tables = read_tables(appctx.adapter, include_internal=internal)
    except QueryError as exc:
        exit_from_exc(exc, message=f"Could not read tables: {exc}", code=1)

    if name_rx:
        tables = [t for t in tables if name_rx.search(t.name)]

    if not tables:
        out.warn("No tables found.")
        raise typer.Exit(0)

    out.header("Tables")
    out.info(f"Database: {appctx.db} | Tables: {len(tables)}")
    out.tables_table(tables, title="Tables")


@catalog_app.command("table-show")
def table_show(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name"),
):
    """Show the columns and indexes of a table."""
    appctx: SQLiteAppContext = ctx.obj

    try:
        with out.status("Reading table..."):
            info = read_table(appctx.adapter, table)
    except QueryError as exc:
        exit_from_exc(exc, message=f"Could not read table '{table}': {exc}", code=1)

    if info is None:
        die(f"Table '{table}' does not exist.", code=1)

    out.header(f"Table {info.name}")
    out.columns_table(info.columns, title="Columns")
    if info.indexes:
        out.indexes_table(info.indexes, title="Indexes")
    else:
        out.info("No indexes.")


@catalog_app.command("user-version")
def user_version(ctx: typer.Context):
    """Print the database's user version."""
    appctx: SQLiteAppContext = ctx.obj
    try:
        version = get_user_version(appctx.adapter)
    except QueryError as exc:
        exit_from_exc(exc, message=f"Could not read user version: {exc}", code=1)
    typer.echo(version)


@catalog_app.command("user-version-set")
def user_version_set(
    ctx: typer.Context,
    number: int = typer.Argument(..., help="New user version"),
    dry_run: bool = DryRunOpt,
):
    """Set the database's user version."""
    appctx: SQLiteAppContext = ctx.obj

    if dry_run:
        out.warn("DRY RUN: no changes will be made.")
        out.kv({"User version (would become)": number})
        raise typer.Exit(0)

    try:
        set_user_version(appctx.adapter, number)
    except ValueError as exc:
        out.error(str(exc))
        raise typer.Exit(2) from exc
    except QueryError as exc:
        exit_from_exc(exc, message=f"Could not set user version: {exc}", code=1)

    out.success(f"User version set to {number}.")
