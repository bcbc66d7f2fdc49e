"""Batch DDL operations that run generated statements through an adapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from sqliteops.core.catalog import INTERNAL_TABLE_PREFIX, CatalogAdapter
from sqliteops.core.connection import QueryError
from sqliteops.core.ddl import drop_table


@dataclass(frozen=True)
class TableDropResult:
    """Result for a single table drop."""

    table: str
    statement: str
    dropped: bool
    error: str | None = None


def filter_table_names(
    names: Iterable[str],
    name_regex: str | None,
    *,
    include_internal: bool = False,
) -> list[str]:
    """Filter table names by regex (or keep all if regex is None)."""
    rx = re.compile(name_regex) if name_regex else None
    out: list[str] = []
    for name in names:
        if not include_internal and name.startswith(INTERNAL_TABLE_PREFIX):
            continue
        if rx and not rx.search(name):
            continue
        out.append(name)
    return out


def drop_tables(
    adapter: CatalogAdapter,
    table_names: Iterable[str],
    *,
    if_exists: bool = False,
    dry_run: bool = False,
) -> list[TableDropResult]:
    """
    Drop each table in turn.

    A failure on one table is recorded on its result and does not stop the
    remaining drops. With `dry_run`, statements are generated but not run.
    """
    results: list[TableDropResult] = []
    for name in table_names:
        statement = drop_table(name, if_exists=if_exists)
        if dry_run:
            results.append(TableDropResult(table=name, statement=statement, dropped=False))
            continue
        try:
            adapter.execute(statement)
            results.append(TableDropResult(table=name, statement=statement, dropped=True))
        except QueryError as e:
            results.append(
                TableDropResult(
                    table=name, statement=statement, dropped=False, error=str(e)
                )
            )
    return results
