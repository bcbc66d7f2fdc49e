"""Catalog reading: schema snapshots, table descriptions and the user version.

Every function here re-reads the live catalog through the adapter; nothing is
cached. Whole-schema reads are best-effort and degrade to an empty snapshot,
while single-table reads surface failures so callers never build on a
half-populated description.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol

from sqliteops.core.connection import QueryError
from sqliteops.core.identifiers import escape_identifier
from sqliteops.core.rows import int_value
from sqliteops.core.schema import SchemaSnapshot
from sqliteops.core.tables import (
    ColumnInfo,
    IndexedColumnInfo,
    IndexInfoBuilder,
    TableInfo,
)

logger = logging.getLogger(__name__)

INTERNAL_TABLE_PREFIX = "sqlite_"
USER_VERSION_MIN = -(2**31)
USER_VERSION_MAX = 2**31 - 1


class CatalogAdapter(Protocol):
    """Interface to the SQL engine used by the catalog reader."""

    def query(self, sql: str) -> Iterable[Mapping[str, Any]]:
        """Run a row-returning statement and yield one mapping per row."""
        ...

    def execute(self, sql: str) -> None:
        """Run a statement that returns no rows."""
        ...


def read_schema(adapter: CatalogAdapter) -> SchemaSnapshot:
    """
    Read every catalog entry of the database.

    If the catalog cannot be read, the failure is logged and an empty
    snapshot is returned instead of raising.
    """
    try:
        return SchemaSnapshot.from_rows(adapter.query("SELECT * FROM sqlite_master"))
    except QueryError:
        logger.exception("Error reading database schema")
        return SchemaSnapshot.empty()


def read_table(adapter: CatalogAdapter, table_name: str) -> TableInfo | None:
    """
    Describe a table: its columns, its indexes and the columns of each index.

    Args:
        adapter: Catalog adapter used to run the PRAGMA queries.
        table_name: Name of the table.

    Returns:
        A TableInfo, or None if the table does not exist (it has no columns).

    Raises:
        QueryError: If any of the catalog queries fails.
    """
    table = escape_identifier(table_name)
    logger.debug("Reading table info for %s", table)

    columns = tuple(
        ColumnInfo.from_row(row) for row in adapter.query(f"PRAGMA table_info({table})")
    )
    if not columns:
        return None

    builders = [
        IndexInfoBuilder.from_row(row)
        for row in adapter.query(f"PRAGMA index_list({table})")
    ]
    for builder in builders:
        index = escape_identifier(builder.name)
        for row in adapter.query(f"PRAGMA index_xinfo({index})"):
            builder.add_column(IndexedColumnInfo.from_row(row))

    return TableInfo(
        name=table_name,
        columns=columns,
        indexes=tuple(b.build() for b in builders),
    )


def read_tables(
    adapter: CatalogAdapter,
    *,
    include_internal: bool = False,
) -> list[TableInfo]:
    """
    Describe every table listed in the catalog, in catalog order.

    Internal `sqlite_*` tables are skipped unless `include_internal` is set.
    Tables dropped between listing and describing are left out.
    """
    out: list[TableInfo] = []
    for name in read_schema(adapter).table_names:
        if not include_internal and name.startswith(INTERNAL_TABLE_PREFIX):
            continue
        info = read_table(adapter, name)
        if info is None:
            continue
        out.append(info)
    return out


def get_user_version(adapter: CatalogAdapter) -> int:
    """Return the database's user version, a number callers use for migrations."""
    rows = list(adapter.query("PRAGMA user_version"))
    if not rows:
        return 0
    return int_value(rows[0], "user_version") or 0


def set_user_version(adapter: CatalogAdapter, number: int) -> None:
    """Set the database's user version. It must fit in a signed 32-bit integer."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise ValueError("User version must be an integer.")
    if not USER_VERSION_MIN <= number <= USER_VERSION_MAX:
        raise ValueError(
            f"User version must be between {USER_VERSION_MIN} and {USER_VERSION_MAX}."
        )
    adapter.execute(f"PRAGMA user_version = {number:d}")
