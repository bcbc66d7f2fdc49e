"""DDL statement builders.

Each function returns the text of a single CREATE / ALTER / DROP statement
and never touches a database; running the statement is up to the caller
(for example `SQLiteAdapter.execute`).

Identifiers (table and index names) are always quoted with
`escape_identifier`. Column definitions, constraint definitions, indexed
column expressions and partial-index predicates are raw SQL fragments and are
inserted as given: sanitizing them is the caller's job.
"""

from __future__ import annotations

from typing import Sequence

from sqliteops.core.identifiers import escape_identifier


def _normalize_fragments(fragments: str | Sequence[str]) -> list[str]:
    """Convert a single fragment or a sequence of fragments to a list."""
    if isinstance(fragments, str):
        return [fragments]
    return list(fragments)


def create_table(
    table_name: str,
    definitions: str | Sequence[str],
    *,
    if_not_exists: bool = False,
) -> str:
    """
    Build a CREATE TABLE statement.

    Args:
        table_name: Name of the table.
        definitions: Column and constraint definitions, such as
            "name TEXT NOT NULL" or "PRIMARY KEY (a, b)". Must not be empty;
            an empty list yields invalid SQL and is not checked here.
        if_not_exists: Add IF NOT EXISTS so an existing table is not an error.
    """
    parts = ["CREATE TABLE"]
    if if_not_exists:
        parts.append("IF NOT EXISTS")
    parts.append(escape_identifier(table_name))
    parts.append("(")
    parts.append(", ".join(_normalize_fragments(definitions)))
    parts.append(")")
    return " ".join(parts)


def drop_table(table_name: str, *, if_exists: bool = False) -> str:
    """Build a DROP TABLE statement, optionally with IF EXISTS."""
    parts = ["DROP TABLE"]
    if if_exists:
        parts.append("IF EXISTS")
    parts.append(escape_identifier(table_name))
    return " ".join(parts)


def rename_table(table_name: str, new_name: str) -> str:
    """Build an ALTER TABLE ... RENAME TO statement."""
    return (
        f"ALTER TABLE {escape_identifier(table_name)} "
        f"RENAME TO {escape_identifier(new_name)}"
    )


def add_column(table_name: str, column: str) -> str:
    """
    Build an ALTER TABLE ... ADD COLUMN statement.

    `column` is a full column definition such as "name TEXT NOT NULL DEFAULT ''".
    """
    return f"ALTER TABLE {escape_identifier(table_name)} ADD COLUMN {column}"


def create_index(
    name: str,
    table_name: str,
    columns: str | Sequence[str],
    *,
    partial_expr: str | None = None,
    unique: bool = False,
    if_not_exists: bool = False,
) -> str:
    """
    Build a CREATE INDEX statement.

    Args:
        name: Name of the index.
        table_name: Name of the indexed table.
        columns: Indexed columns or expressions, such as "email" or
            "lower(name) DESC". Must not be empty; this is not checked.
        partial_expr: WHERE predicate for a partial index.
        unique: Create a UNIQUE index.
        if_not_exists: Add IF NOT EXISTS so an existing index is not an error.
    """
    parts = ["CREATE"]
    if unique:
        parts.append("UNIQUE")
    parts.append("INDEX")
    if if_not_exists:
        parts.append("IF NOT EXISTS")
    parts.append(escape_identifier(name))
    parts.append("ON")
    parts.append(escape_identifier(table_name))
    parts.append("(")
    parts.append(", ".join(_normalize_fragments(columns)))
    parts.append(")")
    if partial_expr is not None:
        parts.append("WHERE")
        parts.append(partial_expr)
    return " ".join(parts)


def drop_index(name: str, *, if_exists: bool = False) -> str:
    """Build a DROP INDEX statement, optionally with IF EXISTS."""
    parts = ["DROP INDEX"]
    if if_exists:
        parts.append("IF EXISTS")
    parts.append(escape_identifier(name))
    return " ".join(parts)
