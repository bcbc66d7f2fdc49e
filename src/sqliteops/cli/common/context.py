"""Application context management for the CLI."""

from dataclasses import dataclass

from sqliteops.cli.common.exits import exit_from_exc
from sqliteops.core.adapters.sqlite import SQLiteAdapter
from sqliteops.core.connection import QueryError, open_connection


@dataclass
class SQLiteAppContext:
    """Application context holding the database path and its adapter."""

    db: str
    adapter: SQLiteAdapter


def build_context(db: str, *, create: bool = False) -> SQLiteAppContext:
    """Open the database and return the application context.

    Args:
        db: Database path or `file:` URI.
        create: Create the database file if it does not exist yet.

    Returns:
        SQLiteAppContext: Context with a connected adapter.
    """
    try:
        connection = open_connection(db, create=create)
    except QueryError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    return SQLiteAppContext(db=db, adapter=SQLiteAdapter(connection))
