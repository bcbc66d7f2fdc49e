from __future__ import annotations

import logging
import sqlite3
from typing import Any, Iterator

from sqliteops.core.connection import QueryError

logger = logging.getLogger(__name__)


class SQLiteAdapter:
    """Adapter around a sqlite3 connection (row queries and plain statements)."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def query(self, sql: str) -> Iterator[dict[str, Any]]:
        """
        Run a row-returning statement and yield one dict per row.

        Rows are fetched one at a time as the caller advances. Failures while
        preparing the statement or stepping through rows raise QueryError.
        """
        logger.debug("Query: %s", sql)
        try:
            cursor = self.connection.execute(sql)
            names = [d[0] for d in cursor.description or ()]
            for values in cursor:
                yield dict(zip(names, values))
        except sqlite3.Error as exc:
            raise QueryError(f"Query failed: {exc}", sql=sql) from exc

    def execute(self, sql: str) -> None:
        """Run a statement that returns no rows and commit it."""
        logger.debug("Execute: %s", sql)
        try:
            self.connection.execute(sql)
            self.connection.commit()
        except sqlite3.Error as exc:
            raise QueryError(f"Statement failed: {exc}", sql=sql) from exc

    def close(self) -> None:
        """Close the underlying connection."""
        self.connection.close()
