"""Connection helpers for SQLite databases.

This module centralizes opening a sqlite3 connection and applies small
normalization rules to the database path (such as expanding the user home)
so that every frontend opens databases the same way.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

MEMORY_DATABASE = ":memory:"


class QueryError(RuntimeError):
    """Raised when SQLite fails to prepare, execute or step through a statement."""

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql


def _normalize_path(path: str | Path) -> str:
    """
    Normalize a database path.

    - Keeps `:memory:` and `file:` URIs untouched
    - Expands a leading `~` to the user home directory
    """
    raw = str(path).strip()
    if raw == MEMORY_DATABASE or raw.startswith("file:"):
        return raw
    return str(Path(raw).expanduser())


def open_connection(path: str | Path, *, create: bool = True) -> sqlite3.Connection:
    """
    Open and return a sqlite3 connection for the given database path.

    `file:` URIs are opened in URI mode so that query parameters such as
    `?mode=ro` are honored. With `create=False` a plain path must point at an
    existing file; sqlite3 would otherwise create an empty database there.
    """
    target = _normalize_path(path)
    is_file_path = target != MEMORY_DATABASE and not target.startswith("file:")
    if not create and is_file_path and not Path(target).is_file():
        raise QueryError(f"Database '{target}' does not exist")
    try:
        return sqlite3.connect(target, uri=target.startswith("file:"))
    except sqlite3.Error as exc:
        raise QueryError(f"Could not open database '{target}': {exc}") from exc
