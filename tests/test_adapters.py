from pathlib import Path

import pytest

from sqliteops.core.adapters.sqlite import SQLiteAdapter
from sqliteops.core.connection import QueryError, _normalize_path, open_connection


def test_normalize_path_keeps_memory_and_uris():
    assert _normalize_path(":memory:") == ":memory:"
    assert _normalize_path("file:x.db?mode=ro") == "file:x.db?mode=ro"


def test_normalize_path_expands_home():
    assert _normalize_path("~/x.db") == str(Path.home() / "x.db")


def test_open_connection_rejects_unopenable_path(tmp_path):
    with pytest.raises(QueryError, match="Could not open database"):
        open_connection(tmp_path / "missing-dir" / "x.db")


def test_adapter_yields_rows_as_dicts(tmp_path):
    adapter = SQLiteAdapter(open_connection(tmp_path / "x.db"))
    adapter.execute("CREATE TABLE t (a, b)")
    adapter.execute("INSERT INTO t VALUES (1, 'one')")

    assert list(adapter.query("SELECT a, b FROM t")) == [{"a": 1, "b": "one"}]
    adapter.close()


def test_adapter_execute_commits(tmp_path):
    path = tmp_path / "x.db"
    first = SQLiteAdapter(open_connection(path))
    first.execute("CREATE TABLE t (a)")
    first.execute("INSERT INTO t VALUES (1)")

    second = SQLiteAdapter(open_connection(path))
    assert list(second.query("SELECT a FROM t")) == [{"a": 1}]
    first.close()
    second.close()


def test_adapter_wraps_errors_with_statement(adapter):
    with pytest.raises(QueryError) as exc_info:
        list(adapter.query("SELECT * FROM nowhere"))
    assert exc_info.value.sql == "SELECT * FROM nowhere"

    with pytest.raises(QueryError, match="Statement failed"):
        adapter.execute("CREATE TABLE")


def test_open_connection_without_create_refuses_missing_file(tmp_path):
    path = tmp_path / "missing.db"

    with pytest.raises(QueryError, match="does not exist"):
        open_connection(path, create=False)
    assert not path.exists()


def test_open_connection_without_create_opens_existing_file(tmp_path):
    path = tmp_path / "x.db"
    open_connection(path).close()

    connection = open_connection(path, create=False)
    connection.close()


def test_open_connection_without_create_allows_memory():
    open_connection(":memory:", create=False).close()
