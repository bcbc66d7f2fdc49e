import logging

import pytest

from sqliteops.core import ddl
from sqliteops.core.adapters.sqlite import SQLiteAdapter
from sqliteops.core.catalog import (
    get_user_version,
    read_schema,
    read_table,
    read_tables,
    set_user_version,
)
from sqliteops.core.connection import QueryError, open_connection
from sqliteops.core.tables import IndexOriginKind


class _FailingAdapter:
    def __init__(self):
        self.calls: list[str] = []

    def query(self, sql: str):
        self.calls.append(sql)
        raise QueryError("boom", sql=sql)

    def execute(self, sql: str) -> None:
        self.calls.append(sql)
        raise QueryError("boom", sql=sql)


class _LazyFailingAdapter:
    """Fails only once the returned rows are iterated, like a cursor."""

    def query(self, sql: str):
        yield {"type": "table", "name": "partial"}
        raise QueryError("database disk image is malformed", sql=sql)

    def execute(self, sql: str) -> None:
        raise QueryError("boom", sql=sql)


class _ScriptedAdapter:
    """Returns canned rows per statement and records every query."""

    def __init__(self, rows_by_sql: dict[str, list[dict]]):
        self.rows_by_sql = rows_by_sql
        self.calls: list[str] = []

    def query(self, sql: str):
        self.calls.append(sql)
        return iter(self.rows_by_sql.get(sql, []))

    def execute(self, sql: str) -> None:
        self.calls.append(sql)


def test_read_schema_returns_empty_snapshot_and_logs_on_failure(caplog):
    adapter = _FailingAdapter()

    with caplog.at_level(logging.ERROR, logger="sqliteops.core.catalog"):
        schema = read_schema(adapter)

    assert len(schema) == 0
    assert adapter.calls == ["SELECT * FROM sqlite_master"]
    assert "Error reading database schema" in caplog.text


def test_read_schema_returns_empty_snapshot_when_iteration_fails(caplog):
    with caplog.at_level(logging.ERROR, logger="sqliteops.core.catalog"):
        schema = read_schema(_LazyFailingAdapter())

    assert len(schema) == 0
    assert "partial" not in schema
    assert "Error reading database schema" in caplog.text


def test_read_schema_of_a_non_database_file_is_empty(tmp_path):
    path = tmp_path / "garbage.db"
    path.write_bytes(b"this is not a sqlite database" * 64)
    adapter = SQLiteAdapter(open_connection(path, create=False))

    try:
        assert len(read_schema(adapter)) == 0
    finally:
        adapter.close()

def test_read_schema_lists_live_catalog(adapter):
    adapter.execute(ddl.create_table("users", ["id INTEGER PRIMARY KEY", "email TEXT"]))
    adapter.execute(ddl.create_index("users_email", "users", ["email"]))

    schema = read_schema(adapter)

    assert schema.table_names == ["users"]
    assert schema.index_names_on_table("users") == ["users_email"]
    assert schema.table_named("users").sql.startswith("CREATE TABLE")


def test_read_schema_is_a_point_in_time_snapshot(adapter):
    adapter.execute(ddl.create_table("a", ["x"]))
    before = read_schema(adapter)

    adapter.execute(ddl.create_table("b", ["x"]))

    assert before.table_names == ["a"]
    assert read_schema(adapter).table_names == ["a", "b"]


def test_read_table_returns_none_for_missing_table(adapter):
    assert read_table(adapter, "missing") is None


def test_read_table_propagates_query_errors():
    with pytest.raises(QueryError, match="boom"):
        read_table(_FailingAdapter(), "users")


def test_read_table_reads_columns_in_declaration_order(adapter):
    adapter.execute(
        ddl.create_table(
            "people",
            [
                "id INTEGER PRIMARY KEY",
                "name TEXT NOT NULL DEFAULT 'anon'",
                "note",
            ],
        )
    )

    info = read_table(adapter, "people")

    assert info.column_names == ["id", "name", "note"]
    assert [c.index for c in info.columns] == [0, 1, 2]
    name = info.column_named("name")
    assert name.type == "TEXT"
    assert name.not_null is True
    assert name.default_value == "'anon'"
    note = info.column_named("note")
    assert note.type in (None, "")
    assert note.not_null is False


def test_composite_primary_key_ordinals_follow_key_declaration(adapter):
    adapter.execute(
        ddl.create_table(
            "memberships",
            ["b TEXT", "extra TEXT", "a TEXT", "PRIMARY KEY (a, b)"],
        )
    )

    info = read_table(adapter, "memberships")
    pk = {c.name: c.primary_key_index for c in info.columns}

    assert pk == {"b": 2, "extra": 0, "a": 1}
    assert [c.name for c in info.primary_key] == ["a", "b"]


def test_index_columns_keep_declaration_order(adapter):
    adapter.execute(ddl.create_table("t", ["a", "b", "c"]))
    adapter.execute(ddl.create_index("t_cab", "t", ["c", "a DESC", "b"]))

    index = read_table(adapter, "t").index_named("t_cab")

    assert index.column_names == ["c", "a", "b"]
    keys = index.key_columns
    assert [c.position_in_table for c in keys] == [2, 0, 1]
    assert [c.descending for c in keys] == [False, True, False]
    assert [c.position_in_index for c in index.columns] == list(range(len(index.columns)))


def test_create_index_executes_and_reads_back(adapter):
    adapter.execute(ddl.create_table("T", ["a", "b"]))
    statement = ddl.create_index("idx1", "T", ["a", "b"], unique=True, if_not_exists=True)

    assert statement == 'CREATE UNIQUE INDEX IF NOT EXISTS "idx1" ON "T" ( a, b )'
    adapter.execute(statement)

    info = read_table(adapter, "T")
    assert info.index_names == ["idx1"]
    index = info.indexes[0]
    assert index.is_unique is True
    assert index.is_partial is False
    assert index.origin.kind is IndexOriginKind.CREATE_INDEX


def test_constraint_indexes_report_their_origin(adapter):
    adapter.execute(ddl.create_table("u", ["code TEXT PRIMARY KEY", "email TEXT UNIQUE"]))
    adapter.execute(
        ddl.create_index("u_partial", "u", ["email"], partial_expr="email IS NOT NULL")
    )

    info = read_table(adapter, "u")
    kinds = {i.origin.kind for i in info.indexes}

    assert kinds == {
        IndexOriginKind.PRIMARY_KEY,
        IndexOriginKind.UNIQUE_CONSTRAINT,
        IndexOriginKind.CREATE_INDEX,
    }
    assert info.index_named("u_partial").is_partial is True


def test_rename_table_moves_descriptor(adapter):
    adapter.execute(ddl.create_table("Old Name", ["x"]))
    adapter.execute(ddl.rename_table("Old Name", "New"))

    assert read_table(adapter, "New") is not None
    assert read_table(adapter, "Old Name") is None


def test_add_column_appends_to_table(adapter):
    adapter.execute(ddl.create_table("t", ["a"]))
    adapter.execute(ddl.add_column("t", "b TEXT NOT NULL DEFAULT ''"))

    assert read_table(adapter, "t").column_names == ["a", "b"]


def test_drop_statements_remove_objects(adapter):
    adapter.execute(ddl.create_table("t", ["a"]))
    adapter.execute(ddl.create_index("t_a", "t", "a"))

    adapter.execute(ddl.drop_index("t_a"))
    assert read_table(adapter, "t").indexes == ()

    adapter.execute(ddl.drop_table("t"))
    adapter.execute(ddl.drop_table("t", if_exists=True))
    assert read_table(adapter, "t") is None
    with pytest.raises(QueryError):
        adapter.execute(ddl.drop_table("t"))


def test_read_table_queries_each_index_by_escaped_name():
    adapter = _ScriptedAdapter(
        {
            'PRAGMA table_info("t")': [{"cid": 0, "name": "a"}],
            'PRAGMA index_list("t")': [
                {"seq": 0, "name": 'weird"idx', "unique": 0, "origin": "c", "partial": 0}
            ],
            'PRAGMA index_xinfo("weird""idx")': [
                {"seqno": 0, "cid": 0, "name": "a", "desc": 0, "coll": "BINARY", "key": 1},
                {"seqno": 1, "cid": -1, "name": None, "desc": 0, "coll": "BINARY", "key": 0},
            ],
        }
    )

    info = read_table(adapter, "t")

    assert adapter.calls == [
        'PRAGMA table_info("t")',
        'PRAGMA index_list("t")',
        'PRAGMA index_xinfo("weird""idx")',
    ]
    index = info.index_named('weird"idx')
    assert index.column_names == ["a"]
    assert index.columns[1].position_in_table == -1
    assert index.columns[1].is_key is False


def test_read_tables_skips_internal_tables(adapter):
    adapter.execute(
        ddl.create_table("counters", ["id INTEGER PRIMARY KEY AUTOINCREMENT", "n"])
    )
    adapter.execute(ddl.create_table("plain", ["x"]))

    names = [t.name for t in read_tables(adapter)]
    all_names = [t.name for t in read_tables(adapter, include_internal=True)]

    assert names == ["counters", "plain"]
    assert "sqlite_sequence" in all_names


def test_user_version_round_trip(adapter):
    assert get_user_version(adapter) == 0

    set_user_version(adapter, 7)

    assert get_user_version(adapter) == 7


def test_get_user_version_defaults_to_zero_without_rows():
    assert get_user_version(_ScriptedAdapter({})) == 0


@pytest.mark.parametrize("value", [True, 1.5, "3", 2**31, -(2**31) - 1])
def test_set_user_version_rejects_invalid_numbers(value):
    adapter = _ScriptedAdapter({})

    with pytest.raises(ValueError, match="User version"):
        set_user_version(adapter, value)
    assert adapter.calls == []


def test_set_user_version_propagates_query_errors():
    with pytest.raises(QueryError):
        set_user_version(_FailingAdapter(), 1)
