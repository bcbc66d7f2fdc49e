"""Core domain models describing a single table.

A TableInfo composes the table's columns (from `PRAGMA table_info`) with its
indexes (from `PRAGMA index_list`) and the columns of each index (from
`PRAGMA index_xinfo`). All models are immutable snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sqliteops.core.rows import Row, bool_value, int_value, string_value

# index_xinfo reports these pseudo column ids instead of a table position.
ROWID_COLUMN = -1
EXPRESSION_COLUMN = -2


@dataclass(frozen=True)
class ColumnInfo:
    """
    Represents a column of a table, as reported by `PRAGMA table_info`.

    Attributes:
        index: 0-based position of the column in the table.
        name: Column name.
        type: Declared type. SQLite is dynamically typed, so this is often
              'INTEGER', 'TEXT', 'REAL' or 'BLOB' but can be any user text,
              or None when no type was declared.
        not_null: True if the column was declared NOT NULL.
        default_value: Text of the default expression, None if there is none.
        primary_key_index: 0 if the column is not part of the primary key,
              otherwise its 1-based position within the key. For a compound
              key (name, email) declared in that order, `name` is 1 and
              `email` is 2 regardless of where the columns sit in the table.
    """

    index: int
    name: str
    type: str | None = None
    not_null: bool = False
    default_value: str | None = None
    primary_key_index: int = 0

    @classmethod
    def from_row(cls, row: Row) -> ColumnInfo:
        return cls(
            index=int_value(row, "cid") or 0,
            name=string_value(row, "name") or "",
            type=string_value(row, "type"),
            not_null=bool_value(row, "notnull") or False,
            default_value=string_value(row, "dflt_value"),
            primary_key_index=int_value(row, "pk") or 0,
        )

    @property
    def is_primary_key(self) -> bool:
        return self.primary_key_index > 0


class IndexOriginKind(str, Enum):
    """
    How an index came to exist.

    Values:
        CREATE_INDEX: A CREATE INDEX statement (code "c").
        UNIQUE_CONSTRAINT: A UNIQUE constraint on the table (code "u").
        PRIMARY_KEY: A PRIMARY KEY constraint (code "pk").
        OTHER: A code this version does not recognize.
    """

    CREATE_INDEX = "c"
    UNIQUE_CONSTRAINT = "u"
    PRIMARY_KEY = "pk"
    OTHER = "other"


@dataclass(frozen=True)
class IndexOrigin:
    """An index origin, keeping the raw engine code next to its kind."""

    code: str

    @property
    def kind(self) -> IndexOriginKind:
        for kind in IndexOriginKind:
            if kind is not IndexOriginKind.OTHER and kind.value == self.code:
                return kind
        return IndexOriginKind.OTHER

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class IndexedColumnInfo:
    """
    Represents one column of an index, as reported by `PRAGMA index_xinfo`.

    Attributes:
        position_in_index: 0-based rank of the column within the index.
        position_in_table: Position of the column in the indexed table,
              -1 for the rowid, None for an expression.
        name: Column name, None for expressions and the rowid.
        descending: True if the column is sorted in descending order.
        collation: Name of the collating sequence.
        is_key: True for key columns, False for auxiliary columns that the
              index stores but does not sort on.
    """

    position_in_index: int
    position_in_table: int | None = None
    name: str | None = None
    descending: bool = False
    collation: str = ""
    is_key: bool = False

    @classmethod
    def from_row(cls, row: Row) -> IndexedColumnInfo:
        cid = int_value(row, "cid")
        return cls(
            position_in_index=int_value(row, "seqno") or 0,
            position_in_table=None if cid == EXPRESSION_COLUMN else cid,
            name=string_value(row, "name"),
            descending=bool_value(row, "desc") or False,
            collation=string_value(row, "coll") or "",
            is_key=bool_value(row, "key") or False,
        )


@dataclass(frozen=True)
class IndexInfo:
    """
    Represents an index of a table, as reported by `PRAGMA index_list`.

    Attributes:
        name: Index name.
        sequence_number: Sequence number assigned by SQLite.
        is_unique: True for UNIQUE indexes.
        origin: How the index was created.
        is_partial: True if the index has a WHERE clause.
        columns: Indexed columns in index order, key columns first.
    """

    name: str
    sequence_number: int = 0
    is_unique: bool = False
    origin: IndexOrigin = IndexOrigin("")
    is_partial: bool = False
    columns: tuple[IndexedColumnInfo, ...] = ()

    @property
    def key_columns(self) -> list[IndexedColumnInfo]:
        return [c for c in self.columns if c.is_key]

    @property
    def column_names(self) -> list[str]:
        """Names of the key columns in declaration order ("" for expressions)."""
        return [c.name or "" for c in self.key_columns]


@dataclass
class IndexInfoBuilder:
    """
    Mutable accumulator for an IndexInfo.

    The index list and the per-index column lists come from separate
    queries, so the descriptor is collected here first and frozen with
    `build()` once every column has been appended.
    """

    name: str
    sequence_number: int = 0
    is_unique: bool = False
    origin: IndexOrigin = IndexOrigin("")
    is_partial: bool = False
    columns: list[IndexedColumnInfo] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Row) -> IndexInfoBuilder:
        return cls(
            name=string_value(row, "name") or "",
            sequence_number=int_value(row, "seq") or 0,
            is_unique=bool_value(row, "unique") or False,
            origin=IndexOrigin(string_value(row, "origin") or ""),
            is_partial=bool_value(row, "partial") or False,
        )

    def add_column(self, column: IndexedColumnInfo) -> None:
        self.columns.append(column)

    def build(self) -> IndexInfo:
        return IndexInfo(
            name=self.name,
            sequence_number=self.sequence_number,
            is_unique=self.is_unique,
            origin=self.origin,
            is_partial=self.is_partial,
            columns=tuple(self.columns),
        )


@dataclass(frozen=True)
class TableInfo:
    """Represents a table: its name, columns in declaration order, and indexes."""

    name: str
    columns: tuple[ColumnInfo, ...] = ()
    indexes: tuple[IndexInfo, ...] = ()

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def index_names(self) -> list[str]:
        return [i.name for i in self.indexes]

    @property
    def primary_key(self) -> list[ColumnInfo]:
        """Primary key columns in key order."""
        key = [c for c in self.columns if c.is_primary_key]
        return sorted(key, key=lambda c: c.primary_key_index)

    def column_named(self, name: str) -> ColumnInfo | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def index_named(self, name: str) -> IndexInfo | None:
        for index in self.indexes:
            if index.name == name:
                return index
        return None
