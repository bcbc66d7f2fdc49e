"""Core domain models for the SQLite catalog.

These models describe the rows of `sqlite_master` in a simple, immutable
form. A snapshot is a point-in-time copy: it holds no connection and does not
change when the database is updated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from sqliteops.core.rows import Row, int_value, string_value


class SchemaEntryKind(str, Enum):
    """
    Kind of structure a catalog entry describes.

    Values:
        TABLE: A table.
        INDEX: An index, explicit or created by a constraint.
        VIEW: A view.
        TRIGGER: A trigger.
        OTHER: A type text this version does not recognize. The raw text is
               kept on `SchemaEntry.type`.
    """

    TABLE = "table"
    INDEX = "index"
    VIEW = "view"
    TRIGGER = "trigger"
    OTHER = "other"

    @classmethod
    def from_type(cls, type_: str) -> SchemaEntryKind:
        """Map raw catalog type text to a kind, falling back to OTHER."""
        try:
            kind = cls(type_)
        except ValueError:
            return cls.OTHER
        return kind


@dataclass(frozen=True)
class SchemaEntry:
    """
    One row of the catalog: a table, index, view or trigger.

    Attributes:
        type: Raw type text as stored in the catalog ("" if missing).
        name: Name of the structure ("" if missing).
        table_name: For tables and views, the same as `name`. For an index,
                    the indexed table. For a trigger, the table or view that
                    fires it ("" if missing).
        root_page: Storage root page, None for views and triggers.
        sql: The statement that created the structure. None for objects
             created implicitly, such as the index behind a UNIQUE
             column constraint.
    """

    type: str = ""
    name: str = ""
    table_name: str = ""
    root_page: int | None = None
    sql: str | None = None

    @classmethod
    def from_row(cls, row: Row) -> SchemaEntry:
        """Build an entry from a `sqlite_master` row."""
        return cls(
            type=string_value(row, "type") or "",
            name=string_value(row, "name") or "",
            table_name=string_value(row, "tbl_name") or "",
            root_page=int_value(row, "rootpage"),
            sql=string_value(row, "sql"),
        )

    @property
    def kind(self) -> SchemaEntryKind:
        return SchemaEntryKind.from_type(self.type)

    @property
    def is_table(self) -> bool:
        return self.kind is SchemaEntryKind.TABLE

    @property
    def is_index(self) -> bool:
        return self.kind is SchemaEntryKind.INDEX

    @property
    def is_view(self) -> bool:
        return self.kind is SchemaEntryKind.VIEW

    @property
    def is_trigger(self) -> bool:
        return self.kind is SchemaEntryKind.TRIGGER


@dataclass(frozen=True)
class SchemaSnapshot:
    """
    The catalog entries of a database, in catalog enumeration order.

    Lookups by name return the first match in that order.
    """

    entries: tuple[SchemaEntry, ...] = ()

    @classmethod
    def from_rows(cls, rows: Iterable[Row]) -> SchemaSnapshot:
        """Build a snapshot with one entry per catalog row."""
        return cls(entries=tuple(SchemaEntry.from_row(row) for row in rows))

    @classmethod
    def empty(cls) -> SchemaSnapshot:
        return cls()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SchemaEntry]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return any(e.name == name for e in self.entries)

    def entry_named(self, name: str) -> SchemaEntry | None:
        """Return the first entry of any kind with the given name."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def entries_of_kind(self, kind: SchemaEntryKind) -> list[SchemaEntry]:
        """Return all entries of the given kind."""
        return [e for e in self.entries if e.kind is kind]

    # Tables

    @property
    def tables(self) -> list[SchemaEntry]:
        return self.entries_of_kind(SchemaEntryKind.TABLE)

    @property
    def table_names(self) -> list[str]:
        return [e.name for e in self.tables]

    def table_named(self, name: str) -> SchemaEntry | None:
        """Return the table entry with the given name."""
        for entry in self.entries:
            if entry.is_table and entry.name == name:
                return entry
        return None

    # Indexes

    @property
    def indexes(self) -> list[SchemaEntry]:
        return self.entries_of_kind(SchemaEntryKind.INDEX)

    @property
    def index_names(self) -> list[str]:
        return [e.name for e in self.indexes]

    def indexes_on_table(self, table_name: str) -> list[SchemaEntry]:
        """Return the index entries whose indexed table is `table_name`."""
        return [e for e in self.indexes if e.table_name == table_name]

    def index_names_on_table(self, table_name: str) -> list[str]:
        return [e.name for e in self.indexes_on_table(table_name)]

    # Views and triggers

    @property
    def views(self) -> list[SchemaEntry]:
        return self.entries_of_kind(SchemaEntryKind.VIEW)

    @property
    def view_names(self) -> list[str]:
        return [e.name for e in self.views]

    @property
    def triggers(self) -> list[SchemaEntry]:
        return self.entries_of_kind(SchemaEntryKind.TRIGGER)

    @property
    def trigger_names(self) -> list[str]:
        return [e.name for e in self.triggers]
