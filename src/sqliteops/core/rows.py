"""Typed accessors for catalog rows.

Catalog rows and PRAGMA results come back loosely typed: a field can be
missing, NULL, or hold text where a number is expected. These helpers read a
single field as the requested type and return None instead of raising, so
model constructors can apply their own defaults.
"""

from __future__ import annotations

from typing import Any, Mapping

Row = Mapping[str, Any]


def string_value(row: Row, key: str) -> str | None:
    """Return the field as text, or None if it is missing or NULL."""
    value = row.get(key)
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def int_value(row: Row, key: str) -> int | None:
    """Return the field as an integer, or None if it is missing or not numeric."""
    value = row.get(key)
    if value is None:
        return None
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def bool_value(row: Row, key: str) -> bool | None:
    """Return the field as a boolean (non-zero is True), or None if not numeric."""
    number = int_value(row, key)
    if number is None:
        return None
    return number != 0
