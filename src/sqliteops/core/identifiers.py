"""Identifier quoting for generated SQL."""

_DELIMITER = '"'


def escape_identifier(identifier: str) -> str:
    """
    Quote an identifier so it can be embedded in a SQL statement.

    Every double quote is doubled and the result is wrapped in double quotes,
    so `a"b` becomes `"a""b"`. No other transformation is applied: case and
    surrounding whitespace are kept.

    Only use this for names (tables, columns, indexes). Value literals and raw
    SQL fragments must never go through it.
    """
    escaped = identifier.replace(_DELIMITER, _DELIMITER * 2)
    return f"{_DELIMITER}{escaped}{_DELIMITER}"
