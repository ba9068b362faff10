"""SQL text helpers: identifier quoting and literal embedding.

All values reach the engine inlined as escaped literals (there is no parameter
binding), so every escaping rule used by the browse and edit tools lives here.
"""

from __future__ import annotations

from .cells import CellKind, classify_cell

LIKE_ESCAPE_CHAR = "\\"


def quote_identifier(name: str) -> str:
    """Wrap a catalog-sourced table or column name in double quotes."""
    return '"' + name.replace('"', '""') + '"'


def quote_text(text: str) -> str:
    """Return ``text`` as a single-quoted SQL string with quotes doubled."""
    return "'" + text.replace("'", "''") + "'"


def escape_like_term(term: str) -> str:
    """Escape a search term for a single-quoted ``LIKE ... ESCAPE '\\'`` pattern.

    Backslash goes first so the wildcard escapes added afterwards are not
    escaped a second time.
    """
    return (
        term.replace("\\", "\\\\")
        .replace("'", "''")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def sql_literal(value: object) -> str:
    """Render a cell value as a SQL literal."""
    kind = classify_cell(value)
    if kind is CellKind.NULL:
        return "NULL"
    if kind is CellKind.BOOLEAN:
        return quote_text("1" if value else "0")
    if kind is CellKind.INTEGER or kind is CellKind.REAL or kind is CellKind.TEXT:
        return quote_text(str(value))
    if kind is CellKind.BLOB:
        return "X'" + bytes(value).hex().upper() + "'"  # type: ignore[arg-type]
    raise AssertionError(f"Unhandled cell kind: {kind}")


def equals_predicate(column: str, value: object) -> str:
    """``"col" = <literal>``, or ``"col" IS NULL`` when the value is null."""
    if classify_cell(value) is CellKind.NULL:
        return f"{quote_identifier(column)} IS NULL"
    return f"{quote_identifier(column)} = {sql_literal(value)}"


def assignment(column: str, value: object) -> str:
    """``"col" = <literal>`` for a SET clause (``NULL`` for null values)."""
    return f"{quote_identifier(column)} = {sql_literal(value)}"


def like_predicate(column: str, escaped_term: str) -> str:
    """Substring match of an already escaped term against one column."""
    return f"{quote_identifier(column)} LIKE '%{escaped_term}%' ESCAPE '{LIKE_ESCAPE_CHAR}'"
