"""Cell value variants and their display conventions."""

from __future__ import annotations

from enum import Enum


class CellKind(str, Enum):
    """The kinds of value a result cell can hold."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BLOB = "blob"


def classify_cell(value: object) -> CellKind:
    """Return the variant for a Python value produced by (or bound for) the engine."""
    if value is None:
        return CellKind.NULL
    # bool first: it is a subclass of int.
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, int):
        return CellKind.INTEGER
    if isinstance(value, float):
        return CellKind.REAL
    if isinstance(value, str):
        return CellKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return CellKind.BLOB
    raise TypeError(f"Unsupported cell value type: {type(value).__name__}")


def display_cell(value: object) -> str:
    """Text shown for a cell in tabular output."""
    kind = classify_cell(value)
    if kind is CellKind.NULL:
        return "NULL"
    if kind is CellKind.BOOLEAN:
        return "true" if value else "false"
    if kind is CellKind.BLOB:
        return f"<{len(bytes(value))} bytes>"  # type: ignore[arg-type]
    return str(value)


def kind_label(value: object) -> str:
    """Short type label for the cell detail view ("NULL" for nulls)."""
    kind = classify_cell(value)
    if kind is CellKind.NULL:
        return "NULL"
    return kind.value


def json_cell(value: object) -> object:
    """Convert a cell into something ``json.dumps`` accepts."""
    if classify_cell(value) is CellKind.BLOB:
        return bytes(value).hex()  # type: ignore[arg-type]
    return value
