"""Data structures shared by the browse, query and edit tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """One column as declared in the table's DDL."""

    name: str
    type: str
    primary_key: bool = False


@dataclass(frozen=True, slots=True)
class ForeignKey:
    """A directed reference from a column of the owning table."""

    from_column: str
    to_table: str
    to_column: str


@dataclass(frozen=True, slots=True)
class TableInfo:
    """Structural description of a table at the time of the last catalog scan.

    ``row_count`` is the count observed during that scan; it is not kept live.
    """

    name: str
    schema: str
    row_count: int
    columns: tuple[ColumnInfo, ...] = ()
    foreign_keys: tuple[ForeignKey, ...] = ()

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def primary_keys(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns if column.primary_key)


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Structured result set returned by the Session."""

    columns: tuple[str, ...]
    rows: Sequence[tuple[Any, ...]] = field(default_factory=tuple)
    execution_time_ms: float | None = None

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def record_keys(self) -> tuple[str, ...]:
        """Column names made unique for keyed (JSON) output.

        A repeated name gets the first free ``_2``, ``_3``... suffix, so both
        ``id`` columns of ``SELECT * FROM a JOIN b`` survive as ``id`` and ``id_2``.
        """
        taken = set(self.columns)
        seen: set[str] = set()
        keys: list[str] = []
        for name in self.columns:
            key = name
            if key in seen:
                suffix = 2
                while f"{name}_{suffix}" in taken:
                    suffix += 1
                key = f"{name}_{suffix}"
                taken.add(key)
            seen.add(key)
            keys.append(key)
        return tuple(keys)

    def first_value(self) -> Any:
        """Return the first cell of the first row, or None for an empty result."""
        if not self.rows or not self.rows[0]:
            return None
        return self.rows[0][0]
