"""Translate a single-cell edit into an UPDATE statement."""

from __future__ import annotations

from collections.abc import Sequence

from lite_cli.shared.exceptions import EditError
from lite_cli.shared.models import TableInfo
from lite_cli.shared.sql import assignment, equals_predicate, quote_identifier


def build_update(
    table: TableInfo,
    column: str,
    new_value: object,
    current_row: Sequence[object],
    row_columns: Sequence[str],
) -> str:
    """Return one ``UPDATE`` that sets ``column`` to ``new_value`` on the displayed row.

    The row is identified by its primary-key columns and their pre-edit values.
    Tables without a primary key fall back to matching every column of the row,
    which also updates any exact duplicates of it.
    """
    if len(current_row) != len(row_columns):
        raise EditError(
            f"Row has {len(current_row)} value(s) but {len(row_columns)} column name(s)."
        )
    if column not in row_columns:
        raise EditError(f"Column '{column}' is not part of the displayed row.")

    old_values = dict(zip(row_columns, current_row))
    key_columns = table.primary_keys or tuple(row_columns)

    predicates: list[str] = []
    for key in key_columns:
        if key not in old_values:
            raise EditError(
                f"Primary key column '{key}' of '{table.name}' is missing from the displayed row."
            )
        predicates.append(equals_predicate(key, old_values[key]))

    return (
        f"UPDATE {quote_identifier(table.name)} "
        f"SET {assignment(column, new_value)} "
        f"WHERE {' AND '.join(predicates)};"
    )
