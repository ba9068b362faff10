"""Catalog inspection: tables, columns, foreign keys and row counts."""

from __future__ import annotations

from collections.abc import Sequence

from lite_cli.shared.database import Session
from lite_cli.shared.exceptions import QueryError
from lite_cli.shared.logging import Logger, get_logger
from lite_cli.shared.models import ColumnInfo, ForeignKey, TableInfo
from lite_cli.shared.sql import quote_identifier, quote_text

TABLES_SQL = (
    "SELECT name, sql FROM sqlite_master "
    "WHERE type='table' AND name NOT LIKE 'sqlite_%' "
    "ORDER BY name ASC"
)


def list_tables(session: Session, *, logger: Logger | None = None) -> list[TableInfo]:
    """Scan the catalog and describe every user table, ordered by name.

    Row count, column and foreign-key lookups fail independently: a failing
    lookup degrades to 0 or an empty list for that table only.
    """
    log = logger or get_logger()
    if not session.is_loaded:
        return []

    catalog = session.execute(TABLES_SQL)
    tables: list[TableInfo] = []
    for name, ddl in catalog.rows:
        tables.append(
            TableInfo(
                name=name,
                schema=ddl or "",
                row_count=_count_rows(session, name, log),
                columns=tuple(_fetch_columns(session, name, log)),
                foreign_keys=tuple(_fetch_foreign_keys(session, name, log)),
            )
        )
    return tables


def get_columns(session: Session, table: str) -> list[ColumnInfo]:
    """Column metadata for one table; empty when the table is missing or unreadable."""
    if not session.is_loaded:
        return []
    try:
        result = session.execute(f"PRAGMA table_info({quote_identifier(table)})")
    except QueryError:
        return []
    return _columns_from_rows(result.rows)


def object_type(session: Session, name: str) -> str | None:
    """Catalog type of ``name`` ("table", "view", ...), or None when it is unknown."""
    if not session.is_loaded:
        return None
    result = session.execute(f"SELECT type FROM sqlite_master WHERE name = {quote_text(name)}")
    value = result.first_value()
    return str(value) if value is not None else None


def find_table(tables: Sequence[TableInfo], name: str) -> TableInfo | None:
    for table in tables:
        if table.name == name:
            return table
    return None


def schema_script(tables: Sequence[TableInfo]) -> str:
    """All table DDL joined into one script, ready to paste elsewhere."""
    return ";\n".join(table.schema for table in tables)


# ---------------------------------------------------------------------------
# Internal helpers


def _count_rows(session: Session, table: str, logger: Logger) -> int:
    try:
        result = session.execute(f"SELECT COUNT(*) FROM {quote_identifier(table)}")
    except QueryError as exc:
        logger.warning(f"Could not count rows for {table}: {exc}")
        return 0
    value = result.first_value()
    return int(value) if value is not None else 0


def _fetch_columns(session: Session, table: str, logger: Logger) -> list[ColumnInfo]:
    try:
        result = session.execute(f"PRAGMA table_info({quote_identifier(table)})")
    except QueryError as exc:
        logger.warning(f"Could not fetch columns for {table}: {exc}")
        return []
    return _columns_from_rows(result.rows)


def _fetch_foreign_keys(session: Session, table: str, logger: Logger) -> list[ForeignKey]:
    try:
        result = session.execute(f"PRAGMA foreign_key_list({quote_identifier(table)})")
    except QueryError as exc:
        logger.warning(f"Could not fetch foreign keys for {table}: {exc}")
        return []
    # id, seq, table, from, to, on_update, on_delete, match
    # "to" is NULL when the reference targets the parent's primary key implicitly.
    return [
        ForeignKey(from_column=row[3], to_table=row[2], to_column=row[4] or "")
        for row in result.rows
    ]


def _columns_from_rows(rows: Sequence[tuple]) -> list[ColumnInfo]:
    # cid, name, type, notnull, dflt_value, pk
    return [
        ColumnInfo(name=row[1], type=row[2] or "", primary_key=int(row[5] or 0) > 0)
        for row in rows
    ]
