"""Ad-hoc SQL execution helpers for lite-query."""

from __future__ import annotations

import sqlite3
from dataclasses import replace

from lite_cli.shared.database import Session
from lite_cli.shared.exceptions import QueryError
from lite_cli.shared.models import QueryResult
from lite_cli.shared.sql import quote_identifier

DEFAULT_TABLE_QUERY_LIMIT = 100


def split_statements(script: str) -> list[str]:
    """Split ``script`` into complete statements, in order.

    A ``;`` only ends a statement when the engine agrees the text before it is
    complete, so semicolons inside string literals, comments and trigger bodies
    stay put. Empty statements are dropped; trailing text without a ``;`` is
    kept as the final statement.
    """
    statements: list[str] = []
    pieces = script.split(";")
    buffer = ""
    for index, piece in enumerate(pieces):
        buffer += piece
        if index == len(pieces) - 1:
            break
        buffer += ";"
        if sqlite3.complete_statement(buffer):
            if buffer.strip(" \t\r\n;"):
                statements.append(buffer.strip())
            buffer = ""
    if buffer.strip():
        statements.append(buffer.strip())
    return statements


def execute_sql(*, session: Session, query: str) -> QueryResult:
    """Execute an ad-hoc script and return its first result set.

    Statements run one after another; the first one that returns columns
    supplies the result (the last statement's result when none does). A
    failing statement stops the script with the engine's message, leaving the
    earlier statements applied. ``execution_time_ms`` covers every statement run.
    """
    statements = split_statements(query)
    if not statements:
        raise QueryError("Query text must not be empty.")

    results = [session.execute(statement) for statement in statements]
    elapsed_ms = sum(result.execution_time_ms or 0.0 for result in results)
    first_result_set = next((result for result in results if result.columns), results[-1])
    return replace(first_result_set, execution_time_ms=elapsed_ms)


def default_table_query(table: str, limit: int = DEFAULT_TABLE_QUERY_LIMIT) -> str:
    """Starting query offered for a table in the SQL editor."""
    return f"SELECT * FROM {quote_identifier(table)} LIMIT {limit};"
