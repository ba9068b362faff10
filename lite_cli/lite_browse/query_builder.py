"""Build the data and count queries behind a table view."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from lite_cli.shared.models import ColumnInfo
from lite_cli.shared.sql import escape_like_term, like_predicate, quote_identifier

SortDirection = Literal["ASC", "DESC"]

DEFAULT_PAGE_SIZE = 50


@dataclass(frozen=True, slots=True)
class BrowseIntent:
    """What a table view should currently display."""

    table: str
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0
    search_term: str = ""
    sort_column: str | None = None
    sort_direction: SortDirection = "ASC"

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset must not be negative, got {self.offset}")
        if self.sort_direction not in ("ASC", "DESC"):
            raise ValueError(f"sort direction must be ASC or DESC, got {self.sort_direction!r}")


@dataclass(frozen=True, slots=True)
class BrowseQueries:
    data_query: str
    count_query: str


def build_browse_queries(intent: BrowseIntent, columns: Sequence[ColumnInfo]) -> BrowseQueries:
    """Return the paginated data query and the matching count query.

    The search filter ORs a LIKE over every column and is shared verbatim by
    both queries; ordering and the LIMIT/OFFSET window apply to the data query only.
    """
    table = quote_identifier(intent.table)
    data_query = f"SELECT * FROM {table}"
    count_query = f"SELECT COUNT(*) AS count FROM {table}"

    where_clause = search_clause(intent.search_term, columns)
    if where_clause:
        data_query += where_clause
        count_query += where_clause

    if intent.sort_column:
        data_query += f" ORDER BY {quote_identifier(intent.sort_column)} {intent.sort_direction}"

    data_query += f" LIMIT {intent.limit} OFFSET {intent.offset}"
    return BrowseQueries(data_query=data_query, count_query=count_query)


def search_clause(term: str, columns: Sequence[ColumnInfo]) -> str:
    """`` WHERE ...`` matching ``term`` literally in any column, or ``""``."""
    if not term.strip() or not columns:
        return ""
    escaped = escape_like_term(term)
    return " WHERE " + " OR ".join(like_predicate(column.name, escaped) for column in columns)


def offset_for_page(page: int, limit: int) -> int:
    """Page N (1-based) starts at offset (N-1) * limit."""
    if page < 1:
        raise ValueError(f"page numbers start at 1, got {page}")
    return (page - 1) * limit


def total_pages(total_rows: int, limit: int) -> int:
    return math.ceil(total_rows / limit) if total_rows > 0 else 0


def toggle_sort(
    current_column: str | None,
    current_direction: SortDirection,
    requested_column: str,
) -> SortDirection:
    """Sorting the ascending column again flips it to DESC; anything else sorts ASC."""
    if current_column == requested_column and current_direction == "ASC":
        return "DESC"
    return "ASC"
