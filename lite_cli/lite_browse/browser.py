"""Table view state: selection, search, sort and pagination over one Session."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass

from lite_cli.shared.cells import display_cell, json_cell, kind_label
from lite_cli.shared.config import BrowseSettings
from lite_cli.shared.database import Session
from lite_cli.shared.exceptions import LiteCliError, QueryError
from lite_cli.shared.logging import Logger, get_logger
from lite_cli.shared.models import ColumnInfo, QueryResult

from .introspect import get_columns
from .query_builder import (
    DEFAULT_PAGE_SIZE,
    BrowseIntent,
    SortDirection,
    build_browse_queries,
    offset_for_page,
    toggle_sort,
    total_pages,
)


@dataclass(frozen=True, slots=True)
class BrowsePage:
    """Everything one fetch produced, tagged with the token it was issued."""

    token: int
    intent: BrowseIntent
    columns: tuple[ColumnInfo, ...]
    result: QueryResult | None
    total_rows: int
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CellDetail:
    column: str
    value: object
    kind: str
    text: str


class TableBrowser:
    """Holds the visible state of one table view.

    Every fetch gets a token from a monotonically increasing counter and only
    the page carrying the most recently issued token is applied; results of
    superseded fetches are dropped.
    """

    def __init__(
        self,
        session: Session,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        logger: Logger | None = None,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.session = session
        self.page_size = page_size
        self.logger = logger or get_logger()

        self.table: str | None = None
        self.search_term = ""
        self.sort_column: str | None = None
        self.sort_direction: SortDirection = "ASC"
        self.page = 1

        self.columns: tuple[ColumnInfo, ...] = ()
        self.result: QueryResult | None = None
        self.total_rows = 0
        self.error: str | None = None

        self._last_token = 0

    # -- intents -----------------------------------------------------------

    def select_table(self, name: str) -> bool:
        self.table = name
        self.search_term = ""
        self.sort_column = None
        self.sort_direction = "ASC"
        self.page = 1
        return self.refresh()

    def restore(
        self,
        name: str,
        *,
        search_term: str = "",
        sort_column: str | None = None,
        sort_direction: SortDirection = "ASC",
        page: int = 1,
    ) -> bool:
        """Reopen a view in a known state.

        The first page is fetched to learn the row count; a later ``page`` is
        then fetched only if it exists. Returns False when it does not.
        """
        self.table = name
        self.search_term = search_term
        self.sort_column = sort_column
        self.sort_direction = sort_direction
        self.page = 1
        applied = self.refresh()
        if page != 1 and applied:
            return self.go_to_page(page)
        return applied

    def search(self, term: str) -> bool:
        """Filter by ``term`` across all columns, keeping the sort, from page 1."""
        self.search_term = term
        self.page = 1
        return self.refresh()

    def sort(self, column: str) -> bool:
        self.sort_direction = toggle_sort(self.sort_column, self.sort_direction, column)
        self.sort_column = column
        self.page = 1
        return self.refresh()

    def go_to_page(self, page: int) -> bool:
        if page < 1 or (page > 1 and page > self.total_pages):
            self.logger.debug(f"Page {page} is out of range (1-{self.total_pages}).")
            return False
        self.page = page
        return self.refresh()

    def next_page(self) -> bool:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.page - 1)

    def refresh(self) -> bool:
        """Re-fetch the current view with unchanged search, sort and page."""
        return self.apply(self.fetch(self.current_intent()))

    # -- fetching ----------------------------------------------------------

    def current_intent(self) -> BrowseIntent:
        if self.table is None:
            raise LiteCliError("No table selected.")
        return BrowseIntent(
            table=self.table,
            limit=self.page_size,
            offset=offset_for_page(self.page, self.page_size),
            search_term=self.search_term,
            sort_column=self.sort_column,
            sort_direction=self.sort_direction,
        )

    def fetch(self, intent: BrowseIntent) -> BrowsePage:
        """Run the count and data queries for ``intent`` without touching visible state."""
        self._last_token += 1
        token = self._last_token

        columns = tuple(get_columns(self.session, intent.table))
        queries = build_browse_queries(intent, columns)
        self.logger.debug(f"[fetch #{token}] {queries.data_query}")

        total_rows = self._count(queries.count_query)
        try:
            result: QueryResult | None = self.session.execute(queries.data_query)
            error = None
        except QueryError as exc:
            self.logger.warning(f"Failed to fetch data for {intent.table}: {exc}")
            result = None
            error = str(exc)

        return BrowsePage(
            token=token,
            intent=intent,
            columns=columns,
            result=result,
            total_rows=total_rows,
            error=error,
        )

    def apply(self, page: BrowsePage) -> bool:
        """Make ``page`` the visible state unless a newer fetch has been issued."""
        if page.token != self._last_token:
            self.logger.debug(
                f"Discarding stale fetch #{page.token} (latest is #{self._last_token})."
            )
            return False
        self.columns = page.columns
        self.result = page.result
        self.total_rows = page.total_rows
        self.error = page.error
        return True

    def _count(self, count_query: str) -> int:
        try:
            result = self.session.execute(count_query)
        except QueryError as exc:
            self.logger.warning(f"Count query failed: {exc}")
            return 0
        value = result.first_value()
        return int(value) if value is not None else 0

    # -- row helpers -------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_rows, self.page_size)

    def row_number(self, index: int) -> int:
        """1-based position of a page row within the whole filtered table."""
        return (self.page - 1) * self.page_size + index + 1

    def current_result(self) -> QueryResult:
        """The visible result set; raises when the last fetch produced none."""
        if self.result is None:
            raise LiteCliError(self.error or "No rows have been fetched yet.")
        return self.result

    def row_values(self, index: int) -> tuple[object, ...]:
        rows = self.current_result().rows
        if index < 0 or index >= len(rows):
            raise LiteCliError(f"Row {index + 1} is not on the current page ({len(rows)} rows shown).")
        return tuple(rows[index])

    def row_as_json(self, index: int) -> str:
        """The row as a column -> value JSON object (copy-row format)."""
        row = self.row_values(index)
        keys = self.current_result().record_keys
        record = {key: json_cell(value) for key, value in zip(keys, row)}
        return json.dumps(record, indent=2)

    def cell_detail(self, index: int, column: str) -> CellDetail:
        row = self.row_values(index)
        columns = self.current_result().columns
        if column not in columns:
            raise LiteCliError(f"Column '{column}' is not part of the current result.")
        value = row[columns.index(column)]
        return CellDetail(column=column, value=value, kind=kind_label(value), text=display_cell(value))


class SearchDebouncer:
    """Delay search intents until typing pauses.

    Each ``submit`` cancels the still-pending timer of the previous one, so only
    the last term within a quiet period reaches the browser. Must be used from
    a running asyncio loop.
    """

    def __init__(self, browser: TableBrowser, delay_seconds: float = 0.3) -> None:
        self.browser = browser
        self.delay_seconds = delay_seconds
        self._pending: asyncio.Task[bool] | None = None

    @classmethod
    def from_settings(cls, browser: TableBrowser, settings: BrowseSettings) -> SearchDebouncer:
        return cls(browser, delay_seconds=settings.search_debounce_ms / 1000.0)

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self, term: str) -> asyncio.Task[bool]:
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._fire(term))
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> bool | None:
        """Wait for the pending search, if any, and return whether it was applied."""
        task = self._pending
        if task is None:
            return None
        try:
            return await task
        finally:
            if self._pending is task:
                self._pending = None

    async def _fire(self, term: str) -> bool:
        await asyncio.sleep(self.delay_seconds)
        return self.browser.search(term)
