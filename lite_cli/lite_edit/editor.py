"""Execute cell edits and keep the edit log and table view in step."""

from __future__ import annotations

from collections.abc import Sequence

from lite_cli.lite_browse.browser import TableBrowser
from lite_cli.shared.database import Session
from lite_cli.shared.exceptions import EditError, QueryError
from lite_cli.shared.logging import Logger, get_logger
from lite_cli.shared.models import TableInfo

from .log import EditLog
from .translator import build_update


class CellEditor:
    def __init__(
        self,
        session: Session,
        edit_log: EditLog,
        *,
        browser: TableBrowser | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.session = session
        self.edit_log = edit_log
        self.browser = browser
        self.logger = logger or get_logger()

    def preview(
        self,
        table: TableInfo,
        column: str,
        new_value: object,
        current_row: Sequence[object],
        row_columns: Sequence[str],
    ) -> str:
        """The statement an edit would run, without running it."""
        return build_update(table, column, new_value, current_row, row_columns)

    def edit_cell(
        self,
        table: TableInfo,
        column: str,
        new_value: object,
        current_row: Sequence[object],
        row_columns: Sequence[str],
    ) -> str:
        """Apply one cell edit and return the executed statement.

        On success the statement is logged and the attached view re-fetched.
        If the engine rejects it an EditError carries the engine's message and
        neither the log nor the view is touched.
        """
        statement = build_update(table, column, new_value, current_row, row_columns)
        try:
            self.session.execute(statement)
        except QueryError as exc:
            raise EditError(str(exc)) from exc

        self.edit_log.append(statement)
        self._report_changes(table)
        if self.browser is not None:
            self.browser.refresh()
        return statement

    def _report_changes(self, table: TableInfo) -> None:
        try:
            changed = self.session.execute("SELECT changes()").first_value()
        except QueryError:
            return
        if changed is None:
            return
        count = int(changed)
        if count == 0:
            self.logger.warning(f"The edit matched no rows in '{table.name}'.")
        elif count > 1 and not table.primary_keys:
            self.logger.warning(
                f"'{table.name}' has no primary key; the edit matched {count} identical rows."
            )
        else:
            self.logger.debug(f"Edit changed {count} row(s).")
