"""The Session: sole owner of the embedded SQLite handle."""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path
from types import TracebackType

from .exceptions import EngineNotReadyError, LoadError, QueryError
from .logging import Logger, get_logger
from .models import QueryResult


def _open_connection() -> sqlite3.Connection:
    # Autocommit: each statement is applied by the engine as soon as it runs.
    return sqlite3.connect(":memory:", isolation_level=None)


def _enable_foreign_keys(connection: sqlite3.Connection) -> None:
    connection.execute("PRAGMA foreign_keys = ON;")


class Session:
    """Holds at most one open database and mediates every call into the engine.

    Other components never touch the connection; they hand SQL text to
    :meth:`execute` and receive :class:`QueryResult` objects back.
    """

    def __init__(self, logger: Logger | None = None) -> None:
        self._connection: sqlite3.Connection | None = None
        self._logger = logger or get_logger()
        self.source: Path | None = None

    @classmethod
    def from_path(cls, path: str | Path, logger: Logger | None = None) -> Session:
        session = cls(logger=logger)
        session.load_file(path)
        return session

    @property
    def is_loaded(self) -> bool:
        return self._connection is not None

    def load(self, image: bytes) -> None:
        """Replace the current database with one opened from ``image``.

        The previous handle is closed first. If the bytes are not a database
        image the session ends up with no handle at all.
        """
        self.close()
        connection = _open_connection()
        try:
            if image:
                connection.deserialize(bytes(image))
            # Deserialisation is lazy; reading the catalog validates the image.
            connection.execute("SELECT COUNT(*) FROM sqlite_master").fetchone()
            _enable_foreign_keys(connection)
        except (sqlite3.Error, OverflowError) as exc:
            connection.close()
            raise LoadError(
                f"Failed to load database image: {exc}. Ensure it is a valid SQLite file."
            ) from exc
        self._connection = connection
        self._logger.debug(f"Loaded database image ({len(image)} bytes).")

    def load_file(self, path: str | Path) -> None:
        db_path = Path(path).expanduser()
        try:
            image = db_path.read_bytes()
        except OSError as exc:
            self.close()
            raise LoadError(f"Unable to read database file '{db_path}': {exc}") from exc
        self.load(image)
        self.source = db_path

    def execute(self, sql: str) -> QueryResult:
        """Run one statement and return its columns, rows and elapsed time."""
        connection = self._require_connection()
        start = time.perf_counter()
        try:
            cursor = connection.execute(sql)
            rows = cursor.fetchall()
        except (sqlite3.Error, sqlite3.Warning) as exc:
            raise QueryError(str(exc)) from exc
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        description = cursor.description or ()
        return QueryResult(
            columns=tuple(col[0] for col in description),
            rows=tuple(tuple(row) for row in rows),
            execution_time_ms=elapsed_ms,
        )

    def export(self) -> bytes | None:
        """Serialise the open database, or return None if nothing is loaded."""
        if self._connection is None:
            return None
        return self._connection.serialize()

    def export_to(self, path: str | Path) -> Path:
        image = self.export()
        if image is None:
            raise EngineNotReadyError("No database is loaded; nothing to export.")
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(image)
        self._logger.debug(f"Exported {len(image)} bytes to {target}.")
        return target

    def save(self) -> Path:
        """Write the image back to the file it was loaded from."""
        if self.source is None:
            raise EngineNotReadyError("Database was not loaded from a file; nothing to save it to.")
        return self.export_to(self.source)

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            self.source = None

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise EngineNotReadyError("Database not loaded.")
        return self._connection

    def __enter__(self) -> Session:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
