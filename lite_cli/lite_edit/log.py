"""Append-only record of the mutation statements executed in a session."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


class EditLog:
    """Statements in execution order.

    Nothing is replayed or undone from here; entries only leave via :meth:`clear`.
    """

    def __init__(self) -> None:
        self._statements: list[str] = []

    def append(self, statement: str) -> None:
        self._statements.append(statement)

    def all(self) -> tuple[str, ...]:
        return tuple(self._statements)

    def clear(self) -> None:
        self._statements.clear()

    def as_script(self) -> str:
        """All statements, one per line, for copying or export."""
        return "\n".join(self._statements)

    def write_to(self, path: str | Path, *, append: bool = True) -> Path:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        mode = "a" if append else "w"
        with target.open(mode, encoding="utf-8") as handle:
            for statement in self._statements:
                handle.write(statement + "\n")
        return target

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._statements))
