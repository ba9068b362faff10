"""Project-wide custom exceptions."""

from __future__ import annotations


class LiteCliError(Exception):
    """Base exception for the lite-cli database tools."""


class ConfigurationError(LiteCliError):
    """Raised when configuration loading or validation fails."""


class DatabaseError(LiteCliError):
    """Raised for database-related issues."""


class EngineNotReadyError(DatabaseError):
    """Raised when an operation needs a database but none is loaded."""


class LoadError(DatabaseError):
    """Raised when bytes cannot be opened as a database image."""


class QueryError(DatabaseError):
    """Raised when the engine rejects a statement.

    The message is the engine's own text, unchanged.
    """


class EditError(QueryError):
    """Raised when a translated cell edit cannot be built or executed."""
