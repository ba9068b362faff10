"""Configuration loading utilities for the lite-cli tools."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    """Which database image to open when no --db is given."""

    path: Path | None


@dataclass(frozen=True, slots=True)
class BrowseSettings:
    """Table browsing behaviour."""

    page_size: int
    search_debounce_ms: int


@dataclass(frozen=True, slots=True)
class QuerySettings:
    """Ad-hoc SQL behaviour."""

    default_limit: int


@dataclass(frozen=True, slots=True)
class EditSettings:
    """Where applied cell edits are recorded."""

    log_path: Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    database: DatabaseSettings
    browse: BrowseSettings
    query: QuerySettings
    edits: EditSettings

    def with_database_path(self, new_path: str | Path) -> AppConfig:
        """Return a copy with an updated database path."""
        resolved = paths.resolve_path(new_path)
        new_db = replace(self.database, path=resolved)
        return replace(self, database=new_db)


def _default_config(env: Mapping[str, str]) -> dict[str, Any]:
    return {
        "database": {"path": None},
        "browse": {
            "page_size": 50,
            "search_debounce_ms": 300,
        },
        "query": {
            "default_limit": 100,
        },
        "edits": {
            "log_path": str(paths.default_edit_log_path(env=env)),
        },
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "database.path": (paths.DATABASE_PATH_ENV, str),
    "browse.page_size": ("LITECLI_PAGE_SIZE", int),
    "browse.search_debounce_ms": ("LITECLI_SEARCH_DEBOUNCE_MS", int),
    "query.default_limit": ("LITECLI_QUERY_DEFAULT_LIMIT", int),
    "edits.log_path": (paths.EDIT_LOG_PATH_ENV, str),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    defaults = _default_config(env)
    merged: dict[str, Any] = _deep_merge(defaults, file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(config_path: str | Path | None, env: Mapping[str, str]) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    cleaned = raw.strip()
    if expected_type is int:
        return int(cleaned)
    return cleaned


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _positive(value: Any, label: str) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"{label} must be a positive integer, got {number}")
    return number


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        raw_db_path = data["database"]["path"]
        database = DatabaseSettings(
            path=paths.resolve_path(raw_db_path) if raw_db_path else None,
        )
        browse = BrowseSettings(
            page_size=_positive(data["browse"]["page_size"], "browse.page_size"),
            search_debounce_ms=int(data["browse"]["search_debounce_ms"]),
        )
        query = QuerySettings(
            default_limit=_positive(data["query"]["default_limit"], "query.default_limit"),
        )
        edits = EditSettings(log_path=paths.resolve_path(data["edits"]["log_path"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    return AppConfig(
        source_path=source_path,
        database=database,
        browse=browse,
        query=query,
        edits=edits,
    )
