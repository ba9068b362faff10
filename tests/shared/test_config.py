from __future__ import annotations

from pathlib import Path

import pytest

from lite_cli.shared import paths
from lite_cli.shared.config import AppConfig, load_config
from lite_cli.shared.exceptions import ConfigurationError


def test_load_config_defaults(isolated_env: Path) -> None:
    cfg = load_config()
    assert isinstance(cfg, AppConfig)
    assert cfg.database.path is None
    assert cfg.browse.page_size == 50
    assert cfg.browse.search_debounce_ms == 300
    assert cfg.query.default_limit == 100
    assert cfg.edits.log_path == isolated_env / paths.DEFAULT_EDIT_LOG_FILE
    assert cfg.source_path == isolated_env / paths.DEFAULT_CONFIG_FILE


def test_load_config_from_yaml(tmp_path: Path, isolated_env: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        """
        database:
          path: ~/alt.db
        browse:
          page_size: 25
        edits:
          log_path: ~/audit/edits.sql
        """,
        encoding="utf-8",
    )
    cfg = load_config(config_path=cfg_file)
    assert cfg.database.path == paths.resolve_path("~/alt.db")
    assert cfg.browse.page_size == 25
    assert cfg.browse.search_debounce_ms == 300
    assert cfg.edits.log_path == paths.resolve_path("~/audit/edits.sql")


def test_load_config_env_overrides(tmp_path: Path) -> None:
    custom_db = tmp_path / "custom.db"
    env = {
        paths.CONFIG_DIR_ENV: str(tmp_path / "config"),
        paths.DATABASE_PATH_ENV: str(custom_db),
        "LITECLI_PAGE_SIZE": "10",
        "LITECLI_SEARCH_DEBOUNCE_MS": "0",
        "LITECLI_QUERY_DEFAULT_LIMIT": "7",
    }
    cfg = load_config(env=env)
    assert cfg.database.path == paths.resolve_path(custom_db)
    assert cfg.browse.page_size == 10
    assert cfg.browse.search_debounce_ms == 0
    assert cfg.query.default_limit == 7


def test_invalid_env_override_raises_configuration_error(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path), "LITECLI_PAGE_SIZE": "many"}
    with pytest.raises(ConfigurationError):
        load_config(env=env)


def test_non_positive_page_size_is_rejected(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path), "LITECLI_PAGE_SIZE": "0"}
    with pytest.raises(ConfigurationError):
        load_config(env=env)


def test_invalid_yaml_raises_configuration_error(tmp_path: Path, isolated_env: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("- just a list", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(config_path=cfg_file)


def test_with_database_path_returns_copy(tmp_path: Path, isolated_env: Path) -> None:
    cfg = load_config()
    updated = cfg.with_database_path(tmp_path / "x.db")
    assert updated.database.path == tmp_path / "x.db"
    assert cfg.database.path is None
