from __future__ import annotations

from pathlib import Path

from lite_cli.shared import paths


def test_get_config_dir_uses_env_override(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path / "config")}
    result = paths.get_config_dir(create=True, env=env)
    assert result == tmp_path / "config"
    assert result.exists()


def test_default_config_path_prefers_file_override(tmp_path: Path) -> None:
    cfg_path = tmp_path / "nested" / "lite.yaml"
    env = {paths.CONFIG_FILE_ENV: str(cfg_path)}
    resolved = paths.default_config_path(create_parents=True, env=env)
    assert resolved == cfg_path
    assert resolved.parent.exists()


def test_default_edit_log_path(tmp_path: Path) -> None:
    env = {paths.CONFIG_DIR_ENV: str(tmp_path)}
    assert paths.default_edit_log_path(env=env) == tmp_path / "edits.sql"

    override = tmp_path / "audit.sql"
    env[paths.EDIT_LOG_PATH_ENV] = str(override)
    assert paths.default_edit_log_path(env=env) == override


def test_resolve_path_expands_user(tmp_path: Path, monkeypatch) -> None:
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    result = paths.resolve_path("~/file.db")
    assert result == fake_home / "file.db"
