from __future__ import annotations

import sqlite3
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from lite_cli.shared import paths
from lite_cli.shared.database import Session

SAMPLE_STATEMENTS: tuple[str, ...] = (
    "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, active INTEGER)",
    """
    CREATE TABLE orders (
        order_id INTEGER PRIMARY KEY,
        user_id INTEGER REFERENCES users(id),
        sku TEXT,
        note TEXT
    )
    """,
    "CREATE TABLE tags (label TEXT, weight REAL)",
    "INSERT INTO users (id, name, active) VALUES (1, 'O''Brien', 1)",
    "INSERT INTO users (id, name, active) VALUES (2, 'Ada', 0)",
    "INSERT INTO users (id, name, active) VALUES (3, 'Grace', 1)",
    "INSERT INTO users (id, name, active) VALUES (4, NULL, NULL)",
    "INSERT INTO orders VALUES (10, 1, '50%_off', 'promo')",
    "INSERT INTO orders VALUES (11, 2, '500 off', 'near miss')",
    "INSERT INTO orders VALUES (12, 3, 'a_b', 'C:\\temp')",
    "INSERT INTO orders VALUES (13, 3, 'axb', NULL)",
    "INSERT INTO tags VALUES ('red', 1.5)",
    "INSERT INTO tags VALUES ('blue', NULL)",
)


def build_image(statements: Sequence[str]) -> bytes:
    connection = sqlite3.connect(":memory:")
    try:
        for statement in statements:
            connection.execute(statement)
        connection.commit()
        return connection.serialize()
    finally:
        connection.close()


@pytest.fixture
def image_factory() -> Callable[[Sequence[str]], bytes]:
    return build_image


@pytest.fixture
def sample_image() -> bytes:
    return build_image(SAMPLE_STATEMENTS)


@pytest.fixture
def session(sample_image: bytes) -> Session:
    active = Session()
    active.load(sample_image)
    yield active
    active.close()


@pytest.fixture
def sample_db(tmp_path: Path, sample_image: bytes) -> Path:
    db_path = tmp_path / "sample.db"
    db_path.write_bytes(sample_image)
    return db_path


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and edit-log locations at a temp dir so tests never touch ~/.litecli."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv(paths.CONFIG_DIR_ENV, str(config_dir))
    monkeypatch.delenv(paths.CONFIG_FILE_ENV, raising=False)
    monkeypatch.delenv(paths.DATABASE_PATH_ENV, raising=False)
    monkeypatch.delenv(paths.EDIT_LOG_PATH_ENV, raising=False)
    return config_dir
