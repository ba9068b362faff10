from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from lite_cli.lite_browse.main import cli
from lite_cli.shared.database import Session


def _json_payload(output: str):
    """Decode the JSON document in ``output``, ignoring any log lines after it."""
    start = min(index for index in (output.find("["), output.find("{")) if index >= 0)
    payload, _ = json.JSONDecoder().raw_decode(output[start:])
    return payload


def _invoke(sample_db: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--db", str(sample_db), *args], env={"NO_COLOR": "1"})


def test_tables_lists_row_counts(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "tables", "--format", "json")

    assert result.exit_code == 0, result.output
    assert _json_payload(result.output) == [
        {"name": "orders", "rows": 4, "columns": 4},
        {"name": "tags", "rows": 2, "columns": 2},
        {"name": "users", "rows": 4, "columns": 3},
    ]


def test_tables_table_format(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "tables")

    assert result.exit_code == 0, result.output
    assert "orders" in result.output
    assert "users" in result.output


def test_schema_for_single_table(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "schema", "--table", "orders", "--format", "json")

    assert result.exit_code == 0, result.output
    payload = _json_payload(result.output)
    assert [table["name"] for table in payload["tables"]] == ["orders"]
    assert payload["tables"][0]["foreign_keys"] == [{"from": "user_id", "table": "users", "to": "id"}]


def test_schema_sql_format(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "schema", "--table", "users", "--format", "sql")

    assert result.exit_code == 0, result.output
    assert "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, active INTEGER);" in result.output


def test_schema_unknown_table(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "schema", "--table", "ghost")

    assert result.exit_code != 0
    assert "Table 'ghost' does not exist" in result.output


def test_rows_with_search_and_sort(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(
        sample_db, "rows", "orders", "--search", "_", "--sort", "order_id", "--desc", "--format", "json"
    )

    assert result.exit_code == 0, result.output
    assert [row["sku"] for row in _json_payload(result.output)] == ["a_b", "50%_off"]
    assert "Page 1 of 1 · 2 rows matching '_' · sorted by order_id DESC" in result.output


def test_rows_table_output_numbers_rows_across_pages(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "rows", "users", "--limit", "3", "--page", "2")

    assert result.exit_code == 0, result.output
    assert "Page 2 of 2 · 4 rows" in result.output
    lines = [line for line in result.output.splitlines() if line.strip().startswith("4 ")]
    assert lines and "NULL" in lines[0]


def test_rows_page_out_of_range(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "rows", "users", "--page", "9")

    assert result.exit_code != 0
    assert "Page 9 is out of range" in result.output


def test_rows_unknown_sort_column(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "rows", "users", "--sort", "age")

    assert result.exit_code != 0
    assert "Cannot sort by 'age'" in result.output


def test_rows_unknown_table(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "rows", "ghost")

    assert result.exit_code != 0
    assert "Table 'ghost' does not exist" in result.output


def test_row_prints_json_record(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "row", "users", "1")

    assert result.exit_code == 0, result.output
    assert _json_payload(result.output) == {"id": 1, "name": "O'Brien", "active": 1}


def test_cell_shows_type_and_content(sample_db: Path, isolated_env: Path) -> None:
    result = _invoke(sample_db, "cell", "users", "4", "name")

    assert result.exit_code == 0, result.output
    assert "[NULL]" in result.output


def test_export_writes_image(sample_db: Path, isolated_env: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "copy.db"

    result = _invoke(sample_db, "export", str(target))

    assert result.exit_code == 0, result.output
    with Session.from_path(target) as copy:
        assert copy.execute("SELECT COUNT(*) FROM users").first_value() == 4


def test_export_dry_run_writes_nothing(sample_db: Path, isolated_env: Path, tmp_path: Path) -> None:
    target = tmp_path / "copy.db"
    runner = CliRunner()

    result = runner.invoke(cli, ["--db", str(sample_db), "--dry-run", "export", str(target)])

    assert result.exit_code == 0, result.output
    assert "[dry-run]" in result.output
    assert not target.exists()


def test_missing_database_option(isolated_env: Path) -> None:
    result = CliRunner().invoke(cli, ["tables"])

    assert result.exit_code != 0
    assert "No database selected" in result.output


def test_corrupt_database_file(tmp_path: Path, isolated_env: Path) -> None:
    bogus = tmp_path / "bogus.db"
    bogus.write_bytes(b"definitely not sqlite" * 10)

    result = CliRunner().invoke(cli, ["--db", str(bogus), "tables"])

    assert result.exit_code != 0
    assert "Failed to load database image" in result.output
