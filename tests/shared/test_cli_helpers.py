from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import click
import pytest
from click.testing import CliRunner

from lite_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors, open_session
from lite_cli.shared.exceptions import ConfigurationError, LiteCliError, QueryError
from lite_cli.shared.logging import get_logger


class DummyAppConfig:
    def __init__(self, path: Path | None) -> None:
        self.database = SimpleNamespace(path=path)

    def with_database_path(self, new_path: str | Path) -> DummyAppConfig:
        return DummyAppConfig(Path(new_path))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_common_cli_options_builds_context(
    monkeypatch: pytest.MonkeyPatch, runner: CliRunner, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        "lite_cli.shared.cli.load_config", lambda config_path: DummyAppConfig(tmp_path / "db.sqlite")
    )

    @click.command()
    @common_cli_options
    def sample(cli_ctx: CLIContext) -> None:
        click.echo(f"dry={cli_ctx.dry_run} verbose={cli_ctx.verbose} db={cli_ctx.db_path.name}")

    result = runner.invoke(sample, ["--dry-run"])

    assert result.exit_code == 0, result.output
    assert "dry=True verbose=False db=db.sqlite" in result.output


def test_common_cli_options_applies_db_override(
    monkeypatch: pytest.MonkeyPatch, runner: CliRunner, tmp_path: Path
) -> None:
    monkeypatch.setattr("lite_cli.shared.cli.load_config", lambda config_path: DummyAppConfig(None))

    @click.command()
    @common_cli_options
    def sample(cli_ctx: CLIContext) -> None:
        click.echo(str(cli_ctx.db_path))

    override_path = tmp_path / "override.sqlite"
    result = runner.invoke(sample, ["--db", str(override_path)])

    assert result.exit_code == 0, result.output
    assert override_path.as_posix() in result.output


def test_common_cli_options_reports_configuration_errors(
    monkeypatch: pytest.MonkeyPatch, runner: CliRunner
) -> None:
    def broken(config_path: str | None) -> DummyAppConfig:
        raise ConfigurationError("bad yaml")

    monkeypatch.setattr("lite_cli.shared.cli.load_config", broken)

    @click.command()
    @common_cli_options
    def sample(cli_ctx: CLIContext) -> None:  # pragma: no cover - never reached
        click.echo("unreachable")

    result = runner.invoke(sample, [])

    assert result.exit_code != 0
    assert "bad yaml" in result.output


def test_open_session_requires_a_database() -> None:
    cli_ctx = CLIContext(
        config=DummyAppConfig(None),  # type: ignore[arg-type]
        db_path=None,
        dry_run=False,
        verbose=False,
        logger=get_logger(),
    )
    with pytest.raises(ConfigurationError):
        open_session(cli_ctx)


def test_open_session_loads_file(sample_db: Path) -> None:
    cli_ctx = CLIContext(
        config=DummyAppConfig(sample_db),  # type: ignore[arg-type]
        db_path=sample_db,
        dry_run=False,
        verbose=False,
        logger=get_logger(),
    )
    with open_session(cli_ctx) as session:
        assert session.execute("SELECT COUNT(*) FROM users").first_value() == 4


def test_handle_cli_errors_wraps_known_exceptions() -> None:
    @handle_cli_errors
    def boom() -> None:
        raise QueryError("near \"SELEC\": syntax error")

    with pytest.raises(click.ClickException) as excinfo:
        boom()
    assert str(excinfo.value) == "near \"SELEC\": syntax error"


def test_handle_cli_errors_formats_configuration_errors() -> None:
    @handle_cli_errors
    def misconfigured() -> None:
        raise ConfigurationError("missing value")

    with pytest.raises(click.ClickException) as excinfo:
        misconfigured()
    assert "Configuration error" in str(excinfo.value)


def test_handle_cli_errors_wraps_base_error() -> None:
    @handle_cli_errors
    def fail() -> None:
        raise LiteCliError("nope")

    with pytest.raises(click.ClickException) as excinfo:
        fail()
    assert str(excinfo.value) == "nope"


def test_handle_cli_errors_wraps_unexpected_exceptions() -> None:
    @handle_cli_errors
    def explode() -> None:
        raise RuntimeError("kapow")

    with pytest.raises(click.ClickException) as excinfo:
        explode()
    assert "Unexpected error: kapow" == str(excinfo.value)
