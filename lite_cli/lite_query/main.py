"""lite-query CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import click

from lite_cli.shared.cli import (
    CLIContext,
    common_cli_options,
    handle_cli_errors,
    open_session,
    pass_cli_context,
)
from lite_cli.shared.database import Session
from lite_cli.shared.models import QueryResult

from . import executor, render


@click.group(help="Run SQL against a SQLite database image.")
@common_cli_options
@handle_cli_errors
def cli(cli_ctx: CLIContext) -> None:
    """Primary Click group for lite-query commands."""
    cli_ctx.logger.debug("lite-query group initialised.")


@cli.command("sql")
@click.argument("query", type=str, required=False)
@click.option(
    "--file",
    "sql_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the statement from a file instead of the argument.",
)
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.OUTPUT_FORMAT_CHOICES),
)
@click.option(
    "--write-back",
    is_flag=True,
    help="Save the database image back to the --db file after the statement runs.",
)
@pass_cli_context
@handle_cli_errors
def run_sql(
    cli_ctx: CLIContext,
    query: str | None,
    sql_file: Path | None,
    output_format: str,
    write_back: bool,
) -> None:
    """Execute one ad-hoc SQL statement."""
    if sql_file is not None:
        query = sql_file.read_text(encoding="utf-8")
    if not query or not query.strip():
        raise click.ClickException("Query text must not be empty.")

    with open_session(cli_ctx) as session:
        result = executor.execute_sql(session=session, query=query)
        _render(cli_ctx, result, output_format)
        if write_back:
            _write_back(cli_ctx, session)


@cli.command("table")
@click.argument("table_name", type=str)
@click.option("--limit", type=int, help="Row limit for the generated query.")
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.OUTPUT_FORMAT_CHOICES),
)
@pass_cli_context
@handle_cli_errors
def run_table_query(
    cli_ctx: CLIContext,
    table_name: str,
    limit: int | None,
    output_format: str,
) -> None:
    """Run the default starting query for TABLE_NAME."""
    effective_limit = limit if limit is not None else cli_ctx.config.query.default_limit
    if effective_limit <= 0:
        raise click.ClickException("--limit must be a positive integer.")
    query = executor.default_table_query(table_name, effective_limit)
    cli_ctx.logger.statement(query)
    with open_session(cli_ctx) as session:
        result = executor.execute_sql(session=session, query=query)
        _render(cli_ctx, result, output_format)


def _render(cli_ctx: CLIContext, result: QueryResult, output_format: str) -> None:
    render.render_query_result(result, output_format=output_format, logger=cli_ctx.logger)
    if result.execution_time_ms is not None and output_format == "table":
        cli_ctx.logger.info(f"{result.row_count} row(s) in {result.execution_time_ms:.2f}ms")


def _write_back(cli_ctx: CLIContext, session: Session) -> None:
    if cli_ctx.dry_run:
        cli_ctx.logger.dry_run(f"Would write database image back to {cli_ctx.db_path}")
        return
    target = session.save()
    cli_ctx.logger.success(f"Saved database to {target}")


def main() -> None:
    """Entry point for console_scripts."""
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
