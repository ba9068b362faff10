"""lite-browse CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import click

from lite_cli.lite_query import render as query_render
from lite_cli.shared.cli import (
    CLIContext,
    common_cli_options,
    handle_cli_errors,
    open_session,
    pass_cli_context,
)

from . import introspect, render
from .options import open_view, view_options


@click.group(help="Browse tables, rows and schema of a SQLite database image.")
@common_cli_options
@handle_cli_errors
def cli(cli_ctx: CLIContext) -> None:
    """Primary Click group for lite-browse commands."""
    cli_ctx.logger.debug("lite-browse group initialised.")


@cli.command("tables")
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.LIST_FORMAT_CHOICES),
)
@pass_cli_context
@handle_cli_errors
def list_tables(cli_ctx: CLIContext, output_format: str) -> None:
    """List tables with their row counts."""
    with open_session(cli_ctx) as session:
        tables = introspect.list_tables(session, logger=cli_ctx.logger)
    render.render_table_list(tables, output_format=output_format, logger=cli_ctx.logger)


@cli.command("schema")
@click.option("--table", "table_filter", type=str, help="Inspect a specific table only.")
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(render.SCHEMA_FORMAT_CHOICES),
)
@pass_cli_context
@handle_cli_errors
def show_schema(cli_ctx: CLIContext, table_filter: str | None, output_format: str) -> None:
    """Display columns, keys and relationships (or the raw DDL with --format sql)."""
    with open_session(cli_ctx) as session:
        tables = introspect.list_tables(session, logger=cli_ctx.logger)
    if table_filter:
        table = introspect.find_table(tables, table_filter)
        if table is None:
            raise click.ClickException(f"Table '{table_filter}' does not exist in the database.")
        tables = [table]
    render.render_schema_overview(tables, output_format=output_format, logger=cli_ctx.logger)


@cli.command("rows")
@click.argument("table", type=str)
@view_options
@click.option(
    "--format",
    "output_format",
    default="table",
    show_default=True,
    type=click.Choice(query_render.OUTPUT_FORMAT_CHOICES),
)
@pass_cli_context
@handle_cli_errors
def show_rows(
    cli_ctx: CLIContext,
    table: str,
    search_term: str,
    sort_column: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
    output_format: str,
) -> None:
    """Show one page of TABLE, optionally filtered and sorted."""
    with open_session(cli_ctx) as session:
        browser = open_view(
            cli_ctx,
            session,
            table,
            search_term=search_term,
            sort_column=sort_column,
            desc=desc,
            page=page,
            page_size=page_size,
        )
    query_render.render_query_result(
        browser.current_result(),
        output_format=output_format,
        logger=cli_ctx.logger,
        title=table if output_format == "table" else None,
        first_row_number=browser.row_number(0) if output_format == "table" else None,
    )
    cli_ctx.logger.info(render.page_summary(browser))


@cli.command("row")
@click.argument("table", type=str)
@click.argument("index", type=click.IntRange(min=1))
@view_options
@pass_cli_context
@handle_cli_errors
def show_row(
    cli_ctx: CLIContext,
    table: str,
    index: int,
    search_term: str,
    sort_column: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
) -> None:
    """Print row INDEX (1-based, within the page) of TABLE as JSON."""
    with open_session(cli_ctx) as session:
        browser = open_view(
            cli_ctx,
            session,
            table,
            search_term=search_term,
            sort_column=sort_column,
            desc=desc,
            page=page,
            page_size=page_size,
        )
    click.echo(browser.row_as_json(index - 1))


@cli.command("cell")
@click.argument("table", type=str)
@click.argument("index", type=click.IntRange(min=1))
@click.argument("column", type=str)
@view_options
@pass_cli_context
@handle_cli_errors
def show_cell(
    cli_ctx: CLIContext,
    table: str,
    index: int,
    column: str,
    search_term: str,
    sort_column: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
) -> None:
    """Show the full content and type of one cell."""
    with open_session(cli_ctx) as session:
        browser = open_view(
            cli_ctx,
            session,
            table,
            search_term=search_term,
            sort_column=sort_column,
            desc=desc,
            page=page,
            page_size=page_size,
        )
    render.render_cell_detail(browser.cell_detail(index - 1, column))


@cli.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@pass_cli_context
@handle_cli_errors
def export_database(cli_ctx: CLIContext, output: Path) -> None:
    """Write the loaded database image to OUTPUT."""
    if cli_ctx.dry_run:
        cli_ctx.logger.dry_run(f"Would export {cli_ctx.db_path} to {output}")
        return
    with open_session(cli_ctx) as session:
        target = session.export_to(output)
    cli_ctx.logger.success(f"Exported database to {target}")


def main() -> None:
    """Entry point for console_scripts."""
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
