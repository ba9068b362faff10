"""lite-edit CLI: single-cell edits against a SQLite database image.

Default behaviour is dry-run (preview the UPDATE only). Use --apply to run the
statement, append it to the edit log file and save the database back.
"""

from __future__ import annotations

from pathlib import Path

import click

from lite_cli.lite_browse import introspect
from lite_cli.lite_browse.options import open_view, view_options
from lite_cli.lite_query import render as query_render
from lite_cli.shared.cli import (
    CLIContext,
    common_cli_options,
    handle_cli_errors,
    open_session,
    pass_cli_context,
)

from .editor import CellEditor
from .log import EditLog


def _effective_dry_run(cli_ctx: CLIContext, apply: bool) -> bool:
    """Return True when we should avoid writes.

    Writes need --apply, and --dry-run wins over --apply.
    """
    return cli_ctx.dry_run or (not apply)


def _log_path(cli_ctx: CLIContext, override: Path | None) -> Path:
    return override.expanduser() if override else cli_ctx.config.edits.log_path


@click.group(help="Edit table cells. Previews by default; pass --apply to write.")
@click.option("--apply", is_flag=True, help="Perform writes (default is preview only).")
@common_cli_options
@handle_cli_errors
def main(apply: bool, cli_ctx: CLIContext) -> None:
    cli_ctx.state["apply_flag"] = bool(apply)
    mode = "APPLY" if apply and not cli_ctx.dry_run else "DRY-RUN"
    cli_ctx.logger.debug(f"lite-edit initialised (mode={mode}, db={cli_ctx.db_path})")


@main.command("cell")
@click.argument("table_name", type=str)
@click.argument("index", type=click.IntRange(min=1))
@click.argument("column", type=str)
@click.option("--value", "new_value", type=str, help="New cell value (stored as text literal).")
@click.option("--null", "set_null", is_flag=True, help="Set the cell to NULL.")
@view_options
@click.option(
    "--log",
    "log_override",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Edit log file to append to (defaults to edits.log_path).",
)
@pass_cli_context
@handle_cli_errors
def edit_cell(
    cli_ctx: CLIContext,
    table_name: str,
    index: int,
    column: str,
    new_value: str | None,
    set_null: bool,
    search_term: str,
    sort_column: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
    log_override: Path | None,
) -> None:
    """Set COLUMN of row INDEX (1-based, within the page) of TABLE_NAME."""
    if (new_value is None) == (not set_null):
        raise click.ClickException("Provide exactly one of --value or --null.")
    value = None if set_null else new_value

    preview = _effective_dry_run(cli_ctx, bool(cli_ctx.state.get("apply_flag")))

    with open_session(cli_ctx) as session:
        browser = open_view(
            cli_ctx,
            session,
            table_name,
            search_term=search_term,
            sort_column=sort_column,
            desc=desc,
            page=page,
            page_size=page_size,
        )
        table = introspect.find_table(introspect.list_tables(session, logger=cli_ctx.logger), table_name)
        if table is None:
            if introspect.object_type(session, table_name) == "view":
                raise click.ClickException(f"'{table_name}' is a view, not a table; only table cells can be edited.")
            raise click.ClickException(f"'{table_name}' is an internal table and cannot be edited.")

        row = browser.row_values(index - 1)
        row_columns = browser.current_result().columns
        edit_log = EditLog()
        editor = CellEditor(session, edit_log, browser=browser, logger=cli_ctx.logger)

        if preview:
            statement = editor.preview(table, column, value, row, row_columns)
            cli_ctx.logger.dry_run("Would execute:")
            cli_ctx.logger.statement(statement)
            return

        statement = editor.edit_cell(table, column, value, row, row_columns)
        cli_ctx.logger.statement(statement)

        log_file = edit_log.write_to(_log_path(cli_ctx, log_override))
        session.save()
        cli_ctx.logger.success(
            f"Updated {table_name}.{column} on row {browser.row_number(index - 1)}; "
            f"logged to {log_file}."
        )

    if browser.result is not None:
        query_render.render_query_result(
            browser.result,
            output_format="table",
            logger=cli_ctx.logger,
            title=table_name,
            first_row_number=browser.row_number(0),
        )


@main.group("log")
def log_group() -> None:
    """Inspect or reset the edit log file."""


@log_group.command("show")
@click.option("--log", "log_override", type=click.Path(dir_okay=False, path_type=Path))
@pass_cli_context
@handle_cli_errors
def show_log(cli_ctx: CLIContext, log_override: Path | None) -> None:
    """Print every recorded statement in execution order."""
    path = _log_path(cli_ctx, log_override)
    if not path.exists() or not path.read_text(encoding="utf-8").strip():
        cli_ctx.logger.info(f"No edits recorded in {path}.")
        return
    click.echo(path.read_text(encoding="utf-8"), nl=False)


@log_group.command("clear")
@click.option("--log", "log_override", type=click.Path(dir_okay=False, path_type=Path))
@pass_cli_context
@handle_cli_errors
def clear_log(cli_ctx: CLIContext, log_override: Path | None) -> None:
    """Empty the edit log file."""
    path = _log_path(cli_ctx, log_override)
    if _effective_dry_run(cli_ctx, bool(cli_ctx.state.get("apply_flag"))):
        cli_ctx.logger.dry_run(f"Would clear {path}")
        return
    EditLog().write_to(path, append=False)
    cli_ctx.logger.success(f"Cleared {path}")
