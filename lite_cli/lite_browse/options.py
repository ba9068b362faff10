"""Click options describing a table view, shared by lite-browse and lite-edit."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import click

from lite_cli.shared.cli import CLIContext
from lite_cli.shared.database import Session

from .browser import TableBrowser

F = TypeVar("F", bound=Callable[..., Any])


def view_options(func: F) -> F:
    """Add --search/--sort/--desc/--page/--limit to a command."""
    options = (
        click.option("--search", "search_term", default="", help="Match this text in any column."),
        click.option("--sort", "sort_column", type=str, help="Column to order by."),
        click.option("--desc", is_flag=True, help="Sort descending instead of ascending."),
        click.option("--page", type=int, default=1, show_default=True, help="1-based page number."),
        click.option("--limit", "page_size", type=int, help="Rows per page (defaults to browse.page_size)."),
    )
    for option in reversed(options):
        func = option(func)
    return func


def open_view(
    cli_ctx: CLIContext,
    session: Session,
    table: str,
    *,
    search_term: str,
    sort_column: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
) -> TableBrowser:
    """Fetch the requested page of ``table`` or fail with a Click error."""
    size = page_size if page_size is not None else cli_ctx.config.browse.page_size
    if size <= 0:
        raise click.ClickException("--limit must be a positive integer.")
    if page < 1:
        raise click.ClickException("--page must be 1 or greater.")

    browser = TableBrowser(session, page_size=size, logger=cli_ctx.logger)
    browser.restore(
        table,
        search_term=search_term,
        sort_column=sort_column,
        sort_direction="DESC" if desc else "ASC",
    )
    if not browser.columns:
        raise click.ClickException(f"Table '{table}' does not exist in the database.")
    if sort_column and sort_column not in {column.name for column in browser.columns}:
        raise click.ClickException(f"Cannot sort by '{sort_column}': no such column in '{table}'.")
    if browser.error:
        raise click.ClickException(browser.error)
    if page != 1 and not browser.go_to_page(page):
        raise click.ClickException(
            f"Page {page} is out of range; '{table}' has {max(browser.total_pages, 1)} page(s)."
        )
    return browser
