"""Output rendering helpers for lite-browse."""

from __future__ import annotations

import json
import sys
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lite_cli.shared.logging import Logger
from lite_cli.shared.models import TableInfo

from .browser import CellDetail, TableBrowser
from .introspect import schema_script

SCHEMA_FORMAT_CHOICES = ("table", "json", "sql")
LIST_FORMAT_CHOICES = ("table", "json")


def render_table_list(
    tables: Sequence[TableInfo],
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    output_stream = stream or sys.stdout
    if output_format == "json":
        payload = [
            {"name": table.name, "rows": table.row_count, "columns": len(table.columns)}
            for table in tables
        ]
        json.dump(payload, output_stream, indent=2)
        output_stream.write("\n")
        return

    if not tables:
        logger.info("No tables found in database.")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    listing = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    listing.add_column("Table", style="bold")
    listing.add_column("Rows", justify="right")
    listing.add_column("Columns", justify="right")
    for table in tables:
        listing.add_row(Text(table.name), f"{table.row_count:,}", str(len(table.columns)))
    console.print(listing)


def render_schema_overview(
    tables: Sequence[TableInfo],
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    """Render columns, keys and relationships for each table."""
    output_stream = stream or sys.stdout
    fmt = (output_format or "table").lower()

    if fmt == "sql":
        script = schema_script(tables)
        output_stream.write(script + (";\n" if script else ""))
        return

    if fmt == "json":
        payload = {
            "tables": [
                {
                    "name": table.name,
                    "rows": table.row_count,
                    "schema": table.schema,
                    "columns": [
                        {"name": column.name, "type": column.type, "primary_key": column.primary_key}
                        for column in table.columns
                    ],
                    "foreign_keys": [
                        {"from": fk.from_column, "table": fk.to_table, "to": fk.to_column}
                        for fk in table.foreign_keys
                    ],
                }
                for table in tables
            ],
        }
        json.dump(payload, output_stream, indent=2)
        output_stream.write("\n")
        return

    if not tables:
        logger.info("No tables found in database.")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    for table in tables:
        console.print(Text(table.name, style="bold"))
        column_table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        column_table.add_column("Column")
        column_table.add_column("Type")
        column_table.add_column("PK")
        for column in table.columns:
            column_table.add_row(Text(column.name), Text(column.type), "PK" if column.primary_key else "")
        console.print(column_table)

        if table.foreign_keys:
            fk_table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
            fk_table.add_column("From")
            fk_table.add_column("References")
            for fk in table.foreign_keys:
                target = f"{fk.to_table}.{fk.to_column}" if fk.to_column else fk.to_table
                fk_table.add_row(Text(fk.from_column), Text(target))
            console.print(fk_table)

        console.print(f"{table.row_count:,} rows\n")


def page_summary(browser: TableBrowser) -> str:
    """Status line for the current page, e.g. ``Page 2 of 7 · 321 rows``."""
    pages = max(browser.total_pages, 1)
    summary = f"Page {browser.page} of {pages} · {browser.total_rows:,} rows"
    if browser.search_term.strip():
        summary += f" matching {browser.search_term!r}"
    if browser.sort_column:
        summary += f" · sorted by {browser.sort_column} {browser.sort_direction}"
    return summary


def render_cell_detail(detail: CellDetail, *, stream=None) -> None:
    output_stream = stream or sys.stdout
    console = Console(file=output_stream, highlight=False, force_terminal=False)
    console.print(Text.assemble((detail.column, "bold"), "  ", (f"[{detail.kind}]", "dim")))
    console.print(Text(detail.text))
