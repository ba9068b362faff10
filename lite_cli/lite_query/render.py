"""Output rendering helpers for query results."""

from __future__ import annotations

import csv
import json
import sys
from typing import IO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from lite_cli.shared.cells import display_cell, json_cell
from lite_cli.shared.logging import Logger
from lite_cli.shared.models import QueryResult

OUTPUT_FORMAT_CHOICES = ("table", "tsv", "csv", "json")


def render_query_result(
    result: QueryResult,
    *,
    output_format: str,
    logger: Logger,
    stream=None,
    title: str | None = None,
    first_row_number: int | None = None,
) -> None:
    """Render a query result set to the desired format.

    ``first_row_number`` adds a leading ``#`` column in table output, numbering
    rows from that value (used for paginated browsing).
    """
    output_stream = stream or sys.stdout
    fmt = (output_format or "table").lower()

    if fmt == "table":
        _render_table(result, logger=logger, stream=output_stream, title=title, first_row_number=first_row_number)
    elif fmt == "csv":
        _render_delimited(result, stream=output_stream, delimiter=",")
    elif fmt == "tsv":
        _render_delimited(result, stream=output_stream, delimiter="\t")
    elif fmt == "json":
        _render_json(result, stream=output_stream)
    else:  # pragma: no cover - Click validation should prevent this
        raise ValueError(f"Unsupported output format '{output_format}'.")


def _render_table(
    result: QueryResult,
    *,
    logger: Logger,
    stream: IO[str],
    title: str | None,
    first_row_number: int | None,
) -> None:
    console = Console(file=stream, highlight=False, force_terminal=False)
    if title:
        console.print(Text(title, style="bold"))

    if not result.columns:
        logger.info("Statement executed; no result set returned.")
        return

    table = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold")
    if first_row_number is not None:
        table.add_column("#", style="dim", justify="right")
    for column in result.columns:
        table.add_column(Text(column or ""))

    if result.rows:
        for offset, row in enumerate(result.rows):
            cells = [display_cell(cell) for cell in row]
            if first_row_number is not None:
                cells.insert(0, str(first_row_number + offset))
            # Text keeps cell contents such as "[x]" from being read as Rich markup.
            table.add_row(*(Text(cell) for cell in cells))
    else:
        logger.info("Query returned zero rows.")

    console.print(table)


def _render_delimited(result: QueryResult, *, stream: IO[str], delimiter: str) -> None:
    writer = csv.writer(stream, delimiter=delimiter)
    if result.columns:
        writer.writerow(result.columns)
    for row in result.rows:
        writer.writerow(_delimited_cell(cell) for cell in row)


def _render_json(result: QueryResult, *, stream: IO[str]) -> None:
    records = [
        {key: json_cell(value) for key, value in zip(result.record_keys, row)}
        for row in result.rows
    ]
    json.dump(records, stream, indent=2)
    stream.write("\n")


def _delimited_cell(value: object) -> object:
    if value is None:
        return ""
    return json_cell(value)
