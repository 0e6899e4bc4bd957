"""Shared Rich display functions for index tables and analysis reports."""

import pandas as pd
from rich.markup import escape
from rich.table import Table

from folder_index.analysis.reports import AnalysisReport
from folder_index.indexing.table import IndexTable
from folder_index.utils.formatting import (
    console,
    create_records_table,
    format_record_row,
    format_size,
)


def create_summary_table(table: IndexTable, title: str = "Index Summary") -> Table:
    """Create a two-column table with the headline numbers of an index.

    Args:
        table: Finished index table.
        title: Table title.

    Returns:
        Rich Table with one row per statistic.
    """
    frame = table.frame
    directories = int(frame["is_directory"].sum())

    summary = Table(
        title=title,
        show_header=False,
        border_style="border",
    )
    summary.add_column("Statistic", style="bold_header")
    summary.add_column("Value", justify="right")

    summary.add_row("Entries", str(len(table)))
    summary.add_row("Files", str(len(table) - directories))
    summary.add_row("Directories", str(directories))
    if table.has_metadata:
        summary.add_row("Total size", format_size(int(frame["size"].sum())))
        span = table.modified_range()
        if span is not None:
            summary.add_row("Oldest change", span[0].strftime("%Y-%m-%d %H:%M"))
            summary.add_row("Newest change", span[1].strftime("%Y-%m-%d %H:%M"))
    if table.has_hashes:
        summary.add_row("Hashed files", str(int(frame["content_hash"].notna().sum())))
    errors = table.error_count()
    summary.add_row("Errors", f"[error]{errors}[/]" if errors else "0")
    return summary


def print_index_summary(table: IndexTable) -> None:
    """Print the summary table of an index."""
    console.print(create_summary_table(table))


def print_records(table: IndexTable, limit: int | None = None, title: str = "Indexed Entries") -> None:
    """Print index rows as a Rich table.

    Args:
        table: Index table to display.
        limit: Maximum number of rows to show. None shows all.
        title: Table title.
    """
    metadata = table.has_metadata
    hashing = table.has_hashes
    rich_table = create_records_table(title, metadata=metadata, hashing=hashing)

    shown = 0
    for record in table.records():
        if limit is not None and shown >= limit:
            break
        rich_table.add_row(*format_record_row(record, metadata=metadata, hashing=hashing))
        shown += 1

    console.print(rich_table)
    if shown < len(table):
        console.print(f"\n[dim](showing {shown} of {len(table)} entries)[/dim]")


def _frame_table(frame: pd.DataFrame, title: str, limit: int = 10) -> Table:
    """Render the first rows of a report DataFrame."""
    table = Table(title=title, header_style="bold_header", border_style="border")
    for column in frame.columns:
        justify = "right" if pd.api.types.is_numeric_dtype(frame[column]) else "left"
        table.add_column(str(column), justify=justify, overflow="fold")
    for row in frame.head(limit).itertuples(index=False, name=None):
        table.add_row(*("-" if pd.isna(value) else escape(str(value)) for value in row))
    return table


def print_analysis_report(report: AnalysisReport) -> None:
    """Print the analysis reports and the files they were written to."""
    console.print(_frame_table(report.overview, "Overview"))
    console.print(_frame_table(report.extensions, "Extensions"))
    console.print(_frame_table(report.largest_files, "Largest Files"))
    if report.duplicates is not None:
        if report.duplicates.empty:
            console.print("[dim]No duplicate content found.[/dim]")
        else:
            console.print(_frame_table(report.duplicates, "Duplicate Content"))

    for path in report.written:
        console.print(f"[dim]Wrote {path}[/dim]")
