"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folder_index.core.theme import get_theme

if TYPE_CHECKING:
    from folder_index.indexing.models import FileRecord


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int | None) -> str:
    """Format a byte count as a human-readable string.

    Args:
        size_bytes: Number of bytes, or None if unknown.

    Returns:
        String such as "512 B" or "1.5 MB"; "-" for None.
    """
    if size_bytes is None:
        return "-"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def create_records_table(title: str, *, metadata: bool, hashing: bool) -> Table:
    """Create a pre-configured table for displaying index records.

    Args:
        title: Table title.
        metadata: Add size and modified columns.
        hashing: Add the content hash column.

    Returns:
        Rich Table configured for record display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Path", overflow="fold")
    if metadata:
        table.add_column("Size", style="info", justify="right")
        table.add_column("Modified", style="muted")
    if hashing:
        table.add_column("Hash", style="muted", overflow="ellipsis", max_width=16)
    table.add_column("Error", style="error")
    return table


def format_record_row(record: FileRecord, *, metadata: bool, hashing: bool) -> tuple[str, ...]:
    """Format a record as a table row matching :func:`create_records_table`.

    Args:
        record: The record to format.
        metadata: Include size and modified cells.
        hashing: Include the hash cell.

    Returns:
        Tuple of cells with Rich markup.
    """
    if record.is_directory:
        cells = ["[directory]\u25a0[/]", f"[directory]{escape(record.path)}/[/]"]
    else:
        cells = ["[file]\u00b7[/]", f"[file]{escape(record.path)}[/]"]

    if metadata:
        cells.append(format_size(record.size) if not record.is_directory else "-")
        mtime = record.modified_time
        cells.append(mtime.strftime("%Y-%m-%d %H:%M:%S") if mtime else "-")
    if hashing:
        cells.append(record.content_hash or "-")
    cells.append(record.error or "")
    return tuple(cells)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
