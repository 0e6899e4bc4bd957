"""Show command implementation.

Loads a previously written cache and displays its rows.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from folder_index.cli.display import print_index_summary, print_records
from folder_index.core.cache import CacheReadFailure, load_index_cache
from folder_index.core.paths import CACHE_FILENAME
from folder_index.indexing.models import FileRecord
from folder_index.utils.formatting import console, print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _record_to_dict(record: FileRecord) -> dict[str, Any]:
    """Convert a record to a JSON-serializable dictionary."""
    return {
        "path": record.path,
        "is_directory": record.is_directory,
        "size": record.size,
        "modified_time": record.modified_time.isoformat() if record.modified_time else None,
        "content_hash": record.content_hash,
        "error": record.error,
    }


def show_cache(
    cache_file: Annotated[
        Path | None,
        typer.Argument(help=f"Cache file to read. Defaults to ./{CACHE_FILENAME}."),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", min=1, help="Limit number of entries to display."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Display the contents of an index cache."""
    path = cache_file or Path.cwd() / CACHE_FILENAME

    try:
        table = load_index_cache(path)
    except CacheReadFailure as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        records = [_record_to_dict(r) for r in table.records()]
        console.print_json(json.dumps(records[:limit] if limit else records))
        return

    print_records(table, limit=limit)
    print_index_summary(table)
