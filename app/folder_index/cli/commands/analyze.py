"""Analyze command implementation.

Runs the analysis reports on an existing cache without re-indexing.
"""

from pathlib import Path
from typing import Annotated

import typer

from folder_index.analysis.reports import AnalysisError, run_analysis
from folder_index.cli.display import print_analysis_report
from folder_index.core.cache import CacheReadFailure, load_index_cache
from folder_index.core.paths import CACHE_FILENAME, InvalidPathError, resolve_output_dir
from folder_index.utils.formatting import print_error


def analyze_cache(
    cache_file: Annotated[
        Path | None,
        typer.Argument(help=f"Cache file to analyze. Defaults to ./{CACHE_FILENAME}."),
    ] = None,
    analysis_folder: Annotated[
        Path | None,
        typer.Option(
            "--analysis_folder",
            "-r",
            help="Folder to save the analysis CSVs to. Defaults to the working directory.",
        ),
    ] = None,
) -> None:
    """Write analysis reports for a cached index.

    Duplicate content is reported when the cache contains hashes.
    """
    try:
        output_dir = resolve_output_dir(analysis_folder)
    except InvalidPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        table = load_index_cache(cache_file or Path.cwd() / CACHE_FILENAME)
        report = run_analysis(table, output_dir, hashed=table.has_hashes)
    except (CacheReadFailure, AnalysisError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_analysis_report(report)
