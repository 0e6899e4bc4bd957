"""Index command implementation.

Builds the index of a directory tree, saves the Parquet cache and
optionally runs the analysis reports.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from folder_index.analysis.reports import AnalysisError, run_analysis
from folder_index.cli.display import print_analysis_report, print_index_summary
from folder_index.core.cache import CacheStore, CacheWriteFailure
from folder_index.core.paths import InvalidPathError, check_valid_folder_path, resolve_output_dir
from folder_index.core.settings import SettingsError, load_settings_or_default
from folder_index.indexing.engine import build_index
from folder_index.indexing.models import IndexOptions
from folder_index.utils.formatting import console, print_error, print_success, print_warning


def index_folder(
    index_path: Annotated[
        Path,
        typer.Argument(help="Folder path to start recursive indexing from."),
    ],
    cache_location: Annotated[
        Path | None,
        typer.Option(
            "--cache_location",
            "-c",
            help="Folder to save the Parquet cache to. Defaults to the working directory.",
        ),
    ] = None,
    metadata: Annotated[
        bool,
        typer.Option(
            "--metadata",
            "-m",
            help="Include size and modification time. Slower than without metadata.",
        ),
    ] = False,
    hash_files: Annotated[
        bool,
        typer.Option("--hash", "-H", help="Calculate a content hash per file."),
    ] = False,
    analysis: Annotated[
        bool,
        typer.Option(
            "--analysis",
            "-a",
            help="Run the analysis reports after indexing. Requires --metadata.",
        ),
    ] = False,
    analysis_folder: Annotated[
        Path | None,
        typer.Option(
            "--analysis_folder",
            "-r",
            help="Folder to save the analysis CSVs to. Defaults to the working directory.",
        ),
    ] = None,
    hash_algorithm: Annotated[
        str | None,
        typer.Option("--hash-algorithm", help="hashlib algorithm (default from settings)."),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=64,
            help="Hashing threads (default from settings).",
        ),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option("--no-cache", help="Do not write the Parquet cache."),
    ] = False,
) -> None:
    """Index a folder recursively and save the result as a Parquet cache.

    Examples:
        folder-index index ~/Music                    # Paths only
        folder-index index ~/Music -m -H              # With metadata and hashes
        folder-index index ~/Music -m -a -r reports/  # Write analysis CSVs
        folder-index index ~/Music -H -w 8            # Hash on 8 threads
    """
    try:
        root = check_valid_folder_path(index_path)
        cache_dir = resolve_output_dir(cache_location)
        analysis_dir = resolve_output_dir(analysis_folder)
    except InvalidPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        settings = load_settings_or_default()
        options = IndexOptions.from_settings(
            settings,
            metadata=metadata,
            hashing=hash_files,
            hash_algorithm=hash_algorithm,
            workers=workers,
        )
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        print_error(f"Invalid options: {e}")
        raise typer.Exit(code=1) from e

    with console.status(f"Indexing {root}..."):
        table = build_index(root, options)

    print_index_summary(table)

    exit_code = 0
    if not no_cache:
        try:
            cache_path = CacheStore(cache_dir).save(table)
            print_success(f"Cache saved to {cache_path}")
        except CacheWriteFailure as e:
            print_error(str(e))
            exit_code = 1

    if analysis:
        if not metadata:
            print_warning("Analysis requires the metadata flag (-m); skipping analysis.")
        else:
            try:
                report = run_analysis(table, analysis_dir, hashed=hash_files)
                print_analysis_report(report)
            except AnalysisError as e:
                print_error(str(e))
                exit_code = 1

    if exit_code:
        raise typer.Exit(code=exit_code)
