"""Aggregate reports over a finished index.

The analysis only reads the table. Each report is a small DataFrame that
is also written to a CSV file in the analysis folder.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import pandas as pd

from folder_index.indexing.table import (
    CONTENT_HASH,
    ERROR,
    IS_DIRECTORY,
    MODIFIED_TIME,
    PATH,
    SIZE,
    IndexTable,
)

logger = logging.getLogger(__name__)

OVERVIEW_FILENAME = "overview.csv"
EXTENSIONS_FILENAME = "extensions.csv"
LARGEST_FILES_FILENAME = "largest_files.csv"
DUPLICATES_FILENAME = "duplicates.csv"

LARGEST_FILES_LIMIT = 100
NO_EXTENSION = "(none)"


class AnalysisError(Exception):
    """Raised when an analysis cannot be computed or written."""


@dataclass(slots=True)
class AnalysisReport:
    """Result of an analysis run.

    Attributes:
        overview: Single-row totals.
        extensions: Count and size per file extension.
        largest_files: Largest files by size.
        duplicates: Files sharing a content hash (hashed runs only).
        written: CSV files written, in order.
    """

    overview: pd.DataFrame
    extensions: pd.DataFrame
    largest_files: pd.DataFrame
    duplicates: pd.DataFrame | None = None
    written: list[Path] = field(default_factory=list)


def _extension(path: str) -> str:
    suffix = PurePosixPath(path).suffix.lower()
    return suffix or NO_EXTENSION


def summarize_overview(frame: pd.DataFrame) -> pd.DataFrame:
    """Totals over the whole table."""
    files = frame[~frame[IS_DIRECTORY]]
    return pd.DataFrame(
        {
            "entries": [len(frame)],
            "files": [len(files)],
            "directories": [int(frame[IS_DIRECTORY].sum())],
            "total_size": [int(files[SIZE].sum())],
            "errors": [int(frame[ERROR].notna().sum())],
        }
    )


def summarize_extensions(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-extension file count and size, largest total first."""
    files = frame.loc[~frame[IS_DIRECTORY], [PATH, SIZE]].copy()
    files["extension"] = files[PATH].map(_extension).astype("string")
    grouped = (
        files.groupby("extension", sort=True)
        .agg(
            count=(PATH, "size"),
            total_size=(SIZE, "sum"),
            mean_size=(SIZE, "mean"),
        )
        .reset_index()
    )
    grouped["mean_size"] = grouped["mean_size"].astype("Float64").round(1)
    return grouped.sort_values(
        ["total_size", "extension"], ascending=[False, True], kind="stable"
    ).reset_index(drop=True)


def summarize_largest_files(frame: pd.DataFrame, limit: int = LARGEST_FILES_LIMIT) -> pd.DataFrame:
    """The largest files, ties broken by path."""
    files = frame.loc[~frame[IS_DIRECTORY] & frame[SIZE].notna(), [PATH, SIZE, MODIFIED_TIME]]
    return (
        files.sort_values([SIZE, PATH], ascending=[False, True], kind="stable")
        .head(limit)
        .reset_index(drop=True)
    )


def summarize_duplicates(frame: pd.DataFrame) -> pd.DataFrame:
    """Groups of files whose content hashes match.

    Columns: content_hash, count, size, wasted_size (bytes held by the
    extra copies) and paths (semicolon separated, sorted).
    """
    hashed = frame.loc[~frame[IS_DIRECTORY] & frame[CONTENT_HASH].notna(), [PATH, SIZE, CONTENT_HASH]]
    grouped = (
        hashed.sort_values(PATH, kind="stable")
        .groupby(CONTENT_HASH, sort=True)
        .agg(
            count=(PATH, "size"),
            size=(SIZE, "max"),
            paths=(PATH, lambda p: ";".join(p)),
        )
        .reset_index()
    )
    grouped = grouped[grouped["count"] > 1].copy()
    extra_copies = (grouped["count"] - 1).astype("UInt64")
    grouped["wasted_size"] = grouped["size"].fillna(0).astype("UInt64") * extra_copies
    columns = [CONTENT_HASH, "count", "size", "wasted_size", "paths"]
    return (
        grouped[columns]
        .sort_values(["wasted_size", CONTENT_HASH], ascending=[False, True], kind="stable")
        .reset_index(drop=True)
    )


def _write_csv(frame: pd.DataFrame, output_dir: Path, filename: str) -> Path:
    path = output_dir / filename
    try:
        frame.to_csv(path, index=False)
    except OSError as e:
        raise AnalysisError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote %s (%d rows)", path, len(frame))
    return path


def run_analysis(table: IndexTable, output_dir: Path, hashed: bool) -> AnalysisReport:
    """Compute the reports for a table and write them as CSV files.

    Args:
        table: Finished index table with metadata columns.
        output_dir: Folder for the CSV files; created if missing.
        hashed: Whether hashing was enabled for the run. Adds the
            duplicates report.

    Returns:
        AnalysisReport with the computed frames and written paths.

    Raises:
        AnalysisError: If the table lacks required columns or a report
            cannot be written.
    """
    if not table.has_metadata:
        raise AnalysisError("Analysis requires an index built with metadata")
    if hashed and not table.has_hashes:
        raise AnalysisError("Duplicate analysis requires an index built with hashing")

    frame = table.frame
    report = AnalysisReport(
        overview=summarize_overview(frame),
        extensions=summarize_extensions(frame),
        largest_files=summarize_largest_files(frame),
        duplicates=summarize_duplicates(frame) if hashed else None,
    )

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise AnalysisError(f"Failed to create analysis folder {output_dir}: {e}") from e

    report.written.append(_write_csv(report.overview, output_dir, OVERVIEW_FILENAME))
    report.written.append(_write_csv(report.extensions, output_dir, EXTENSIONS_FILENAME))
    report.written.append(_write_csv(report.largest_files, output_dir, LARGEST_FILES_FILENAME))
    if report.duplicates is not None:
        report.written.append(_write_csv(report.duplicates, output_dir, DUPLICATES_FILENAME))

    return report
