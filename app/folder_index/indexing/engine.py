"""Indexing pipeline.

Wires traversal, metadata extraction, hashing and table assembly into a
single run. Traversal always happens on the calling thread; with more
than one worker, hashing is fanned out to a bounded thread pool.
"""

from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from folder_index.indexing.builder import TableBuilder
from folder_index.indexing.collector import EntryCollector
from folder_index.indexing.hasher import ContentHasher
from folder_index.indexing.metadata import extract_metadata
from folder_index.indexing.models import (
    CollectedEntry,
    Err,
    FileMetadata,
    IndexOptions,
    Ok,
)
from folder_index.indexing.reporter import LoggingReporter, Reporter
from folder_index.indexing.table import IndexTable

# Hash jobs allowed in flight per worker before traversal waits
_PENDING_PER_WORKER = 4

_Pending = dict[Future[Ok[str] | Err], tuple[int, CollectedEntry, Ok[FileMetadata] | Err | None]]


def build_index(
    root: Path,
    options: IndexOptions | None = None,
    reporter: Reporter | None = None,
) -> IndexTable:
    """Index a directory tree.

    Args:
        root: Validated root directory.
        options: Run options. Defaults to no metadata and no hashing.
        reporter: Receives traversal warnings and progress. Defaults to logging.

    Returns:
        The finished IndexTable, one row per entry below root.
    """
    options = options or IndexOptions()
    reporter = reporter or LoggingReporter()

    collector = EntryCollector(root, reporter)
    builder = TableBuilder(options)
    hasher = ContentHasher(options.hash_algorithm, options.chunk_size) if options.hashing else None

    reporter.info(f"Indexing {root}")
    entries = collector.collect()
    if hasher is not None and options.workers > 1:
        _index_parallel(entries, builder, options, hasher)
    else:
        _index_sequential(entries, builder, options, hasher)

    table = builder.finalize()
    reporter.info(f"Indexed {len(table)} entries ({table.error_count()} with errors)")
    return table


def _index_sequential(
    entries: Iterable[CollectedEntry],
    builder: TableBuilder,
    options: IndexOptions,
    hasher: ContentHasher | None,
) -> None:
    for entry in entries:
        metadata = extract_metadata(entry.path) if options.metadata else None
        digest = None
        if hasher is not None and not entry.is_directory:
            digest = hasher.hash_file(entry.path)
        builder.append(entry, metadata, digest)


def _index_parallel(
    entries: Iterable[CollectedEntry],
    builder: TableBuilder,
    options: IndexOptions,
    hasher: ContentHasher,
) -> None:
    """Hash files on a thread pool while traversal continues.

    Completed jobs are drained as soon as they finish, so a slow file only
    holds its own worker. Rows carry their traversal sequence number and
    are reordered by the builder on finalize.
    """
    pending: _Pending = {}
    max_pending = options.workers * _PENDING_PER_WORKER

    def drain(done: Iterable[Future[Ok[str] | Err]]) -> None:
        for future in done:
            sequence, entry, metadata = pending.pop(future)
            builder.append(entry, metadata, future.result(), sequence=sequence)

    with ThreadPoolExecutor(
        max_workers=options.workers, thread_name_prefix="folder-index-hash"
    ) as pool:
        for sequence, entry in enumerate(entries):
            metadata = extract_metadata(entry.path) if options.metadata else None
            if entry.is_directory:
                builder.append(entry, metadata, None, sequence=sequence)
                continue

            future = pool.submit(hasher.hash_file, entry.path)
            pending[future] = (sequence, entry, metadata)
            if len(pending) >= max_pending:
                done, _ = wait(list(pending), return_when=FIRST_COMPLETED)
                drain(done)

        while pending:
            done, _ = wait(list(pending), return_when=FIRST_COMPLETED)
            drain(done)
