"""Indexing engine.

This module provides directory traversal, metadata extraction, content
hashing and assembly of the columnar index table.
"""

from folder_index.indexing.builder import TableBuilder
from folder_index.indexing.collector import EntryCollector
from folder_index.indexing.engine import build_index
from folder_index.indexing.hasher import ContentHasher
from folder_index.indexing.metadata import extract_metadata
from folder_index.indexing.models import (
    CollectedEntry,
    Err,
    ErrorKind,
    FileMetadata,
    FileRecord,
    IndexOptions,
    Ok,
)
from folder_index.indexing.reporter import LoggingReporter, Reporter
from folder_index.indexing.table import IndexTable, index_columns

__all__ = [
    "CollectedEntry",
    "ContentHasher",
    "EntryCollector",
    "Err",
    "ErrorKind",
    "FileMetadata",
    "FileRecord",
    "IndexOptions",
    "IndexTable",
    "LoggingReporter",
    "Ok",
    "Reporter",
    "TableBuilder",
    "build_index",
    "extract_metadata",
    "index_columns",
]
