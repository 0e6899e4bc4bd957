"""Indexing domain models.

This module defines the data structures that flow through an indexing
run: the options fixed at run start, the entries produced by traversal,
the tagged per-field results of metadata extraction and hashing, and the
finished rows.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from folder_index.core.settings import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_WORKERS,
    IndexSettings,
    validate_hash_algorithm,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Field-level error tags recorded on a row instead of a value.

    Attributes:
        ENTRY_UNREADABLE: The entry itself could not be stat'd during traversal.
        METADATA_UNAVAILABLE: Size and modification time could not be read.
        HASH_UNAVAILABLE: The file could not be opened or fully read.
    """

    ENTRY_UNREADABLE = "entry_unreadable"
    METADATA_UNAVAILABLE = "metadata_unavailable"
    HASH_UNAVAILABLE = "hash_unavailable"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful field result."""

    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed field result.

    Attributes:
        kind: Error tag stored on the row.
        detail: Human-readable cause, used for logging only.
    """

    kind: ErrorKind
    detail: str = ""


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """Size and modification time of a filesystem entry.

    Attributes:
        size: Size in bytes, None for directories.
        modified_time: Last modification time (UTC).
    """

    size: int | None
    modified_time: datetime


@dataclass(frozen=True, slots=True)
class CollectedEntry:
    """A filesystem entry discovered during traversal.

    Attributes:
        path: Absolute or root-joined path used for file access.
        relative_path: POSIX path relative to the indexed root.
        is_directory: True for directories (including linked directories).
        error: Tag set when the entry could not be stat'd.
    """

    path: Path
    relative_path: str
    is_directory: bool
    error: ErrorKind | None = None


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One row of the index table.

    Attributes:
        path: POSIX path relative to the indexed root.
        is_directory: True for directories.
        size: Size in bytes (metadata runs, files only).
        modified_time: Modification time in UTC (metadata runs).
        content_hash: Hex digest of the content (hashing runs, files only).
        error: Comma-separated error tags, None if every field succeeded.
    """

    path: str
    is_directory: bool
    size: int | None = None
    modified_time: datetime | None = None
    content_hash: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def error_kinds(self) -> tuple[ErrorKind, ...]:
        """Error tags parsed back into ErrorKind values."""
        if not self.error:
            return ()
        return tuple(ErrorKind(tag) for tag in self.error.split(","))


class IndexOptions(BaseModel):
    """Options fixed for the duration of one indexing run.

    The metadata and hashing switches determine the table schema; the
    remaining fields only tune how the work is done.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    metadata: bool = False
    hashing: bool = False
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    chunk_size: Annotated[int, Field(ge=4096, le=64 << 20)] = DEFAULT_CHUNK_SIZE
    workers: Annotated[int, Field(ge=1, le=64)] = DEFAULT_WORKERS

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, v: str) -> str:
        return validate_hash_algorithm(v)

    @classmethod
    def from_settings(
        cls,
        settings: IndexSettings,
        *,
        metadata: bool,
        hashing: bool,
        hash_algorithm: str | None = None,
        workers: int | None = None,
    ) -> "IndexOptions":
        """Build run options from persisted settings and per-run overrides.

        Args:
            settings: User defaults.
            metadata: Enable metadata extraction.
            hashing: Enable content hashing.
            hash_algorithm: Override for settings.hash_algorithm.
            workers: Override for settings.workers.

        Returns:
            Validated IndexOptions.
        """
        return cls(
            metadata=metadata,
            hashing=hashing,
            hash_algorithm=hash_algorithm or settings.hash_algorithm,
            chunk_size=settings.chunk_size,
            workers=workers or settings.workers,
        )
