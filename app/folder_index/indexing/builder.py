"""Assembly of index rows.

TableBuilder is the single writer of an index: producers hand it one
entry at a time together with the optional metadata and hash results,
and it turns each into exactly one FileRecord.
"""

from folder_index.indexing.models import (
    CollectedEntry,
    Err,
    ErrorKind,
    FileMetadata,
    FileRecord,
    IndexOptions,
    Ok,
)
from folder_index.indexing.table import IndexTable


class TableBuilder:
    """Accumulates FileRecord rows under a schema fixed at construction.

    Rows may be appended out of order when a sequence number is given
    (parallel hashing completes in any order); :meth:`finalize` restores
    sequence order. Appending after finalization is an error.

    Args:
        options: Run options; only the metadata and hashing switches matter.
    """

    def __init__(self, options: IndexOptions) -> None:
        self._metadata = options.metadata
        self._hashing = options.hashing
        self._rows: list[tuple[int, FileRecord]] = []
        self._finalized = False

    def __len__(self) -> int:
        return len(self._rows)

    def append(
        self,
        entry: CollectedEntry,
        metadata: Ok[FileMetadata] | Err | None = None,
        digest: Ok[str] | Err | None = None,
        *,
        sequence: int | None = None,
    ) -> FileRecord:
        """Build and store the row for one entry.

        Results for switches that are off are ignored, and a hash result
        given for a directory is ignored, so the schema never varies per row.

        Args:
            entry: Entry produced by traversal.
            metadata: Metadata result, or None if not attempted.
            digest: Hash result, or None if not attempted.
            sequence: Traversal position; defaults to append order.

        Returns:
            The stored record.

        Raises:
            RuntimeError: If the builder has already been finalized.
        """
        if self._finalized:
            msg = "Cannot append to a finalized table"
            raise RuntimeError(msg)

        errors: list[ErrorKind] = []
        if entry.error is not None:
            errors.append(entry.error)

        size: int | None = None
        modified_time = None
        if self._metadata:
            if isinstance(metadata, Ok):
                size = None if entry.is_directory else metadata.value.size
                modified_time = metadata.value.modified_time
            elif isinstance(metadata, Err):
                errors.append(metadata.kind)

        content_hash: str | None = None
        if self._hashing and not entry.is_directory:
            if isinstance(digest, Ok):
                content_hash = digest.value
            elif isinstance(digest, Err):
                errors.append(digest.kind)

        record = FileRecord(
            path=entry.relative_path,
            is_directory=entry.is_directory,
            size=size,
            modified_time=modified_time,
            content_hash=content_hash,
            error=",".join(kind.value for kind in dict.fromkeys(errors)) or None,
        )
        position = len(self._rows) if sequence is None else sequence
        self._rows.append((position, record))
        return record

    def finalize(self) -> IndexTable:
        """Close the builder and return the finished table.

        Returns:
            IndexTable with rows in sequence order.
        """
        self._finalized = True
        self._rows.sort(key=lambda item: item[0])
        return IndexTable.from_records(
            [record for _, record in self._rows],
            metadata=self._metadata,
            hashing=self._hashing,
        )
