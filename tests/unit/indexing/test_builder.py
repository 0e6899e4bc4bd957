"""Unit tests for TableBuilder."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from folder_index.indexing.builder import TableBuilder
from folder_index.indexing.models import (
    CollectedEntry,
    Err,
    ErrorKind,
    FileMetadata,
    FileRecord,
    IndexOptions,
    Ok,
)

MTIME = datetime(2024, 6, 1, tzinfo=UTC)


def _file(name: str, error: ErrorKind | None = None) -> CollectedEntry:
    return CollectedEntry(Path("/root") / name, name, False, error)


def _dir(name: str) -> CollectedEntry:
    return CollectedEntry(Path("/root") / name, name, True)


class TestTableBuilder:
    """Tests for row assembly."""

    def test_plain_row(self) -> None:
        """Without switches a row holds only path and kind."""
        builder = TableBuilder(IndexOptions())

        record = builder.append(_file("a.txt"))

        assert record == FileRecord(path="a.txt", is_directory=False)
        assert len(builder) == 1

    def test_metadata_and_hash(self) -> None:
        """Successful results fill their columns."""
        builder = TableBuilder(IndexOptions(metadata=True, hashing=True))

        record = builder.append(
            _file("a.txt"), Ok(FileMetadata(size=4, modified_time=MTIME)), Ok("abc")
        )

        assert record == FileRecord(
            path="a.txt",
            is_directory=False,
            size=4,
            modified_time=MTIME,
            content_hash="abc",
        )

    def test_directory_has_no_size_or_hash(self) -> None:
        """Directories never carry size or content hash."""
        builder = TableBuilder(IndexOptions(metadata=True, hashing=True))

        record = builder.append(
            _dir("sub"), Ok(FileMetadata(size=4096, modified_time=MTIME)), Ok("ignored")
        )

        assert record.size is None
        assert record.content_hash is None
        assert record.modified_time == MTIME
        assert record.error is None

    def test_results_ignored_when_switch_off(self) -> None:
        """Results for disabled switches do not leak into the row."""
        builder = TableBuilder(IndexOptions())

        record = builder.append(
            _file("a.txt"),
            Err(ErrorKind.METADATA_UNAVAILABLE),
            Err(ErrorKind.HASH_UNAVAILABLE),
        )

        assert record.error is None
        assert record.size is None

    def test_errors_joined_in_order(self) -> None:
        """Several failures on one row are joined with commas."""
        builder = TableBuilder(IndexOptions(metadata=True, hashing=True))

        record = builder.append(
            _file("a.txt", ErrorKind.ENTRY_UNREADABLE),
            Err(ErrorKind.METADATA_UNAVAILABLE),
            Err(ErrorKind.HASH_UNAVAILABLE),
        )

        assert record.error == "entry_unreadable,metadata_unavailable,hash_unavailable"
        assert record.size is None
        assert record.content_hash is None

    def test_hash_failure_keeps_metadata(self) -> None:
        """A failed hash does not discard metadata."""
        builder = TableBuilder(IndexOptions(metadata=True, hashing=True))

        record = builder.append(
            _file("locked"),
            Ok(FileMetadata(size=10, modified_time=MTIME)),
            Err(ErrorKind.HASH_UNAVAILABLE, "denied"),
        )

        assert record.size == 10
        assert record.content_hash is None
        assert record.error == "hash_unavailable"


class TestFinalize:
    """Tests for TableBuilder.finalize."""

    def test_append_order(self) -> None:
        """Rows without sequence numbers keep append order."""
        builder = TableBuilder(IndexOptions())
        for name in ("b", "a", "c"):
            builder.append(_file(name))

        assert builder.finalize().paths() == ["b", "a", "c"]

    def test_sequence_order(self) -> None:
        """Rows appended out of order are sorted by sequence."""
        builder = TableBuilder(IndexOptions(hashing=True))
        builder.append(_file("third"), digest=Ok("3"), sequence=2)
        builder.append(_file("first"), digest=Ok("1"), sequence=0)
        builder.append(_file("second"), digest=Ok("2"), sequence=1)

        table = builder.finalize()

        assert table.paths() == ["first", "second", "third"]
        assert [r.content_hash for r in table.records()] == ["1", "2", "3"]

    def test_schema_follows_options(self) -> None:
        """The finished table has the columns selected by the options."""
        builder = TableBuilder(IndexOptions(metadata=True))

        table = builder.finalize()

        assert table.columns == ("path", "is_directory", "size", "modified_time", "error")

    def test_append_after_finalize(self) -> None:
        """The builder rejects rows once finalized."""
        builder = TableBuilder(IndexOptions())
        builder.finalize()

        with pytest.raises(RuntimeError, match="finalized"):
            builder.append(_file("late"))
