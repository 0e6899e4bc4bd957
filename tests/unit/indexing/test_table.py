"""Unit tests for IndexTable."""

from datetime import UTC, datetime

import pandas as pd
import pytest
from folder_index.indexing.models import ErrorKind, FileRecord
from folder_index.indexing.table import IndexTable, index_columns


def _records() -> list[FileRecord]:
    return [
        FileRecord(
            path="a.txt",
            is_directory=False,
            size=4,
            modified_time=datetime(2024, 1, 1, tzinfo=UTC),
            content_hash="abc",
        ),
        FileRecord(path="sub", is_directory=True, modified_time=datetime(2024, 3, 1, tzinfo=UTC)),
        FileRecord(
            path="sub/b.txt",
            is_directory=False,
            error="metadata_unavailable,hash_unavailable",
        ),
    ]


class TestIndexColumns:
    """Tests for index_columns function."""

    def test_minimal(self) -> None:
        """Without switches only path, kind and error are present."""
        assert index_columns(metadata=False, hashing=False) == ("path", "is_directory", "error")

    def test_all_switches(self) -> None:
        """Optional columns appear in a fixed order before error."""
        assert index_columns(metadata=True, hashing=True) == (
            "path",
            "is_directory",
            "size",
            "modified_time",
            "content_hash",
            "error",
        )

    def test_hash_only(self) -> None:
        """Hashing alone adds only content_hash."""
        assert index_columns(metadata=False, hashing=True) == (
            "path",
            "is_directory",
            "content_hash",
            "error",
        )


class TestIndexTable:
    """Tests for IndexTable construction and access."""

    def test_from_records_schema(self) -> None:
        """Columns follow the switches, not the record contents."""
        table = IndexTable.from_records(_records(), metadata=False, hashing=True)

        assert table.columns == ("path", "is_directory", "content_hash", "error")
        assert table.has_hashes
        assert not table.has_metadata

    def test_records_round_trip(self) -> None:
        """Records read back equal the records put in."""
        table = IndexTable.from_records(_records(), metadata=True, hashing=True)

        assert list(table.records()) == _records()
        assert list(table) == _records()

    def test_dtypes(self) -> None:
        """Columns are normalized to nullable pandas dtypes."""
        frame = IndexTable.from_records(_records(), metadata=True, hashing=True).frame

        assert frame["size"].dtype == "UInt64"
        assert frame["is_directory"].dtype == bool
        assert str(frame["modified_time"].dtype) == "datetime64[ns, UTC]"
        assert frame["size"].isna().tolist() == [False, True, True]

    def test_frame_is_a_copy(self) -> None:
        """Mutating the returned frame does not change the table."""
        table = IndexTable.from_records(_records(), metadata=False, hashing=False)
        frame = table.frame
        frame.loc[0, "path"] = "changed"

        assert table.paths()[0] == "a.txt"

    def test_len_and_paths(self) -> None:
        """Length and paths reflect the rows in order."""
        table = IndexTable.from_records(_records(), metadata=False, hashing=False)

        assert len(table) == 3
        assert table.paths() == ["a.txt", "sub", "sub/b.txt"]

    def test_error_count(self) -> None:
        """Only rows with error tags are counted."""
        table = IndexTable.from_records(_records(), metadata=True, hashing=True)

        assert table.error_count() == 1

    def test_get(self) -> None:
        """Records can be looked up by path."""
        table = IndexTable.from_records(_records(), metadata=True, hashing=True)

        record = table.get("sub/b.txt")

        assert record is not None
        assert record.error_kinds == (
            ErrorKind.METADATA_UNAVAILABLE,
            ErrorKind.HASH_UNAVAILABLE,
        )
        assert table.get("missing") is None

    def test_modified_range(self) -> None:
        """The range spans the oldest and newest known mtimes."""
        table = IndexTable.from_records(_records(), metadata=True, hashing=False)

        assert table.modified_range() == (
            datetime(2024, 1, 1, tzinfo=UTC),
            datetime(2024, 3, 1, tzinfo=UTC),
        )

    def test_modified_range_without_metadata(self) -> None:
        """Tables without metadata have no range."""
        table = IndexTable.from_records(_records(), metadata=False, hashing=False)

        assert table.modified_range() is None

    def test_empty_table(self) -> None:
        """An empty table still carries its schema."""
        table = IndexTable.from_records([], metadata=True, hashing=True)

        assert len(table) == 0
        assert table.columns == index_columns(metadata=True, hashing=True)
        assert table.error_count() == 0
        assert table.modified_range() is None


class TestFromFrame:
    """Tests for IndexTable.from_frame validation."""

    def test_rejects_unknown_columns(self) -> None:
        """Frames with foreign columns are rejected."""
        with pytest.raises(ValueError, match="Invalid index columns"):
            IndexTable.from_frame(pd.DataFrame({"name": ["x"]}))

    def test_rejects_wrong_order(self) -> None:
        """Column order is part of the schema."""
        frame = pd.DataFrame({"is_directory": [False], "path": ["a"], "error": [None]})

        with pytest.raises(ValueError):
            IndexTable.from_frame(frame)

    def test_rejects_partial_metadata(self) -> None:
        """size without modified_time is not a valid schema."""
        frame = pd.DataFrame(
            {"path": ["a"], "is_directory": [False], "size": [1], "error": [None]}
        )

        with pytest.raises(ValueError):
            IndexTable.from_frame(frame)

    def test_normalizes_naive_index(self) -> None:
        """A non-default row index is reset."""
        frame = pd.DataFrame(
            {"path": ["a", "b"], "is_directory": [False, True], "error": [None, None]},
            index=[10, 20],
        )

        table = IndexTable.from_frame(frame)

        assert table.frame.index.tolist() == [0, 1]
        assert table.get("b") == FileRecord(path="b", is_directory=True)
