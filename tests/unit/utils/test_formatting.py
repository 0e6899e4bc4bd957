"""Unit tests for formatting and logging utilities."""

import logging
from datetime import UTC, datetime

import pytest
from folder_index.indexing.models import FileRecord
from folder_index.utils.formatting import create_records_table, format_record_row, format_size
from folder_index.utils.log import configure_logging
from rich.logging import RichHandler


class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "-"),
            (0, "0 B"),
            (512, "512 B"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024**4, "3.0 TB"),
        ],
    )
    def test_format_size(self, size: int | None, expected: str) -> None:
        """Sizes are scaled to the largest fitting unit."""
        assert format_size(size) == expected


class TestRecordRows:
    """Tests for record table helpers."""

    def test_columns_follow_switches(self) -> None:
        """Optional columns are added per switch."""
        minimal = create_records_table("t", metadata=False, hashing=False)
        full = create_records_table("t", metadata=True, hashing=True)

        assert [c.header for c in minimal.columns] == ["", "Path", "Error"]
        assert [c.header for c in full.columns] == ["", "Path", "Size", "Modified", "Hash", "Error"]

    def test_file_row(self) -> None:
        """File rows show size, mtime and hash."""
        record = FileRecord(
            path="a.txt",
            is_directory=False,
            size=4,
            modified_time=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
            content_hash="abc",
        )

        row = format_record_row(record, metadata=True, hashing=True)

        assert row[1] == "[file]a.txt[/]"
        assert row[2:] == ("4 B", "2024-01-02 03:04:05", "abc", "")

    def test_directory_row(self) -> None:
        """Directory paths get a trailing slash and no size."""
        record = FileRecord(path="sub", is_directory=True)

        row = format_record_row(record, metadata=True, hashing=False)

        assert row[1] == "[directory]sub/[/]"
        assert row[2:] == ("-", "-", "")

    def test_markup_is_escaped(self) -> None:
        """Brackets in file names are not treated as markup."""
        record = FileRecord(path="[bold]x", is_directory=False, error="hash_unavailable")

        row = format_record_row(record, metadata=False, hashing=False)

        assert row[1] == "[file]\\[bold]x[/]"
        assert row[-1] == "hash_unavailable"


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def _rich_handlers(self) -> list[logging.Handler]:
        return [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]

    def test_levels(self) -> None:
        """Verbose and quiet select the root level."""
        configure_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

        configure_logging(quiet=True)
        assert logging.getLogger().level == logging.WARNING

        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_handler_not_duplicated(self) -> None:
        """Repeated calls keep a single Rich handler."""
        configure_logging()
        configure_logging()

        assert len(self._rich_handlers()) == 1
