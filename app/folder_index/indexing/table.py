"""Columnar index table.

IndexTable wraps a pandas DataFrame whose column set is fixed by the run
options. Optional columns are either present for every row or absent from
the whole table.
"""

from collections.abc import Iterator
from datetime import datetime
from typing import Any

import pandas as pd

from folder_index.indexing.models import FileRecord

PATH = "path"
IS_DIRECTORY = "is_directory"
SIZE = "size"
MODIFIED_TIME = "modified_time"
CONTENT_HASH = "content_hash"
ERROR = "error"

_DTYPES: dict[str, str] = {
    PATH: "string",
    IS_DIRECTORY: "bool",
    SIZE: "UInt64",
    MODIFIED_TIME: "datetime64[ns, UTC]",
    CONTENT_HASH: "string",
    ERROR: "string",
}


def index_columns(*, metadata: bool, hashing: bool) -> tuple[str, ...]:
    """Column names, in order, for a run with the given switches.

    Args:
        metadata: Metadata extraction enabled.
        hashing: Content hashing enabled.

    Returns:
        Ordered column names.
    """
    columns = [PATH, IS_DIRECTORY]
    if metadata:
        columns.extend((SIZE, MODIFIED_TIME))
    if hashing:
        columns.append(CONTENT_HASH)
    columns.append(ERROR)
    return tuple(columns)


def _scalar(value: Any) -> Any:
    """Convert a pandas cell to a plain Python value (None for missing)."""
    if value is None or value is pd.NA or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, float) and pd.isna(value):
        return None
    if hasattr(value, "item"):
        return value.item()
    return value


class IndexTable:
    """Immutable, finished index of one run.

    Use :meth:`from_records` or :meth:`from_frame` to construct; the
    wrapped frame is normalized to canonical dtypes and never handed out
    without copying.
    """

    def __init__(self, frame: pd.DataFrame) -> None:
        self._frame = frame

    @classmethod
    def from_records(
        cls,
        records: list[FileRecord],
        *,
        metadata: bool,
        hashing: bool,
    ) -> "IndexTable":
        """Build a table from records with the schema of the given switches.

        Args:
            records: Rows in the order they should appear.
            metadata: Include size and modified_time columns.
            hashing: Include the content_hash column.

        Returns:
            New IndexTable.
        """
        columns = index_columns(metadata=metadata, hashing=hashing)
        data: dict[str, list[Any]] = {
            name: [getattr(record, name) for record in records] for name in columns
        }
        frame = pd.DataFrame(
            {name: pd.Series(values, dtype="object") for name, values in data.items()},
            columns=list(columns),
        )
        return cls.from_frame(frame)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "IndexTable":
        """Validate a DataFrame against the index schema and wrap it.

        Args:
            frame: DataFrame with index columns, e.g. read from a cache.

        Returns:
            New IndexTable with canonical dtypes.

        Raises:
            ValueError: If the columns do not form a valid index schema.
        """
        names = tuple(frame.columns)
        expected = index_columns(metadata=SIZE in names, hashing=CONTENT_HASH in names)
        if names != expected:
            msg = f"Invalid index columns {list(names)}, expected {list(expected)}"
            raise ValueError(msg)

        normalized = frame.reset_index(drop=True)
        for name in names:
            if name == MODIFIED_TIME:
                normalized[name] = pd.to_datetime(normalized[name], utc=True).astype(
                    _DTYPES[name]
                )
            else:
                normalized[name] = normalized[name].astype(_DTYPES[name])
        return cls(normalized)

    @property
    def frame(self) -> pd.DataFrame:
        """Copy of the underlying DataFrame."""
        return self._frame.copy()

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names in order."""
        return tuple(self._frame.columns)

    @property
    def has_metadata(self) -> bool:
        """True if size and modified_time columns are present."""
        return SIZE in self._frame.columns

    @property
    def has_hashes(self) -> bool:
        """True if the content_hash column is present."""
        return CONTENT_HASH in self._frame.columns

    def __len__(self) -> int:
        return len(self._frame)

    def __iter__(self) -> Iterator[FileRecord]:
        return self.records()

    def records(self) -> Iterator[FileRecord]:
        """Iterate rows as FileRecord values."""
        columns = self.columns
        for row in self._frame.itertuples(index=False, name=None):
            values = {name: _scalar(value) for name, value in zip(columns, row, strict=True)}
            yield FileRecord(**values)

    def error_count(self) -> int:
        """Number of rows carrying at least one error tag."""
        return int(self._frame[ERROR].notna().sum())

    def paths(self) -> list[str]:
        """All paths in table order."""
        return [str(p) for p in self._frame[PATH]]

    def get(self, path: str) -> FileRecord | None:
        """Look up a single record by its relative path."""
        matches = self._frame.index[self._frame[PATH] == path]
        if len(matches) == 0:
            return None
        row = self._frame.loc[matches[0]]
        return FileRecord(**{name: _scalar(row[name]) for name in self.columns})

    def modified_range(self) -> tuple[datetime, datetime] | None:
        """Oldest and newest modification time, if metadata is present."""
        if not self.has_metadata:
            return None
        times = self._frame[MODIFIED_TIME].dropna()
        if times.empty:
            return None
        return times.min().to_pydatetime(), times.max().to_pydatetime()
