"""Parquet cache for finished index tables.

The cache lives at a fixed filename inside the configured directory, so
every run overwrites the previous one. Writes go to a temporary file in
the same directory and are moved into place with os.replace(), so readers
never observe a truncated cache.
"""

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

import pandas as pd
import pyarrow as pa

from folder_index.core.paths import CACHE_FILENAME
from folder_index.indexing.table import IndexTable

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


class CacheError(Exception):
    """Base exception for cache errors."""


class CacheWriteFailure(CacheError):
    """Raised when the cache file cannot be written."""


class CacheReadFailure(CacheError):
    """Raised when the cache file is missing or cannot be decoded."""


class CacheStore:
    """Reads and writes the index cache in one directory.

    Args:
        cache_dir: Directory holding the cache file.
        filename: Cache filename inside cache_dir.
    """

    def __init__(self, cache_dir: Path, filename: str = CACHE_FILENAME) -> None:
        self._cache_dir = cache_dir
        self._filename = filename

    @property
    def path(self) -> Path:
        """Full path of the cache file."""
        return self._cache_dir / self._filename

    def save(self, table: IndexTable) -> Path:
        """Serialize a table to the cache file.

        Args:
            table: Finished index table. It is not modified.

        Returns:
            Path of the written cache file.

        Raises:
            CacheWriteFailure: If serialization or the final rename fails.
                The previous cache, if any, is left untouched.
        """
        cache_path = self.path
        logger.info("Saving cache: %s", cache_path)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                dir=self._cache_dir,
                prefix=".folder-index-",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
            table.frame.to_parquet(tmp_path, engine="pyarrow", index=False)
            # NamedTemporaryFile creates 0600; give the cache the usual umask mode
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, cache_path)
        except (OSError, ValueError, pa.ArrowException) as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise CacheWriteFailure(f"Failed to write cache {cache_path}: {e}") from e

        return cache_path

    def load(self) -> IndexTable:
        """Read the cache file of this store.

        Returns:
            The cached IndexTable.

        Raises:
            CacheReadFailure: If the file is missing or invalid.
        """
        return load_index_cache(self.path)


def load_index_cache(path: Path) -> IndexTable:
    """Read a cache file written by :meth:`CacheStore.save`.

    Args:
        path: Path to a Parquet cache file.

    Returns:
        IndexTable with the same columns and values as the saved table.

    Raises:
        CacheReadFailure: If the file is missing, unreadable, or does not
            hold an index table.
    """
    if not path.is_file():
        raise CacheReadFailure(f"Cache file not found: {path}")

    try:
        frame = pd.read_parquet(path, engine="pyarrow")
    except (OSError, ValueError, pa.ArrowException) as e:
        raise CacheReadFailure(f"Failed to read cache {path}: {e}") from e

    try:
        return IndexTable.from_frame(frame)
    except (ValueError, TypeError) as e:
        raise CacheReadFailure(f"Invalid cache {path}: {e}") from e
