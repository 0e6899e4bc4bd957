"""Recursive directory traversal.

Walks a validated root depth-first in name order and yields one
CollectedEntry per filesystem entry below it. Directories that cannot be
listed are reported and skipped; they never abort the walk.
"""

import os
import stat
from collections.abc import Iterator
from pathlib import Path

from folder_index.indexing.models import CollectedEntry, ErrorKind
from folder_index.indexing.reporter import LoggingReporter, Reporter

# (st_dev, st_ino) pair identifying a directory on disk
DirKey = tuple[int, int]


def _storable_name(name: str) -> str:
    """Escape bytes that are not valid UTF-8 in a filesystem name.

    os.scandir decodes such bytes to lone surrogates, which pandas string
    columns and Parquet reject. They are kept as backslash escapes, so a
    0xff byte becomes the text "\\xff". Valid names are returned unchanged.
    """
    return os.fsencode(name).decode("utf-8", "backslashreplace")


class EntryCollector:
    """Produces the entries of a directory tree as a lazy sequence.

    Traversal is depth-first, pre-order, with siblings sorted by name so a
    static tree always yields the same sequence. Symlinked directories are
    recorded as directories but never descended into, and every descended
    directory is remembered by device and inode, so trees containing
    symlink cycles or repeated bind mounts terminate without duplicate rows.

    Args:
        root: Directory to index. Must already be validated.
        reporter: Receives traversal warnings. Defaults to logging.
    """

    def __init__(self, root: Path, reporter: Reporter | None = None) -> None:
        self._root = root
        self._reporter = reporter or LoggingReporter()
        self._consumed = False

    @property
    def root(self) -> Path:
        """Root directory of the traversal."""
        return self._root

    def collect(self) -> Iterator[CollectedEntry]:
        """Return the entry sequence.

        The sequence can only be produced once per collector.

        Returns:
            Iterator over CollectedEntry values in traversal order.

        Raises:
            RuntimeError: If called a second time.
        """
        if self._consumed:
            msg = "EntryCollector can only be iterated once"
            raise RuntimeError(msg)
        self._consumed = True
        return self._walk()

    def _walk(self) -> Iterator[CollectedEntry]:
        visited: set[DirKey] = set()
        root_key = self._dir_key(self._root)
        if root_key is not None:
            visited.add(root_key)

        stack: list[Iterator[os.DirEntry[str]]] = []
        listing = self._list_dir(self._root)
        if listing is not None:
            stack.append(iter(listing))

        while stack:
            dir_entry = next(stack[-1], None)
            if dir_entry is None:
                stack.pop()
                continue

            entry, descend = self._classify(dir_entry, visited)
            yield entry

            if descend:
                listing = self._list_dir(entry.path)
                if listing is not None:
                    stack.append(iter(listing))

    def _list_dir(self, directory: Path) -> list[os.DirEntry[str]] | None:
        """List a directory sorted by name, or report and return None."""
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._reporter.warning(f"Cannot read directory {directory}: {e.strerror or e}")
            return None

    def _classify(
        self, dir_entry: os.DirEntry[str], visited: set[DirKey]
    ) -> tuple[CollectedEntry, bool]:
        """Build the entry for a directory item and decide whether to descend.

        Args:
            dir_entry: Item returned by os.scandir.
            visited: Keys of directories already descended into.

        Returns:
            Tuple of (entry, descend).
        """
        path = Path(dir_entry.path)
        relative = _storable_name(path.relative_to(self._root).as_posix())

        try:
            # Follows symlinks; fails for dangling links
            mode = dir_entry.stat().st_mode
            is_link = dir_entry.is_symlink()
        except OSError as e:
            self._reporter.warning(f"Cannot stat {path}: {e.strerror or e}")
            return CollectedEntry(path, relative, False, ErrorKind.ENTRY_UNREADABLE), False

        if not stat.S_ISDIR(mode):
            return CollectedEntry(path, relative, False), False

        entry = CollectedEntry(path, relative, True)
        if is_link:
            return entry, False

        key = self._dir_key(path)
        if key is not None:
            if key in visited:
                return entry, False
            visited.add(key)
        return entry, True

    @staticmethod
    def _dir_key(path: Path) -> DirKey | None:
        """Identify a directory by device and inode.

        Returns None where the platform reports no inode numbers.
        """
        try:
            st = os.stat(path)
        except OSError:
            return None
        if st.st_ino == 0:
            return None
        return (st.st_dev, st.st_ino)
