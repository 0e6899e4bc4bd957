"""Streaming content hashing."""

import hashlib
import logging
import stat
from pathlib import Path

from folder_index.core.settings import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_HASH_ALGORITHM,
    validate_hash_algorithm,
)
from folder_index.indexing.models import Err, ErrorKind, Ok

logger = logging.getLogger(__name__)


class ContentHasher:
    """Computes file digests with bounded memory.

    Files are read in fixed-size chunks folded into a running hashlib
    state, so memory use does not depend on file size. A read that fails
    partway produces an error, never the digest of a truncated prefix.

    Args:
        algorithm: Any fixed-length hashlib algorithm name.
        chunk_size: Bytes per read.
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            msg = f"Chunk size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self._algorithm = validate_hash_algorithm(algorithm)
        self._chunk_size = chunk_size

    @property
    def algorithm(self) -> str:
        """Normalized hashlib algorithm name."""
        return self._algorithm

    def hash_file(self, path: Path) -> Ok[str] | Err:
        """Hash the full contents of a file.

        Only regular files are read. FIFOs, sockets and device nodes are
        never opened, since opening a pipe without a writer blocks.

        Args:
            path: File to read.

        Returns:
            Ok with the hex digest, or Err(HASH_UNAVAILABLE) if the path is
            not a regular file, cannot be opened, or a read fails.
        """
        state = hashlib.new(self._algorithm)
        try:
            if not stat.S_ISREG(path.stat().st_mode):
                logger.debug("Not hashing %s: not a regular file", path)
                return Err(ErrorKind.HASH_UNAVAILABLE, "not a regular file")
            with path.open("rb") as f:
                for chunk in iter(lambda: f.read(self._chunk_size), b""):
                    state.update(chunk)
        except OSError as e:
            logger.debug("Hash unavailable for %s: %s", path, e)
            return Err(ErrorKind.HASH_UNAVAILABLE, str(e))
        return Ok(state.hexdigest())
