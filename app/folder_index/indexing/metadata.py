"""Filesystem metadata extraction."""

import logging
import stat
from datetime import UTC, datetime
from pathlib import Path

from folder_index.indexing.models import Err, ErrorKind, FileMetadata, Ok

logger = logging.getLogger(__name__)


def extract_metadata(path: Path) -> Ok[FileMetadata] | Err:
    """Read size and modification time for a path.

    Symlinks are followed so the values describe the content that would
    be hashed. Directories report no size.

    Args:
        path: File or directory to inspect.

    Returns:
        Ok with FileMetadata, or Err(METADATA_UNAVAILABLE) when the entry
        cannot be stat'd (permission denied, vanished since enumeration).
    """
    try:
        st = path.stat()
    except OSError as e:
        logger.debug("Metadata unavailable for %s: %s", path, e)
        return Err(ErrorKind.METADATA_UNAVAILABLE, str(e))

    size = None if stat.S_ISDIR(st.st_mode) else st.st_size
    mtime = datetime.fromtimestamp(st.st_mtime, tz=UTC)
    return Ok(FileMetadata(size=size, modified_time=mtime))
