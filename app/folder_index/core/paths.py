"""Path management and validation for folder-index.

This module provides the XDG-compliant configuration paths and the
directory validation used for the index root, the cache location and
the analysis output folder.

XDG defaults:
- Config: ~/.config/folder-index/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "folder-index"

# Fixed cache filename so repeated runs overwrite the previous cache
CACHE_FILENAME = "folder-index.parquet"


class InvalidPathError(Exception):
    """Base exception for paths that cannot be used as a directory."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class PathNotFoundError(InvalidPathError):
    """Raised when a path does not exist."""


class NotADirectoryPathError(InvalidPathError):
    """Raised when a path exists but is not a directory."""


def check_valid_folder_path(path: str | Path) -> Path:
    """Check that a path exists and is a directory.

    Args:
        path: Path to validate.

    Returns:
        The validated path.

    Raises:
        PathNotFoundError: If the path does not exist.
        NotADirectoryPathError: If the path exists but is not a directory.
    """
    candidate = Path(path)

    if not candidate.exists():
        msg = f"The specified path does not exist: {candidate}"
        raise PathNotFoundError(candidate, msg)

    if not candidate.is_dir():
        msg = f"The specified path is not a folder: {candidate}"
        raise NotADirectoryPathError(candidate, msg)

    return candidate


def resolve_output_dir(path: str | Path | None) -> Path:
    """Validate an optional output directory, defaulting to the working directory.

    Args:
        path: User supplied directory, or None.

    Returns:
        The validated directory, or the current working directory.

    Raises:
        InvalidPathError: If a supplied path is missing or not a directory.
    """
    if path is None:
        return Path.cwd()
    return check_valid_folder_path(path)


def get_config_dir() -> Path:
    """Configuration directory, honoring XDG_CONFIG_HOME when it is set."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / APP_NAME


def get_settings_path() -> Path:
    """Path of the user settings file (config.toml)."""
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Path of the optional color override file (theme.toml)."""
    return get_config_dir() / "theme.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
