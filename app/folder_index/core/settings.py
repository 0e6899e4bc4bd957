"""User settings for folder-index.

Settings provide the defaults for tuning knobs that rarely change between
runs (hash algorithm, read chunk size, worker count). Command line flags
always take precedence.

Settings are stored in ~/.config/folder-index/config.toml
"""

import hashlib
import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from folder_index.core.paths import get_settings_path

logger = logging.getLogger(__name__)

DEFAULT_HASH_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 1 << 20
DEFAULT_WORKERS = 1


def validate_hash_algorithm(name: str) -> str:
    """Normalize a hash algorithm name and check hashlib supports it.

    Args:
        name: Algorithm name such as "sha256" or "BLAKE2b".

    Returns:
        Lower-cased algorithm name.

    Raises:
        ValueError: If hashlib does not provide the algorithm.
    """
    normalized = name.strip().lower()
    if normalized not in hashlib.algorithms_available:
        msg = f"Unsupported hash algorithm: {name!r}"
        raise ValueError(msg)
    if normalized.startswith("shake_"):
        msg = f"Variable-length digest {name!r} is not supported"
        raise ValueError(msg)
    return normalized


class IndexSettings(BaseModel):
    """Persistent defaults for indexing runs.

    Attributes:
        hash_algorithm: hashlib algorithm used when hashing is enabled.
        chunk_size: Bytes read per chunk while hashing.
        workers: Number of hashing threads (1 = sequential).
    """

    model_config = ConfigDict(extra="forbid")

    hash_algorithm: Annotated[
        str,
        Field(description="hashlib algorithm name"),
    ] = DEFAULT_HASH_ALGORITHM
    chunk_size: Annotated[
        int,
        Field(ge=4096, le=64 << 20, description="Read chunk size in bytes"),
    ] = DEFAULT_CHUNK_SIZE
    workers: Annotated[
        int,
        Field(ge=1, le=64, description="Hashing threads (1-64)"),
    ] = DEFAULT_WORKERS

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, v: str) -> str:
        return validate_hash_algorithm(v)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> IndexSettings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated IndexSettings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return IndexSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> IndexSettings:
    """Load settings, falling back to defaults when no file exists.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Loaded settings, or IndexSettings() if the file is missing.

    Raises:
        SettingsError: If the file exists but is invalid.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file, using defaults")
        return IndexSettings()


def save_settings(settings: IndexSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SettingsError(f"Failed to create settings directory: {e}") from e

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(tmp_path, settings_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
