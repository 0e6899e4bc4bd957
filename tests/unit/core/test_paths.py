"""Unit tests for path management and validation."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from folder_index.core.paths import (
    APP_NAME,
    CACHE_FILENAME,
    InvalidPathError,
    NotADirectoryPathError,
    PathNotFoundError,
    check_valid_folder_path,
    ensure_config_dir,
    get_config_dir,
    get_settings_path,
    get_user_theme_path,
    resolve_output_dir,
)


class TestCheckValidFolderPath:
    """Tests for check_valid_folder_path function."""

    def test_accepts_existing_directory(self, tmp_path: Path) -> None:
        """An existing directory is returned unchanged."""
        assert check_valid_folder_path(tmp_path) == tmp_path

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        """String paths are converted to Path."""
        assert check_valid_folder_path(str(tmp_path)) == tmp_path

    def test_missing_path_raises_not_found(self, tmp_path: Path) -> None:
        """A missing path raises PathNotFoundError."""
        missing = tmp_path / "missing"

        with pytest.raises(PathNotFoundError, match="does not exist") as exc_info:
            check_valid_folder_path(missing)

        assert exc_info.value.path == missing

    def test_file_raises_not_a_directory(self, tmp_path: Path) -> None:
        """A regular file raises NotADirectoryPathError."""
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")

        with pytest.raises(NotADirectoryPathError, match="not a folder"):
            check_valid_folder_path(file_path)

    def test_errors_share_base_class(self, tmp_path: Path) -> None:
        """Both failures can be caught as InvalidPathError."""
        with pytest.raises(InvalidPathError):
            check_valid_folder_path(tmp_path / "missing")


class TestResolveOutputDir:
    """Tests for resolve_output_dir function."""

    def test_none_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """None resolves to the current working directory."""
        monkeypatch.chdir(tmp_path)

        assert resolve_output_dir(None) == Path.cwd()

    def test_given_directory_is_validated(self, tmp_path: Path) -> None:
        """A supplied directory must exist."""
        with pytest.raises(PathNotFoundError):
            resolve_output_dir(tmp_path / "nope")


class TestConfigPaths:
    """Tests for XDG configuration paths."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_settings_and_theme_paths(self, isolated_config_home: Path) -> None:
        """Settings and theme files live in the config directory."""
        assert get_settings_path() == isolated_config_home / APP_NAME / "config.toml"
        assert get_user_theme_path() == isolated_config_home / APP_NAME / "theme.toml"

    def test_ensure_config_dir_creates_directory(self, isolated_config_home: Path) -> None:
        """ensure_config_dir creates the directory."""
        result = ensure_config_dir()

        assert result.is_dir()
        assert result == isolated_config_home / APP_NAME

    def test_ensure_config_dir_permission_error(self) -> None:
        """ensure_config_dir converts PermissionError to RuntimeError."""
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_config_dir()


def test_cache_filename_is_fixed() -> None:
    """The cache filename is a constant Parquet name."""
    assert CACHE_FILENAME == "folder-index.parquet"
