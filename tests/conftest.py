"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


class RecordingReporter:
    """Reporter that keeps messages in memory for assertions."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.warnings: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def reporter() -> RecordingReporter:
    """Reporter capturing engine messages."""
    return RecordingReporter()


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Small tree: a.txt (4 bytes) and sub/b.txt (empty)."""
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.txt").write_bytes(b"abcd")
    (root / "sub").mkdir()
    (root / "sub" / "b.txt").write_bytes(b"")
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """Deeper tree with several files per directory and a duplicate file."""
    root = tmp_path / "nested"
    (root / "docs" / "drafts").mkdir(parents=True)
    (root / "music").mkdir()
    (root / "empty").mkdir()
    (root / "readme.md").write_text("# readme\n")
    (root / "docs" / "report.txt").write_text("quarterly numbers\n")
    (root / "docs" / "drafts" / "report-copy.txt").write_text("quarterly numbers\n")
    (root / "docs" / "drafts" / "notes.txt").write_text("todo\n")
    (root / "music" / "song.mp3").write_bytes(b"\x00" * 2048)
    return root
