"""CLI commands for folder-index.

This package contains all subcommand implementations.
"""

from folder_index.cli.commands import analyze, config, index, show

__all__ = ["analyze", "config", "index", "show"]
