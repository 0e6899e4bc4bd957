"""CLI package for folder-index.

This package contains the Typer application and all subcommands.
"""

from folder_index.cli.main import app

__all__ = ["app"]
