"""Settings commands.

Provides commands to display and initialize the user settings file.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from folder_index.core.paths import ensure_config_dir, get_settings_path
from folder_index.core.settings import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_WORKERS,
    IndexSettings,
    SettingsError,
    SettingsNotFoundError,
    load_settings,
    save_settings,
)
from folder_index.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize indexing settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective indexing settings."""
    path = get_settings_path()
    try:
        settings = load_settings(path)
        source = str(path)
    except SettingsNotFoundError:
        settings = IndexSettings()
        source = "defaults (no settings file)"
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(title="Settings", header_style="bold_header", border_style="border")
    table.add_column("Key", style="bold_header")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))

    console.print(table)
    console.print(f"[dim]Source: {source}[/dim]")


@app.command()
def init(
    hash_algorithm: Annotated[
        str,
        typer.Option("--hash-algorithm", help="hashlib algorithm used for --hash."),
    ] = DEFAULT_HASH_ALGORITHM,
    chunk_size: Annotated[
        int,
        typer.Option("--chunk-size", help="Bytes read per chunk while hashing."),
    ] = DEFAULT_CHUNK_SIZE,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", help="Default number of hashing threads."),
    ] = DEFAULT_WORKERS,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the given values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings already exist at {path} (use --force to overwrite).")
        raise typer.Exit(code=1)

    try:
        settings = IndexSettings(
            hash_algorithm=hash_algorithm,
            chunk_size=chunk_size,
            workers=workers,
        )
    except ValidationError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    try:
        ensure_config_dir()
        saved = save_settings(settings, path)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
