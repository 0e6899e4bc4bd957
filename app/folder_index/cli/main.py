"""Main CLI application entry point.

Defines the Typer application, the global logging options and the
command registry.
"""

from typing import Annotated

import typer

from folder_index import __version__
from folder_index.cli.commands import analyze, config, index, show
from folder_index.utils.log import configure_logging

app = typer.Typer(
    name="folder-index",
    help="Recursively index a folder into a Parquet cache.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"folder-index version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug messages to stderr."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Log only warnings and errors."),
    ] = False,
) -> None:
    """folder-index - Catalog a directory tree with sizes, times and hashes.

    Index a folder into a Parquet cache, inspect the cache, and write
    CSV reports from it.
    """
    configure_logging(verbose=verbose, quiet=quiet)


app.command(name="index")(index.index_folder)
app.command(name="show")(show.show_cache)
app.command(name="analyze")(analyze.analyze_cache)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
