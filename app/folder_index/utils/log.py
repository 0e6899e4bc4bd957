"""Logging setup for the command line.

Library modules only create loggers; handlers are installed once here,
routing records through Rich to stderr.
"""

import logging

from rich.logging import RichHandler

from folder_index.utils.formatting import err_console

_HANDLER_NAME = "folder-index-rich"


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Install the Rich log handler on the root logger.

    Calling this again replaces the previously installed handler, so
    repeated CLI invocations in one process do not duplicate output.

    Args:
        verbose: Log DEBUG and above.
        quiet: Log WARNING and above. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
