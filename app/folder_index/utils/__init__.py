"""Utility modules for folder-index.

This module exports commonly used utility functions.
"""

from folder_index.utils.formatting import (
    console,
    create_records_table,
    err_console,
    format_record_row,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from folder_index.utils.log import configure_logging

__all__ = [
    "configure_logging",
    "console",
    "create_records_table",
    "err_console",
    "format_record_row",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
