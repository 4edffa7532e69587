"""Utility modules for scratchctl.

This module exports commonly used utility functions.
"""

from scratchctl.utils.formatting import (
    console,
    create_path_table,
    err_console,
    format_count,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_path_table",
    "err_console",
    "format_count",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
