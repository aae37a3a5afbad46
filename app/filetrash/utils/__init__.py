"""Utility modules for filetrash.

This module exports commonly used utility functions.
"""

from filetrash.utils.formatting import (
    console,
    create_result_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_result_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
