"""Utility modules for rbhgc.

This module exports commonly used utility functions.
"""

from rbhgc.utils.formatting import (
    console,
    err_console,
    print_error,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_success",
    "print_warning",
]
