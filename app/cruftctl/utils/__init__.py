"""Utility modules for cruftctl.

This module exports commonly used utility functions.
"""

from cruftctl.utils.formatting import (
    configure_logging,
    console,
    create_targets_table,
    err_console,
    print_error,
    print_info,
    print_match,
    print_success,
    print_warning,
)

__all__ = [
    "configure_logging",
    "console",
    "create_targets_table",
    "err_console",
    "print_error",
    "print_info",
    "print_match",
    "print_success",
    "print_warning",
]
