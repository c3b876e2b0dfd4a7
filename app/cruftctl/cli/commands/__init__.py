"""CLI commands for cruftctl.

This package contains all subcommand implementations.
"""

from cruftctl.cli.commands import config, scan, targets

__all__ = ["config", "scan", "targets"]
