"""CLI package for cruftctl.

This package contains the Typer application and all subcommands.
"""

from cruftctl.cli.main import app

__all__ = ["app"]
