"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from cruftctl import __version__
from cruftctl.cli.commands import config, scan, targets
from cruftctl.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="cruftctl",
    help="Find disposable build artifacts (dependency folders, caches, debug logs).",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cruftctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """cruftctl - find disposable build artifacts in a directory tree.

    Looks for dependency folders, build caches and debug logs so they
    can be reviewed or removed.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="targets")(targets.list_targets)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
