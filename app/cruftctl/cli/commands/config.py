"""Config file management commands."""

from pathlib import Path
from typing import Annotated

import typer

from cruftctl.core.config import ConfigError, CruftConfig, save_config
from cruftctl.core.paths import get_config_path
from cruftctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the cruftctl config file.",
    no_args_is_help=True,
)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this path instead of the default."),
    ] = None,
) -> None:
    """Write a default config file."""
    path = output or get_config_path()

    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(CruftConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def path() -> None:
    """Print the location of the config file."""
    console.print(str(get_config_path()), soft_wrap=True)
