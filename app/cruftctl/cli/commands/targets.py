"""Targets command implementation.

Lists the targets a scan would look for.
"""

from pathlib import Path
from typing import Annotated

import typer

from cruftctl.core.config import ConfigError, load_config, resolve_targets
from cruftctl.utils.formatting import console, create_targets_table, print_error, print_info


def list_targets(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Use an alternative config file."),
    ] = None,
) -> None:
    """Show the built-in and configured targets, in matching order."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    targets = resolve_targets(config)
    if not targets:
        print_info("No targets configured.")
        return

    table = create_targets_table()
    for target in targets:
        table.add_row(
            target.kind,
            target.pattern,
            "[success]yes[/]" if target.descend else "[muted]no[/]",
            target.description or "-",
        )
    console.print(table)
