"""Scan command implementation.

Walks a directory tree and lists the artifacts matched by the active
targets.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from cruftctl.core.config import ConfigError, CruftConfig, load_config, resolve_targets
from cruftctl.core.targets import Match, Target, register_targets
from cruftctl.scanner.errors import ListingError
from cruftctl.scanner.models import EntryKind
from cruftctl.scanner.walker import create_scanner
from cruftctl.utils.formatting import (
    console,
    print_error,
    print_match,
    print_success,
    print_warning,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


def scan(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Where to start the search from."),
    ],
    dirs: Annotated[
        list[str] | None,
        typer.Option("--dir", help="Extra directory pattern to look for (repeatable)."),
    ] = None,
    files: Annotated[
        list[str] | None,
        typer.Option("--file", help="Extra file pattern to look for (repeatable)."),
    ] = None,
    descend: Annotated[
        bool,
        typer.Option("--descend", help="Keep scanning inside directories matched by --dir."),
    ] = False,
    no_defaults: Annotated[
        bool,
        typer.Option("--no-defaults", help="Do not look for the built-in targets."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Use an alternative config file."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: text or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """Find disposable artifacts below PATH.

    Matched directories are not scanned further unless --descend is given.

    Examples:
        cruftctl scan ~/code                          # Built-in targets
        cruftctl scan . --dir target --dir build      # Also Rust/Gradle output
        cruftctl scan . --file '.*\\.log' --no-defaults
        cruftctl scan . --format json
    """
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    config = _load_config_or_exit(config_path)
    if no_defaults:
        config = config.model_copy(update={"use_defaults": False})

    extra = _build_extra_targets(dirs or [], files or [], descend)
    targets = resolve_targets(config, extra)
    if not targets:
        print_warning("No targets to look for.")
        return

    found: list[Match] = []
    errors: list[ListingError] = []

    def on_match(match: Match) -> None:
        found.append(match)
        if output_format == OutputFormat.TEXT:
            print_match(str(match.path), match.kind == EntryKind.DIRECTORY)

    scanner = create_scanner(path, on_error=errors.append)
    register_targets(scanner, targets, on_match)
    scanner.run()

    if output_format == OutputFormat.JSON:
        _print_json(found)
        return

    if quiet:
        return

    if not found:
        print_success("No matching entries found.")
    else:
        console.print(f"\n[dim]Found {len(found)} matching entries[/dim]")
    if errors:
        console.print(f"[dim]{len(errors)} director(ies) could not be read[/dim]")


# === Private helper functions ===


def _load_config_or_exit(config_path: Path | None) -> CruftConfig:
    """Load the config file or exit with an error message."""
    try:
        return load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _build_extra_targets(dirs: list[str], files: list[str], descend: bool) -> list[Target]:
    """Turn --dir/--file options into targets, exiting on invalid patterns."""
    extra: list[Target] = []
    try:
        extra.extend(Target(kind="dir", pattern=p, descend=descend) for p in dirs)
        extra.extend(Target(kind="file", pattern=p) for p in files)
    except ValidationError as e:
        print_error(f"Invalid pattern: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e
    return extra


def _print_json(found: list[Match]) -> None:
    """Display matches as JSON, sorted by path."""
    data = [
        {
            "path": str(m.path),
            "kind": m.kind.value,
            "pattern": m.target.pattern,
        }
        for m in sorted(found, key=lambda m: str(m.path))
    ]
    console.print_json(json.dumps(data))
