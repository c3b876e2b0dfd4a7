"""Artifact targets and their registration on a scanner.

A target names a kind of disposable artifact (a dependency folder, a
build cache, a debug log). Targets are plain data; registering them
turns each one into a scanner rule whose handler reports a Match.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cruftctl.scanner.models import EntryKind, ScanContext
from cruftctl.scanner.rules import compile_pattern
from cruftctl.scanner.walker import TreeScanner

TargetKind = Literal["dir", "file"]


class Target(BaseModel):
    """A named artifact to look for.

    Attributes:
        kind: Whether the target is a directory or a file.
        pattern: Name pattern ("*", an exact name, or a regular expression).
        description: Optional human-readable description.
        descend: If True, a matched directory is still scanned below.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Annotated[TargetKind, Field(description="Entry kind to match")]
    pattern: Annotated[str, Field(description="Name pattern", min_length=1)]
    description: Annotated[str | None, Field(description="What the artifact is")] = None
    descend: Annotated[bool, Field(description="Keep scanning below a match")] = False

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        compile_pattern(v)
        return v


DEFAULT_TARGETS: tuple[Target, ...] = (
    Target(kind="dir", pattern="node_modules", description="npm/pnpm/yarn dependencies"),
    Target(kind="dir", pattern=".dart_tool", description="Dart/Flutter build cache"),
    Target(kind="file", pattern=".pnpm-debug.log", description="pnpm debug log"),
)


@dataclass(frozen=True, slots=True)
class Match:
    """An entry matched by a target.

    Attributes:
        path: Absolute path of the matched entry.
        kind: Kind of the matched entry.
        target: Target that matched.
    """

    path: Path
    kind: EntryKind
    target: Target


MatchCallback = Callable[[Match], None]


def _make_handler(target: Target, on_match: MatchCallback) -> Callable[[ScanContext], bool | None]:
    def handle(context: ScanContext) -> bool | None:
        on_match(Match(path=context.path, kind=context.entry.kind, target=target))
        return True if target.descend else None

    return handle


def register_targets(
    scanner: TreeScanner,
    targets: Iterable[Target],
    on_match: MatchCallback,
) -> TreeScanner:
    """Register one rule per target on ``scanner``.

    Args:
        scanner: Scanner to register on.
        targets: Targets in priority order.
        on_match: Called once for every matched entry.

    Returns:
        The scanner, for chaining.
    """
    for target in targets:
        scanner.register(target.kind, target.pattern, _make_handler(target, on_match))
    return scanner
