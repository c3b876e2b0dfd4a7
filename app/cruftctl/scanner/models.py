"""Scanner domain models.

This module defines the data structures shared by the rule registry and
the level walker: entry classification, name matchers, rules, the
per-entry scan context handed to handlers, and the outcome a handler
returns.
"""

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Kind of a directory entry.

    Attributes:
        DIRECTORY: Directory (not a symlink to one).
        FILE: Regular file (not a symlink to one).
        OTHER: Symlinks, sockets, fifos and devices. Never matched.
    """

    DIRECTORY = "dir"
    FILE = "file"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Entry:
    """One entry of a directory listing.

    Attributes:
        name: Base name of the entry.
        kind: Classification of the entry.
    """

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @classmethod
    def from_dir_entry(cls, dir_entry: os.DirEntry[str]) -> "Entry":
        """Classify an ``os.scandir`` entry without following symlinks."""
        try:
            if dir_entry.is_file(follow_symlinks=False):
                kind = EntryKind.FILE
            elif dir_entry.is_dir(follow_symlinks=False):
                kind = EntryKind.DIRECTORY
            else:
                kind = EntryKind.OTHER
        except OSError:
            kind = EntryKind.OTHER
        return cls(name=dir_entry.name, kind=kind)


# =============================================================================
# Name matchers
# =============================================================================


@dataclass(frozen=True, slots=True)
class AnyName:
    """Matches every name."""


@dataclass(frozen=True, slots=True)
class LiteralName:
    """Matches one exact name."""

    text: str


@dataclass(frozen=True, slots=True)
class PatternName:
    """Matches names against a compiled regular expression.

    Attributes:
        regex: Compiled expression.
        anchored: If True the whole name must match, otherwise a search
            anywhere in the name is enough.
    """

    regex: re.Pattern[str]
    anchored: bool = True


Matcher = AnyName | LiteralName | PatternName


def matches(matcher: Matcher, name: str) -> bool:
    """Test ``name`` against ``matcher``."""
    if isinstance(matcher, AnyName):
        return True
    if isinstance(matcher, LiteralName):
        return name == matcher.text
    if matcher.anchored:
        return matcher.regex.fullmatch(name) is not None
    return matcher.regex.search(name) is not None


# =============================================================================
# Handler contract
# =============================================================================


class Control(Enum):
    """What the walker does after a handler runs.

    Attributes:
        PRUNE: Stop evaluating rules; a matched directory is not descended into.
        CONTINUE: Evaluate the next rule against the same entry.
        DESCEND: Stop evaluating rules; a matched directory is still descended into.
    """

    PRUNE = "prune"
    CONTINUE = "continue"
    DESCEND = "descend"


@dataclass(frozen=True, slots=True)
class ScanContext:
    """Everything a handler can see about the entry being matched.

    The queues are snapshots. A handler changes traversal by returning an
    :class:`Outcome` carrying replacement queues.

    Attributes:
        path: Absolute path of the entry.
        entry: The matched entry.
        entries: Full listing of the current directory, in listing order.
        remaining: Entries of this level not processed yet.
        next: Subdirectories of this level queued for descent.
    """

    path: Path
    entry: Entry
    entries: tuple[Entry, ...]
    remaining: tuple[Entry, ...]
    next: tuple[Entry, ...]


@dataclass(frozen=True, slots=True)
class Outcome:
    """Structured handler result.

    Attributes:
        control: How rule evaluation proceeds for this entry.
        remaining: Replacement for the remaining queue, or None to keep it.
        next: Replacement for the descent queue, or None to keep it.
    """

    control: Control = Control.PRUNE
    remaining: Sequence[Entry] | None = None
    next: Sequence[Entry] | None = None


HandlerResult = Outcome | bool | None
Handler = Callable[[ScanContext], HandlerResult]


def to_outcome(result: HandlerResult) -> Outcome:
    """Normalise a handler's return value.

    ``None`` prunes, ``False`` falls through to the next rule, ``True``
    keeps the entry queued for descent.
    """
    if isinstance(result, Outcome):
        return result
    if result is None:
        return Outcome(Control.PRUNE)
    if result is True:
        return Outcome(Control.DESCEND)
    if result is False:
        return Outcome(Control.CONTINUE)
    msg = f"Handler must return None, a bool or an Outcome, got {type(result).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Rule:
    """A registered (kind, matcher, handler) triple."""

    kind: EntryKind
    matcher: Matcher
    handler: Handler

    def applies_to(self, entry: Entry) -> bool:
        """Check whether this rule matches ``entry``."""
        return self.kind == entry.kind and matches(self.matcher, entry.name)
