"""Concurrent rule-matching directory tree scanner.

Each directory level is listed, then its entries are drained one by one
against the rule registry. Handlers decide whether a matched directory
is pruned or descended into and may replace the level's queues. The
surviving subdirectories are scanned concurrently, and a level finishes
only after all of its children have finished.
"""

import asyncio
import logging
import os
import re
from collections import deque
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from cruftctl.scanner.errors import ListingError
from cruftctl.scanner.models import (
    Control,
    Entry,
    EntryKind,
    Handler,
    Rule,
    ScanContext,
    to_outcome,
)
from cruftctl.scanner.rules import RuleRegistry

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[ListingError], None]


def list_directory(directory: Path) -> list[Entry]:
    """List and classify the entries of ``directory``.

    Raises:
        ListingError: If the directory cannot be read.
    """
    try:
        with os.scandir(directory) as iterator:
            return [Entry.from_dir_entry(dir_entry) for dir_entry in iterator]
    except OSError as e:
        raise ListingError.from_os_error(directory, e) from e


def _files_first(entries: Sequence[Entry]) -> list[Entry]:
    """Stable partition putting files before directories.

    OTHER entries are left out.
    """
    files = [e for e in entries if e.kind == EntryKind.FILE]
    dirs = [e for e in entries if e.is_dir]
    return files + dirs


def _restrict_to_subdirs(queue: Sequence[Entry], listing: frozenset[Entry]) -> list[Entry]:
    """Keep only directory entries that belong to the current level."""
    kept: list[Entry] = []
    for entry in queue:
        if entry.is_dir and entry in listing:
            kept.append(entry)
        else:
            logger.debug("Ignoring %s queued for descent: not a directory of this level", entry.name)
    return kept


def walk_level(directory: Path, entries: Sequence[Entry], rules: Iterable[Rule]) -> list[Entry]:
    """Drain one directory level against the rules.

    Args:
        directory: Absolute path of the level being walked.
        entries: The level's listing, in listing order.
        rules: Rules in registration order.

    Returns:
        Subdirectories of this level to descend into.
    """
    rules = tuple(rules)
    all_entries = tuple(entries)
    listing = frozenset(all_entries)

    remaining: deque[Entry] = deque(_files_first(all_entries))
    descend: list[Entry] = []

    while remaining:
        entry = remaining.popleft()

        if entry.kind == EntryKind.OTHER:
            continue

        # Queued up front; a handler that prunes takes it back out.
        if entry.is_dir:
            descend.append(entry)

        path = directory / entry.name

        for rule in rules:
            if not rule.applies_to(entry):
                continue

            context = ScanContext(
                path=path,
                entry=entry,
                entries=all_entries,
                remaining=tuple(remaining),
                next=tuple(descend),
            )
            outcome = to_outcome(rule.handler(context))

            if outcome.remaining is not None:
                remaining = deque(outcome.remaining)
            if outcome.next is not None:
                descend = _restrict_to_subdirs(outcome.next, listing)

            if outcome.control == Control.CONTINUE:
                continue
            if outcome.control == Control.PRUNE and entry.is_dir and entry in descend:
                descend.remove(entry)
            break

    return descend


class TreeScanner:
    """Walks a directory tree and dispatches matching entries to handlers.

    Args:
        root: Directory to start from. Resolved to an absolute path.
        rules: Registry to use. A new empty registry is created if omitted.
        on_error: Called with every ListingError, in addition to logging it.

    Example:
        await (
            TreeScanner("~/code")
            .dir("node_modules", lambda ctx: print(ctx.path))
            .file(".pnpm-debug.log", lambda ctx: print(ctx.path))
            .scan()
        )
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        rules: RuleRegistry | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._root = Path(root).expanduser().resolve()
        self._rules = rules if rules is not None else RuleRegistry()
        self._on_error = on_error

    @property
    def root(self) -> Path:
        return self._root

    @property
    def rules(self) -> RuleRegistry:
        return self._rules

    def register(
        self,
        kind: EntryKind | str,
        pattern: str | re.Pattern[str],
        handler: Handler,
    ) -> "TreeScanner":
        """Register a rule. See :meth:`RuleRegistry.register`."""
        self._rules.register(kind, pattern, handler)
        return self

    def dir(self, pattern: str | re.Pattern[str], handler: Handler) -> "TreeScanner":
        """Register a directory rule."""
        self._rules.dir(pattern, handler)
        return self

    def file(self, pattern: str | re.Pattern[str], handler: Handler) -> "TreeScanner":
        """Register a file rule."""
        self._rules.file(pattern, handler)
        return self

    async def scan(self) -> None:
        """Scan the tree from the root.

        The rule registry is frozen for good once a scan starts. Listing
        errors are reported and never raised. An exception raised by a
        handler propagates once the sibling branches have finished.
        """
        self._rules.freeze()
        rules = self._rules.rules
        logger.debug("Scanning %s with %d rule(s)", self._root, len(rules))
        await self._scan_level(self._root, rules)

    def run(self) -> None:
        """Run :meth:`scan` to completion on a new event loop."""
        asyncio.run(self.scan())

    async def _scan_level(self, directory: Path, rules: tuple[Rule, ...]) -> None:
        try:
            entries = await asyncio.to_thread(list_directory, directory)
        except ListingError as e:
            self._report(e)
            return

        subdirs = walk_level(directory, entries, rules)
        if not subdirs:
            return

        results = await asyncio.gather(
            *(self._scan_level(directory / subdir.name, rules) for subdir in subdirs),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if not failures:
            return
        first, *others = failures
        for other in others:
            logger.error("Handler error under %s: %s", directory, other, exc_info=other)
        raise first

    def _report(self, error: ListingError) -> None:
        logger.error("%s %s", error.code, error.path)
        if self._on_error is not None:
            self._on_error(error)


def create_scanner(
    root: str | os.PathLike[str],
    *,
    on_error: ErrorCallback | None = None,
) -> TreeScanner:
    """Create a scanner rooted at ``root`` with an empty rule registry."""
    return TreeScanner(root, on_error=on_error)
