"""Rule-matching directory tree scanner.

This package provides the traversal engine: rule registration, the
per-level walker, and the concurrent recursive dispatcher.
"""

from cruftctl.scanner.errors import InvalidStateError, ListingError, PatternError, ScanError
from cruftctl.scanner.models import (
    AnyName,
    Control,
    Entry,
    EntryKind,
    Handler,
    LiteralName,
    Matcher,
    Outcome,
    PatternName,
    Rule,
    ScanContext,
    matches,
)
from cruftctl.scanner.rules import RuleRegistry, compile_pattern
from cruftctl.scanner.walker import TreeScanner, create_scanner, list_directory, walk_level

__all__ = [
    "AnyName",
    "Control",
    "Entry",
    "EntryKind",
    "Handler",
    "InvalidStateError",
    "ListingError",
    "LiteralName",
    "Matcher",
    "Outcome",
    "PatternError",
    "PatternName",
    "Rule",
    "RuleRegistry",
    "ScanContext",
    "ScanError",
    "TreeScanner",
    "compile_pattern",
    "create_scanner",
    "list_directory",
    "matches",
    "walk_level",
]
