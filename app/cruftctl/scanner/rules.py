"""Rule registry and pattern compilation.

Rules are kept in registration order. The first rule whose kind and
name matcher fit an entry handles it; later rules only run when a
handler explicitly falls through.
"""

import logging
import re
from collections.abc import Iterator

from cruftctl.scanner.errors import InvalidStateError, PatternError
from cruftctl.scanner.models import (
    AnyName,
    EntryKind,
    Handler,
    LiteralName,
    Matcher,
    PatternName,
    Rule,
)

logger = logging.getLogger(__name__)

WILDCARD = "*"

# Characters that turn a string pattern into a regular expression.
# "." and "-" are deliberately absent: they are common in file names.
_REGEX_METACHARS = frozenset("^$*+?{}[]\\|()")


def compile_pattern(pattern: str | re.Pattern[str]) -> Matcher:
    """Compile a rule pattern into a name matcher.

    Args:
        pattern: ``"*"`` for any name, a plain name for an exact match,
            a string containing regex metacharacters for an anchored
            regular expression, or a precompiled ``re.Pattern`` used with
            search semantics.

    Returns:
        The matcher for the pattern.

    Raises:
        PatternError: If the pattern is empty or not a valid expression.
    """
    if isinstance(pattern, re.Pattern):
        return PatternName(pattern, anchored=False)

    if not isinstance(pattern, str):
        raise PatternError(repr(pattern), "pattern must be a string or compiled regex")
    if not pattern:
        raise PatternError(pattern, "pattern cannot be empty")
    if pattern == WILDCARD:
        return AnyName()
    if not _REGEX_METACHARS.intersection(pattern):
        return LiteralName(pattern)

    try:
        return PatternName(re.compile(pattern))
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def _coerce_kind(kind: EntryKind | str) -> EntryKind:
    try:
        resolved = EntryKind(kind)
    except ValueError:
        msg = f"Unknown entry kind: {kind!r}"
        raise ValueError(msg) from None
    if resolved == EntryKind.OTHER:
        msg = "Rules can only target 'dir' or 'file' entries"
        raise ValueError(msg)
    return resolved


class RuleRegistry:
    r"""Ordered, chainable collection of rules.

    Example:
        registry = RuleRegistry().dir("node_modules", report).file(r".*\.log", report)
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []
        self._frozen = False

    def register(
        self,
        kind: EntryKind | str,
        pattern: str | re.Pattern[str],
        handler: Handler,
    ) -> "RuleRegistry":
        """Append a rule.

        Raises:
            InvalidStateError: If the registry has been frozen by a scan.
            PatternError: If the pattern cannot be compiled.
            ValueError: If ``kind`` is not ``dir`` or ``file``.
        """
        if self._frozen:
            msg = "Cannot register rules after a scan has started"
            raise InvalidStateError(msg)

        rule = Rule(kind=_coerce_kind(kind), matcher=compile_pattern(pattern), handler=handler)
        self._rules.append(rule)
        logger.debug("Registered %s rule %r", rule.kind.value, pattern)
        return self

    def dir(self, pattern: str | re.Pattern[str], handler: Handler) -> "RuleRegistry":
        """Register a directory rule."""
        return self.register(EntryKind.DIRECTORY, pattern, handler)

    def file(self, pattern: str | re.Pattern[str], handler: Handler) -> "RuleRegistry":
        """Register a file rule."""
        return self.register(EntryKind.FILE, pattern, handler)

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
