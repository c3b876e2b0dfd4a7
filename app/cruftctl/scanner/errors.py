"""Exceptions raised by the tree scanner.

Listing failures are reported at the level where they happen and never
escape a scan. Pattern and state errors are raised to the caller that
registers rules.
"""

import errno
from pathlib import Path


class ScanError(Exception):
    """Base exception for scanner errors."""


class PatternError(ScanError, ValueError):
    """Raised when a rule pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class InvalidStateError(ScanError, RuntimeError):
    """Raised when rules are registered after a scan has started."""


class ListingError(ScanError):
    """A directory could not be listed.

    Attributes:
        path: Directory that failed to list.
        code: Symbolic errno name (e.g. ``EACCES``), or ``UNKNOWN``.
    """

    def __init__(self, path: Path, code: str, message: str) -> None:
        self.path = path
        self.code = code
        super().__init__(f"{code} {path}: {message}")

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> "ListingError":
        """Build a ListingError from the OSError raised while listing ``path``."""
        code = errno.errorcode.get(exc.errno, "UNKNOWN") if exc.errno else "UNKNOWN"
        error = cls(path, code, exc.strerror or str(exc))
        error.__cause__ = exc
        return error
