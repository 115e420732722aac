"""Errors raised for malformed glob and exclude patterns."""

from __future__ import annotations


class GlobError(ValueError):
    """Base class for errors caused by the pattern text itself."""


class PatternSyntaxError(GlobError):
    """A single-level wildcard expression is malformed (e.g. an unterminated `[`)."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"syntax error in pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class RecursiveMarkerError(GlobError):
    """The recursive marker `**` is used where it is not allowed."""


class LastRecursiveError(RecursiveMarkerError):
    def __init__(self, pattern: str) -> None:
        super().__init__(f"pattern ** as last path element: {pattern!r}")
        self.pattern = pattern


class MultipleRecursiveError(RecursiveMarkerError):
    def __init__(self, pattern: str) -> None:
        super().__init__(f"pattern contains multiple **: {pattern!r}")
        self.pattern = pattern
