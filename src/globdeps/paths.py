"""
Path segment helpers shared by the glob engine and the exclude matcher.

All functions here are purely lexical: none of them touch the filesystem.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

# Characters that indicate a path is a glob pattern rather than a literal path.
_GLOB_CHARS = frozenset("*?[")

RECURSIVE_MARKER = "**"


def is_glob(pattern: str) -> bool:
    """True if the pattern contains any glob characters (`*`, `?`, or `[`)."""
    return any(c in _GLOB_CHARS for c in pattern)


def has_glob(patterns: Iterable[str]) -> bool:
    """True if any of the patterns contains glob characters."""
    return any(is_glob(p) for p in patterns)


def clean(path: str) -> str:
    """
    Lexically normalize a path: collapse duplicate separators, `.` and `..`
    elements. An empty path becomes `"."`.
    """
    cleaned = os.path.normpath(path) if path else "."
    # POSIX normpath keeps a leading "//"; treat it as a plain root.
    if cleaned.startswith(os.sep * 2):
        cleaned = os.sep + cleaned.lstrip(os.sep)
    return cleaned


def join(*parts: str) -> str:
    """Join path elements and clean the result."""
    return clean(os.path.join(*parts))


def base(path: str) -> str:
    """
    Last element of a path, ignoring trailing separators: `base("a/**/")` is
    `"**"`. An empty path gives `"."` and the root gives the separator.
    """
    if not path:
        return "."
    stripped = path.rstrip(os.sep)
    if not stripped:
        return os.sep
    return stripped[stripped.rfind(os.sep) + 1 :]


def sane_split(path: str) -> tuple[str, str]:
    """
    Like `os.path.split`, but returns `"."` when the directory part is empty
    and trims the trailing separator unless the directory is the root.
    `sane_split(".")` is `(".", "")`.
    """
    if path == ".":
        return ".", ""
    sep_index = path.rfind(os.sep)
    head, tail = path[: sep_index + 1], path[sep_index + 1 :]
    if head == "":
        head = "."
    elif head != os.sep:
        head = head[:-1]
    return head, tail


def split_first(path: str) -> tuple[str, str]:
    """Split a path at its first separator: `"a/b/c"` gives `("a", "b/c")`."""
    first, _, rest = path.partition(os.sep)
    return first, rest


def split_segments(path: str) -> tuple[bool, list[str]]:
    """
    Clean a path once and split it into `(rooted, segments)`.

    `"/a/b"` gives `(True, ["a", "b"])`, `"."` gives `(False, [])`.
    """
    cleaned = clean(path)
    rooted = cleaned.startswith(os.sep)
    body = cleaned.lstrip(os.sep)
    if body in ("", "."):
        return rooted, []
    return rooted, body.split(os.sep)
