"""
Single-segment wildcard matching.

Supports `*` (any run of characters), `?` (any single character), `[...]`
character classes with ranges and `^` negation, and `\\` escapes. None of
the wildcards match the path separator, and names starting with `.` get no
special treatment. Unlike `fnmatch`, malformed patterns are errors rather
than literal text.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache

from globdeps.errors import PatternSyntaxError

_SEP = re.escape(os.sep)


def match_segment(pattern: str, name: str) -> bool:
    """
    Report whether `name` matches the single-segment wildcard `pattern`.
    Raises `PatternSyntaxError` for a malformed pattern.
    """
    return compile_segment(pattern).fullmatch(name) is not None


@lru_cache(maxsize=1024)
def compile_segment(pattern: str) -> re.Pattern[str]:
    """Translate a wildcard segment into a compiled regex, validating its syntax."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            while i < n and pattern[i] == "*":
                i += 1
            out.append(f"[^{_SEP}]*")
            continue
        if c == "?":
            out.append(f"[^{_SEP}]")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise PatternSyntaxError(pattern, "trailing backslash")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "[":
            cls, i = _translate_class(pattern, i + 1)
            out.append(cls)
        else:
            out.append(re.escape(c))
            i += 1
    return re.compile("".join(out), re.DOTALL)


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one (possibly escaped) character of a class body."""
    if i >= len(pattern):
        raise PatternSyntaxError(pattern, "unterminated character class")
    c = pattern[i]
    if c in "-]":
        raise PatternSyntaxError(pattern, f"unescaped {c!r} in character class")
    if c == "\\":
        if i + 1 >= len(pattern):
            raise PatternSyntaxError(pattern, "trailing backslash")
        return pattern[i + 1], i + 2
    return c, i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """
    Translate a class body starting just after `[`. Returns the regex class
    and the index just past the closing `]`.
    """
    negate = False
    if i < len(pattern) and pattern[i] == "^":
        negate = True
        i += 1

    items: list[str] = []
    while True:
        if i >= len(pattern):
            raise PatternSyntaxError(pattern, "unterminated character class")
        if pattern[i] == "]":
            if not items:
                raise PatternSyntaxError(pattern, "empty character class")
            i += 1
            break
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise PatternSyntaxError(pattern, f"bad range {lo}-{hi}")
        if hi == lo:
            items.append(re.escape(lo))
        else:
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")

    body = "".join(items)
    if negate:
        return f"[^{_SEP}{body}]", i
    return f"[{body}]", i
