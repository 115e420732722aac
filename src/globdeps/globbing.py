"""
Recursive glob with directory dependency tracking.

`glob()` returns the paths matching a pattern together with the directories
that were searched to produce them. A build system that re-runs the glob
whenever one of those directories changes always sees an up-to-date file
list, without re-running on unrelated edits.

Patterns use single-level wildcards (`*`, `?`, `[...]`) in any segment, plus
`**`, which matches zero or more complete path segments. `**` may appear at
most once and never as the last segment.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Sequence
from dataclasses import dataclass, field

from globdeps.errors import LastRecursiveError, MultipleRecursiveError
from globdeps.excludes import filter_excludes
from globdeps.paths import RECURSIVE_MARKER, base, clean, is_glob, join, sane_split
from globdeps.wildcard import compile_segment, match_segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlobResult:
    """Paths matched by a glob and the directories searched to find them."""

    matches: list[str] = field(default_factory=list)
    dirs: list[str] = field(default_factory=list)


def glob(pattern: str, excludes: Sequence[str] | None = None) -> GlobResult:
    """
    Return the paths matching `pattern` that match none of `excludes`, and
    the directories that were searched.

    Raises `LastRecursiveError` if the last segment of `pattern` is `**`,
    `MultipleRecursiveError` if `**` appears more than once, and
    `PatternSyntaxError` for malformed wildcards. Filesystem errors other
    than a missing path propagate unchanged.
    """
    if base(pattern) == RECURSIVE_MARKER:
        raise LastRecursiveError(pattern)

    matches, dirs = _glob(pattern, has_recursive=False)
    matches = filter_excludes(matches, excludes or [])
    # Order-preserving dedupe
    matches = list(dict.fromkeys(matches))

    logger.debug("glob %r: %d matches, %d dirs searched", pattern, len(matches), len(dirs))
    return GlobResult(matches=matches, dirs=dirs)


def glob_pattern_list(patterns: Sequence[str], prefix: str) -> GlobResult:
    """
    Expand a list of paths relative to `prefix`. Glob patterns are expanded
    with `glob()`; plain paths are joined to `prefix` and passed through
    without checking that they exist.
    """
    matches: list[str] = []
    dirs: list[str] = []
    for pattern in patterns:
        if is_glob(pattern):
            result = glob(join(prefix, pattern))
            matches.extend(result.matches)
            dirs.extend(result.dirs)
        else:
            matches.append(join(prefix, pattern))
    return GlobResult(matches=matches, dirs=dirs)


def _glob(pattern: str, has_recursive: bool) -> tuple[list[str], list[str]]:
    """
    Resolve one level of `pattern`, recursing on its parent first so that the
    directories searched at every level are collected.
    """
    if not is_glob(pattern):
        return _glob_literal(pattern)

    parent, last = sane_split(pattern)

    if last == RECURSIVE_MARKER:
        if has_recursive:
            raise MultipleRecursiveError(pattern)
        has_recursive = True

    base_dirs, dirs = _glob(parent, has_recursive)

    matches: list[str] = []
    for candidate in base_dirs:
        if not _is_dir(candidate):
            continue
        if last == RECURSIVE_MARKER:
            # Every directory in the tree is a base for the following segment.
            matches.extend(_walk_all_dirs(candidate))
        else:
            dirs.append(candidate)
            matches.extend(_glob_dir(candidate, last))

    return matches, dirs


def _glob_literal(pattern: str) -> tuple[list[str], list[str]]:
    """
    A pattern without wildcards either exists, and is its own match, or it
    doesn't, and the nearest existing ancestor becomes a dependency.
    """
    path = clean(pattern)
    if _exists(path):
        return [path], []

    ancestor = path
    while True:
        parent, _ = sane_split(ancestor)
        if parent == ancestor:
            # Reached "." or the root.
            break
        ancestor = parent
        if _exists(ancestor):
            break
    logger.debug("%r does not exist, depending on ancestor %r", path, ancestor)
    return [], [ancestor]


def _glob_dir(directory: str, pattern: str) -> list[str]:
    """Sorted entries of `directory` whose names match the wildcard `pattern`."""
    if pattern in (os.curdir, os.pardir):
        # Never listed by the directory, so resolve lexically.
        path = join(directory, pattern)
        return [path] if _exists(path) else []
    # Validate the pattern even when the directory turns out to be empty.
    compile_segment(pattern)
    try:
        names = sorted(os.listdir(directory))
    except (FileNotFoundError, NotADirectoryError):
        return []
    return [join(directory, name) for name in names if match_segment(pattern, name)]


def _walk_all_dirs(root: str) -> list[str]:
    """
    All directories under `root`, including `root` itself, in lexical order.
    Symlinks below `root` are not followed.
    """
    found: list[str] = []
    # Explicit stack: os.walk recurses per level before Python 3.12.
    stack = [root]
    while stack:
        current = stack.pop()
        found.append(current)
        with os.scandir(current) as it:
            subdirs = sorted(e.name for e in it if e.is_dir(follow_symlinks=False))
        # Reversed so the first name is popped first.
        stack.extend(join(current, name) for name in reversed(subdirs))
    return found


def _exists(path: str) -> bool:
    try:
        os.lstat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return True


def _is_dir(path: str) -> bool:
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        # Dangling symlink matched by lstat.
        return False
