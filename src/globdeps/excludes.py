"""
Exclude matching: hierarchical (`a/*`) and recursive (`**`) patterns applied
to path strings rather than to the filesystem.
"""

from __future__ import annotations

from collections.abc import Sequence

from globdeps.errors import LastRecursiveError, MultipleRecursiveError
from globdeps.paths import RECURSIVE_MARKER, base, split_segments
from globdeps.wildcard import match_segment


def filter_excludes(matches: list[str], excludes: Sequence[str]) -> list[str]:
    """
    Drop every path in `matches` that matches any of the `excludes` patterns.
    With no excludes the input list is returned as is.
    """
    if not excludes:
        return matches

    kept: list[str] = []
    for candidate in matches:
        if not any(match(exclude, candidate) for exclude in excludes):
            kept.append(candidate)
    return kept


def match(pattern: str, name: str) -> bool:
    """
    Report whether `name` matches `pattern` segment by segment, working back
    from the last segment. A `**` segment hands the remaining left side of the
    pattern to `match_prefix`.
    """
    if base(pattern) == RECURSIVE_MARKER:
        raise LastRecursiveError(pattern)

    pattern_rooted, pattern_segs = split_segments(pattern)
    name_rooted, name_segs = split_segments(name)

    p = len(pattern_segs)
    n = len(name_segs)
    while True:
        p -= 1
        n -= 1
        if p >= 0 and pattern_segs[p] == RECURSIVE_MARKER:
            return _match_prefix_segments(
                pattern, pattern_rooted, pattern_segs[:p], name_rooted, name_segs[: n + 1]
            )
        if p < 0 and n < 0:
            return True
        if p < 0 or n < 0:
            return False
        if not match_segment(pattern_segs[p], name_segs[n]):
            return False


def match_prefix(pattern: str, name: str) -> bool:
    """
    Report whether the leading segments of `name` match `pattern`. `name` may
    have any number of further segments. `**` is not allowed here.
    """
    pattern_rooted, pattern_segs = split_segments(pattern)
    name_rooted, name_segs = split_segments(name)
    return _match_prefix_segments(pattern, pattern_rooted, pattern_segs, name_rooted, name_segs)


def _match_prefix_segments(
    pattern: str,
    pattern_rooted: bool,
    pattern_segs: list[str],
    name_rooted: bool,
    name_segs: list[str],
) -> bool:
    if pattern_rooted and not name_rooted:
        return False
    if name_rooted and not pattern_rooted:
        # A relative prefix cannot anchor inside an absolute name, except the empty one.
        return not pattern_segs

    for i, segment in enumerate(pattern_segs):
        if segment == RECURSIVE_MARKER:
            raise MultipleRecursiveError(pattern)
        if i >= len(name_segs):
            return False
        if not match_segment(segment, name_segs[i]):
            return False
    return True
