"""
Glob to a file list plus a depfile, for use as a build step.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from globdeps.depfile import write_dep_file
from globdeps.globbing import glob
from globdeps.write import write_file_if_changed

logger = logging.getLogger(__name__)


def format_file_list(files: Sequence[str]) -> str:
    """One path per line, with a trailing newline."""
    return "\n".join(files) + "\n"


def glob_with_dep_file(
    pattern: str,
    list_file: str | Path,
    dep_file: str | Path,
    excludes: Sequence[str] | None = None,
    mode: int | None = None,
) -> list[str]:
    """
    Glob `pattern`, write the matches to `list_file` (only if the list
    changed), and write `dep_file` recording that `list_file` depends on every
    directory searched. Returns the matched paths.

    The pattern is either `path/*.ext` for a single directory glob, or
    `path/**/*.ext` for a recursive glob.
    """
    result = glob(pattern, excludes)

    changed = write_file_if_changed(list_file, format_file_list(result.matches), mode=mode)
    write_dep_file(dep_file, str(list_file), result.dirs)

    logger.info(
        "%s: %d files from %d dirs (%s)",
        list_file,
        len(result.matches),
        len(result.dirs),
        "updated" if changed else "unchanged",
    )
    return result.matches
