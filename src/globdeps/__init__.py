"""
Recursive globbing with directory dependency tracking for build systems.

Usage::

    from globdeps import glob, glob_with_dep_file

    result = glob("src/**/*.py", excludes=["**/test/*"])
    result.matches  # matched paths
    result.dirs     # directories whose changes can change the matches

    glob_with_dep_file("src/**/*.py", "out/srcs.list", "out/srcs.list.d")
"""

from globdeps.depfile import write_dep_file
from globdeps.emit import glob_with_dep_file
from globdeps.errors import (
    GlobError,
    LastRecursiveError,
    MultipleRecursiveError,
    PatternSyntaxError,
    RecursiveMarkerError,
)
from globdeps.excludes import filter_excludes, match
from globdeps.globbing import GlobResult, glob, glob_pattern_list
from globdeps.paths import has_glob, is_glob
from globdeps.write import write_file_if_changed

__all__ = [
    "GlobError",
    "GlobResult",
    "LastRecursiveError",
    "MultipleRecursiveError",
    "PatternSyntaxError",
    "RecursiveMarkerError",
    "filter_excludes",
    "glob",
    "glob_pattern_list",
    "glob_with_dep_file",
    "has_glob",
    "is_glob",
    "match",
    "write_dep_file",
    "write_file_if_changed",
]
