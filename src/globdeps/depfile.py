"""
Makefile-style dependency files, as read by ninja's `depfile` support.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from strif import atomic_output_file

_CONTINUATION = " \\\n "


def format_dep_file(target: str, deps: Iterable[str]) -> str:
    """
    Render a depfile declaring that `target` depends on `deps`:

        target: \\
         dep1 \\
         dep2
    """
    body = _CONTINUATION.join(_escape(dep) for dep in deps)
    return f"{_escape(target)}:{_CONTINUATION}{body}\n"


def write_dep_file(path: str | Path, target: str, deps: Iterable[str]) -> None:
    """Write the depfile for `target` to `path`, replacing any previous one."""
    with atomic_output_file(Path(path), make_parents=True) as temp_path:
        Path(temp_path).write_text(format_dep_file(target, deps), encoding="utf-8")


def _escape(path: str) -> str:
    return path.replace(" ", "\\ ")
