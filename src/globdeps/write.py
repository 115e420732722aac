"""
Change-aware file writing.

Files are only rewritten when their contents actually change, so build rules
using restat (or content hashing) don't cascade rebuilds when a regenerated
file comes out identical.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from strif import atomic_output_file

logger = logging.getLogger(__name__)


def write_file_if_changed(path: str | Path, data: bytes | str, mode: int | None = None) -> bool:
    """
    Write `data` to `path` unless the file already holds exactly these bytes.

    Parent directories are created as needed. The write is atomic. If `mode`
    is given it is applied to the written file; otherwise a rewritten file
    keeps its previous permissions. Returns True if the file was written,
    False if it was left untouched.
    """
    path = Path(path)
    if isinstance(data, str):
        data = data.encode("utf-8")

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        old_stat = path.stat()
    except FileNotFoundError:
        old_stat = None

    if old_stat is not None and not _is_changed(path, old_stat, data):
        logger.debug("unchanged, not rewriting: %s", path)
        return False

    if mode is None and old_stat is not None:
        mode = stat.S_IMODE(old_stat.st_mode)

    with atomic_output_file(path, make_parents=True) as temp_path:
        Path(temp_path).write_bytes(data)
        if mode is not None:
            os.chmod(temp_path, mode)
    logger.debug("wrote %d bytes: %s", len(data), path)
    return True


def _is_changed(path: Path, old_stat: os.stat_result, data: bytes) -> bool:
    # Cheap size check before reading the whole file.
    if old_stat.st_size != len(data):
        return True
    return path.read_bytes() != data
