"""
Project settings for globdeps, read from TOML.

A project can keep exclude patterns and the list file mode next to its
sources, in `.globdeps.toml`, `globdeps.toml`, or the `[tool.globdeps]`
table of `pyproject.toml`:

    exclude = ["**/testdata/*"]
    extend-exclude = ["gen/*"]
    file-mode = 0o644

Keys may also be grouped under sub-tables (e.g. `[excludes]`). Values are
type-checked on load, since a bad exclude list would otherwise only fail
halfway through a build.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

if TYPE_CHECKING:
    from globdeps.cli import Options

_TOOL_NAME = "globdeps"

# Searched in this order in each directory, walking up to the filesystem root.
_CONFIG_FILENAMES = [f".{_TOOL_NAME}.toml", f"{_TOOL_NAME}.toml", "pyproject.toml"]


class ConfigError(ValueError):
    """A config file is unreadable or holds a value of the wrong type."""


@dataclass
class GlobdepsConfig:
    """Settings from a config file. `None` means the key was absent."""

    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    file_mode: int | None = None


def find_config_file(start_dir: Path) -> Path | None:
    """
    Nearest config file at or above `start_dir`. A `pyproject.toml` only
    counts if it has a `[tool.globdeps]` table.
    """
    for directory in [start_dir.resolve(), *start_dir.resolve().parents]:
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml":
                return candidate
            try:
                if _tool_table(_read_toml(candidate)) is not None:
                    return candidate
            except (ConfigError, OSError):
                # Someone else's broken pyproject.toml is not ours to report.
                continue
    return None


def load_config(config_path: Path) -> GlobdepsConfig:
    """Read and validate a config file. Raises `ConfigError` on bad contents."""
    data = _read_toml(config_path)
    if config_path.name == "pyproject.toml":
        data = _tool_table(data) or {}
    try:
        return _parse_config_data(data)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from None


def apply_config(options: Options, config: GlobdepsConfig | None, explicit_flags: set[str]) -> Options:
    """
    Fill in options from `config` unless the flag was given on the command
    line. `exclude` from the config replaces the (empty) default;
    `extend-exclude` is added after it.
    """
    if config is None:
        return options
    if config.exclude is not None and "exclude" not in explicit_flags:
        options.exclude = list(config.exclude)
    if config.extend_exclude is not None and "extend_exclude" not in explicit_flags:
        options.extend_exclude = list(config.extend_exclude)
    if config.file_mode is not None and "file_mode" not in explicit_flags:
        options.file_mode = config.file_mode
    return options


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    table = data.get("tool", {}).get(_TOOL_NAME)
    return cast(dict[str, Any], table) if isinstance(table, dict) else None


def _parse_config_data(data: dict[str, Any]) -> GlobdepsConfig:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value

    known = {f.name for f in fields(GlobdepsConfig)}
    values: dict[str, Any] = {}
    for key, value in flat.items():
        name = key.replace("-", "_")
        if name in known:
            values[name] = value

    for name in ("exclude", "extend_exclude"):
        value = values.get(name)
        if value is not None and not (
            isinstance(value, list) and all(isinstance(p, str) for p in cast(list[Any], value))
        ):
            raise ConfigError(f"{name.replace('_', '-')} must be a list of pattern strings")

    file_mode = values.get("file_mode")
    # bool is an int subclass; reject it explicitly.
    if file_mode is not None and (isinstance(file_mode, bool) or not isinstance(file_mode, int)):
        raise ConfigError("file-mode must be an integer, e.g. 0o644")

    return GlobdepsConfig(**values)
