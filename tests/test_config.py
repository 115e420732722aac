"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from globdeps.cli import _parse_args  # pyright: ignore[reportPrivateUsage]
from globdeps.config import (
    ConfigError,
    GlobdepsConfig,
    apply_config,
    find_config_file,
    load_config,
)


def test_find_config_globdeps_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "globdeps.toml"
    config_file.write_text('exclude = ["**/test/*"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_globdeps_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "globdeps.toml").write_text('exclude = ["a"]\n')
    dot_config = tmp_path / ".globdeps.toml"
    dot_config.write_text('exclude = ["b"]\n')
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.globdeps]\nexclude = ["a"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "globdeps.toml"
    config_file.write_text('exclude = ["a"]\n')
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_load_config_kebab_case_and_sections(tmp_path: Path) -> None:
    config_file = tmp_path / "globdeps.toml"
    config_file.write_text(
        '[excludes]\nexclude = ["**/test/*"]\nextend-exclude = ["gen/*"]\n'
        "[output]\nfile-mode = 0o644\nunknown-key = 1\n"
    )
    config = load_config(config_file)
    assert config == GlobdepsConfig(
        exclude=["**/test/*"], extend_exclude=["gen/*"], file_mode=0o644
    )


def test_load_config_pyproject(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.globdeps]\nextend-exclude = ["gen/*"]\n')
    assert load_config(config_file).extend_exclude == ["gen/*"]


def test_apply_config_fills_unset_options() -> None:
    options, explicit = _parse_args(["src/*.go"])
    apply_config(options, GlobdepsConfig(exclude=["*_test.go"], file_mode=0o600), explicit)
    assert options.exclude == ["*_test.go"]
    assert options.file_mode == 0o600


def test_apply_config_explicit_cli_flags_win() -> None:
    options, explicit = _parse_args(["-e", "gen/*", "src/*.go"])
    apply_config(options, GlobdepsConfig(exclude=["*_test.go"]), explicit)
    assert options.exclude == ["gen/*"]


def test_apply_config_extend_exclude_combines() -> None:
    options, explicit = _parse_args(["--extend-exclude", "gen/*", "src/*.go"])
    apply_config(options, GlobdepsConfig(exclude=["*_test.go"]), explicit)
    assert options.effective_exclude == ["*_test.go", "gen/*"]


def test_apply_config_none_is_noop() -> None:
    options, explicit = _parse_args(["src/*.go"])
    assert apply_config(options, None, explicit) is options
    assert options.effective_exclude == []


@pytest.mark.parametrize(
    ("toml", "message"),
    [
        ('exclude = "**/test/*"\n', "exclude must be a list of pattern strings"),
        ("exclude = [1, 2]\n", "exclude must be a list of pattern strings"),
        ('extend-exclude = "gen/*"\n', "extend-exclude must be a list of pattern strings"),
        ('file-mode = "644"\n', "file-mode must be an integer"),
        ("file-mode = true\n", "file-mode must be an integer"),
    ],
)
def test_load_config_rejects_wrong_types(tmp_path: Path, toml: str, message: str) -> None:
    config_file = tmp_path / "globdeps.toml"
    config_file.write_text(toml)
    with pytest.raises(ConfigError, match=message):
        load_config(config_file)


def test_load_config_rejects_invalid_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "globdeps.toml"
    config_file.write_text("exclude = [\n")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_config(config_file)


def test_find_config_skips_broken_pyproject(tmp_path: Path) -> None:
    config_file = tmp_path / "globdeps.toml"
    config_file.write_text('exclude = ["a"]\n')
    subdir = tmp_path / "sub"
    subdir.mkdir()
    (subdir / "pyproject.toml").write_text("[tool.globdeps\n")
    assert find_config_file(subdir) == config_file
