"""CLI integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from globdeps.cli import main


def _make_tree(root: Path) -> None:
    for rel in ["src/main/a.go", "src/main/b.go", "src/test/a.go"]:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("")


def _lines(out: str) -> list[str]:
    return [line for line in out.split("\n") if line]


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Common usage:" in out
    assert "globdeps -o out/srcs.list -d out/srcs.list.d 'src/**/*.py'" in out


def test_prints_matches(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["src/**/*.go"]) == 0
    assert _lines(capsys.readouterr().out) == ["src/main/a.go", "src/main/b.go", "src/test/a.go"]


def test_exclude_flag(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-e", "**/test/*", "src/**/*.go"]) == 0
    assert _lines(capsys.readouterr().out) == ["src/main/a.go", "src/main/b.go"]


def test_print_dirs(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--print-dirs", "src/*/*.go"]) == 0
    assert _lines(capsys.readouterr().out) == ["src", "src/main", "src/test"]


def test_output_and_depfile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-o", "out/list", "-d", "out/list.d", "src/main/*.go"]) == 0
    assert (tmp_path / "out" / "list").read_text() == "src/main/a.go\nsrc/main/b.go\n"
    assert (tmp_path / "out" / "list.d").read_text() == "out/list: \\\n src/main\n"


def test_output_without_depfile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-o", "list", "src/test/*.go"]) == 0
    assert (tmp_path / "list").read_text() == "src/test/a.go\n"


def test_config_excludes_used(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "globdeps.toml").write_text('exclude = ["**/test/*"]\n')
    monkeypatch.chdir(tmp_path)
    assert main(["src/**/*.go"]) == 0
    assert "src/test/a.go" not in capsys.readouterr().out


def test_depfile_requires_output(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["-d", "list.d", "*.go"]) == 1
    assert "--depfile requires --output" in capsys.readouterr().err


def test_missing_pattern(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "No pattern specified" in capsys.readouterr().err


def test_trailing_recursive_marker_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["src/**"]) == 1
    assert "pattern ** as last path element" in capsys.readouterr().err


def test_multiple_recursive_marker_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["a/**/b/**/c"]) == 1
    assert "pattern contains multiple **" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("v") or out.startswith("unknown")


def test_bad_config_reported(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "globdeps.toml").write_text('exclude = "**/test/*"\n')
    monkeypatch.chdir(tmp_path)
    assert main(["*.go"]) == 1
    assert "exclude must be a list of pattern strings" in capsys.readouterr().err
