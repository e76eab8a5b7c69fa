"""Tests for the sangria command line."""

import json
from pathlib import Path

import pytest

from sangria.cli import EXIT_CONFIG_ERROR, EXIT_OK, EXIT_PROBLEMS, build_parser, main


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "good.rb").write_text("def f\n  x\nend\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestParser:
    """Argument defaults."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.paths == []
        assert args.spaces is None
        assert args.format == "text"
        assert args.workers == 1
        assert not args.verbose

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--format", "xml"])


class TestMain:
    """Exit status and output."""

    def test_clean_project_uses_default_glob(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_problems_reported(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        bad = project / "lib" / "bad.rb"
        bad.write_text("def f\n    x\nend\n")

        assert main(["lib"]) == EXIT_PROBLEMS

        out = capsys.readouterr().out
        assert out == f"{bad}:2: Line is indented to column 4, but should be at 2.\n"

    def test_spaces_option(self, project: Path) -> None:
        (project / "lib" / "wide.rb").write_text("def f\n    x\nend\n")
        assert main(["lib/wide.rb", "--spaces", "4"]) == EXIT_OK

    def test_json_output(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (project / "lib" / "bad.rb").write_text("def f\nx\nend\n")

        assert main(["--format", "json", "lib"]) == EXIT_PROBLEMS

        data = json.loads(capsys.readouterr().out)
        assert [Path(r["file_path"]).name for r in data] == ["bad.rb", "good.rb"]
        assert [(p["line"], p["expected"], p["actual"]) for p in data[0]["problems"]] == [(2, 2, 0)]
        assert data[1]["problems"] == []

    def test_invalid_spaces(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--spaces", "0"]) == EXIT_CONFIG_ERROR
        assert capsys.readouterr().err.startswith("sangria: Configuration 'spaces'")

    def test_unlexable_file(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        broken = project / "lib" / "broken.rb"
        broken.write_text('x = "abc')

        assert main([str(broken)]) == EXIT_PROBLEMS

        out = capsys.readouterr().out
        assert out.startswith(f"{broken}: error: ")
        assert "unterminated literal" in out

    def test_workers(self, project: Path) -> None:
        for i in range(5):
            (project / "lib" / f"m{i}.rb").write_text("class M\n  x\nend\n")
        assert main(["--workers", "3", "lib"]) == EXIT_OK

    def test_no_files(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert main([]) == EXIT_OK
