"""Tests for checking strings and files."""

from pathlib import Path

import pytest

from sangria import IndentConfig, check, check_file, check_files
from sangria.driver import FileReport
from sangria.errors import LexError
from sangria.problems import Problem

GOOD = "def f\n  x\nend\n"
BAD = "def f\nx\nend\n"


class TestCheck:
    """check() on in-memory source."""

    def test_clean_source(self) -> None:
        assert check(GOOD) == []

    def test_problem_carries_file_path(self) -> None:
        [problem] = check(BAD, file_path="a.rb")
        assert problem.file_path == "a.rb"
        assert (problem.line, problem.expected, problem.actual) == (2, 2, 0)

    def test_default_file_path(self) -> None:
        [problem] = check(BAD)
        assert problem.file_path == "<string>"

    def test_config(self) -> None:
        assert check("def f\n    x\nend\n", config=IndentConfig(spaces=4)) == []

    def test_lex_error_propagates(self) -> None:
        with pytest.raises(LexError):
            check('x = "abc')


class TestCheckFile:
    """check_file() reports failures instead of raising."""

    def test_clean_file(self, tmp_path: Path) -> None:
        path = tmp_path / "good.rb"
        path.write_text(GOOD)
        report = check_file(path)
        assert report == FileReport(str(path))
        assert report.ok

    def test_file_with_problems(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.rb"
        path.write_text(BAD)
        report = check_file(str(path))
        assert not report.ok
        assert report.error is None
        assert [p.line for p in report.problems] == [2]
        assert report.problems[0].file_path == str(path)

    def test_file_with_literals(self, tmp_path: Path) -> None:
        path = tmp_path / "literals.rb"
        path.write_text(
            "def f\n"
            '  puts "hi #{name}"\n'
            "  words = %w[a b]\n"
            "  ok = /re/ ? :yes : ?n\n"
            "  text = <<~EOS\n"
            "    body\n"
            "  EOS\n"
            "end\n"
        )
        report = check_file(path)
        assert report.error is None
        assert report.ok

    def test_missing_file(self, tmp_path: Path) -> None:
        report = check_file(tmp_path / "missing.rb")
        assert report.error is not None
        assert report.problems == ()
        assert not report.ok

    def test_unlexable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.rb"
        path.write_text('x = 1\ny = "abc')
        report = check_file(path)
        assert report.error is not None
        assert "unterminated literal" in report.error
        assert report.error.startswith(f"{path}:2:4 ")

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.rb"
        path.write_bytes(b"x = '\xff'\n")
        report = check_file(path)
        assert report.error is not None


class TestCheckFiles:
    """check_files() keeps input order, serially or on threads."""

    @pytest.fixture
    def paths(self, tmp_path: Path) -> list[Path]:
        paths = []
        for i in range(12):
            path = tmp_path / f"f{i:02d}.rb"
            path.write_text(BAD if i % 3 == 0 else GOOD)
            paths.append(path)
        return paths

    @pytest.mark.parametrize("max_workers", [None, 1, 4])
    def test_order_preserved(self, paths: list[Path], max_workers: int | None) -> None:
        reports = check_files(paths, max_workers=max_workers)
        assert [r.file_path for r in reports] == [str(p) for p in paths]
        assert [r.ok for r in reports] == [i % 3 != 0 for i in range(12)]

    def test_parallel_matches_serial(self, paths: list[Path]) -> None:
        assert check_files(paths, max_workers=4) == check_files(paths)

    def test_one_bad_file_does_not_stop_the_rest(self, paths: list[Path], tmp_path: Path) -> None:
        reports = check_files([tmp_path / "missing.rb", *paths[1:3]], max_workers=2)
        assert reports[0].error is not None
        assert all(r.ok for r in reports[1:])

    def test_shared_config(self, tmp_path: Path) -> None:
        path = tmp_path / "wide.rb"
        path.write_text("def f\n    x\nend\n")
        [report] = check_files([path], IndentConfig(spaces=4))
        assert report.ok

    def test_empty(self) -> None:
        assert check_files([]) == []


class TestFileReport:
    """FileReport.ok"""

    def test_ok_requires_no_error(self) -> None:
        assert not FileReport("a.rb", error="boom").ok

    def test_ok_requires_no_problems(self) -> None:
        problem = Problem.indentation("a.rb", 1, expected=0, actual=2)
        assert not FileReport("a.rb", problems=(problem,)).ok
