"""Tests for JSON serialization of problems and reports."""

import json

import pytest

from sangria.driver import FileReport
from sangria.problems import Problem
from sangria.serialization import from_dict, report_to_dict, to_dict, to_json


@pytest.fixture
def problem() -> Problem:
    return Problem.indentation("lib/a.rb", 3, expected=2, actual=4)


class TestToDict:
    """Problem to dict and back."""

    def test_fields(self, problem: Problem) -> None:
        assert to_dict(problem) == {
            "file_path": "lib/a.rb",
            "line": 3,
            "kind": "indentation",
            "expected": 2,
            "actual": 4,
            "message": "Line is indented to column 4, but should be at 2.",
        }

    def test_from_dict_restores_problem(self, problem: Problem) -> None:
        assert from_dict(to_dict(problem)) == problem

    def test_missing_field(self, problem: Problem) -> None:
        data = to_dict(problem)
        del data["line"]
        with pytest.raises(ValueError, match="missing \\['line'\\]"):
            from_dict(data)

    def test_unknown_field(self, problem: Problem) -> None:
        data = {**to_dict(problem), "column": 1}
        with pytest.raises(ValueError, match="unknown \\['column'\\]"):
            from_dict(data)


class TestReports:
    """FileReports serialize to a sorted, deterministic JSON array."""

    def test_report_to_dict(self, problem: Problem) -> None:
        report = FileReport("lib/a.rb", problems=(problem,))
        assert report_to_dict(report) == {
            "file_path": "lib/a.rb",
            "problems": [to_dict(problem)],
            "error": None,
        }

    def test_error_report(self) -> None:
        data = report_to_dict(FileReport("lib/b.rb", error="unterminated literal"))
        assert data == {"file_path": "lib/b.rb", "problems": [], "error": "unterminated literal"}

    def test_to_json_round_trips_through_json(self, problem: Problem) -> None:
        reports = [FileReport("lib/a.rb", problems=(problem,)), FileReport("lib/c.rb")]
        data = json.loads(to_json(reports))
        assert [r["file_path"] for r in data] == ["lib/a.rb", "lib/c.rb"]
        assert from_dict(data[0]["problems"][0]) == problem

    def test_keys_are_sorted(self, problem: Problem) -> None:
        text = to_json([FileReport("lib/a.rb", problems=(problem,))])
        assert text.index('"error"') < text.index('"file_path"') < text.index('"problems"')
        assert text.index('"actual"') < text.index('"expected"') < text.index('"kind"')

    def test_deterministic(self, problem: Problem) -> None:
        reports = [FileReport("lib/a.rb", problems=(problem,))]
        assert to_json(reports) == to_json(reports)

    def test_indent(self) -> None:
        assert to_json([FileReport("x.rb")], indent=2).startswith("[\n  {")

    def test_empty(self) -> None:
        assert to_json([]) == "[]"
