"""Tests for FileSet file discovery and style handling."""

from pathlib import Path

import pytest

from sangria.errors import ConfigurationError
from sangria.file_set import DEFAULT_GLOB, FileSet


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small project: lib/ with nested sources and a non-source file."""
    (tmp_path / "lib" / "sub").mkdir(parents=True)
    (tmp_path / "lib" / "a.rb").write_text("a\n")
    (tmp_path / "lib" / "sub" / "b.rb").write_text("b\n")
    (tmp_path / "lib" / "notes.txt").write_text("not code\n")
    (tmp_path / "script.rb").write_text("c\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def resolved(project: Path, *names: str) -> list[str]:
    return sorted(str((project / name).resolve()) for name in names)


class TestBuildFileList:
    """File expressions resolve to absolute, sorted, existing paths."""

    def test_default_glob(self, project: Path) -> None:
        assert DEFAULT_GLOB == "lib/**/*.rb"
        fs = FileSet()
        assert fs.file_list == resolved(project, "lib/a.rb", "lib/sub/b.rb")

    def test_directory_is_searched_recursively(self, project: Path) -> None:
        fs = FileSet(file_expression="lib")
        assert fs.file_list == resolved(project, "lib/a.rb", "lib/sub/b.rb")

    def test_single_file(self, project: Path) -> None:
        fs = FileSet(file_expression="script.rb")
        assert fs.file_list == resolved(project, "script.rb")

    def test_glob(self, project: Path) -> None:
        fs = FileSet(file_expression="*.rb")
        assert fs.file_list == resolved(project, "script.rb")

    def test_list_mixes_directories_and_files(self, project: Path) -> None:
        fs = FileSet(file_expression=["lib/sub", "script.rb", "lib/sub/b.rb"])
        assert fs.file_list == resolved(project, "lib/sub/b.rb", "script.rb")

    def test_missing_files_are_dropped(self, project: Path) -> None:
        fs = FileSet(file_expression=["missing.rb", "script.rb"])
        assert fs.file_list == resolved(project, "script.rb")

    def test_absolute_paths(self, project: Path) -> None:
        fs = FileSet(file_expression=str(project / "lib"))
        assert all(Path(p).is_absolute() for p in fs.file_list)

    def test_update_file_list_appends_new_files(self, project: Path) -> None:
        fs = FileSet(file_expression="lib")
        fs.update_file_list(["script.rb", "lib/a.rb"])
        assert fs.file_list == [*resolved(project, "lib/a.rb", "lib/sub/b.rb"), *resolved(project, "script.rb")]


class TestStyle:
    """Style options merge into an IndentConfig."""

    def test_default_style(self, project: Path) -> None:
        fs = FileSet()
        assert fs["style"]["spaces"] == 2
        assert fs.config.spaces == 2

    def test_style_at_construction(self, project: Path) -> None:
        fs = FileSet({"spaces": 4})
        assert fs["style"]["spaces"] == 4
        assert fs.config.spaces == 4

    def test_update_style(self, project: Path) -> None:
        fs = FileSet()
        fs.update_style({"spaces": 3})
        assert fs.config.spaces == 3
        assert fs.config.terminator_keyword == "end"

    def test_unknown_style_option(self, project: Path) -> None:
        with pytest.raises(ConfigurationError):
            FileSet({"tabs": True})

    def test_failed_update_keeps_previous_style(self, project: Path) -> None:
        fs = FileSet({"spaces": 4})
        with pytest.raises(ConfigurationError):
            fs.update_style({"spaces": 0})
        assert fs["style"]["spaces"] == 4

    def test_style_is_a_copy(self, project: Path) -> None:
        fs = FileSet()
        fs["style"]["spaces"] = 8
        assert fs.config.spaces == 2


class TestItemAccess:
    """Only "style" and "file_list" may be looked up."""

    def test_file_list_key(self, project: Path) -> None:
        fs = FileSet(file_expression="script.rb")
        assert fs["file_list"] is fs.file_list

    def test_invalid_key(self, project: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            FileSet()["files"]
        assert exc_info.value.key == "files"
