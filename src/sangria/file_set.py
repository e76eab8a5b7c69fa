"""The set of files to check, and the style to check them with.

A file expression is a list of paths, a directory, a single file, or a
glob. Directories are searched recursively for source files.

Usage:
    fs = FileSet({"spaces": 4}, "lib")
    fs["file_list"]   # absolute, sorted paths
    fs.config         # IndentConfig(spaces=4, ...)

"""

from __future__ import annotations

import glob
import os
from collections.abc import Sequence
from dataclasses import fields
from pathlib import Path
from typing import Any

from sangria.config import DEFAULT_CONFIG, IndentConfig
from sangria.errors import ConfigurationError
from sangria.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_GLOB = "lib/**/*.rb"
SOURCE_SUFFIX = ".rb"

FileExpression = str | os.PathLike[str] | Sequence[str | os.PathLike[str]]


def default_style() -> dict[str, Any]:
    """The default style as a plain dict of IndentConfig fields."""
    return {f.name: getattr(DEFAULT_CONFIG, f.name) for f in fields(IndentConfig)}


def all_files_in_dir(base_dir: str | os.PathLike[str]) -> list[str]:
    """Source files anywhere below ``base_dir``."""
    return [str(p) for p in Path(base_dir).rglob(f"*{SOURCE_SUFFIX}") if p.is_file()]


class FileSet:
    """Files to check plus their style.

    Raises:
        ConfigurationError: On unknown style options, or on ``fs[key]``
            for anything but "style" and "file_list".

    """

    __slots__ = ("_style", "_config", "file_list")

    def __init__(
        self,
        style: dict[str, Any] | None = None,
        file_expression: FileExpression | None = None,
    ) -> None:
        self._style = default_style()
        self._config = DEFAULT_CONFIG
        if style:
            self.update_style(style)

        if file_expression is None:
            file_expression = DEFAULT_GLOB
        self.file_list: list[str] = self.build_file_list(file_expression)

    @property
    def style(self) -> dict[str, Any]:
        return dict(self._style)

    @property
    def config(self) -> IndentConfig:
        return self._config

    def build_file_list(self, file_expression: FileExpression) -> list[str]:
        """Resolve a file expression to absolute, existing, sorted paths.

        Args:
            file_expression: A list of paths, a directory, a file or a glob

        Returns:
            De-duplicated absolute paths in sorted order.
        """
        if isinstance(file_expression, (list, tuple)):
            logger.debug("File expression is a list: %s", file_expression)
            files: list[str] = []
            for entry in file_expression:
                if os.path.isdir(entry):
                    files.extend(all_files_in_dir(entry))
                else:
                    files.append(os.fspath(entry))
        elif os.path.isdir(file_expression):
            logger.debug("File expression is a directory: %s", file_expression)
            files = all_files_in_dir(file_expression)
        elif os.path.isfile(file_expression):
            logger.debug("File expression is a single file: %s", file_expression)
            files = [os.fspath(file_expression)]
        else:
            logger.debug("File expression is a glob: %s", file_expression)
            files = glob.glob(os.fspath(file_expression), recursive=True)

        absolute = {os.path.abspath(f) for f in files}
        return sorted(f for f in absolute if os.path.isfile(f))

    def update_file_list(self, file_expression: FileExpression) -> None:
        """Add the files of another expression, keeping existing order."""
        for path in self.build_file_list(file_expression):
            if path not in self.file_list:
                self.file_list.append(path)

    def update_style(self, new_style: dict[str, Any]) -> None:
        """Merge style options; the result must be a valid IndentConfig.

        Raises:
            ConfigurationError: On unknown options or invalid values.
        """
        merged = {**self._style, **new_style}
        self._config = IndentConfig.from_dict(merged)
        self._style = merged

    def __getitem__(self, key: str) -> Any:
        if key == "style":
            return self.style
        if key == "file_list":
            return self.file_list
        raise ConfigurationError(key, "invalid key requested")

    def __repr__(self) -> str:
        return f"FileSet(style={self._style!r}, files={len(self.file_list)})"


__all__ = ["DEFAULT_GLOB", "FileSet"]
