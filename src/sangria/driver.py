"""Run the indentation checker over sources and files.

One Lexer and one IndentationManager per file; nothing is shared between
files except the frozen IndentConfig, so files may be checked in parallel.

Thread Safety:
    All functions are safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from sangria.config import DEFAULT_CONFIG, IndentConfig
from sangria.errors import LexError
from sangria.indentation import IndentationManager
from sangria.lexer import Lexer, group_lines
from sangria.problems import Problem
from sangria.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FileReport:
    """Result of checking one file.

    Attributes:
        file_path: Path of the checked file
        problems: Indentation problems, in line order
        error: Why the file could not be checked (lex or read failure);
            None when it was checked

    """

    file_path: str
    problems: tuple[Problem, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the file was checked and has no problems."""
        return self.error is None and not self.problems


def check(
    source: str,
    *,
    file_path: str = "<string>",
    config: IndentConfig | None = None,
) -> list[Problem]:
    """Check the indentation of one source string.

    Args:
        source: Source text
        file_path: Path recorded on each Problem
        config: Indentation style (defaults to 2 spaces)

    Returns:
        Problems in line order (empty when the source is well indented).

    Raises:
        LexError: If the source cannot be lexed.

    Example:
        >>> check("def f\\n  1\\nend\\n")
        []
    """
    config = config or DEFAULT_CONFIG
    events = list(Lexer(source, source_file=file_path, config=config).tokenize())
    manager = IndentationManager(config, file_path=file_path)
    return manager.run(events, group_lines(events))


def check_file(path: str | Path, config: IndentConfig | None = None) -> FileReport:
    """Check one file; read and lex failures are reported, not raised."""
    file_path = str(path)
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", file_path, e)
        return FileReport(file_path, error=str(e))

    try:
        problems = check(source, file_path=file_path, config=config)
    except LexError as e:
        logger.warning("Could not lex %s: %s", file_path, e)
        return FileReport(file_path, error=str(e))

    logger.debug("%s: %d problem(s)", file_path, len(problems))
    return FileReport(file_path, problems=tuple(problems))


def check_files(
    paths: Iterable[str | Path],
    config: IndentConfig | None = None,
    max_workers: int | None = None,
) -> list[FileReport]:
    """Check many files.

    Args:
        paths: Files to check
        config: Indentation style shared by every file
        max_workers: Check files on this many threads; None or 1 checks
            them one after another

    Returns:
        One FileReport per path, in the order given.
    """
    paths = list(paths)
    if max_workers is None or max_workers <= 1 or len(paths) <= 1:
        return [check_file(path, config) for path in paths]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda path: check_file(path, config), paths))


__all__ = ["FileReport", "check", "check_file", "check_files"]
