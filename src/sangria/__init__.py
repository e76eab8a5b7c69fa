"""
Sangria: indentation checker for keyword-block source files.

Computes, for every line of a file, the indentation the line should have
(from ``class``/``def``/``do``...``end`` blocks, brackets, and statements
continued across lines) and reports the lines that differ.

Quick Start:
    >>> from sangria import check
    >>> check("def f\\n  if x\\n    y\\n  end\\nend\\n")
    []
    >>> [p.message for p in check("def f\\ny\\nend\\n")]
    ['Line is indented to column 0, but should be at 2.']

    >>> # Four spaces per level
    >>> from sangria import IndentConfig
    >>> check("if x\\n    y\\nend\\n", config=IndentConfig(spaces=4))
    []

Files:
    >>> from sangria import check_files
    >>> reports = check_files(["lib/a.rb", "lib/b.rb"], max_workers=4)

Command line:
    sangria lib --spaces 2 --format json
"""

from sangria.config import DEFAULT_CONFIG, IndentConfig
from sangria.driver import FileReport, check, check_file, check_files
from sangria.errors import ConfigurationError, LexError, SangriaError
from sangria.file_set import FileSet
from sangria.indentation import IndentationManager, IndentReason, IndentState
from sangria.lexer import LexedLine, Lexer, group_lines, tokenize
from sangria.problems import Problem
from sangria.tokens import LexEvent, LexEventType

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigurationError",
    "FileReport",
    "FileSet",
    "IndentConfig",
    "IndentReason",
    "IndentState",
    "IndentationManager",
    "LexError",
    "LexEvent",
    "LexEventType",
    "LexedLine",
    "Lexer",
    "Problem",
    "SangriaError",
    "__version__",
    "check",
    "check_file",
    "check_files",
    "group_lines",
    "tokenize",
]
