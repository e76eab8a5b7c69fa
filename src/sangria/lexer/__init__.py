"""Modular state-machine lexer for the Sangria indentation checker.

This package turns source text into a stream of classified lexical
events and groups them into per-line views.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode, LexedLine, group_lines
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum, keyword and operator constants
├── lines.py             # LexedLine per-line view, group_lines
├── classifiers/         # Ambiguity resolution mixins
│   ├── keyword.py       # Keyword / modifier / label / method name
│   └── operand.py       # Operand vs operator, hard vs soft line breaks
└── scanners/            # Mode-specific scanners
    ├── code.py          # Code mode (main dispatch)
    ├── literal.py       # Strings, symbols, regexps, %-literals
    └── heredoc.py       # Heredoc bodies

Usage:
    >>> from sangria.lexer import Lexer, group_lines
    >>> events = list(Lexer("if x\\n  y\\nend\\n").tokenize())
    >>> lines = group_lines(events)
    >>> lines[2].first_non_space_element()
    LexEvent(IDENTIFIER, 'y', 2:2)

"""

from collections.abc import Iterator

from sangria.config import IndentConfig
from sangria.lexer.core import Lexer
from sangria.lexer.lines import LexedLine, group_lines
from sangria.lexer.modes import LexerMode
from sangria.tokens import LexEvent


def tokenize(
    source: str,
    source_file: str | None = None,
    config: IndentConfig | None = None,
) -> Iterator[LexEvent]:
    """Tokenize ``source`` with a fresh Lexer.

    Raises:
        LexError: If the source cannot be lexed.
    """
    return Lexer(source, source_file=source_file, config=config).tokenize()


__all__ = ["LexedLine", "Lexer", "LexerMode", "group_lines", "tokenize"]
