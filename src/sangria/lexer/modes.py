"""Lexer operating modes and constants.

This module defines the finite state machine modes for the lexer
and the constant sets used to classify words and punctuation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from sangria.tokens import LexEventType


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes based on context:
    - CODE: Scanning ordinary source tokens
    - HEREDOC: Reading the bodies of heredocs opened on the previous line
    - DATA: After ``__END__``; the rest of the file is not code

    """

    CODE = auto()
    HEREDOC = auto()
    DATA = auto()


class BlockParamState(Enum):
    """Tracks ``|a, b|`` after ``do`` or ``{``."""

    NONE = auto()
    EXPECTED = auto()  # Just saw do / {
    OPEN = auto()  # Inside |...|


# Every reserved word of the language.
KEYWORDS = frozenset(
    {
        "BEGIN",
        "END",
        "__ENCODING__",
        "__FILE__",
        "__LINE__",
        "alias",
        "and",
        "begin",
        "break",
        "case",
        "class",
        "def",
        "defined?",
        "do",
        "else",
        "elsif",
        "end",
        "ensure",
        "false",
        "for",
        "if",
        "in",
        "module",
        "next",
        "nil",
        "not",
        "or",
        "redo",
        "rescue",
        "retry",
        "return",
        "self",
        "super",
        "then",
        "true",
        "undef",
        "unless",
        "until",
        "when",
        "while",
        "yield",
    }
)

# Keywords that may trail a complete statement: `foo if bar`.
MODIFIER_CAPABLE_KEYWORDS = frozenset({"if", "unless", "while", "until", "rescue"})

# Keywords that behave like values (an operator may follow them).
VALUE_KEYWORDS = frozenset(
    {"end", "self", "nil", "true", "false", "__FILE__", "__LINE__", "__ENCODING__"}
)

# Keywords after which an if/unless/... is still a modifier: `return if x`.
MODIFIER_AFTER_KEYWORDS = VALUE_KEYWORDS | frozenset(
    {"return", "break", "next", "redo", "retry", "yield", "super"}
)

# Keywords that act as boolean operators; a line ending in one continues.
OPERATOR_KEYWORDS = frozenset({"and", "or", "not"})

# Loop keywords whose optional `do` introduces no extra block.
LOOP_KEYWORDS = frozenset({"while", "until", "for"})

# Event types that end an operand; an operator usually follows them.
VALUE_TYPES = frozenset(
    {
        LexEventType.IDENTIFIER,
        LexEventType.CONSTANT,
        LexEventType.IVAR,
        LexEventType.CVAR,
        LexEventType.GVAR,
        LexEventType.NUMBER,
        LexEventType.SYMBOL,
        LexEventType.CHAR,
        LexEventType.STRING,
        LexEventType.HEREDOC_START,
        LexEventType.RBRACE,
        LexEventType.RBRACKET,
        LexEventType.RPAREN,
    }
)

# Event types that leave an expression unfinished at the end of a line.
SINGLE_TOKEN_TYPES = frozenset(
    {
        LexEventType.OPERATOR,
        LexEventType.COMMA,
        LexEventType.PERIOD,
        LexEventType.LABEL,
        LexEventType.MODIFIER_KEYWORD,
    }
)

# Longest first so that a prefix never shadows a longer operator.
OPERATORS = (
    "**=",
    "<=>",
    "===",
    "...",
    "<<=",
    ">>=",
    "&&=",
    "||=",
    "**",
    "==",
    "!=",
    ">=",
    "<=",
    "&&",
    "||",
    "<<",
    ">>",
    "=~",
    "!~",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "|=",
    "&=",
    "^=",
    "=>",
    "->",
    "..",
    "::",
    "+",
    "-",
    "*",
    "/",
    "%",
    "=",
    "<",
    ">",
    "!",
    "&",
    "|",
    "^",
    "~",
    "?",
    ":",
)

# Operator method names usable as symbols: :<=>, :[]=, :+@ ...
SYMBOL_OPERATORS = (
    "[]=",
    "[]",
    "<=>",
    "===",
    "==",
    "=~",
    "!=",
    "!~",
    "**",
    "+@",
    "-@",
    "<<",
    ">>",
    "<=",
    ">=",
    "+",
    "-",
    "*",
    "/",
    "%",
    "<",
    ">",
    "!",
    "~",
    "&",
    "|",
    "^",
)

PUNCTUATION = {
    "(": LexEventType.LPAREN,
    ")": LexEventType.RPAREN,
    "[": LexEventType.LBRACKET,
    "]": LexEventType.RBRACKET,
    "{": LexEventType.LBRACE,
    "}": LexEventType.RBRACE,
    ",": LexEventType.COMMA,
    ";": LexEventType.SEMICOLON,
}

# %q(...) family
PERCENT_LITERAL_TYPES = frozenset("qQwWiIrsx")
PERCENT_INTERPOLATING = frozenset("QWIrx")
PAIRED_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}

REGEX_FLAGS = frozenset("imxounse")

# $!, $@, $~ ... single-character global variables
GVAR_SPECIALS = frozenset("~*$?!@/\\;,.=:<>\"&`'+0")

SPACE_CHARS = frozenset(" \t\f\v\r")
DIGITS = frozenset("0123456789")
IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
IDENT_CHARS = IDENT_START | DIGITS

EMBDOC_BEGIN = "=begin"
EMBDOC_END = "=end"
DATA_MARKER = "__END__"


@dataclass(frozen=True, slots=True)
class PendingHeredoc:
    """A heredoc opened on the current line whose body starts on the next.

    Attributes:
        identifier: The terminator word (``EOS`` in ``<<~EOS``)
        indented: True for ``<<-``/``<<~``; the terminator may be indented
        start: Source position of the ``<<`` (for error messages)

    """

    identifier: str
    indented: bool
    start: int
