"""LexEvent and LexEventType definitions for the Sangria lexer.

The lexer produces a stream of LexEvent objects that the indentation
manager consumes. Each event has a type, the raw source text, and the
position it starts at.

Thread Safety:
LexEvent is frozen (immutable) and safe to share across threads.
LexEventType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class LexEventType(Enum):
    """Event types produced by the lexer.

    Organized by category for clarity:
    - Line structure (newlines, spaces, comments)
    - Keywords
    - Enclosures (braces, brackets, parens)
    - Continuation tokens (operators, commas, periods, labels)
    - Values (identifiers, literals)

    """

    # Line structure
    HARD_NEWLINE = auto()  # Statement boundary; indentation is compared
    SOFT_NEWLINE = auto()  # Break inside an unfinished expression
    SPACE = auto()
    COMMENT = auto()  # # ...
    EMBDOC = auto()  # =begin ... =end
    LINE_CONTINUATION = auto()  # \ before a newline
    SEMICOLON = auto()
    DATA = auto()  # Everything after __END__

    # Keywords
    KEYWORD = auto()
    MODIFIER_KEYWORD = auto()  # foo if bar

    # Enclosures
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LPAREN = auto()
    RPAREN = auto()

    # Continuation tokens
    OPERATOR = auto()
    COMMA = auto()
    PERIOD = auto()
    LABEL = auto()  # key:
    BLOCK_PARAM_DELIM = auto()  # |a, b|

    # Values
    IDENTIFIER = auto()
    CONSTANT = auto()
    IVAR = auto()  # @name
    CVAR = auto()  # @@name
    GVAR = auto()  # $name
    NUMBER = auto()
    SYMBOL = auto()
    CHAR = auto()  # ?a
    STRING = auto()  # quotes, backticks, %-literals, regexps
    HEREDOC_START = auto()  # <<~EOS
    HEREDOC_BODY = auto()


OPENERS = frozenset({LexEventType.LBRACE, LexEventType.LBRACKET, LexEventType.LPAREN})
CLOSERS = frozenset({LexEventType.RBRACE, LexEventType.RBRACKET, LexEventType.RPAREN})
NEWLINES = frozenset({LexEventType.HARD_NEWLINE, LexEventType.SOFT_NEWLINE})

# Events that carry no code: skipped when looking for a line's first or last
# significant token.
INSIGNIFICANT = frozenset(
    {
        LexEventType.SPACE,
        LexEventType.COMMENT,
        LexEventType.EMBDOC,
        LexEventType.HARD_NEWLINE,
        LexEventType.SOFT_NEWLINE,
        LexEventType.LINE_CONTINUATION,
    }
)

# Look-up table that allows for OPEN_EVENT_FOR[LexEventType.RBRACE].
OPEN_EVENT_FOR = {
    LexEventType.KEYWORD: LexEventType.KEYWORD,
    LexEventType.RBRACE: LexEventType.LBRACE,
    LexEventType.RBRACKET: LexEventType.LBRACKET,
    LexEventType.RPAREN: LexEventType.LPAREN,
}


@dataclass(frozen=True, slots=True)
class LexEvent:
    """A single classified token.

    Attributes:
        type: The event type (from LexEventType enum)
        value: The raw string value from source
        line: Start line number (1-indexed)
        column: Start column (0-indexed character offset in the line)
        end_line: Last line the token covers (multi-line literals);
            defaults to ``line``.

    """

    type: LexEventType
    value: str
    line: int
    column: int
    end_line: int = 0

    def __post_init__(self) -> None:
        if self.end_line < self.line:
            object.__setattr__(self, "end_line", self.line)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"LexEvent({self.type.name}, {val!r}, {self.line}:{self.column})"

    @property
    def is_multi_line(self) -> bool:
        """True if the token spans more than one physical line."""
        return self.end_line > self.line
