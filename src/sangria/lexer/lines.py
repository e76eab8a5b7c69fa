"""Per-line views over the lexer's event stream.

The indentation manager reasons about physical lines: where the first
token of a line sits, what the last token of a line is, whether a line
is nothing but a closing delimiter. LexedLine answers those questions
for the events that start on one line.

Thread Safety:
LexedLine is read-only after construction and safe to share.

"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator, Sequence

from sangria.config import DEFAULT_TERMINATOR_KEYWORD
from sangria.lexer.modes import LOOP_KEYWORDS, OPERATOR_KEYWORDS
from sangria.tokens import INSIGNIFICANT, OPENERS, LexEvent, LexEventType

# Tokens whose every covered line is exempt, not only the tail.
_WHOLLY_EXEMPT = frozenset(
    {LexEventType.HEREDOC_BODY, LexEventType.EMBDOC, LexEventType.DATA}
)

_LINE_END_FILLER = frozenset(
    {LexEventType.SPACE, LexEventType.HARD_NEWLINE, LexEventType.SOFT_NEWLINE}
)


class LexedLine:
    """The lexed events of one physical source line, in column order.

    Attributes:
        lineno: Line number (1-indexed)

    """

    __slots__ = ("_events", "_significant", "_exempt", "lineno")

    def __init__(
        self,
        events: Sequence[LexEvent],
        lineno: int,
        *,
        exempt: bool = False,
    ) -> None:
        """Initialize a line view.

        Args:
            events: Events starting on this line
            lineno: Line number (1-indexed)
            exempt: True if the line lies inside a multi-line literal
        """
        self._events = tuple(events)
        self._significant = tuple(e for e in self._events if e.type not in INSIGNIFICANT)
        self._exempt = exempt
        self.lineno = lineno

    def __iter__(self) -> Iterator[LexEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __str__(self) -> str:
        """The line's source text as far as its own events reach."""
        return "".join(e.value for e in self._events).split("\n", 1)[0]

    def __repr__(self) -> str:
        return f"LexedLine({self.lineno}, {str(self)!r})"

    @property
    def events(self) -> tuple[LexEvent, ...]:
        return self._events

    # =========================================================================
    # First / last tokens
    # =========================================================================

    def first_non_space_element(self) -> LexEvent | None:
        """Return the first event that is not whitespace."""
        for event in self._events:
            if event.type != LexEventType.SPACE:
                return event
        return None

    def first_significant(self) -> LexEvent | None:
        """Return the first code event (no spaces, comments, line breaks)."""
        return self._significant[0] if self._significant else None

    def last_significant(self) -> LexEvent | None:
        """Return the last code event before the line break."""
        return self._significant[-1] if self._significant else None

    def is_first_significant(self, event: LexEvent) -> bool:
        return bool(self._significant) and self._significant[0] is event

    def is_blank(self) -> bool:
        """True if the line holds no code (blank or comment only)."""
        return not self._significant

    def end_of_multi_line_string(self) -> bool:
        """True if the line lies inside (or ends) a multi-line literal.

        Such lines are exempt from indentation comparison.
        """
        return self._exempt

    def starts_with(self, text: str) -> bool:
        """Check if the line, ignoring leading whitespace, begins with ``text``."""
        first = self.first_significant()
        return first is not None and first.value == text

    # =========================================================================
    # Lines consisting solely of one closer
    # =========================================================================

    def _only(self, event_type: LexEventType, value: str | None = None) -> bool:
        if len(self._significant) != 1:
            return False
        event = self._significant[0]
        return event.type == event_type and (value is None or event.value == value)

    def only_rbrace(self) -> bool:
        return self._only(LexEventType.RBRACE)

    def only_rbracket(self) -> bool:
        return self._only(LexEventType.RBRACKET)

    def only_rparen(self) -> bool:
        return self._only(LexEventType.RPAREN)

    def only_end(self, terminator: str = DEFAULT_TERMINATOR_KEYWORD) -> bool:
        return self._only(LexEventType.KEYWORD, terminator)

    def only_closer(self, event_type: LexEventType) -> bool:
        """Check if the line is nothing but one closer of ``event_type``.

        ``event_type`` is RBRACE, RBRACKET, RPAREN, or KEYWORD (terminator).
        """
        if event_type == LexEventType.KEYWORD:
            return self.only_end()
        return self._only(event_type)

    # =========================================================================
    # Line endings
    # =========================================================================

    def _ends_with(self, event_type: LexEventType) -> bool:
        last = self.last_significant()
        return last is not None and last.type == event_type

    def ends_with_op(self) -> bool:
        last = self.last_significant()
        if last is None:
            return False
        if last.type == LexEventType.OPERATOR:
            return True
        return last.type == LexEventType.KEYWORD and last.value in OPERATOR_KEYWORDS

    def ends_with_comma(self) -> bool:
        return self._ends_with(LexEventType.COMMA)

    def ends_with_period(self) -> bool:
        return self._ends_with(LexEventType.PERIOD)

    def ends_with_label(self) -> bool:
        return self._ends_with(LexEventType.LABEL)

    def ends_with_modifier_kw(self) -> bool:
        return self._ends_with(LexEventType.MODIFIER_KEYWORD)

    def ends_with_line_continuation(self) -> bool:
        """True if a backslash continues the line."""
        for event in reversed(self._events):
            if event.type in _LINE_END_FILLER:
                continue
            return event.type == LexEventType.LINE_CONTINUATION
        return False

    def ends_with_opener(self) -> bool:
        last = self.last_significant()
        return last is not None and last.type in OPENERS

    # =========================================================================
    # Keyword context
    # =========================================================================

    def is_loop_do(self, event: LexEvent) -> bool:
        """Check if a ``do`` is the optional introducer of a loop on this line.

        ``while x do`` opens one block, owned by ``while``.
        """
        if event.type != LexEventType.KEYWORD or event.value != "do":
            return False

        owner: LexEvent | None = None
        for other in self._significant:
            if other is event:
                return owner is not None
            if other.type != LexEventType.KEYWORD:
                continue
            if other.value in LOOP_KEYWORDS:
                owner = other
            elif other.value == "do":
                owner = None
        return False


def group_lines(events: Iterable[LexEvent]) -> dict[int, LexedLine]:
    """Group an event stream into one LexedLine per physical line.

    Every line from 1 to the last covered line gets an entry, including
    lines covered only by a multi-line literal (those carry no events of
    their own and are marked exempt).

    Args:
        events: Events in source order

    Returns:
        Mapping of line number to LexedLine.
    """
    buckets: dict[int, list[LexEvent]] = defaultdict(list)
    exempt: set[int] = set()
    last_line = 0

    for event in events:
        buckets[event.line].append(event)
        if event.type in _WHOLLY_EXEMPT:
            exempt.update(range(event.line, event.end_line + 1))
        elif event.end_line > event.line:
            exempt.update(range(event.line + 1, event.end_line + 1))
        last_line = max(last_line, event.end_line)

    return {
        lineno: LexedLine(buckets.get(lineno, ()), lineno, exempt=lineno in exempt)
        for lineno in range(1, last_line + 1)
    }
