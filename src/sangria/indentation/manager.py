"""Indentation state machine.

Consumes the lexer's event stream one event at a time and keeps two
expectations: where the current line should be indented and where the
next one should be. Reasons for indenting (blocks, enclosures, continued
expressions) live on an :class:`IndentReasonStack`; when a reason
resolves, the level recorded with it comes back.

Only hard line breaks are compared. A soft break (inside an unfinished
expression) just promotes the next-line expectation.

Thread Safety:
IndentationManager instances are single-use, one per file.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from sangria.config import DEFAULT_CONFIG, IndentConfig
from sangria.indentation.reasons import IndentReason, IndentReasonStack
from sangria.lexer.lines import LexedLine
from sangria.problems import Problem
from sangria.tokens import CLOSERS, OPENERS, LexEvent, LexEventType
from sangria.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class IndentState:
    """Mutable per-file expectations.

    Attributes:
        this_line: Expected indentation of the line being read
        next_line: Expected indentation of the line after it
        actual: Measured indentation of the last compared line

    """

    this_line: int = 0
    next_line: int = 0
    actual: int = 0


class IndentationManager:
    """Tracks expected indentation across one file.

    Usage:
        >>> from sangria.lexer import Lexer, group_lines
        >>> events = list(Lexer("def f\\nx\\nend\\n").tokenize())
        >>> manager = IndentationManager()
        >>> [p.line for p in manager.run(events, group_lines(events))]
        [2]

    Never raises: a closer with nothing to close is logged and leaves the
    expectations as they were.

    """

    __slots__ = (
        "_config",
        "_spaces",
        "_file_path",
        "_state",
        "_reasons",
        "_problems",
        "_outdented_line",
    )

    def __init__(
        self,
        config: IndentConfig | None = None,
        file_path: str = "<string>",
    ) -> None:
        """Initialize with empty state.

        Args:
            config: Indentation style (defaults to DEFAULT_CONFIG)
            file_path: Path recorded on every Problem
        """
        self._config = config or DEFAULT_CONFIG
        self._spaces = self._config.spaces
        self._file_path = file_path
        self._state = IndentState()
        self._reasons = IndentReasonStack()
        self._problems: list[Problem] = []
        # Line whose expectation was already outdented by a closer
        self._outdented_line = 0

    # =========================================================================
    # Public state
    # =========================================================================

    @property
    def config(self) -> IndentConfig:
        return self._config

    @property
    def state(self) -> IndentState:
        return self._state

    @property
    def indent_reasons(self) -> IndentReasonStack:
        return self._reasons

    @property
    def problems(self) -> list[Problem]:
        """Problems found so far, in line order."""
        return list(self._problems)

    def should_be_at(self) -> int:
        """Expected indentation of the current line."""
        return self._state.this_line

    def next_should_be_at(self) -> int:
        return self._state.next_line

    # =========================================================================
    # Driving
    # =========================================================================

    def run(
        self,
        events: Iterable[LexEvent],
        lines: Mapping[int, LexedLine],
    ) -> list[Problem]:
        """Feed a whole file's events and return its problems.

        Args:
            events: Events in source order
            lines: LexedLines from :func:`sangria.lexer.group_lines`

        Returns:
            Problems in line order.
        """
        for event in events:
            lexed_line = lines.get(event.line)
            if lexed_line is None:
                lexed_line = LexedLine((), event.line)
            self.feed(event, lexed_line)
        return self.problems

    def feed(self, event: LexEvent, lexed_line: LexedLine) -> None:
        """Apply one event.

        Args:
            event: The event
            lexed_line: The LexedLine of the line the event starts on
        """
        event_type = event.type
        if event_type in OPENERS:
            self.update_for_opening_reason(event, lexed_line)
        elif event_type in CLOSERS:
            self.update_for_closing_reason(event, lexed_line)
        elif event_type == LexEventType.KEYWORD:
            self._keyword_update(event, lexed_line)
        elif event_type == LexEventType.MODIFIER_KEYWORD:
            self._log(event.line, "Found modifier %r; no indent reason.", event.value)
        elif event_type == LexEventType.SOFT_NEWLINE:
            self.soft_newline_update(lexed_line)
        elif event_type == LexEventType.HARD_NEWLINE:
            self.hard_newline_update(lexed_line)

    def _keyword_update(self, event: LexEvent, lexed_line: LexedLine) -> None:
        token = event.value
        config = self._config
        if config.is_continuation_keyword(token):
            self.update_for_continuation_reason(event, lexed_line)
        elif config.is_indent_keyword(token):
            self.update_for_opening_reason(event, lexed_line)
        elif config.is_terminator(token):
            self.update_for_closing_reason(event, lexed_line)

    # =========================================================================
    # Expectation arithmetic
    # =========================================================================

    def decrease_this_line(self, lineno: int) -> None:
        """Outdent the current line by one level, at most once per line."""
        if self._outdented_line == lineno:
            self._log(lineno, "Line already outdented; skipping.")
            return
        self._state.this_line = max(0, self._state.this_line - self._spaces)
        self._outdented_line = lineno
        self._log(lineno, "this_line decreased to %d.", self._state.this_line)

    def transition_lines(self, lineno: int) -> None:
        """Promote the next-line expectation to the current line."""
        self._state.this_line = self._state.next_line
        self._log(lineno, "Transitioning; this_line is now %d.", self._state.this_line)

    def _reset_next_line(self) -> None:
        """Indent the next line one level past the newest reason, or to 0."""
        last = self._reasons.last
        self._state.next_line = 0 if last is None else last.should_be_at + self._spaces

    def add_indent_reason(self, event_type: LexEventType, token: str, lineno: int) -> IndentReason:
        """Push a reason recorded at the current line's expectation.

        Returns:
            The new reason.
        """
        reason = IndentReason(
            event_type=event_type,
            token=token,
            lineno=lineno,
            should_be_at=self._state.this_line,
        )
        self._reasons.push(reason)
        self._state.next_line = reason.should_be_at + self._spaces
        self._log(
            lineno,
            "Added indent reason %r; next_line is now %d.",
            token,
            self._state.next_line,
        )
        return reason

    # =========================================================================
    # Event updates
    # =========================================================================

    def update_for_opening_reason(self, event: LexEvent, lexed_line: LexedLine) -> None:
        """Open a block or enclosure."""
        if event.type == LexEventType.MODIFIER_KEYWORD:
            self._log(event.line, "Found modifier %r; no indent reason.", event.value)
            return
        if lexed_line.is_loop_do(event):
            self._log(event.line, "Found 'do' of a loop; no indent reason.")
            return
        self.add_indent_reason(event.type, event.value, event.line)

    def update_for_continuation_reason(self, event: LexEvent, lexed_line: LexedLine) -> None:
        """Handle ``else``/``elsif``/``when``/``rescue``/``ensure``.

        The keyword's own line sits one level shallower than the body it
        starts, unless something already opened on this line.
        """
        lineno = event.line
        spaces = self._spaces
        state = self._state

        self._reasons.remove_continuation_keywords(self._config.continuation_keywords)
        on_this_line = self._reasons.find_on_line(lineno)

        if on_this_line is None and lexed_line.starts_with(event.value):
            self.decrease_this_line(lineno)

        last = self._reasons.last
        if last is None:
            state.next_line = spaces
        elif on_this_line is None:
            state.next_line = last.should_be_at + spaces
        else:
            state.next_line = max(0, last.should_be_at - spaces)

        self._reasons.push(
            IndentReason(
                event_type=event.type,
                token=event.value,
                lineno=lineno,
                should_be_at=state.this_line,
            )
        )
        self._log(lineno, "Continuation %r; next_line is now %d.", event.value, state.next_line)

    def update_for_closing_reason(self, event: LexEvent, lexed_line: LexedLine) -> None:
        """Close an enclosure or terminate a keyword block."""
        lineno = event.line
        self._reasons.remove_continuation_keywords(self._config.continuation_keywords)

        removed = self._reasons.remove_for_close(event.type)
        if removed is None:
            logger.warning(
                "%s:%d: %r closes nothing; indentation left unchanged.",
                self._file_path,
                lineno,
                event.value,
            )
            return

        self._reset_next_line()
        self._log(
            lineno,
            "%r closed %r from line %d; next_line is now %d.",
            event.value,
            removed.token,
            removed.lineno,
            self._state.next_line,
        )

        if removed.lineno < lineno and lexed_line.is_first_significant(event):
            self.decrease_this_line(lineno)

    def update_for_single_token(self, lexed_line: LexedLine) -> None:
        """Record a reason for a line that ends mid-expression."""
        last = lexed_line.last_significant()
        if lexed_line.ends_with_line_continuation():
            event_type = LexEventType.LINE_CONTINUATION
            token = "\\"
        elif last is not None and self.line_ends_with_single_token_indenter(lexed_line):
            # and/or/not continue a line like any other operator
            event_type = LexEventType.OPERATOR if last.type == LexEventType.KEYWORD else last.type
            token = last.value
        else:
            return

        lineno = lexed_line.lineno

        if self.last_indent_reason_type() == event_type:
            self._log(lineno, "Line ends with same single token as last reason.")
            return
        if event_type == LexEventType.COMMA and self.in_an_enclosure():
            self._log(lineno, "Comma inside an enclosure.")
            return
        self.add_indent_reason(event_type, token, lineno)

    def soft_newline_update(self, lexed_line: LexedLine) -> None:
        """Promote the next-line expectation without comparing."""
        self.update_for_single_token(lexed_line)
        self.transition_lines(lexed_line.lineno)

    def hard_newline_update(self, lexed_line: LexedLine) -> None:
        """Compare the finished line, settle continued expressions, then promote."""
        lineno = lexed_line.lineno
        if lexed_line.end_of_multi_line_string():
            self._log(lineno, "Line ends a multi-line literal; not measured.")
        else:
            self.update_actual_indentation(lexed_line)
            self.measure(lineno)

        if self._reasons.remove_trailing_single_tokens():
            self._reset_next_line()

        self.transition_lines(lineno)

    def update_actual_indentation(self, lexed_line: LexedLine) -> None:
        """Measure the line as the column of its first non-space event.

        Columns count characters, so a leading tab counts as one column.
        """
        first = lexed_line.first_non_space_element()
        if first is None:
            return
        self._state.actual = first.column

    def measure(self, lineno: int) -> None:
        """Record a Problem if the line's indentation is off."""
        state = self._state
        if state.actual == state.this_line:
            return
        problem = Problem.indentation(
            self._file_path,
            lineno,
            expected=state.this_line,
            actual=state.actual,
        )
        self._problems.append(problem)
        self._log(lineno, "%s", problem.message)

    # =========================================================================
    # Queries
    # =========================================================================

    def in_an_enclosure(self) -> bool:
        """True if the innermost non-single-token reason is a brace, bracket or paren."""
        for reason in reversed(list(self._reasons)):
            if reason.is_single_token:
                continue
            return reason.is_enclosure
        return False

    def last_indent_reason_type(self) -> LexEventType | None:
        last = self._reasons.last
        return None if last is None else last.event_type

    def line_ends_with_single_token_indenter(self, lexed_line: LexedLine) -> bool:
        return (
            lexed_line.ends_with_op()
            or lexed_line.ends_with_comma()
            or lexed_line.ends_with_period()
            or lexed_line.ends_with_label()
            or lexed_line.ends_with_modifier_kw()
        )

    def _multi_line(self, token: str, lineno: int) -> bool:
        reasons = self._reasons.find_all(token)
        if not reasons:
            return False
        return all(reason.lineno != lineno for reason in reasons)

    def multi_line_brackets(self, lineno: int) -> bool:
        """True if an open ``[`` exists and none opened on ``lineno``."""
        return self._multi_line("[", lineno)

    def multi_line_braces(self, lineno: int) -> bool:
        """True if an open ``{`` exists and none opened on ``lineno``."""
        return self._multi_line("{", lineno)

    def multi_line_parens(self, lineno: int) -> bool:
        """True if an open ``(`` exists and none opened on ``lineno``."""
        return self._multi_line("(", lineno)

    def _log(self, lineno: int, message: str, *args: object) -> None:
        logger.debug("%d: " + message, lineno, *args)
