"""State-machine lexer producing classified lexical events.

Implements a cursor-based approach: look at the character under the
cursor, let a classifier resolve what it means, then emit one event and
commit the position. Every emit advances, which guarantees forward progress.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from sangria.config import DEFAULT_CONFIG, IndentConfig
from sangria.errors import LexError
from sangria.lexer.classifiers import (
    KeywordClassifierMixin,
    OperandClassifierMixin,
)
from sangria.lexer.modes import BlockParamState, LexerMode, PendingHeredoc
from sangria.lexer.scanners import (
    CodeScannerMixin,
    HeredocScannerMixin,
    LiteralScannerMixin,
)
from sangria.tokens import LexEvent, LexEventType

# Events that neither end an operand nor start a statement.
_TRANSPARENT = frozenset(
    {
        LexEventType.SPACE,
        LexEventType.COMMENT,
        LexEventType.EMBDOC,
        LexEventType.HEREDOC_BODY,
        LexEventType.DATA,
    }
)


class Lexer(
    # Classifiers (pure logic, no position mutation)
    KeywordClassifierMixin,
    OperandClassifierMixin,
    # Scanners (mode-specific scanning logic)
    CodeScannerMixin,
    LiteralScannerMixin,
    HeredocScannerMixin,
):
    """State-machine lexer for keyword-block source files.

    Usage:
            >>> lexer = Lexer("def f\\n  1\\nend\\n")
            >>> for event in lexer.tokenize():
            ...     print(event)
        LexEvent(KEYWORD, 'def', 1:0)
        LexEvent(SPACE, ' ', 1:3)
        LexEvent(IDENTIFIER, 'f', 1:4)
        LexEvent(HARD_NEWLINE, '\\n', 1:5)
        ...

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_source_file",
        "_config",
        # Lookbehind state for classification
        "_prev",  # Last significant event (hard line breaks included)
        "_last_on_line",  # Last significant event since the last line break
        "_continued",  # Saw a backslash line continuation
        "_block_params",
        # Heredocs opened on the current line
        "_pending_heredocs",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        config: IndentConfig | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Source text of one file
            source_file: Optional source file path for error messages
            config: Keyword configuration (defaults to DEFAULT_CONFIG)
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 0
        self._mode = LexerMode.CODE
        self._source_file = source_file
        self._config = config or DEFAULT_CONFIG

        self._prev: LexEvent | None = None
        self._last_on_line: LexEvent | None = None
        self._continued: bool = False
        self._block_params = BlockParamState.NONE

        self._pending_heredocs: list[PendingHeredoc] = []

    def tokenize(self) -> Iterator[LexEvent]:
        """Tokenize source into an event stream.

        Yields:
            LexEvent objects one at a time, in source order.

        Raises:
            LexError: If the source cannot be lexed.

        Complexity: O(n) where n = len(source)
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

        if self._pending_heredocs:
            heredoc = self._pending_heredocs[0]
            raise self._error(
                f"unterminated heredoc; can't find string {heredoc.identifier!r}",
                heredoc.start,
            )

        # A last line without a trailing line break still ends a statement.
        if self._last_on_line is not None or self._continued:
            yield LexEvent(self._classify_newline(), "", self._lineno, self._col)

    def _dispatch_mode(self) -> Iterator[LexEvent]:
        """Dispatch to appropriate scanner based on current mode.

        Yields:
            LexEvent objects from the mode-specific scanner.
        """
        if self._mode == LexerMode.CODE:
            yield from self._scan_code()
        elif self._mode == LexerMode.HEREDOC:
            yield from self._scan_heredoc_bodies()

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF).

        Returns:
            Position of newline or end of source.
        """
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _commit_to(self, end: int) -> None:
        """Commit position to ``end``, updating line and column.

        Args:
            end: Position to commit to.
        """
        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")

        if newline_count > 0:
            last_nl = segment.rfind("\n")
            self._lineno += newline_count
            self._col = len(segment) - last_nl - 1
        else:
            self._col += len(segment)

        self._pos = end

    # =========================================================================
    # Event creation
    # =========================================================================

    def _emit(self, event_type: LexEventType, end: int) -> LexEvent:
        """Emit ``source[pos:end]`` as one event and commit position.

        Also updates the lookbehind state the classifiers read.

        Args:
            event_type: The event type.
            end: Position just past the token.

        Returns:
            The emitted event.
        """
        value = self._source[self._pos : end]
        # A trailing line break belongs to the token's last line
        body = value[:-1] if value.endswith("\n") else value
        event = LexEvent(
            type=event_type,
            value=value,
            line=self._lineno,
            column=self._col,
            end_line=self._lineno + body.count("\n"),
        )
        self._commit_to(end)
        self._track(event)
        return event

    def _track(self, event: LexEvent) -> None:
        """Update lookbehind state after an event."""
        event_type = event.type
        if event_type in _TRANSPARENT:
            return

        if event_type == LexEventType.LINE_CONTINUATION:
            self._continued = True
            return

        if event_type == LexEventType.HARD_NEWLINE or event_type == LexEventType.SOFT_NEWLINE:
            self._last_on_line = None
            self._continued = False
            if event_type == LexEventType.HARD_NEWLINE:
                self._prev = event
            return

        self._prev = event
        self._last_on_line = event

        if event_type == LexEventType.SEMICOLON:
            self._block_params = BlockParamState.NONE
        elif self._block_params == BlockParamState.EXPECTED:
            if event_type != LexEventType.BLOCK_PARAM_DELIM:
                self._block_params = BlockParamState.NONE

        if event_type == LexEventType.LBRACE or (
            event_type == LexEventType.KEYWORD and event.value == "do"
        ):
            self._block_params = BlockParamState.EXPECTED

    def _error(self, message: str, pos: int) -> LexError:
        """Build a LexError located at a source position.

        Args:
            message: Error description
            pos: Absolute source position

        Returns:
            LexError (the caller raises it).
        """
        source = self._source
        pos = max(0, min(pos, self._source_len))
        lineno = source.count("\n", 0, pos) + 1
        col = pos - (source.rfind("\n", 0, pos) + 1)
        return LexError(message, lineno=lineno, col_offset=col, source_file=self._source_file)
