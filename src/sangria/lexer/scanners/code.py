"""Code mode scanner mixin."""

from __future__ import annotations

import re
from collections.abc import Iterator

from sangria.errors import LexError
from sangria.lexer.modes import (
    DATA_MARKER,
    DIGITS,
    EMBDOC_BEGIN,
    EMBDOC_END,
    GVAR_SPECIALS,
    IDENT_CHARS,
    IDENT_START,
    OPERATORS,
    PUNCTUATION,
    SPACE_CHARS,
    BlockParamState,
    LexerMode,
    PendingHeredoc,
)
from sangria.tokens import LexEvent, LexEventType

_NUMBER_RE = re.compile(
    r"(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oOdD]?[0-9_]+"
    r"|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d[\d_]*)?)(?:ri|r|i)?"
)


def _is_ident_char(char: str) -> bool:
    return char in IDENT_CHARS or ord(char) > 127


class CodeScannerMixin:
    """Mixin providing code mode scanning logic.

    Scans one token per call:
    1. Look at the character under the cursor
    2. Find where the token ends (classifiers resolve ambiguities)
    3. Emit the event and commit position (always advances)

    """

    # These will be set by the Lexer class or other mixins
    _source: str
    _source_len: int
    _pos: int
    _col: int
    _mode: LexerMode
    _block_params: BlockParamState
    _pending_heredocs: list[PendingHeredoc]

    def _emit(self, event_type: LexEventType, end: int) -> LexEvent:
        """Emit source[pos:end] as one event and commit. Implemented by Lexer."""
        raise NotImplementedError

    def _error(self, message: str, pos: int) -> LexError:
        """Build a LexError at a source position. Implemented by Lexer."""
        raise NotImplementedError

    def _find_line_end(self) -> int:
        raise NotImplementedError

    def _classify_word(self, word: str, end: int) -> LexEventType:
        raise NotImplementedError

    def _classify_newline(self) -> LexEventType:
        raise NotImplementedError

    def _operand_expected(self, width: int = 1) -> bool:
        raise NotImplementedError

    def _space_at(self, pos: int) -> bool:
        raise NotImplementedError

    def _scan_code(self) -> Iterator[LexEvent]:
        """Scan the next token in code mode."""
        source = self._source
        pos = self._pos
        char = source[pos]

        if self._col == 0:
            if source.startswith(EMBDOC_BEGIN, pos) and self._space_at(
                pos + len(EMBDOC_BEGIN)
            ):
                yield self._scan_embdoc()
                return
            if self._at_data_marker():
                self._mode = LexerMode.DATA
                yield self._emit(LexEventType.DATA, self._source_len)
                return

        if char == "\n":
            yield self._scan_newline()
        elif char in SPACE_CHARS:
            end = pos + 1
            while end < self._source_len and source[end] in SPACE_CHARS:
                end += 1
            yield self._emit(LexEventType.SPACE, end)
        elif char == "#":
            yield self._emit(LexEventType.COMMENT, self._find_line_end())
        elif char == "\\":
            yield self._scan_backslash()
        elif char in IDENT_START or ord(char) > 127:
            yield self._scan_word()
        elif char in DIGITS:
            yield self._scan_number()
        elif char == "@":
            yield self._scan_instance_variable()
        elif char == "$":
            yield self._scan_global_variable()
        elif char in "\"'`":
            yield self._scan_quoted()
        elif char == ":":
            yield self._scan_colon()
        elif char == "?":
            yield self._scan_question()
        else:
            yield self._scan_punctuation()

    def _scan_newline(self) -> LexEvent:
        """Emit a hard or soft line break, then read pending heredoc bodies."""
        event = self._emit(self._classify_newline(), self._pos + 1)
        if self._pending_heredocs:
            self._mode = LexerMode.HEREDOC
        return event

    def _scan_backslash(self) -> LexEvent:
        """A backslash outside a literal is only valid before a line break."""
        pos = self._pos
        rest = self._source[pos + 1 : pos + 3]
        if rest.startswith("\n") or rest == "\r\n":
            return self._emit(LexEventType.LINE_CONTINUATION, pos + 1)
        raise self._error("unexpected backslash", pos)

    def _scan_word(self) -> LexEvent:
        """Scan an identifier, constant, keyword or label."""
        source = self._source
        source_len = self._source_len
        end = self._pos + 1
        while end < source_len and _is_ident_char(source[end]):
            end += 1

        # Predicate and bang methods: empty? save!  (but not a != b)
        if (
            end < source_len
            and source[end] in "?!"
            and (end + 1 >= source_len or source[end + 1] != "=")
        ):
            end += 1

        word = source[self._pos : end]
        event_type = self._classify_word(word, end)
        if event_type == LexEventType.LABEL:
            end += 1
        return self._emit(event_type, end)

    def _scan_number(self) -> LexEvent:
        match = _NUMBER_RE.match(self._source, self._pos)
        # A digit always matches at least one character
        assert match is not None
        return self._emit(LexEventType.NUMBER, match.end())

    def _scan_instance_variable(self) -> LexEvent:
        source = self._source
        pos = self._pos
        event_type = LexEventType.IVAR
        start = pos + 1
        if source.startswith("@@", pos):
            event_type = LexEventType.CVAR
            start = pos + 2

        if start >= self._source_len or not (
            source[start] in IDENT_START or ord(source[start]) > 127
        ):
            raise self._error("invalid instance variable name", pos)

        end = start + 1
        while end < self._source_len and _is_ident_char(source[end]):
            end += 1
        return self._emit(event_type, end)

    def _scan_global_variable(self) -> LexEvent:
        source = self._source
        pos = self._pos
        end = pos + 1
        if end >= self._source_len:
            raise self._error("invalid global variable name", pos)

        char = source[end]
        if _is_ident_char(char):
            while end < self._source_len and _is_ident_char(source[end]):
                end += 1
        elif char == "-" and end + 1 < self._source_len and _is_ident_char(source[end + 1]):
            end += 2
        elif char in GVAR_SPECIALS:
            end += 1
        else:
            raise self._error("invalid global variable name", pos)
        return self._emit(LexEventType.GVAR, end)

    def _scan_punctuation(self) -> LexEvent:
        """Scan brackets, separators, periods, block params and operators."""
        source = self._source
        pos = self._pos
        char = source[pos]

        if char == "|" and self._block_params != BlockParamState.NONE:
            return self._scan_block_param_delimiter()

        if char == "/" and self._operand_expected():
            return self._scan_regexp()

        if char == "%" and self._operand_expected():
            event = self._try_scan_percent_literal()
            if event is not None:
                return event

        if source.startswith("<<", pos):
            event = self._try_scan_heredoc_start()
            if event is not None:
                return event

        if char == "." and not source.startswith("..", pos):
            return self._emit(LexEventType.PERIOD, pos + 1)

        if source.startswith("&.", pos):
            return self._emit(LexEventType.PERIOD, pos + 2)

        punctuation = PUNCTUATION.get(char)
        if punctuation is not None:
            return self._emit(punctuation, pos + 1)

        for operator in OPERATORS:
            if source.startswith(operator, pos):
                return self._emit(LexEventType.OPERATOR, pos + len(operator))

        raise self._error(f"invalid character {char!r}", pos)

    def _scan_block_param_delimiter(self) -> LexEvent:
        """Scan the ``|`` around block parameters."""
        pos = self._pos
        if self._block_params == BlockParamState.EXPECTED:
            if self._source.startswith("||", pos):
                # do || ... (explicitly empty parameter list)
                event = self._emit(LexEventType.BLOCK_PARAM_DELIM, pos + 2)
                self._block_params = BlockParamState.NONE
                return event
            event = self._emit(LexEventType.BLOCK_PARAM_DELIM, pos + 1)
            self._block_params = BlockParamState.OPEN
            return event

        event = self._emit(LexEventType.BLOCK_PARAM_DELIM, pos + 1)
        self._block_params = BlockParamState.NONE
        return event

    def _scan_embdoc(self) -> LexEvent:
        """Scan an ``=begin`` ... ``=end`` embedded document."""
        source = self._source
        start = self._pos
        marker = "\n" + EMBDOC_END
        search = start
        while True:
            idx = source.find(marker, search)
            if idx == -1:
                raise self._error("embedded document meets end of file", start)
            if self._space_at(idx + len(marker)):
                break
            search = idx + 1

        line_end = source.find("\n", idx + 1)
        end = self._source_len if line_end == -1 else line_end + 1
        return self._emit(LexEventType.EMBDOC, end)

    def _at_data_marker(self) -> bool:
        source = self._source
        pos = self._pos
        if not source.startswith(DATA_MARKER, pos):
            return False
        after = pos + len(DATA_MARKER)
        return after >= self._source_len or source[after] in "\r\n"
