"""Literal scanner mixin: strings, symbols, regexps, %-literals, heredoc starts.

A literal is always emitted as a single event, however many lines it
covers; line breaks inside it never become newline events.
"""

from __future__ import annotations

import re

from sangria.errors import LexError
from sangria.lexer.modes import (
    IDENT_CHARS,
    IDENT_START,
    PAIRED_DELIMITERS,
    PERCENT_INTERPOLATING,
    PERCENT_LITERAL_TYPES,
    REGEX_FLAGS,
    SYMBOL_OPERATORS,
    PendingHeredoc,
)
from sangria.tokens import LexEvent, LexEventType

_HEREDOC_START_RE = re.compile(
    r"<<(?P<flag>[~-]?)"
    r"(?:(?P<quote>[\"'`])(?P<quoted_id>[^\"'`\n]+)(?P=quote)|(?P<id>[A-Za-z_]\w*))"
)


class LiteralScannerMixin:
    """Mixin providing literal scanning logic."""

    _source: str
    _source_len: int
    _pos: int
    _prev: LexEvent | None
    _pending_heredocs: list[PendingHeredoc]

    def _emit(self, event_type: LexEventType, end: int) -> LexEvent:
        raise NotImplementedError

    def _error(self, message: str, pos: int) -> LexError:
        raise NotImplementedError

    def _operand_expected(self, width: int = 1) -> bool:
        raise NotImplementedError

    def _space_at(self, pos: int) -> bool:
        raise NotImplementedError

    def _space_before(self) -> bool:
        raise NotImplementedError

    def _prev_is_value(self) -> bool:
        raise NotImplementedError

    # =========================================================================
    # Delimiter matching
    # =========================================================================

    def _find_literal_end(
        self,
        start: int,
        open_char: str,
        close_char: str,
        *,
        interpolate: bool,
        nestable: bool,
    ) -> int:
        """Find the position just past a literal's closing delimiter.

        Args:
            start: Position of the first character after the opening delimiter
            open_char: Opening delimiter (counted only when nestable)
            close_char: Closing delimiter
            interpolate: Whether ``#{...}`` interpolation is recognized
            nestable: Whether nested open/close pairs are counted (``%w(a (b))``)

        Returns:
            Position after the closing delimiter.

        Raises:
            LexError: If the source ends first.
        """
        source = self._source
        source_len = self._source_len
        depth = 0
        i = start
        while i < source_len:
            char = source[i]
            if char == "\\":
                i += 2
                continue
            if interpolate and char == "#" and source.startswith("{", i + 1):
                i = self._find_interpolation_end(i + 2)
                continue
            if nestable and char == open_char:
                depth += 1
            elif char == close_char:
                if depth == 0:
                    return i + 1
                depth -= 1
            i += 1
        raise self._error("unterminated literal", start - 1)

    def _find_interpolation_end(self, start: int) -> int:
        """Find the position just past the ``}`` closing ``#{``."""
        source = self._source
        source_len = self._source_len
        depth = 0
        i = start
        while i < source_len:
            char = source[i]
            if char == "\\":
                i += 2
                continue
            if char in "\"'`":
                i = self._find_literal_end(
                    i + 1, char, char, interpolate=char != "'", nestable=False
                )
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                if depth == 0:
                    return i + 1
                depth -= 1
            i += 1
        raise self._error("unterminated interpolation", start - 2)

    # =========================================================================
    # Literals
    # =========================================================================

    def _scan_quoted(self) -> LexEvent:
        """Scan '...', "..." or `...`."""
        pos = self._pos
        quote = self._source[pos]
        prev = self._prev
        if quote == "`" and prev is not None:
            # def `(cmd) / obj.` name a method, not a command string
            if prev.type == LexEventType.PERIOD or (
                prev.type == LexEventType.KEYWORD and prev.value == "def"
            ):
                return self._emit(LexEventType.IDENTIFIER, pos + 1)

        end = self._find_literal_end(
            pos + 1, quote, quote, interpolate=quote != "'", nestable=False
        )
        return self._emit(LexEventType.STRING, end)

    def _scan_regexp(self) -> LexEvent:
        end = self._find_literal_end(
            self._pos + 1, "/", "/", interpolate=True, nestable=False
        )
        return self._emit(LexEventType.STRING, self._skip_flags(end))

    def _skip_flags(self, pos: int) -> int:
        source = self._source
        while pos < self._source_len and source[pos] in REGEX_FLAGS:
            pos += 1
        return pos

    def _try_scan_percent_literal(self) -> LexEvent | None:
        """Try to scan a %-literal such as ``%w[a b]`` or ``%(text)``.

        Returns:
            The literal event, or None if the ``%`` is an operator.
        """
        source = self._source
        pos = self._pos
        nxt = source[pos + 1] if pos + 1 < self._source_len else ""

        if (
            nxt in PERCENT_LITERAL_TYPES
            and nxt
            and pos + 2 < self._source_len
            and not source[pos + 2].isalnum()
            and not self._space_at(pos + 2)
        ):
            kind = nxt
            open_char = source[pos + 2]
            start = pos + 3
        elif nxt and not nxt.isalnum() and not self._space_at(pos + 1) and nxt != "=":
            kind = "Q"
            open_char = nxt
            start = pos + 2
        else:
            return None

        close_char = PAIRED_DELIMITERS.get(open_char, open_char)
        end = self._find_literal_end(
            start,
            open_char,
            close_char,
            interpolate=kind in PERCENT_INTERPOLATING,
            nestable=open_char in PAIRED_DELIMITERS,
        )
        if kind == "r":
            end = self._skip_flags(end)
        event_type = LexEventType.SYMBOL if kind == "s" else LexEventType.STRING
        return self._emit(event_type, end)

    def _scan_colon(self) -> LexEvent:
        """Scan ``::``, a symbol, or a ternary/label colon."""
        source = self._source
        source_len = self._source_len
        pos = self._pos

        if source.startswith("::", pos):
            return self._emit(LexEventType.OPERATOR, pos + 2)

        nxt = source[pos + 1] if pos + 1 < source_len else ""
        if nxt in ("'", '"'):
            end = self._find_literal_end(
                pos + 2, nxt, nxt, interpolate=nxt == '"', nestable=False
            )
            return self._emit(LexEventType.SYMBOL, end)

        symbol_allowed = not self._prev_is_value() or (
            self._space_before() and not self._space_at(pos + 1)
        )
        if symbol_allowed and nxt:
            end = self._symbol_end(pos + 1)
            if end is not None:
                return self._emit(LexEventType.SYMBOL, end)

        return self._emit(LexEventType.OPERATOR, pos + 1)

    def _symbol_end(self, start: int) -> int | None:
        """Find the end of a symbol name starting at ``start`` (after the colon)."""
        source = self._source
        source_len = self._source_len
        char = source[start]

        if char in "@$":
            end = start + 1
            while end < source_len and source[end] in "@$":
                end += 1
        elif char in IDENT_START or ord(char) > 127:
            end = start
        else:
            for operator in SYMBOL_OPERATORS:
                if source.startswith(operator, start):
                    return start + len(operator)
            return None

        while end < source_len and (source[end] in IDENT_CHARS or ord(source[end]) > 127):
            end += 1
        if end == start:
            return None

        # :empty?  :save!  :name=  (but not :a==b or :a=>b)
        if end < source_len and source[end] in "?!":
            end += 1
        elif (
            end < source_len
            and source[end] == "="
            and (end + 1 >= source_len or source[end + 1] not in "=~>")
        ):
            end += 1
        return end

    def _scan_question(self) -> LexEvent:
        """Scan a character literal (``?a``) or the ternary ``?``."""
        source = self._source
        source_len = self._source_len
        pos = self._pos

        if self._operand_expected() and not self._space_at(pos + 1):
            nxt = source[pos + 1]
            if nxt == "\\":
                return self._emit(LexEventType.CHAR, min(pos + 3, source_len))
            after = pos + 2
            if after >= source_len or not (
                source[after] in IDENT_CHARS and nxt in IDENT_CHARS
            ):
                return self._emit(LexEventType.CHAR, after)

        return self._emit(LexEventType.OPERATOR, pos + 1)

    def _try_scan_heredoc_start(self) -> LexEvent | None:
        """Try to scan ``<<ID``, ``<<-ID`` or ``<<~ID``.

        The body is not read here: it starts on the next line, so the
        heredoc is queued and read after the current line break.

        Returns:
            The heredoc start event, or None if ``<<`` is an operator.
        """
        match = _HEREDOC_START_RE.match(self._source, self._pos)
        if match is None or not self._operand_expected(width=2):
            return None

        prev = self._prev
        if prev is not None and prev.type == LexEventType.KEYWORD and prev.value == "class":
            # class <<self
            return None

        identifier = match.group("quoted_id") or match.group("id")
        self._pending_heredocs.append(
            PendingHeredoc(
                identifier=identifier,
                indented=bool(match.group("flag")),
                start=self._pos,
            )
        )
        return self._emit(LexEventType.HEREDOC_START, match.end())
