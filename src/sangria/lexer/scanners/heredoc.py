"""Heredoc mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from sangria.errors import LexError
from sangria.lexer.modes import LexerMode, PendingHeredoc
from sangria.tokens import LexEvent, LexEventType


class HeredocScannerMixin:
    """Mixin providing heredoc body scanning.

    Entered after the line break of a line that opened one or more
    heredocs. Each body, terminator line included, becomes a single
    HEREDOC_BODY event; bodies are read in the order they were opened.

    """

    _source: str
    _source_len: int
    _pos: int
    _mode: LexerMode
    _pending_heredocs: list[PendingHeredoc]

    def _emit(self, event_type: LexEventType, end: int) -> LexEvent:
        raise NotImplementedError

    def _error(self, message: str, pos: int) -> LexError:
        raise NotImplementedError

    def _scan_heredoc_bodies(self) -> Iterator[LexEvent]:
        """Scan every pending heredoc body, then return to code mode."""
        pending = list(self._pending_heredocs)
        self._pending_heredocs.clear()

        for heredoc in pending:
            end = self._find_heredoc_end(heredoc)
            yield self._emit(LexEventType.HEREDOC_BODY, end)

        self._mode = LexerMode.CODE

    def _find_heredoc_end(self, heredoc: PendingHeredoc) -> int:
        """Find the position just past the heredoc's terminator line.

        Raises:
            LexError: If the source ends before the terminator.
        """
        source = self._source
        source_len = self._source_len
        pos = self._pos
        while pos < source_len:
            line_end = source.find("\n", pos)
            if line_end == -1:
                line_end = source_len
            line = source[pos:line_end].rstrip("\r")
            if heredoc.indented:
                line = line.strip()
            if line == heredoc.identifier:
                return line_end + 1 if line_end < source_len else source_len
            pos = line_end + 1
        raise self._error(
            f"unterminated heredoc; can't find string {heredoc.identifier!r}",
            heredoc.start,
        )
