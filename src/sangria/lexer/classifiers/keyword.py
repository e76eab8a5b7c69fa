"""Keyword classifier mixin."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sangria.lexer.modes import (
    KEYWORDS,
    MODIFIER_AFTER_KEYWORDS,
    MODIFIER_CAPABLE_KEYWORDS,
    VALUE_KEYWORDS,
    VALUE_TYPES,
)
from sangria.tokens import LexEvent, LexEventType

if TYPE_CHECKING:
    from sangria.config import IndentConfig


class KeywordClassifierMixin:
    """Mixin deciding what a scanned word is.

    A reserved word is not always a keyword: after ``.``/``::`` or ``def``
    it is a method name, and followed by a single ``:`` it is a hash label.
    ``if``/``unless``/``while``/``until``/``rescue`` trailing a complete
    statement are modifiers and open no block.

    """

    _source: str
    _source_len: int
    _prev: LexEvent | None
    _config: IndentConfig

    def _prev_is_value(self) -> bool:
        """Check if the previous significant event ends an operand.

        Returns:
            True if an infix operator may follow.
        """
        prev = self._prev
        if prev is None:
            return False
        if prev.type in VALUE_TYPES:
            return True
        if prev.type == LexEventType.KEYWORD:
            return prev.value in VALUE_KEYWORDS or self._config.is_terminator(prev.value)
        return False

    def _in_modifier_position(self) -> bool:
        """Check if a keyword here would trail a complete statement."""
        prev = self._prev
        if prev is None:
            return False
        if prev.type == LexEventType.KEYWORD and prev.value in MODIFIER_AFTER_KEYWORDS:
            return True
        return self._prev_is_value()

    def _is_method_name_position(self) -> bool:
        """Check if a word here names a method (after ``.``, ``::``, ``def``)."""
        prev = self._prev
        if prev is None:
            return False
        if prev.type == LexEventType.PERIOD:
            return True
        if prev.type == LexEventType.OPERATOR and prev.value == "::":
            return True
        return prev.type == LexEventType.KEYWORD and prev.value == "def"

    def _is_label_at(self, end: int) -> bool:
        """Check if the word ending at ``end`` is followed by a label colon."""
        source = self._source
        if end >= self._source_len or source[end] != ":":
            return False
        return end + 1 >= self._source_len or source[end + 1] != ":"

    def _is_keyword(self, word: str) -> bool:
        """Reserved words plus any keyword the style configures."""
        if word in KEYWORDS:
            return True
        config = self._config
        return (
            config.is_indent_keyword(word)
            or config.is_continuation_keyword(word)
            or config.is_terminator(word)
        )

    def _classify_word(self, word: str, end: int) -> LexEventType:
        """Classify an identifier-like word.

        Args:
            word: The word text (may carry a ``?``/``!`` suffix)
            end: Position just past the word

        Returns:
            The event type for the word.
        """
        if self._is_label_at(end) and not word.endswith("?"):
            return LexEventType.LABEL

        if self._is_keyword(word) and not self._is_method_name_position():
            if word in MODIFIER_CAPABLE_KEYWORDS and self._in_modifier_position():
                return LexEventType.MODIFIER_KEYWORD
            return LexEventType.KEYWORD

        first = word[0]
        if first.isupper():
            return LexEventType.CONSTANT
        return LexEventType.IDENTIFIER
