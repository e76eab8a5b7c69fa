"""Operand and line-break classifier mixin.

Several characters mean different things depending on whether an operand
or an operator is expected next: ``/`` (regexp or division), ``%``
(literal or modulo), ``<<`` (heredoc or append), ``?`` (character literal
or ternary) and ``:`` (symbol or ternary). The line break itself is
classified here too.
"""

from __future__ import annotations

from sangria.lexer.modes import (
    OPERATOR_KEYWORDS,
    SINGLE_TOKEN_TYPES,
    SPACE_CHARS,
    BlockParamState,
)
from sangria.tokens import LexEvent, LexEventType


def ends_expression_early(event: LexEvent) -> bool:
    """Check if a line ending in ``event`` leaves its expression unfinished.

    True for trailing operators, commas, periods, labels, modifier keywords
    and the boolean keywords ``and``/``or``/``not``.
    """
    if event.type in SINGLE_TOKEN_TYPES:
        return True
    return event.type == LexEventType.KEYWORD and event.value in OPERATOR_KEYWORDS


class OperandClassifierMixin:
    """Mixin providing operand/operator disambiguation."""

    _source: str
    _source_len: int
    _pos: int
    _prev: LexEvent | None
    _last_on_line: LexEvent | None
    _continued: bool
    _block_params: BlockParamState

    def _prev_is_value(self) -> bool:
        """Implemented by KeywordClassifierMixin."""
        raise NotImplementedError

    def _space_before(self) -> bool:
        pos = self._pos
        return pos > 0 and self._source[pos - 1] in SPACE_CHARS

    def _space_at(self, pos: int) -> bool:
        """True if ``pos`` is whitespace, a line break, or past the end."""
        if pos >= self._source_len:
            return True
        char = self._source[pos]
        return char in SPACE_CHARS or char == "\n"

    def _operand_expected(self, width: int = 1) -> bool:
        """Decide whether the operator-like character at the cursor starts an operand.

        ``foo /bar/`` passes a regexp to a method call while ``foo / bar``
        divides: after a bare identifier, a space before the character
        and none after it means an operand.

        Args:
            width: Length of the ambiguous lead-in (``<<`` is 2)

        Returns:
            True if an operand (literal) is expected here.
        """
        if not self._prev_is_value():
            return True
        prev = self._prev
        if prev is not None and prev.type == LexEventType.IDENTIFIER:
            after = self._pos + width
            if self._space_before() and not self._space_at(after):
                return after >= self._source_len or self._source[after] != "="
        return False

    def _classify_newline(self) -> LexEventType:
        """Classify the line break at the cursor.

        A break is soft when the expression before it is unfinished (or
        there is no code on the line); only hard breaks are statement
        boundaries whose line gets compared.
        """
        if self._continued or self._block_params == BlockParamState.OPEN:
            return LexEventType.SOFT_NEWLINE

        last = self._last_on_line
        if last is None or ends_expression_early(last):
            return LexEventType.SOFT_NEWLINE
        return LexEventType.HARD_NEWLINE
