"""Indent reasons and the tagged list that holds them.

Indent levels are not 1:1 with reasons: one line may open a paren and a
brace, a continued expression may sit inside a block. Each reason records
the level the current line was expected at when it appeared, which is the
level restored once the reason resolves.

Removal is by search rather than a strict stack pop: a closer removes the
newest reason of its own kind even when other reasons sit above it.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from sangria.tokens import OPEN_EVENT_FOR, OPENERS, LexEventType


@dataclass(frozen=True, slots=True)
class IndentReason:
    """Why the following lines should be indented.

    Attributes:
        event_type: Event type that caused the reason (KEYWORD, LBRACE,
            OPERATOR, COMMA, ...)
        token: Token text ("def", "{", "+", ...)
        lineno: Line the reason was found on
        should_be_at: Expected indentation of that line when the reason
            was recorded

    """

    event_type: LexEventType
    token: str
    lineno: int
    should_be_at: int

    @property
    def is_enclosure(self) -> bool:
        return self.event_type in OPENERS

    @property
    def is_keyword(self) -> bool:
        return self.event_type == LexEventType.KEYWORD

    @property
    def is_single_token(self) -> bool:
        """Operators, commas, periods, labels, modifiers: no explicit closer."""
        return not self.is_enclosure and not self.is_keyword


class IndentReasonStack:
    """Ordered reasons, newest last.

    Modified only by :meth:`push`, :meth:`remove_for_close`,
    :meth:`remove_continuation_keywords` and
    :meth:`remove_trailing_single_tokens`.

    """

    __slots__ = ("_reasons",)

    def __init__(self) -> None:
        self._reasons: list[IndentReason] = []

    def __len__(self) -> int:
        return len(self._reasons)

    def __bool__(self) -> bool:
        return bool(self._reasons)

    def __iter__(self) -> Iterator[IndentReason]:
        return iter(self._reasons)

    def __repr__(self) -> str:
        inner = ", ".join(f"{r.token!r}@{r.lineno}" for r in self._reasons)
        return f"IndentReasonStack([{inner}])"

    @property
    def last(self) -> IndentReason | None:
        return self._reasons[-1] if self._reasons else None

    def push(self, reason: IndentReason) -> None:
        self._reasons.append(reason)

    # =========================================================================
    # Searches
    # =========================================================================

    def _last_index(self, predicate) -> int | None:
        for index in range(len(self._reasons) - 1, -1, -1):
            if predicate(self._reasons[index]):
                return index
        return None

    def last_opening_event(self, closing_event_type: LexEventType) -> IndentReason | None:
        """Return the newest reason opened by the counterpart of a closer.

        Args:
            closing_event_type: RBRACE, RBRACKET, RPAREN, or KEYWORD for the
                terminator keyword.
        """
        index = self._opening_index(closing_event_type)
        return None if index is None else self._reasons[index]

    def _opening_index(self, closing_event_type: LexEventType) -> int | None:
        opening = OPEN_EVENT_FOR.get(closing_event_type)
        if opening is None:
            return None
        return self._last_index(lambda r: r.event_type == opening)

    def last_single_token_event(self) -> IndentReason | None:
        """Return the newest single-token reason, if any."""
        index = self._last_index(lambda r: r.is_single_token)
        return None if index is None else self._reasons[index]

    def find_on_line(self, lineno: int) -> IndentReason | None:
        """Return the first reason recorded on ``lineno``."""
        for reason in self._reasons:
            if reason.lineno == lineno:
                return reason
        return None

    def find_all(self, token: str) -> list[IndentReason]:
        return [r for r in self._reasons if r.token == token]

    # =========================================================================
    # Removal
    # =========================================================================

    def remove_for_close(self, closing_event_type: LexEventType) -> IndentReason | None:
        """Remove the reason a closer resolves.

        The newest matching opener is removed even if it is not on top.
        Without one, the newest single-token reason is removed instead;
        keyword and enclosure reasons never are.

        Returns:
            The removed reason, or None if nothing could be removed.
        """
        index = self._opening_index(closing_event_type)
        if index is None:
            index = self._last_index(lambda r: r.is_single_token)
        if index is None:
            return None
        return self._reasons.pop(index)

    def remove_continuation_keywords(self, keywords: Iterable[str]) -> list[IndentReason]:
        """Pop continuation-keyword reasons (else, when, ...) off the top.

        Returns:
            The removed reasons, newest first.
        """
        keywords = frozenset(keywords)
        removed: list[IndentReason] = []
        while self._reasons and self._reasons[-1].is_keyword and self._reasons[-1].token in keywords:
            removed.append(self._reasons.pop())
        return removed

    def remove_trailing_single_tokens(self) -> list[IndentReason]:
        """Pop single-token reasons off the top once their expression ends.

        Returns:
            The removed reasons, newest first.
        """
        removed: list[IndentReason] = []
        while self._reasons and self._reasons[-1].is_single_token:
            removed.append(self._reasons.pop())
        return removed
