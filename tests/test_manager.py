"""Tests for IndentationManager state transitions.

Most tests feed a snippet through the real lexer and inspect the
manager's state part way through.
"""

import logging

import pytest

from sangria.config import IndentConfig
from sangria.indentation import IndentationManager
from sangria.lexer import Lexer, group_lines
from sangria.tokens import LexEvent, LexEventType

T = LexEventType


def feed(
    source: str,
    *,
    stop_after: str | None = None,
    config: IndentConfig | None = None,
) -> IndentationManager:
    """Feed ``source``; optionally stop right after the last event valued ``stop_after``."""
    events = list(Lexer(source, config=config).tokenize())
    lines = group_lines(events)
    if stop_after is not None:
        index = max(i for i, e in enumerate(events) if e.value == stop_after)
        events = events[: index + 1]
    manager = IndentationManager(config)
    for event in events:
        manager.feed(event, lines[event.line])
    return manager


class TestInitialState:
    """A fresh manager expects column 0."""

    def test_zero(self) -> None:
        manager = IndentationManager()
        assert manager.should_be_at() == 0
        assert manager.next_should_be_at() == 0
        assert manager.state.actual == 0
        assert not manager.indent_reasons
        assert manager.problems == []
        assert manager.last_indent_reason_type() is None


class TestOpeners:
    """Block keywords and enclosures push reasons."""

    def test_block_keyword(self) -> None:
        manager = feed("def f", stop_after="def")
        assert manager.last_indent_reason_type() == T.KEYWORD
        assert manager.next_should_be_at() == 2

    def test_reason_records_current_level(self) -> None:
        manager = feed("def f\n  if x", stop_after="if")
        last = manager.indent_reasons.last
        assert last is not None
        assert (last.token, last.lineno, last.should_be_at) == ("if", 2, 2)
        assert manager.next_should_be_at() == 4

    @pytest.mark.parametrize("source,kind", [("x = [", T.LBRACKET), ("h = {", T.LBRACE), ("f(", T.LPAREN)])
    def test_enclosure(self, source: str, kind: LexEventType) -> None:
        manager = feed(source)
        assert manager.last_indent_reason_type() == kind
        assert manager.should_be_at() == 2

    def test_modifier_pushes_nothing(self) -> None:
        manager = feed("foo if bar\n")
        assert not manager.indent_reasons
        assert manager.should_be_at() == 0

    def test_loop_do_pushes_one_reason(self) -> None:
        manager = feed("while x do\n")
        assert [r.token for r in manager.indent_reasons] == ["while"]

    def test_block_do_pushes(self) -> None:
        manager = feed("items.each do |x|\n")
        assert [r.token for r in manager.indent_reasons] == ["do"]

    def test_custom_spaces(self) -> None:
        manager = feed("class Foo\n", config=IndentConfig(spaces=4))
        assert manager.should_be_at() == 4


class TestClosers:
    """Closers resolve their reason and restore its level."""

    def test_same_line_pair_does_not_outdent(self) -> None:
        manager = feed("def f\n  g(1)", stop_after=")")
        assert manager.should_be_at() == 2
        assert manager.next_should_be_at() == 2

    def test_multi_line_closer_outdents(self) -> None:
        manager = feed("foo(\n  1\n)", stop_after=")")
        assert manager.should_be_at() == 0
        assert manager.next_should_be_at() == 0
        assert not manager.indent_reasons

    def test_two_closers_outdent_once(self) -> None:
        manager = feed("foo({\n  a: 1\n})", stop_after=")")
        assert manager.should_be_at() == 0

    def test_closer_not_first_on_line_does_not_outdent(self) -> None:
        manager = feed("foo(a,\n  b)", stop_after=")")
        assert manager.should_be_at() == 2
        assert manager.next_should_be_at() == 0

    def test_close_without_reason_leaves_state(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sangria"):
            manager = feed("def f\n  }", stop_after="}")
        assert manager.should_be_at() == 2
        assert manager.next_should_be_at() == 2
        assert [r.token for r in manager.indent_reasons] == ["def"]
        assert "closes nothing" in caplog.text

    def test_close_falls_back_to_single_token(self) -> None:
        manager = feed("x = a +\n  b)", stop_after=")")
        assert not manager.indent_reasons


class TestTerminator:
    """``end`` closes the newest keyword block."""

    def test_end_pops_block_and_continuations(self) -> None:
        source = "if a\n  b\nelse\n  c\nend"
        manager = feed(source, stop_after="end")
        assert not manager.indent_reasons
        assert manager.should_be_at() == 0
        assert manager.next_should_be_at() == 0

    @pytest.mark.parametrize("depth", [1, 2, 3, 5])
    def test_end_drops_both_expectations_one_level(self, depth: int) -> None:
        opening = "".join("  " * i + "if x\n" for i in range(depth))
        manager = feed(opening + "  " * (depth - 1) + "end", stop_after="end")
        assert manager.should_be_at() == 2 * (depth - 1)
        assert manager.next_should_be_at() == 2 * (depth - 1)

    def test_end_mid_line_does_not_outdent(self) -> None:
        manager = feed("def f\n  g do 1 end", stop_after="end")
        assert manager.should_be_at() == 2


class TestContinuationKeywords:
    """else/elsif/when/rescue/ensure dedent their own line only."""

    def test_else_outdents_its_line(self) -> None:
        manager = feed("if a\n  b\nelse", stop_after="else")
        assert manager.should_be_at() == 0
        assert manager.next_should_be_at() == 2
        assert [r.token for r in manager.indent_reasons] == ["if", "else"]

    def test_second_continuation_replaces_first(self) -> None:
        source = "case x\nwhen 1\n  a\nwhen 2"
        manager = feed(source, stop_after="when")
        assert [r.token for r in manager.indent_reasons] == ["case", "when"]
        assert manager.should_be_at() == 0

    def test_continuation_with_empty_stack(self) -> None:
        manager = feed("else", stop_after="else")
        assert manager.should_be_at() == 0
        assert manager.next_should_be_at() == 2

    def test_continuation_on_a_line_with_a_reason(self) -> None:
        manager = feed("def f\n  if a then b else", stop_after="else")
        # the if line is not outdented by its own else
        assert manager.should_be_at() == 2
        assert manager.next_should_be_at() == 0


class TestSingleTokens:
    """Lines ending mid-expression indent the next line."""

    @pytest.mark.parametrize(
        "source,kind",
        [
            ("x = a +\n", T.OPERATOR),
            ("puts a,\n", T.COMMA),
            ("foo.\n", T.PERIOD),
            ("foo key:\n", T.LABEL),
            ("x = 1 if\n", T.MODIFIER_KEYWORD),
            ("a and\n", T.OPERATOR),
        ],
    )
    def test_pushes_reason(self, source: str, kind: LexEventType) -> None:
        manager = feed(source)
        assert manager.last_indent_reason_type() == kind
        assert manager.should_be_at() == 2

    def test_same_type_not_pushed_twice(self) -> None:
        manager = feed("x = a +\n  b +\n")
        assert len(manager.indent_reasons) == 1
        assert manager.should_be_at() == 2

    def test_comma_inside_enclosure_not_pushed(self) -> None:
        manager = feed("foo(a,\n")
        assert [r.token for r in manager.indent_reasons] == ["("]
        assert manager.in_an_enclosure()

    def test_hard_newline_drops_single_tokens(self) -> None:
        manager = feed("def f\n  x = a +\n    b\n")
        assert [r.token for r in manager.indent_reasons] == ["def"]
        assert manager.should_be_at() == 2


class TestNewlines:
    """Soft breaks promote; hard breaks compare and promote."""

    def test_soft_newline_does_not_compare(self) -> None:
        manager = feed("def f\n      # comment\n  x\nend\n")
        assert manager.problems == []

    def test_hard_newline_records_problem(self) -> None:
        manager = feed("def f\n    x\nend\n")
        assert len(manager.problems) == 1
        problem = manager.problems[0]
        assert (problem.line, problem.expected, problem.actual) == (2, 2, 4)
        assert manager.state.actual == 0

    def test_multi_line_string_tail_not_measured(self) -> None:
        manager = feed('x = "a\n      b"\n')
        assert manager.problems == []

    def test_run_returns_problems(self) -> None:
        events = list(Lexer("if x\ny\nend\n").tokenize())
        problems = IndentationManager(file_path="a.rb").run(events, group_lines(events))
        assert [(p.file_path, p.line) for p in problems] == [("a.rb", 2)]

    def test_run_tolerates_missing_line_views(self) -> None:
        event = LexEvent(T.HARD_NEWLINE, "\n", 7, 0)
        assert IndentationManager().run([event], {}) == []


class TestQueries:
    """Enclosure and multi-line queries."""

    def test_in_an_enclosure_looks_past_single_tokens(self) -> None:
        manager = feed("foo(a +\n")
        assert manager.last_indent_reason_type() == T.OPERATOR
        assert manager.in_an_enclosure()

    def test_keyword_inside_enclosure_is_not_an_enclosure(self) -> None:
        manager = feed("foo(bar do\n")
        assert not manager.in_an_enclosure()

    def test_multi_line_predicates(self) -> None:
        manager = feed("x = [\n  {\n    (\n")
        assert manager.multi_line_brackets(2)
        assert not manager.multi_line_brackets(1)
        assert manager.multi_line_braces(3)
        assert not manager.multi_line_braces(2)
        assert not manager.multi_line_parens(3)
        assert manager.multi_line_parens(4)

    def test_multi_line_predicates_without_reasons(self) -> None:
        manager = IndentationManager()
        assert not manager.multi_line_brackets(1)
        assert not manager.multi_line_braces(1)
        assert not manager.multi_line_parens(1)
