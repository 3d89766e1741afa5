from __future__ import annotations

import pytest

from . import Scanner
from .checks import is_whitespace, is_newline, is_parens, is_summary_sep


def test_peek_does_not_advance() -> None:
    sc = Scanner("ab")
    assert sc.peek() == "a"
    assert sc.peek() == "a"
    assert sc.peek(2) == "ab"
    assert sc.position() == 0


def test_peek_at_eof_is_none() -> None:
    sc = Scanner("a")
    sc.next()
    assert sc.eof()
    assert sc.peek() is None
    assert sc.peek(2) is None


def test_peek_is_bounded_by_input() -> None:
    sc = Scanner("a")
    assert sc.peek(3) == "a"


def test_next_consumes_one_or_n() -> None:
    sc = Scanner("BREAKING CHANGE: x")
    assert sc.peek_literal("BREAKING CHANGE")
    assert sc.next(len("BREAKING CHANGE")) == "BREAKING CHANGE"
    assert sc.next() == ":"
    assert sc.position() == 16


def test_next_past_end_raises() -> None:
    sc = Scanner("")
    with pytest.raises(IndexError):
        sc.next()
    sc = Scanner("ab")
    with pytest.raises(IndexError):
        sc.next(3)
    assert sc.position() == 0


def test_consume_whitespace_stops_at_newline() -> None:
    sc = Scanner(" \t \nx")
    sc.consume_whitespace()
    assert sc.position() == 3
    assert sc.peek() == "\n"


def test_rewind_to_observed_position() -> None:
    sc = Scanner("feat: x")
    start = sc.position()
    sc.next(4)
    mid = sc.position()
    sc.next()
    sc.rewind(mid)
    assert sc.peek() == ":"
    sc.rewind(start)
    assert sc.peek() == "f"


def test_rewind_to_unobserved_offset_raises() -> None:
    sc = Scanner("feat: x")
    sc.next(2)
    with pytest.raises(ValueError):
        sc.rewind(5)


def test_slice_from_and_line_col() -> None:
    sc = Scanner("fix: a\nRefs #1")
    sc.next(7)
    start = sc.position()
    sc.next(4)
    assert sc.slice_from(start) == "Refs"
    assert sc.line_col() == (2, 5)
    assert sc.line_col(0) == (1, 1)


@pytest.mark.parametrize(
    ("fn", "arg", "expected"),
    [
        (is_whitespace, " ", True),
        (is_whitespace, "\t", True),
        (is_whitespace, "\n", False),
        (is_whitespace, None, False),
        (is_newline, "\n", True),
        (is_newline, "\r\n", True),
        (is_newline, "\r", False),
        (is_newline, None, False),
        (is_parens, "(", True),
        (is_parens, ")", True),
        (is_parens, "[", False),
        (is_summary_sep, "!:", True),
        (is_summary_sep, "!", False),
        (is_summary_sep, "!x", False),
        (is_summary_sep, None, False),
    ],
)
def test_checks(fn, arg, expected) -> None:
    assert fn(arg) is expected
