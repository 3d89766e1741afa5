from __future__ import annotations

import pytest

from .ast import Kind, Leaf, Interior
from .errors import ParseFailure, UnexpectedToken, caret_snippet
from .parser import (
    parse_message, summary, value, body_footer, token, separator, continuation,
)
from .render import dump, to_dict, render_summary
from ..scan import Scanner


def _summary(tree: Interior) -> Interior:
    s = tree.children[0]
    assert s.kind == Kind.SUMMARY
    return s


def _body_footer(tree: Interior) -> Interior:
    bf = tree.find(Kind.BODY_FOOTER)
    assert bf is not None
    return bf


# ---- summary ----

def test_simple_summary() -> None:
    tree = parse_message("fix: correct bug")
    assert tree.kind == Kind.MESSAGE
    assert len(tree.children) == 1
    s = _summary(tree)
    assert [c.kind for c in s.children] == [Kind.TYPE, Kind.SUMMARY_SEP, Kind.TEXT]
    assert s.find(Kind.TYPE).value == "fix"
    assert s.find(Kind.SCOPE) is None
    sep = s.find(Kind.SUMMARY_SEP)
    assert sep.children == (Leaf(Kind.SEPARATOR, ":"),)
    assert sep.find(Kind.BREAKING_CHANGE) is None
    assert s.find(Kind.TEXT).value == "correct bug"


def test_scoped_breaking_summary() -> None:
    s = _summary(parse_message("feat(api)!: remove endpoint"))
    assert [c.kind for c in s.children] == [Kind.TYPE, Kind.SCOPE, Kind.SUMMARY_SEP, Kind.TEXT]
    assert s.find(Kind.TYPE).value == "feat"
    assert s.find(Kind.SCOPE).value == "api"
    sep = s.find(Kind.SUMMARY_SEP)
    assert sep.children == (Leaf(Kind.BREAKING_CHANGE, "!"), Leaf(Kind.SEPARATOR, ":"))
    assert s.find(Kind.TEXT).value == "remove endpoint"


def test_unscoped_breaking_summary() -> None:
    s = _summary(parse_message("refactor!: drop py2"))
    assert s.find(Kind.TYPE).value == "refactor"
    assert s.find(Kind.SUMMARY_SEP).find(Kind.BREAKING_CHANGE).value == "!"


def test_bang_not_followed_by_colon_is_part_of_type() -> None:
    s = _summary(parse_message("feat!x: y"))
    assert s.find(Kind.TYPE).value == "feat!x"
    assert s.find(Kind.SUMMARY_SEP).find(Kind.BREAKING_CHANGE) is None


def test_surrounding_whitespace_is_trimmed() -> None:
    s = _summary(parse_message("  \n fix:    spaced out \n\n"))
    assert s.find(Kind.TYPE).value == "fix"
    assert s.find(Kind.TEXT).value == "spaced out"


def test_empty_text_is_accepted() -> None:
    s = _summary(parse_message("fix:"))
    assert s.find(Kind.TEXT) == Leaf(Kind.TEXT, "")


@pytest.mark.parametrize(
    ("msg", "type_", "scope"),
    [
        ("docs: x", "docs", None),
        ("build(deps): bump regex", "build", "deps"),
        ("feat(parser scope): spaces in scope", "feat", "parser scope"),
        ("ci!: y", "ci", None),
        ("chore(release)!: z\n\nRefs #1", "chore", "release"),
    ],
)
def test_type_is_first_summary_child(msg: str, type_: str, scope) -> None:
    s = _summary(parse_message(msg))
    assert s.children[0] == Leaf(Kind.TYPE, type_)
    sc = s.find(Kind.SCOPE)
    assert (sc.value if sc is not None else None) == scope


# ---- summary errors ----

def test_missing_colon_raises() -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message("nocolon here")
    f = ei.value.failure
    assert isinstance(f, ParseFailure)
    assert f.expected == (":", "(")
    assert f.found == " "
    assert f.offset == 7
    assert str(ei.value) == "unexpected token ' ' at position 7 valid tokens [:, (]"


@pytest.mark.parametrize(
    ("msg", "expected_message"),
    [
        ("feat(a)'x", "unexpected token ''' at position 7 valid tokens [:]"),
        ("nocolon\there", "unexpected token '\t' at position 7 valid tokens [:, (]"),
    ],
)
def test_failure_message_quotes_raw_char(msg: str, expected_message: str) -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message(msg)
    assert str(ei.value) == expected_message


# parse_message raises for a non-newline after a valid summary instead of
# dropping that failure. The branch cannot be reached from text input:
# `text` only stops at a newline or EOF, which is what this test pins down.
@pytest.mark.parametrize(
    "msg",
    ["fix: a\nRefs #1", "feat(x)!: b\r\nRefs #1", "docs:\n\nx", "ci: tail \t\ny", "fix: eof"],
)
def test_summary_always_ends_at_newline_or_eof(msg: str) -> None:
    sc = Scanner(msg)
    s = summary(sc)
    assert not isinstance(s, ParseFailure)
    assert sc.eof() or sc.peek() in ("\n", "\r")


def test_unexpected_token_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        parse_message("nocolon")


def test_missing_colon_at_eof() -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message("nocolon")
    f = ei.value.failure
    assert f.at_eof
    assert f.message == "unexpected token EOF valid tokens [:, (]"


def test_empty_message_has_no_type() -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message("   ")
    assert ei.value.failure.expected == ("type",)


def test_leading_colon_has_no_type() -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message(": nothing")
    assert ei.value.failure.expected == ("type",)
    assert ei.value.failure.offset == 0


@pytest.mark.parametrize(
    ("msg", "expected", "offset"),
    [
        ("feat(): empty scope", ("scope",), 5),
        ("feat(api: unclosed", (")",), 18),
        ("feat(api) no sep", (":",), 9),
    ],
)
def test_scoped_summary_failures(msg: str, expected, offset: int) -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message(msg)
    assert ei.value.failure.expected == expected
    assert ei.value.failure.offset == offset


def test_failure_reports_line_and_col() -> None:
    with pytest.raises(UnexpectedToken) as ei:
        parse_message("feat(api no sep")
    f = ei.value.failure
    assert (f.line, f.col) == (1, f.offset + 1)


def test_caret_snippet() -> None:
    assert caret_snippet("nocolon here", 7) == "nocolon here\n       ^"
    assert caret_snippet("a\nbc", 3) == "bc\n ^"


# ---- body-footer ----

def test_two_footers() -> None:
    tree = parse_message("chore: cleanup\n\nBREAKING CHANGE: removed X\nReviewed-by: Jane")
    bf = _body_footer(tree)
    assert len(bf.children) == 2
    first, second = bf.children
    assert first.kind == Kind.FOOTER
    assert first.children[0].children == (Leaf(Kind.BREAKING_CHANGE, "BREAKING CHANGE"),)
    assert first.children[2].children[0] == Leaf(Kind.TEXT, "removed X")
    assert second.children[0].children == (Leaf(Kind.TYPE, "Reviewed-by"),)
    assert second.children[2].children[0] == Leaf(Kind.TEXT, "Jane")


def test_footer_directly_after_summary() -> None:
    bf = _body_footer(parse_message("fix: a\nRefs #123"))
    (f,) = bf.children
    tok, sep, val = f.children
    assert tok.children == (Leaf(Kind.TYPE, "Refs"),)
    assert sep == Leaf(Kind.SEPARATOR, " #")
    assert val.children == (Leaf(Kind.TEXT, "123"),)


def test_footer_separator_reuses_summary_sep() -> None:
    bf = _body_footer(parse_message("fix: a\n\nAcked-by!:   Bob"))
    (f,) = bf.children
    sep = f.children[1]
    assert sep.kind == Kind.SUMMARY_SEP
    assert sep.children == (Leaf(Kind.BREAKING_CHANGE, "!"), Leaf(Kind.SEPARATOR, ":"))
    assert f.children[2].children[0].value == "Bob"


def test_footer_token_with_scope() -> None:
    bf = _body_footer(parse_message("fix: a\n\nfix(core): nested"))
    (f,) = bf.children
    assert f.children[0].children == (Leaf(Kind.TYPE, "fix"), Leaf(Kind.SCOPE, "core"))


def test_breaking_change_leaf_roles_differ_by_parent() -> None:
    tree = parse_message("feat!: x\n\nBREAKING CHANGE: y")
    marker = _summary(tree).find(Kind.SUMMARY_SEP).find(Kind.BREAKING_CHANGE)
    literal = _body_footer(tree).children[0].find(Kind.TOKEN).find(Kind.BREAKING_CHANGE)
    assert marker == Leaf(Kind.BREAKING_CHANGE, "!")
    assert literal == Leaf(Kind.BREAKING_CHANGE, "BREAKING CHANGE")


def test_free_form_body_yields_empty_body_footer() -> None:
    msg = "fix: bug\n\nSome free-form paragraph with no footers."
    tree = parse_message(msg)
    bf = _body_footer(tree)
    assert bf.children == ()
    # the paragraph is not represented anywhere in the tree
    assert "free-form" not in repr(to_dict(tree))


def test_body_followed_by_footers_is_discarded_whole() -> None:
    msg = "fix: bug\n\nExplain the change.\n\nReviewed-by: Jane"
    assert _body_footer(parse_message(msg)).children == ()


def test_late_footer_failure_discards_earlier_footers() -> None:
    msg = "fix: bug\n\nReviewed-by: Jane\nnot a footer line"
    assert _body_footer(parse_message(msg)).children == ()


def test_body_footer_rewinds_to_start() -> None:
    sc = Scanner("Reviewed-by: Jane\nnot a footer")
    start = sc.position()
    bf = body_footer(sc)
    assert bf == Interior(Kind.BODY_FOOTER, ())
    assert sc.position() == start


def test_crlf_footers() -> None:
    msg = "chore: cleanup\r\n\r\nBREAKING CHANGE: removed X\r\nReviewed-by: Jane"
    tree = parse_message(msg)
    assert _summary(tree).find(Kind.TEXT).value == "cleanup"
    assert len(_body_footer(tree).children) == 2


# ---- value / continuation ----

def test_value_with_continuations() -> None:
    sc = Scanner("line1\n line2\n line3")
    v = value(sc)
    assert v.children[0] == Leaf(Kind.TEXT, "line1")
    assert v.children[1] == Interior(Kind.CONTINUATION, (Leaf(Kind.TEXT, "line2"),))
    assert v.children[2] == Interior(Kind.CONTINUATION, (Leaf(Kind.TEXT, "line3"),))
    assert sc.eof()


def test_unindented_line_ends_value() -> None:
    sc = Scanner("line1\n line2\nline3")
    v = value(sc)
    assert len(v.children) == 2
    assert sc.peek() == "\n"
    assert sc.slice_from(0) == "line1\n line2"


def test_continuation_failure_leaves_cursor() -> None:
    sc = Scanner("\nx")
    r = continuation(sc)
    assert isinstance(r, ParseFailure)
    assert r.expected == ("continuation",)
    assert sc.position() == 0


def test_multiline_footer_value() -> None:
    msg = "fix: a\n\nBREAKING CHANGE: first\n  second\nRefs #9"
    (f1, f2) = _body_footer(parse_message(msg)).children
    v = f1.find(Kind.VALUE)
    assert v.children[1] == Interior(Kind.CONTINUATION, (Leaf(Kind.TEXT, " second"),))
    assert f2.find(Kind.VALUE).children == (Leaf(Kind.TEXT, "9"),)


# ---- token / separator alternatives ----

def test_token_prefers_breaking_change_literal() -> None:
    sc = Scanner("BREAKING CHANGE: x")
    t = token(sc)
    assert t == Interior(Kind.TOKEN, (Leaf(Kind.BREAKING_CHANGE, "BREAKING CHANGE"),))
    assert sc.peek() == ":"


def test_token_falls_back_to_type() -> None:
    sc = Scanner("BREAKING-CHANGE: x")
    t = token(sc)
    assert t == Interior(Kind.TOKEN, (Leaf(Kind.TYPE, "BREAKING-CHANGE"),))


def test_separator_failure_does_not_consume() -> None:
    sc = Scanner(" x")
    r = separator(sc)
    assert isinstance(r, ParseFailure)
    assert r.expected == ("separator",)
    assert sc.position() == 0


# ---- rendering ----

@pytest.mark.parametrize(
    "msg",
    [
        "fix: correct bug",
        "feat(api)!: remove endpoint",
        "refactor!: x",
        "docs(readme):",
        "chore(a b): with: colons (and parens)",
    ],
)
def test_rendered_summary_reparses_identically(msg: str) -> None:
    s = _summary(parse_message(msg))
    again = _summary(parse_message(render_summary(s)))
    assert again == s


@pytest.mark.parametrize(
    ("msg", "kept"),
    [
        ("feat(x): trailing\t\nRefs #2", "trailing\t"),
        ("fix: a \n\nRefs #1", "a "),
    ],
)
def test_rendered_summary_drops_trailing_whitespace_of_multiline_message(msg: str, kept: str) -> None:
    s = _summary(parse_message(msg))
    assert s.find(Kind.TEXT).value == kept
    again = _summary(parse_message(render_summary(s)))
    assert again.find(Kind.TEXT).value == kept.rstrip()
    assert again.children[:-1] == s.children[:-1]


def test_render_summary_rejects_other_nodes() -> None:
    with pytest.raises(ValueError):
        render_summary(parse_message("fix: a"))


def test_to_dict_shape() -> None:
    d = to_dict(parse_message("fix: a"))
    assert d == {
        "type": "message",
        "children": [
            {
                "type": "summary",
                "children": [
                    {"type": "type", "value": "fix"},
                    {"type": "summary-sep", "children": [{"type": "separator", "value": ":"}]},
                    {"type": "text", "value": "a"},
                ],
            }
        ],
    }


def test_dump() -> None:
    assert dump(parse_message("fix: a")) == (
        "message\n"
        "  summary\n"
        "    type: 'fix'\n"
        "    summary-sep\n"
        "      separator: ':'\n"
        "    text: 'a'"
    )


def _kinds(node) -> list:
    if isinstance(node, Leaf):
        return [node.kind]
    out = [node.kind]
    for c in node.children:
        out.extend(_kinds(c))
    return out


def test_find_all_and_known_kinds() -> None:
    tree = parse_message("feat(api)!: x\n\nBREAKING CHANGE: y\n  more\nRefs #3")
    bf = _body_footer(tree)
    footers = list(bf.find_all(Kind.FOOTER))
    assert len(footers) == 2
    assert list(bf.find_all(Kind.TEXT)) == []
    assert set(_kinds(tree)) <= set(Kind.ALL)
    assert len(Kind.ALL) == 13


def test_nodes_are_immutable() -> None:
    s = _summary(parse_message("fix: a"))
    with pytest.raises(AttributeError):
        s.kind = "other"  # type: ignore[misc]
