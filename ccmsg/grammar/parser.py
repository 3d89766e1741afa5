"""Conventional Commits 메시지 파서 (재귀 하강)
- 문법 생성규칙 하나당 함수 하나. 모두 같은 Scanner를 공유한다
- 내부 루틴은 예외 대신 **ParseFailure 값을 반환**한다
  → 대안(alternative)을 시도할 때 위치를 되돌리고(rewind) 다음 후보로 넘어간다
- 예외(UnexpectedToken)는 진입점 `parse_message`에서만 던진다
- body-footer 는 전부 아니면 전무: footer 하나라도 실패하면 빈 노드 + 시작 위치로 복귀
"""

#   message      := summary (NEWLINE NEWLINE* body-footer)?
#   summary      := type "(" scope ")" summary-sep text
#                 | type summary-sep text
#   type         := 1*(char - NEWLINE - PARENS - WHITESPACE - ":" - "!:")
#   text         := *(char - NEWLINE)
#   summary-sep  := "!"? ":" WHITESPACE*
#   scope        := 1*(char - NEWLINE - PARENS)
#   body-footer  := 1*footer
#   footer       := token separator WHITESPACE* value NEWLINE?
#   token        := "BREAKING CHANGE" | type "(" scope ")" | type
#   separator    := summary-sep | " #"
#   value        := text *continuation
#   continuation := NEWLINE WHITESPACE text

from __future__ import annotations
from typing import List, Union

from .ast import Kind, Leaf, Interior, Node
from .errors import ParseFailure, UnexpectedToken, unexpected
from ..scan import Scanner
from ..scan.checks import is_whitespace, is_newline, is_parens, is_summary_sep

Result = Union[Node, ParseFailure]

BREAKING_CHANGE = "BREAKING CHANGE"


def _failed(r: Result) -> bool:
    return isinstance(r, ParseFailure)

# ---- 개행 헬퍼 (LF / CRLF) ----
def _at_newline(sc: Scanner) -> bool:
    return is_newline(sc.peek()) or is_newline(sc.peek(2))

def _eat_newline(sc: Scanner) -> str:
    if sc.peek(2) == "\r\n":
        return sc.next(2)
    return sc.next()


# --- 진입점 ---
def parse_message(commit_text: str) -> Interior:
    """
    커밋 메시지 전체를 파싱해 `message` 노드를 돌려준다.
    summary가 없거나 깨졌으면 UnexpectedToken을 던진다.
    summary 뒤의 본문이 footer 묶음으로 해석되지 않으면 빈 body-footer가 된다(오류 아님).
    """
    sc = Scanner(commit_text.strip())

    # <summary>
    s = summary(sc)
    if _failed(s):
        raise UnexpectedToken(s)
    children: List[Node] = [s]
    if sc.eof():
        return Interior(Kind.MESSAGE, tuple(children))

    # <summary> <newline> <body-footer>
    # text는 개행에서만 멈추므로 여기 걸리면 스캐너/문법 불일치다. 조용히 버리지 않는다.
    if not _at_newline(sc):
        raise UnexpectedToken(unexpected(sc, ["newline"]))
    _eat_newline(sc)
    # summary와 footer 사이의 빈 줄(관례상 1줄)은 건너뛴다
    while _at_newline(sc):
        _eat_newline(sc)
    children.append(body_footer(sc))
    return Interior(Kind.MESSAGE, tuple(children))


def summary(sc: Scanner) -> Result:
    """
    <type> "(" <scope> ")" <summary-sep> <text>
    | <type> <summary-sep> <text>
    다음 글자로 갈래를 정한다: ':' / '!:' → scope 없는 형태, '(' → scope 형태.
    """
    t = type_(sc)
    if _failed(t):
        return t
    children: List[Node] = [t]

    if sc.peek() == ":" or is_summary_sep(sc.peek(2)):
        # <type> <summary-sep> <text>
        sep = summary_sep(sc)
        if _failed(sep):
            return sep
        children.append(sep)
        children.append(text(sc))
    elif sc.peek() == "(":
        # <type> "(" <scope> ")" <summary-sep> <text>
        sc.next()
        s = scope(sc)
        if _failed(s):
            return s
        children.append(s)
        if sc.peek() != ")":
            return unexpected(sc, [")"])
        sc.next()
        sep = summary_sep(sc)
        if _failed(sep):
            return sep
        children.append(sep)
        children.append(text(sc))
    else:
        return unexpected(sc, [":", "("])
    return Interior(Kind.SUMMARY, tuple(children))


def type_(sc: Scanner) -> Result:
    """최장 일치. 개행/괄호/공백/':'/'!:' 앞에서 멈춘다. 빈 매치는 실패."""
    start = sc.position()
    while not sc.eof():
        ch = sc.peek()
        if (is_parens(ch) or is_whitespace(ch) or _at_newline(sc)
                or is_summary_sep(sc.peek(2)) or ch == ":"):
            break
        sc.next()
    if sc.pos == start:
        return unexpected(sc, ["type"])
    return Leaf(Kind.TYPE, sc.slice_from(start))


def text(sc: Scanner) -> Leaf:
    """개행 전까지 전부. 빈 문자열도 허용(실패하지 않음)."""
    start = sc.position()
    while not sc.eof() and not _at_newline(sc):
        sc.next()
    return Leaf(Kind.TEXT, sc.slice_from(start))


def summary_sep(sc: Scanner) -> Result:
    """<summary-sep> ::= ["!"] ":" *<whitespace>. '!'는 바로 뒤에 ':'가 올 때만 breaking-change 표식."""
    children: List[Node] = []
    if is_summary_sep(sc.peek(2)):
        children.append(Leaf(Kind.BREAKING_CHANGE, sc.next()))
        children.append(Leaf(Kind.SEPARATOR, sc.next()))
    elif sc.peek() == ":":
        children.append(Leaf(Kind.SEPARATOR, sc.next()))
    else:
        return unexpected(sc, [":"])
    sc.consume_whitespace()
    return Interior(Kind.SUMMARY_SEP, tuple(children))


def scope(sc: Scanner) -> Result:
    start = sc.position()
    while not sc.eof():
        if is_parens(sc.peek()) or _at_newline(sc):
            break
        sc.next()
    if sc.pos == start:
        return unexpected(sc, ["scope"])
    return Leaf(Kind.SCOPE, sc.slice_from(start))


def body_footer(sc: Scanner) -> Interior:
    """
    1*<footer>: 시작 위치부터 끝까지 footer가 빈틈없이 이어질 때만 채택한다.
    하나라도 실패하면 지금까지 모은 footer를 버리고 시작 위치로 되돌린 뒤
    빈 body-footer를 돌려준다. 자유 형식 본문은 트리에 남지 않는다.
    """
    # TODO: 자유 형식 본문을 `body` 노드로 보존하기 (body NEWLINE 1*body-footer | body)
    start = sc.position()
    footers: List[Node] = []
    while not sc.eof():
        f = footer(sc)
        if _failed(f):
            footers = []
            sc.rewind(start)
            break
        footers.append(f)
    return Interior(Kind.BODY_FOOTER, tuple(footers))


def footer(sc: Scanner) -> Result:
    """<token> <separator> *<whitespace> <value> <newline>?"""
    t = token(sc)
    if _failed(t):
        return t
    s = separator(sc)
    if _failed(s):
        return s
    sc.consume_whitespace()
    v = value(sc)
    if _at_newline(sc):
        _eat_newline(sc)
    return Interior(Kind.FOOTER, (t, s, v))


def token(sc: Scanner) -> Result:
    """
    "BREAKING CHANGE"
    | <type> "(" <scope> ")"
    | <type>
    """
    # "BREAKING CHANGE": 실패하면 위치 복구 후 type으로
    start = sc.position()
    b = breaking_change_literal(sc)
    if not _failed(b):
        return Interior(Kind.TOKEN, (b,))
    sc.rewind(start)

    t = type_(sc)
    if _failed(t):
        return t
    children: List[Node] = [t]
    if sc.peek() == "(":
        sc.next()
        s = scope(sc)
        if _failed(s):
            return s
        if sc.peek() != ")":
            return unexpected(sc, [")"])
        sc.next()
        children.append(s)
    return Interior(Kind.TOKEN, tuple(children))


def breaking_change_literal(sc: Scanner) -> Result:
    if not sc.peek_literal(BREAKING_CHANGE):
        return unexpected(sc, [BREAKING_CHANGE])
    return Leaf(Kind.BREAKING_CHANGE, sc.next(len(BREAKING_CHANGE)))


def value(sc: Scanner) -> Interior:
    """<text> *<continuation>: 연속 줄은 실패할 때까지 탐욕적으로."""
    children: List[Node] = [text(sc)]
    while True:
        c = continuation(sc)
        if _failed(c):
            break
        children.append(c)
    return Interior(Kind.VALUE, tuple(children))


def continuation(sc: Scanner) -> Result:
    """<newline> <whitespace> <text>: 들여쓰기 없는 다음 줄은 소비하지 않는다."""
    start = sc.position()
    if not _at_newline(sc):
        return unexpected(sc, ["continuation"])
    _eat_newline(sc)
    if not is_whitespace(sc.peek()):
        sc.rewind(start)
        return unexpected(sc, ["continuation"])
    sc.next()
    return Interior(Kind.CONTINUATION, (text(sc),))


def separator(sc: Scanner) -> Result:
    """<summary-sep> | ' #'"""
    start = sc.position()
    sep = summary_sep(sc)
    if not _failed(sep):
        return sep
    sc.rewind(start)

    # ' #'
    if sc.peek_literal(" #"):
        return Leaf(Kind.SEPARATOR, sc.next(2))
    return unexpected(sc, ["separator"])
