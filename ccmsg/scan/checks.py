# ccmsg/scan/checks.py
from __future__ import annotations
from typing import Optional

# All predicates take a lookahead string (or None at EOF) and never consume.

WHITESPACE = (" ", "\t")
NEWLINES = ("\n", "\r\n")
PARENS = ("(", ")")
BREAKING_SEP = "!:"


def is_whitespace(ch: Optional[str]) -> bool:
    return ch in WHITESPACE


def is_newline(tok: Optional[str]) -> bool:
    """`tok` is `peek()` or `peek(2)`; a bare CR is not a newline."""
    return tok in NEWLINES


def is_parens(ch: Optional[str]) -> bool:
    return ch in PARENS


def is_summary_sep(tok: Optional[str]) -> bool:
    """True for the two-char lookahead `!:` (breaking-change marker)."""
    return tok == BREAKING_SEP
