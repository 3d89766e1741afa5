# ccmsg/__init__.py
"""Conventional Commits message parser.

This package provides:
- a character Scanner with backtracking (`ccmsg.scan`)
- a recursive-descent grammar parser producing an immutable tree (`ccmsg.grammar`)
- `parse(text)`, the single entry point; raises `UnexpectedToken` on a bad summary
"""

from .grammar.ast import Kind, Leaf, Interior, Node
from .grammar.errors import ParseFailure, UnexpectedToken
from .grammar.parser import parse_message as parse
from .scan import Scanner
