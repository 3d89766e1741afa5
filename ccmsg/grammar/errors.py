# ccmsg/grammar/errors.py
"""Parse failure values and the single raised error.

Grammar routines *return* a `ParseFailure` so callers can rewind and try
another alternative; only the entry point turns one into `UnexpectedToken`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..scan import Scanner


@dataclass(frozen=True)
class ParseFailure:
    found: Optional[str]           # offending char, None at EOF
    offset: int
    expected: Tuple[str, ...]
    line: int = 1
    col: int = 1

    @property
    def at_eof(self) -> bool:
        return self.found is None

    @property
    def message(self) -> str:
        valid = ", ".join(self.expected)
        if self.found is None:
            return f"unexpected token EOF valid tokens [{valid}]"
        return f"unexpected token '{self.found}' at position {self.offset} valid tokens [{valid}]"

    def __str__(self) -> str:
        return self.message


def unexpected(sc: "Scanner", expected: Sequence[str]) -> ParseFailure:
    """Failure at the scanner's current offset; does not move the cursor."""
    off = sc.pos
    line, col = sc.line_col(off)
    return ParseFailure(found=sc.peek(), offset=off, expected=tuple(expected), line=line, col=col)


class UnexpectedToken(SyntaxError):
    def __init__(self, failure: ParseFailure):
        super().__init__(failure.message)
        self.failure = failure

    def __str__(self) -> str:
        return self.failure.message


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [start, end) 범위를 반환."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def caret_snippet(src: str, pos: int) -> str:
    """The line holding `pos` with a caret under it."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"
