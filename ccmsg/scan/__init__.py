# ccmsg/scan/__init__.py
"""ccmsg 스캐너: 커밋 메시지 원문 위를 움직이는 문자 커서.

특징
----
- 입력 문자열은 **불변**, 커서(`pos`)만 움직인다
- 1문자/고정 길이 lookahead(`peek`), 리터럴 lookahead(`peek_literal`)
- `position()`으로 얻은 위치로만 `rewind` 가능(백트래킹)
- 남은 입력을 복사하지 않는다. leaf 값은 `slice_from`으로 잘라낸다

API
---
- `position() -> int`
- `eof() -> bool`
- `peek(n=1) -> Optional[str]`
- `peek_literal(s) -> bool`
- `next(n=None) -> str`
- `consume_whitespace() -> None`      # 공백/탭만. 개행은 건드리지 않음
- `rewind(pos) -> None`
- `slice_from(start) -> str`
- `line_col(offset=None) -> (line, col)`   # 1-based
"""

from __future__ import annotations
from typing import Optional, Set, Tuple

from .checks import is_whitespace


class Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.n = len(text)
        # position()으로 관측된 오프셋만 rewind 대상이 된다
        self._seen: Set[int] = {0}

    def position(self) -> int:
        self._seen.add(self.pos)
        return self.pos

    def eof(self) -> bool:
        return self.pos >= self.n

    def peek(self, n: int = 1) -> Optional[str]:
        """커서 위치의 최대 n글자. EOF면 None."""
        if self.pos >= self.n:
            return None
        return self.text[self.pos:self.pos + n]

    def peek_literal(self, s: str) -> bool:
        return self.text.startswith(s, self.pos)

    def next(self, n: Optional[int] = None) -> str:
        """n이 없으면 1글자, 있으면 n글자를 소비해 돌려준다.
        호출 전에 eof()/peek()로 확인하는 것은 호출자 책임."""
        count = 1 if n is None else n
        if count < 1 or self.pos + count > self.n:
            raise IndexError(
                f"scanner: cannot consume {count} char(s) at {self.pos} (length {self.n})"
            )
        start = self.pos
        self.pos += count
        return self.text[start:self.pos]

    def consume_whitespace(self) -> None:
        while self.pos < self.n and is_whitespace(self.text[self.pos]):
            self.pos += 1

    def rewind(self, pos: int) -> None:
        if pos not in self._seen:
            raise ValueError(f"scanner: rewind to unobserved offset {pos}")
        self.pos = pos

    def slice_from(self, start: int) -> str:
        return self.text[start:self.pos]

    def line_col(self, offset: Optional[int] = None) -> Tuple[int, int]:
        off = self.pos if offset is None else offset
        line = self.text.count("\n", 0, off) + 1
        col = off - (self.text.rfind("\n", 0, off) + 1) + 1
        return line, col

    def __repr__(self) -> str:
        return f"Scanner(pos={self.pos}, len={self.n})"
