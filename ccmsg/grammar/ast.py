# ccmsg/grammar/ast.py
"""Commit message AST
- Leaf: kind + value (입력의 슬라이스)
- Interior: kind + children (문법 순서 그대로)
- 노드는 생성 후 불변. 부모가 자식을 단독 소유한다
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Iterator, Optional, Tuple, Union


class Kind:
    MESSAGE         = "message"
    SUMMARY         = "summary"
    TYPE            = "type"
    SCOPE           = "scope"
    TEXT            = "text"
    SUMMARY_SEP     = "summary-sep"
    SEPARATOR       = "separator"
    BREAKING_CHANGE = "breaking-change"   # summary-sep 안의 "!" 또는 token 안의 "BREAKING CHANGE"
    BODY_FOOTER     = "body-footer"
    FOOTER          = "footer"
    TOKEN           = "token"
    VALUE           = "value"
    CONTINUATION    = "continuation"

    ALL = (
        MESSAGE, SUMMARY, TYPE, SCOPE, TEXT, SUMMARY_SEP, SEPARATOR,
        BREAKING_CHANGE, BODY_FOOTER, FOOTER, TOKEN, VALUE, CONTINUATION,
    )


@dataclass(frozen=True)
class Leaf:
    kind: str
    value: str


@dataclass(frozen=True)
class Interior:
    """
    내부 노드.
    - children: 문법 순서의 자식 튜플(선택 요소가 없으면 그냥 빠진다)
    """
    kind: str
    children: Tuple["Node", ...] = ()

    def find(self, kind: str) -> Optional["Node"]:
        """kind가 일치하는 첫 번째 직계 자식(없으면 None)."""
        for c in self.children:
            if c.kind == kind:
                return c
        return None

    def find_all(self, kind: str) -> Iterator["Node"]:
        return (c for c in self.children if c.kind == kind)


Node = Union[Leaf, Interior]
