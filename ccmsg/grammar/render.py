# ccmsg/grammar/render.py
"""Tree rendering helpers for the CLI and tests.

- dump:           indented one-node-per-line view
- to_dict:        JSON-able {"type", "value" | "children"} mapping
- render_summary: summary subtree back to `type(scope)!: text`
"""

from __future__ import annotations
from typing import Any, Dict, List

from .ast import Kind, Leaf, Interior, Node


def dump(node: Node, indent: int = 0) -> str:
    lines: List[str] = []
    _dump_into(node, indent, lines)
    return "\n".join(lines)


def _dump_into(node: Node, depth: int, out: List[str]) -> None:
    pad = "  " * depth
    if isinstance(node, Leaf):
        out.append(f"{pad}{node.kind}: {node.value!r}")
        return
    out.append(f"{pad}{node.kind}")
    for c in node.children:
        _dump_into(c, depth + 1, out)


def to_dict(node: Node) -> Dict[str, Any]:
    if isinstance(node, Leaf):
        return {"type": node.kind, "value": node.value}
    return {"type": node.kind, "children": [to_dict(c) for c in node.children]}


def render_summary(summary: Interior) -> str:
    """`type(scope)!: text` 한 줄로 되돌린다.

    다시 파싱하면 같은 summary가 나온다. 단, 여러 줄 메시지에서 summary 줄 끝의
    공백/탭은 `text`에 남아 있지만 한 줄로 다시 파싱할 때는 strip으로 사라진다.
    """
    if summary.kind != Kind.SUMMARY:
        raise ValueError(f"expected a summary node, got {summary.kind!r}")
    out: List[str] = []
    for c in summary.children:
        if c.kind == Kind.SCOPE:
            out.append(f"({c.value})")
        elif c.kind == Kind.SUMMARY_SEP:
            # "!" + ":" 다음 공백 하나
            out.append("".join(leaf.value for leaf in c.children) + " ")
        else:
            out.append(c.value)
    return "".join(out)
