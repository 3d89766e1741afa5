"""커밋 메시지 로더
- 파일 또는 stdin("-")에서 읽는다
- 개행 정규화(CRLF/CR → LF)
- git이 COMMIT_EDITMSG에서 하듯 '#' 주석 줄과 scissors 줄 이후를 제거(선택)
"""

from __future__ import annotations
import regex as re
import sys
from pathlib    import Path

# "# ------------------------ >8 ------------------------" 부터 끝까지
_SCISSORS_RE = re.compile(r"^#[ \t]*-+[ \t]*>8[ \t]*-+[ \t]*$.*\Z", re.M | re.S)
_COMMENT_RE = re.compile(r"^#[^\n]*(?:\n|\Z)", re.M)


def normalize_commit_text(text: str, strip_comments: bool = True) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if strip_comments:
        text = _SCISSORS_RE.sub("", text)
        text = _COMMENT_RE.sub("", text)
    return text


def load_commit_text(path: str, strip_comments: bool = True) -> str:
    """
    Load Commit Text
    """
    if path == "-":
        text = sys.stdin.read()
    else:
        text = Path(path).read_text(encoding="utf-8")
    return normalize_commit_text(text, strip_comments=strip_comments)
