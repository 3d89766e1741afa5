"""ccmsg – Conventional Commits 메시지 파서 CLI

사용 예)
    $ ccmsg parse .git/COMMIT_EDITMSG
    $ git log -1 --format=%B | ccmsg parse - --json
    $ ccmsg check .git/COMMIT_EDITMSG -D

기능
----
- parse : 메시지를 파싱해 트리(기본) 또는 JSON(--json)을 표준출력으로
- check : 파싱만 수행하고 요약 한 줄 출력. 실패 시 종료코드 2 (commit-msg 훅 용)

디버그 모드(-D/--debug)를 켜면 로딩/파싱 단계별 요약을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import json
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _load(path: str, debug: bool, keep_comments: bool) -> str:
    from .grammar.loader import load_commit_text
    text = load_commit_text(path, strip_comments=not keep_comments)
    if debug: _eprint("[DEBUG] loaded | chars=%d lines=%d" % (len(text), text.count("\n") + 1))
    return text


def _parse(text: str, debug: bool):
    from .grammar.parser import parse_message
    tree = parse_message(text)
    if debug:
        bf = tree.find("body-footer")
        _eprint("[DEBUG] parsed | footers=%d" % (len(bf.children) if bf is not None else 0))
    return tree


def _report_syntax_error(text: str, e) -> None:
    from .grammar.errors import caret_snippet
    f = e.failure
    _eprint("[SYNTAX ERROR]")
    _eprint(f"{f.message} ({f.line}:{f.col})")
    # 파서는 앞뒤 공백을 잘라낸 원문 기준으로 위치를 센다
    _eprint(caret_snippet(text.strip(), f.offset))

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_parse(args) -> int:
    from .grammar.errors import UnexpectedToken
    from .grammar.render import dump, to_dict
    try:
        text = _load(args.file, debug=args.debug, keep_comments=args.keep_comments)
    except (OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2
    try:
        tree = _parse(text, debug=args.debug)
    except UnexpectedToken as e:
        _report_syntax_error(text, e)
        return 2

    if args.json:
        print(json.dumps(to_dict(tree), indent=2, ensure_ascii=False))
    else:
        print(dump(tree))
    return 0


def cmd_check(args) -> int:
    from .grammar.errors import UnexpectedToken
    try:
        text = _load(args.file, debug=args.debug, keep_comments=args.keep_comments)
    except (OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2
    try:
        tree = _parse(text, debug=args.debug)
    except UnexpectedToken as e:
        _report_syntax_error(text, e)
        return 2

    summary = tree.find("summary")
    bf = tree.find("body-footer")
    n_footers = sum(1 for _ in bf.find_all("footer")) if bf is not None else 0
    print(f"[CHECK OK] type={summary.find('type').value} footers={n_footers}")
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="ccmsg", description="Conventional Commits message parser CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_parse = sub.add_parser("parse", help="메시지를 파싱해 트리를 출력합니다")
    p_parse.add_argument("file", help="커밋 메시지 파일 ('-'이면 stdin)")
    p_parse.add_argument("--json", action="store_true", help="트리를 JSON으로 출력")
    p_parse.add_argument("--keep-comments", action="store_true", help="'#' 주석 줄을 지우지 않음")
    p_parse.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_parse.set_defaults(func=cmd_parse)

    p_check = sub.add_parser("check", help="메시지 구조를 검사합니다 (실패 시 종료코드 2)")
    p_check.add_argument("file", help="커밋 메시지 파일 ('-'이면 stdin)")
    p_check.add_argument("--keep-comments", action="store_true", help="'#' 주석 줄을 지우지 않음")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
