from __future__ import annotations

import io
import json

import pytest

from . import cli
from .grammar.loader import load_commit_text, normalize_commit_text


# ---- loader ----

def test_normalize_newlines() -> None:
    assert normalize_commit_text("a\r\nb\rc") == "a\nb\nc"


def test_strip_git_comments() -> None:
    text = "fix: a\n# Please enter the commit message\n#\nRefs #1\n"
    assert normalize_commit_text(text) == "fix: a\nRefs #1\n"


def test_keep_comments() -> None:
    text = "fix: a\n# note\n"
    assert normalize_commit_text(text, strip_comments=False) == text


def test_strip_scissors_and_below() -> None:
    text = (
        "feat: x\n"
        "\n"
        "Reviewed-by: Jane\n"
        "# ------------------------ >8 ------------------------\n"
        "# Do not modify or remove the line above.\n"
        "diff --git a/f b/f\n"
    )
    assert normalize_commit_text(text) == "feat: x\n\nReviewed-by: Jane\n"


def test_load_from_file(tmp_path) -> None:
    p = tmp_path / "COMMIT_EDITMSG"
    p.write_bytes(b"fix: a\r\n# comment\r\n")
    assert load_commit_text(str(p)) == "fix: a\n"


def test_load_from_stdin(monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("docs: b\n"))
    assert load_commit_text("-") == "docs: b\n"


# ---- cli ----

def _write(tmp_path, text: str) -> str:
    p = tmp_path / "msg.txt"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_check_ok(tmp_path, capsys) -> None:
    path = _write(tmp_path, "chore: cleanup\n\nBREAKING CHANGE: removed X\nReviewed-by: Jane\n")
    assert cli.main(["check", path]) == 0
    assert capsys.readouterr().out.strip() == "[CHECK OK] type=chore footers=2"


def test_check_syntax_error(tmp_path, capsys) -> None:
    path = _write(tmp_path, "nocolon here\n")
    assert cli.main(["check", path]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "valid tokens [:, (]" in err
    assert "nocolon here\n       ^" in err


def test_check_missing_file(tmp_path, capsys) -> None:
    assert cli.main(["check", str(tmp_path / "missing")]) == 2
    assert "[ERROR] FileNotFoundError" in capsys.readouterr().err


def test_parse_json(tmp_path, capsys) -> None:
    path = _write(tmp_path, "feat(api)!: remove endpoint\n")
    assert cli.main(["parse", path, "--json"]) == 0
    tree = json.loads(capsys.readouterr().out)
    summary = tree["children"][0]
    assert summary["children"][0] == {"type": "type", "value": "feat"}
    assert summary["children"][1] == {"type": "scope", "value": "api"}


def test_parse_dump_from_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("fix: a\n"))
    assert cli.main(["parse", "-"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "message"


def test_keep_comments_makes_comment_a_failed_body(tmp_path, capsys) -> None:
    path = _write(tmp_path, "fix: a\n\n# Refs #1\n")
    assert cli.main(["check", path, "--keep-comments"]) == 0
    assert capsys.readouterr().out.strip() == "[CHECK OK] type=fix footers=0"


def test_debug_goes_to_stderr(tmp_path, capsys) -> None:
    path = _write(tmp_path, "fix: a\nRefs #1\n")
    assert cli.main(["check", path, "-D"]) == 0
    captured = capsys.readouterr()
    assert "[DEBUG] loaded" in captured.err
    assert "[DEBUG] parsed | footers=1" in captured.err
    assert "[DEBUG]" not in captured.out


def test_subcommand_required() -> None:
    with pytest.raises(SystemExit):
        cli.main([])
