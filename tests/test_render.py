from __future__ import annotations

from git_codeowners.models import CommitInfo, OwnerStats, Summary
from git_codeowners.render import commit_label, detail_line, summary_lines


def test_commit_label() -> None:
    assert commit_label(CommitInfo(sha="0123456789abcdef", summary="fix the thing")) == "012345 fix the thing"
    assert commit_label(CommitInfo(sha="0123456789abcdef", summary="")) == "012345 "


def test_detail_line() -> None:
    assert detail_line("main.go", ["@core-team", "a@example.com"]) == "  main.go: @core-team a@example.com"
    assert detail_line("README.md", []) == "  README.md:"


def test_summary_lines_with_and_without_unowned() -> None:
    core = OwnerStats(files=3, commits=2, example="main.go in 012345 x")
    s = Summary(owners=(("@core", core),), unowned=OwnerStats())
    assert summary_lines(s) == [
        "",
        "Summary:",
        " * @core: 3 files in 2 commits, including: main.go in 012345 x",
    ]

    s = Summary(owners=(), unowned=OwnerStats(files=1, example="README.md in 012345 x"))
    assert summary_lines(s) == ["", "Summary:", " * no owner: 1 files, including: README.md in 012345 x"]
