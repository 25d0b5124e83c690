from __future__ import annotations

from typing import Sequence

from .models import CommitInfo, OwnerStats, Summary

LABEL_SHA_LEN = 6


def commit_label(commit: CommitInfo) -> str:
    return f"{commit.sha[:LABEL_SHA_LEN]} {commit.summary}"


def example_for(path: str, label: str) -> str:
    return f"{path} in {label}"


def detail_line(path: str, owners: Sequence[str]) -> str:
    if not owners:
        return f"  {path}:"
    return f"  {path}: {' '.join(owners)}"


def owner_summary_line(owner: str, st: OwnerStats) -> str:
    return f" * {owner}: {st.files} files in {st.commits} commits, including: {st.example}"


def unowned_summary_line(st: OwnerStats) -> str:
    return f" * no owner: {st.files} files, including: {st.example}"


def summary_lines(summary: Summary) -> list[str]:
    lines: list[str] = ["", "Summary:"]
    for owner, st in summary.owners:
        lines.append(owner_summary_line(owner, st))
    if summary.unowned.files != 0:
        lines.append(unowned_summary_line(summary.unowned))
    return lines
