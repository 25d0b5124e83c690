from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .errors import ConfigurationError, DiffError, RangeResolutionError
from .models import CommitInfo


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def get_repo_toplevel(candidate: Path) -> Optional[Path]:
    code, out, _ = run_git(["rev-parse", "--show-toplevel"], cwd=candidate)
    if code != 0:
        return None
    try:
        return Path(out.strip()).resolve()
    except Exception:
        return None


def require_repo_toplevel(candidate: Path) -> Path:
    if not candidate.is_dir():
        raise ConfigurationError(f"no such directory: {candidate}")
    top = get_repo_toplevel(candidate)
    if top is None:
        raise ConfigurationError(f"not a git repository: {candidate}")
    return top


def _parse_log_records(out: str) -> list[CommitInfo]:
    commits: list[CommitInfo] = []
    for record in out.split("\0"):
        record = record.lstrip("\n")
        if not record:
            continue
        parts = record.split("\x1f", 2)
        if len(parts) != 3:
            continue
        sha, parents, body = parts
        lines = body.splitlines()
        commits.append(CommitInfo(sha=sha.strip(), summary=lines[0] if lines else "", parents=tuple(parents.split())))
    return commits


def walk_commits(repo: Path, revspecs: Iterable[str]) -> Iterator[CommitInfo]:
    """
    Yield the commits of each revspec in turn, each in `git log` order.
    Every revspec is resolved before the first commit is yielded, so an
    unresolvable one raises RangeResolutionError with nothing walked yet.
    """
    walks: list[list[CommitInfo]] = []
    for spec in revspecs:
        args = ["log", "-z", "--no-show-signature", "--format=%H%x1f%P%x1f%B", "--end-of-options", spec, "--"]
        code, out, err = run_git(args, cwd=repo)
        if code != 0:
            raise RangeResolutionError(args, code, err)
        walks.append(_parse_log_records(out))
    for commits in walks:
        yield from commits


def commit_tree(repo: Path, sha: str) -> str:
    args = ["rev-parse", "--verify", f"{sha}^{{tree}}"]
    code, out, err = run_git(args, cwd=repo)
    if code != 0:
        raise DiffError(args, code, err)
    return out.strip()


def parse_name_status_z(out: str) -> list[str]:
    tokens = out.split("\0")
    paths: set[str] = set()
    i = 0
    while i < len(tokens):
        status = tokens[i].strip()
        i += 1
        if not status:
            continue
        # Renames and copies carry old and new path; everything else one path.
        width = 2 if status[0] in ("R", "C") else 1
        for p in tokens[i : i + width]:
            if p:
                paths.add(p)
        i += width
    return sorted(paths)


def changed_files(repo: Path, parent_tree: str, tree: str) -> list[str]:
    args = ["diff-tree", "-r", "-z", "--name-status", "--find-renames", parent_tree, tree]
    code, out, err = run_git(args, cwd=repo)
    if code != 0:
        raise DiffError(args, code, err)
    return parse_name_status_z(out)


def commit_changed_files(repo: Path, commit: CommitInfo) -> list[str]:
    """Paths touched by `commit` relative to its first parent. Root commits touch nothing."""
    parent = commit.first_parent
    if parent is None:
        return []
    return changed_files(repo, commit_tree(repo, parent), commit_tree(repo, commit.sha))
