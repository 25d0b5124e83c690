from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest


def run(cmd: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> str:
    proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=True, capture_output=True, text=True)
    return proc.stdout


class Repo:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._tick = 0

    def git(self, *args: str) -> str:
        return run(["git", *args], cwd=self.path)

    def write(self, filename: str, content: str) -> None:
        p = self.path / filename
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")

    def commit(self, message: str, *, files: dict[str, str] | None = None, allow_empty: bool = False) -> str:
        for name, content in (files or {}).items():
            self.write(name, content)
            self.git("add", name)
        # Fixed, increasing dates keep `git log` order deterministic.
        self._tick += 1
        env = os.environ.copy()
        env["GIT_AUTHOR_DATE"] = f"2025-01-01T00:00:{self._tick:02d}Z"
        env["GIT_COMMITTER_DATE"] = env["GIT_AUTHOR_DATE"]
        cmd = ["git", "commit", "-q", "-m", message]
        if allow_empty:
            cmd.insert(2, "--allow-empty")
        run(cmd, cwd=self.path, env=env)
        return self.head()

    def head(self) -> str:
        return self.git("rev-parse", "HEAD").strip()


@pytest.fixture
def repo(tmp_path: Path) -> Repo:
    path = tmp_path / "repo"
    path.mkdir()
    run(["git", "init", "-q"], cwd=path)
    run(["git", "config", "user.name", "Test User"], cwd=path)
    run(["git", "config", "user.email", "test@example.com"], cwd=path)
    run(["git", "config", "commit.gpgsign", "false"], cwd=path)
    return Repo(path)
