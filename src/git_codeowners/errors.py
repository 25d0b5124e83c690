from __future__ import annotations


class GitCodeownersError(Exception):
    pass


class ConfigurationError(GitCodeownersError):
    """Missing ruleset, bad explicit ruleset path, or no repository."""


class RulesetError(ConfigurationError):
    def __init__(self, source: str, lineno: int, message: str) -> None:
        super().__init__(f"{source}:{lineno}: {message}")
        self.source = source
        self.lineno = lineno


class GitError(GitCodeownersError):
    def __init__(self, args: list[str], code: int, stderr: str) -> None:
        detail = stderr.strip()[:500] or "no output"
        super().__init__(f"git {' '.join(args)} exited {code}: {detail}")
        self.git_args = list(args)
        self.code = code
        self.stderr = stderr


class RangeResolutionError(GitError):
    pass


class DiffError(GitError):
    pass
