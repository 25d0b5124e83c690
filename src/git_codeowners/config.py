from __future__ import annotations

import argparse
from pathlib import Path

from .errors import ConfigurationError
from .git import get_repo_toplevel, require_repo_toplevel
from .models import DisplayFilter, Settings
from .ownership import Ruleset, load_ruleset, locate


def settings_from_args(args: argparse.Namespace) -> Settings:
    # argparse enforces that at most one of these is set.
    if getattr(args, "teams", False):
        return Settings(display=DisplayFilter.TEAMS)
    if getattr(args, "users", False):
        return Settings(display=DisplayFilter.USERS)
    if getattr(args, "emails", False):
        return Settings(display=DisplayFilter.EMAILS)
    return Settings()


def codeowners_path(*, explicit: Path | None, search_root: Path) -> Path:
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigurationError(f"CODEOWNERS file not found: {explicit}")
        return explicit
    found = locate(search_root)
    if found is None:
        raise ConfigurationError(f"no CODEOWNERS file found under {search_root}")
    return found


def search_root_for(cwd: Path) -> Path:
    """Repository top level when inside one, otherwise `cwd` itself."""
    if cwd.is_dir():
        top = get_repo_toplevel(cwd)
        if top is not None:
            return top
    return cwd


def _load(path: Path) -> Ruleset:
    try:
        return load_ruleset(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read CODEOWNERS file {path}: {e}") from e


def load_path_config(*, explicit: Path | None, cwd: Path) -> Ruleset:
    search_root = cwd if explicit is not None else search_root_for(cwd)
    return _load(codeowners_path(explicit=explicit, search_root=search_root))


def load_log_config(*, explicit: Path | None, cwd: Path) -> tuple[Path, Ruleset]:
    repo = require_repo_toplevel(cwd)
    return repo, _load(codeowners_path(explicit=explicit, search_root=repo))
