from __future__ import annotations

import dataclasses
from typing import Iterable, Union, assert_never

from .models import DisplayFilter, Settings


@dataclasses.dataclass(frozen=True)
class Team:
    name: str  # "org/team", no leading "@"


@dataclasses.dataclass(frozen=True)
class Username:
    name: str  # no leading "@"


@dataclasses.dataclass(frozen=True)
class Email:
    address: str


Owner = Union[Team, Username, Email]


def parse_owner(token: str) -> Owner | None:
    """
    Classify a CODEOWNERS owner token:
      - @org/team-name -> Team
      - @username      -> Username
      - user@host      -> Email
    Returns None for anything else.
    """
    t = token.strip()
    if t.startswith("@"):
        name = t[1:]
        if not name or "@" in name:
            return None
        if "/" in name:
            org, _, team = name.partition("/")
            if not org or not team or "/" in team:
                return None
            return Team(name)
        return Username(name)
    local, sep, host = t.partition("@")
    if sep and local and host and "@" not in host:
        return Email(t)
    return None


def display_owner(owner: Owner) -> str:
    if isinstance(owner, Team):
        return f"@{owner.name}"
    if isinstance(owner, Username):
        return f"@{owner.name}"
    if isinstance(owner, Email):
        return owner.address
    assert_never(owner)


def _kept(owner: Owner, display: DisplayFilter) -> bool:
    if display is DisplayFilter.ALL:
        return True
    if display is DisplayFilter.TEAMS:
        return isinstance(owner, Team)
    if display is DisplayFilter.USERS:
        return isinstance(owner, Username)
    if display is DisplayFilter.EMAILS:
        return isinstance(owner, Email)
    assert_never(display)


def format_owners(owners: Iterable[Owner] | None, settings: Settings) -> list[str]:
    # An empty result may mean "filtered out" as well as "nothing resolved";
    # callers that care look at the unfiltered owners.
    if not owners:
        return []
    return [display_owner(o) for o in owners if _kept(o, settings.display)]
