from __future__ import annotations

import pytest

from git_codeowners.models import DisplayFilter, Settings
from git_codeowners.owners import Email, Team, Username, display_owner, format_owners, parse_owner


def test_parse_owner_variants() -> None:
    assert parse_owner("@org/core") == Team("org/core")
    assert parse_owner("@alice") == Username("alice")
    assert parse_owner("alice@example.com") == Email("alice@example.com")


@pytest.mark.parametrize("token", ["alice", "@", "@org/", "@/team", "@org/team/x", "@a@b", "a@", "a@b@c"])
def test_parse_owner_rejects_malformed(token: str) -> None:
    assert parse_owner(token) is None


def test_display_owner_sigils() -> None:
    assert display_owner(Team("org/core")) == "@org/core"
    assert display_owner(Username("alice")) == "@alice"
    assert display_owner(Email("a@example.com")) == "a@example.com"


OWNERS = (Username("alice"), Team("org/core"), Email("a@example.com"), Team("org/docs"))


def test_format_owners_all_keeps_resolution_order() -> None:
    assert format_owners(OWNERS, Settings()) == ["@alice", "@org/core", "a@example.com", "@org/docs"]


def test_format_owners_filters() -> None:
    assert format_owners(OWNERS, Settings(DisplayFilter.TEAMS)) == ["@org/core", "@org/docs"]
    assert format_owners(OWNERS, Settings(DisplayFilter.USERS)) == ["@alice"]
    assert format_owners(OWNERS, Settings(DisplayFilter.EMAILS)) == ["a@example.com"]


def test_format_owners_empty_inputs() -> None:
    assert format_owners(None, Settings()) == []
    assert format_owners((), Settings()) == []
    assert format_owners((Username("alice"),), Settings(DisplayFilter.TEAMS)) == []
