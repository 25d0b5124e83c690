from __future__ import annotations

import dataclasses
import enum


class DisplayFilter(enum.Enum):
    ALL = "all"
    TEAMS = "teams"
    USERS = "users"
    EMAILS = "emails"


@dataclasses.dataclass(frozen=True)
class Settings:
    display: DisplayFilter = DisplayFilter.ALL


@dataclasses.dataclass(frozen=True)
class CommitInfo:
    sha: str
    summary: str
    parents: tuple[str, ...] = ()

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None


@dataclasses.dataclass
class OwnerStats:
    files: int = 0
    commits: int = 0
    example: str = ""

    def note_example(self, example: str) -> None:
        if not self.example:
            self.example = example


@dataclasses.dataclass(frozen=True)
class Summary:
    owners: tuple[tuple[str, OwnerStats], ...]  # ascending by owner display string
    unowned: OwnerStats
