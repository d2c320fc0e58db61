from __future__ import annotations

import dataclasses

from .identity import AuthorIdentity
from .windows import ContributionWindow


@dataclasses.dataclass(frozen=True)
class DiffStats:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclasses.dataclass
class AuthorTotals:
    identity: AuthorIdentity
    commits: int = 0
    insertions: int = 0
    deletions: int = 0
    files_changed: int = 0  # per-commit file counts summed, not distinct
    files: set[str] = dataclasses.field(default_factory=set)

    @property
    def name(self) -> str:
        return self.identity.label

    @property
    def email(self) -> str:
        return self.identity.email

    @property
    def changed(self) -> int:
        return self.insertions + self.deletions

    @property
    def distinct_files(self) -> int:
        return len(self.files)


@dataclasses.dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    name: str
    email: str
    value: int
    insertions: int = 0
    deletions: int = 0


@dataclasses.dataclass
class WindowReport:
    window: ContributionWindow
    totals: dict[str, AuthorTotals]  # email -> totals
    warnings: list[str] = dataclasses.field(default_factory=list)
