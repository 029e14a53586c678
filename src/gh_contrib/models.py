"""Data models for gh-contrib."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from . import dates


class ItemKind(str, Enum):
    PULL_REQUEST = "is:pr"
    ISSUE = "is:issue"


class ItemState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class ContributionItem:
    kind: ItemKind
    state: ItemState
    created_at: str
    closed_at: str | None = None
    number: int = 0
    title: str = ""
    url: str = ""
    body: str = ""
    repository: str = ""

    @classmethod
    def from_api(cls, kind: ItemKind, payload: dict) -> ContributionItem:
        """Build an item from one entry of a search API response."""
        state = ItemState.CLOSED if payload.get("state") == ItemState.CLOSED.value else ItemState.OPEN
        repo = payload.get("repository") or {}
        repository = repo.get("name", "") if isinstance(repo, dict) else ""
        if not repository and payload.get("repository_url"):
            repository = payload["repository_url"].rstrip("/").rsplit("/", 1)[-1]
        return cls(
            kind=kind,
            state=state,
            created_at=payload.get("created_at") or "",
            closed_at=payload.get("closed_at") or None,
            number=payload.get("number") or 0,
            title=payload.get("title") or "",
            url=payload.get("html_url") or "",
            body=payload.get("body") or "",
            repository=repository,
        )

    def effective_date(self, now: datetime) -> datetime:
        return dates.resolve_effective_date(self.closed_at, self.created_at, now)


@dataclass(frozen=True)
class WeekBucket:
    index: int
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        return dates.week_label(self.index, self.start, self.end)


@dataclass
class ContributionTally:
    closed_prs: int = 0
    open_prs: int = 0
    closed_issues: int = 0
    open_issues: int = 0

    def add(self, kind: ItemKind, state: ItemState) -> None:
        if kind is ItemKind.PULL_REQUEST:
            if state is ItemState.CLOSED:
                self.closed_prs += 1
            else:
                self.open_prs += 1
        elif state is ItemState.CLOSED:
            self.closed_issues += 1
        else:
            self.open_issues += 1

    def merge(self, other: ContributionTally) -> None:
        self.closed_prs += other.closed_prs
        self.open_prs += other.open_prs
        self.closed_issues += other.closed_issues
        self.open_issues += other.open_issues

    @property
    def prs(self) -> int:
        return self.closed_prs + self.open_prs

    @property
    def issues(self) -> int:
        return self.closed_issues + self.open_issues

    @property
    def total(self) -> int:
        return self.prs + self.issues


@dataclass
class ContributionGraph:
    since: datetime
    today: datetime
    buckets: list[WeekBucket] = field(default_factory=list)
    tallies: dict[int, ContributionTally] = field(default_factory=dict)
    pr_count: int = 0
    issue_count: int = 0

    @property
    def totals(self) -> ContributionTally:
        combined = ContributionTally()
        for tally in self.tallies.values():
            combined.merge(tally)
        return combined
