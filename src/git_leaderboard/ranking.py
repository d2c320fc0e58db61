from __future__ import annotations

from typing import Iterable

from .errors import ConfigError
from .models import AuthorTotals, LeaderboardEntry

METRIC_COMMITS = "commits"
METRIC_LINES = "lines"
METRIC_FILES = "files"
METRICS = (METRIC_COMMITS, METRIC_LINES, METRIC_FILES)


def metric_value(t: AuthorTotals, metric: str) -> int:
    if metric == METRIC_COMMITS:
        return t.commits
    if metric == METRIC_LINES:
        return t.changed
    if metric == METRIC_FILES:
        return t.distinct_files
    raise ValueError(f"Unknown metric: {metric!r} (expected one of {', '.join(METRICS)})")


def validate_top_n(top_n: int) -> int:
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n <= 0:
        raise ConfigError(f"Invalid number of contributors: {top_n!r} (expected a positive integer)")
    return top_n


def rank(totals: Iterable[AuthorTotals], metric: str, top_n: int) -> list[LeaderboardEntry]:
    """Sort by metric descending; ties go to display name ascending, then email."""
    validate_top_n(top_n)
    items = sorted(
        totals,
        key=lambda t: (-metric_value(t, metric), t.name.casefold(), t.name, t.email),
    )
    return [
        LeaderboardEntry(
            rank=i,
            name=t.name,
            email=t.email,
            value=metric_value(t, metric),
            insertions=t.insertions,
            deletions=t.deletions,
        )
        for i, t in enumerate(items[:top_n], start=1)
    ]


def rank_all(totals: Iterable[AuthorTotals], top_n: int) -> dict[str, list[LeaderboardEntry]]:
    items = list(totals)
    return {metric: rank(items, metric, top_n) for metric in METRICS}
