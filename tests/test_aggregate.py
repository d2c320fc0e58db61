from __future__ import annotations

import datetime as dt

import pytest

from fakes import FakeHistory, alice_and_bob
from git_leaderboard.aggregate import aggregate_window, default_jobs
from git_leaderboard.errors import HistoryQueryError, RepositoryError
from git_leaderboard.identity import AuthorIdentity
from git_leaderboard.models import DiffStats
from git_leaderboard.windows import ContributionWindow

WINDOW = ContributionWindow(label="Past Week", since=dt.date(2026, 3, 1))


def test_aggregate_window_builds_totals_per_identity() -> None:
    provider = alice_and_bob()
    report = aggregate_window(provider, WINDOW, jobs=4)

    assert list(report.totals) == ["a@x.com", "b@x.com"]
    alice = report.totals["a@x.com"]
    assert alice.commits == 5
    assert (alice.insertions, alice.deletions, alice.changed) == (40, 10, 50)
    assert alice.files_changed == 6
    assert alice.distinct_files == 4
    bob = report.totals["b@x.com"]
    assert (bob.commits, bob.changed, bob.distinct_files) == (2, 5, 1)
    assert report.warnings == []


def test_one_query_per_identity_not_per_commit() -> None:
    provider = alice_and_bob()
    aggregate_window(provider, WINDOW, jobs=2)
    assert sorted(provider.queried) == ["a@x.com", "b@x.com"]


def test_empty_window_has_no_totals() -> None:
    report = aggregate_window(FakeHistory(records=[]), WINDOW)
    assert report.totals == {}
    assert report.warnings == []


def test_rename_only_author_counts_zero_lines() -> None:
    provider = FakeHistory(
        records=[("Renamer", "r@x.com")],
        stats={"r@x.com": DiffStats(files_changed=1)},
        files={"r@x.com": {"new_name.py"}},
    )
    report = aggregate_window(provider, WINDOW, jobs=1)
    t = report.totals["r@x.com"]
    assert t.changed == 0
    assert t.distinct_files == 1


def test_failing_author_degrades_to_zero_with_warning() -> None:
    provider = alice_and_bob()
    provider.failing = {"b@x.com"}
    report = aggregate_window(provider, WINDOW, jobs=2)

    bob = report.totals["b@x.com"]
    assert bob.commits == 2
    assert bob.changed == 0
    assert bob.distinct_files == 0
    assert report.totals["a@x.com"].changed == 50
    assert len(report.warnings) == 1
    assert "Bob <b@x.com>" in report.warnings[0]
    assert "timed out" in report.warnings[0]


def test_listing_failure_propagates() -> None:
    class Broken(FakeHistory):
        def list_commit_authors(self, window: ContributionWindow) -> list[tuple[str, str]]:
            raise HistoryQueryError("git log exited 128: fatal: bad revision")

    with pytest.raises(HistoryQueryError):
        aggregate_window(Broken(records=[]), WINDOW)


def test_interrupt_propagates_without_report() -> None:
    class Interrupted(FakeHistory):
        def author_touched_files(self, identity: AuthorIdentity, window: ContributionWindow) -> set[str]:
            raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        aggregate_window(Interrupted(records=[("A", "a@x.com"), ("B", "b@x.com")]), WINDOW, jobs=2)


def test_malformed_records_are_dropped_and_reported() -> None:
    provider = FakeHistory(records=[("NoEmail", ""), ("Alice", "a@x.com")])
    report = aggregate_window(provider, WINDOW)
    assert list(report.totals) == ["a@x.com"]
    assert len(report.warnings) == 1


def test_default_jobs_is_bounded() -> None:
    assert 1 <= default_jobs() <= 8


def test_malformed_author_data_degrades_to_zero_with_warning() -> None:
    class Malformed(FakeHistory):
        def author_diff_stats(self, identity: AuthorIdentity, window: ContributionWindow) -> DiffStats:
            if identity.email == "b@x.com":
                return None  # type: ignore[return-value]
            return super().author_diff_stats(identity, window)

    base = alice_and_bob()
    provider = Malformed(records=base.records, stats=base.stats, files=base.files)
    report = aggregate_window(provider, WINDOW, jobs=2)

    assert report.totals["b@x.com"].commits == 2
    assert report.totals["b@x.com"].changed == 0
    assert report.totals["b@x.com"].distinct_files == 0
    assert report.totals["a@x.com"].changed == 50
    assert len(report.warnings) == 1
    assert "Bob <b@x.com>" in report.warnings[0]


def test_repository_error_during_author_query_propagates() -> None:
    class GitGone(FakeHistory):
        def author_touched_files(self, identity: AuthorIdentity, window: ContributionWindow) -> set[str]:
            raise RepositoryError("git executable not found")

    with pytest.raises(RepositoryError):
        aggregate_window(GitGone(records=[("A", "a@x.com")]), WINDOW, jobs=1)
