from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from .errors import RepositoryError
from .history import HistoryProvider
from .identity import AuthorIdentity, resolve_identities
from .models import AuthorTotals, WindowReport
from .windows import ContributionWindow


def default_jobs() -> int:
    return max(1, min(8, (os.cpu_count() or 4)))


def author_totals(
    provider: HistoryProvider,
    identity: AuthorIdentity,
    window: ContributionWindow,
    commits: int,
) -> AuthorTotals:
    stats = provider.author_diff_stats(identity, window)
    files = provider.author_touched_files(identity, window)
    return AuthorTotals(
        identity=identity,
        commits=commits,
        insertions=max(0, int(stats.insertions or 0)),
        deletions=max(0, int(stats.deletions or 0)),
        files_changed=max(0, int(stats.files_changed or 0)),
        files=set(files or ()),
    )


def aggregate_window(provider: HistoryProvider, window: ContributionWindow, *, jobs: int | None = None) -> WindowReport:
    """
    Build per-author totals for one window.

    Listing commit authors is repository-scoped: its HistoryQueryError propagates.
    Per-author queries run on a bounded thread pool; each task returns its own
    AuthorTotals and the main thread merges them once they complete. An author
    whose queries fail or return malformed data keeps its commit count, gets zero
    line/file totals, and adds a warning. RepositoryError still aborts the run.
    An interrupt cancels whatever has not started and re-raises, so no partial
    report escapes.
    """
    records = provider.list_commit_authors(window)
    identities, counts, warnings = resolve_identities(records)

    totals: dict[str, AuthorTotals] = {}
    if not identities:
        return WindowReport(window=window, totals=totals, warnings=warnings)

    workers = max(1, min(jobs or default_jobs(), len(identities)))
    ex = ThreadPoolExecutor(max_workers=workers)
    try:
        futs: dict[Future[AuthorTotals], AuthorIdentity] = {}
        for identity in identities:
            fut = ex.submit(author_totals, provider, identity, window, counts[identity.email])
            futs[fut] = identity

        for fut in as_completed(futs):
            identity = futs[fut]
            try:
                totals[identity.email] = fut.result()
            except RepositoryError:
                raise
            except Exception as e:
                warnings.append(f"{identity.label} <{identity.email}>: {e}; counting 0 lines and 0 files")
                totals[identity.email] = AuthorTotals(identity=identity, commits=counts[identity.email])
    except BaseException:
        ex.shutdown(wait=False, cancel_futures=True)
        raise
    ex.shutdown(wait=True)

    # first-seen order, independent of completion order
    ordered = {identity.email: totals[identity.email] for identity in identities}
    return WindowReport(window=window, totals=ordered, warnings=warnings)
