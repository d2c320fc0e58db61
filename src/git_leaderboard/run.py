from __future__ import annotations

import datetime as dt
import sys
from typing import TextIO

from .aggregate import aggregate_window
from .config import Settings
from .git import get_current_branch, get_remote_origin, require_repo
from .history import GitHistoryProvider, HistoryProvider
from .render import WINDOW_SEPARATOR, render_header, render_window


def run_leaderboard(
    settings: Settings,
    *,
    today: dt.date | None = None,
    provider: HistoryProvider | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """
    Print the header and one full section per window.

    Windows are computed before any output, so a bad window length fails fast.
    A section is written only after its aggregation completed; RepositoryError,
    HistoryQueryError and KeyboardInterrupt propagate to the caller.
    """
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    if today is None:
        today = dt.date.today()

    windows = settings.build_windows(today=today)

    repo = require_repo(settings.repo)
    if provider is None:
        provider = GitHistoryProvider(repo, include_merges=settings.include_merges, timeout_s=settings.timeout_s)

    out.write(
        render_header(
            repo_label=get_remote_origin(repo),
            branch=get_current_branch(repo),
            generated_on=today.isoformat(),
        )
        + "\n"
    )
    out.flush()

    for i, window in enumerate(windows):
        report = aggregate_window(provider, window, jobs=settings.jobs)
        if i > 0:
            out.write(WINDOW_SEPARATOR + "\n\n")
        out.write(render_window(report, settings.max_contributors, settings.name_width))
        out.flush()
        for w in report.warnings:
            print(f"Warning: [{window.label}] {w}", file=err)
    return 0
