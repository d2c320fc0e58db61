from __future__ import annotations

from .models import LeaderboardEntry, WindowReport
from .ranking import METRIC_COMMITS, METRIC_FILES, METRIC_LINES, rank_all

NAME_WIDTH = 30
ELLIPSIS = "..."
NO_DATA = "  (no data)"

BANNER_RULE = "=" * 47
WINDOW_SEPARATOR = "-" * 47

TABLE_TITLES = {
    METRIC_COMMITS: "Commits:",
    METRIC_LINES: "Lines changed (added + deleted):",
    METRIC_FILES: "Files changed:",
}


def trunc(s: str, max_len: int = NAME_WIDTH) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= len(ELLIPSIS):
        return s[: max(0, max_len)]
    return s[: max_len - len(ELLIPSIS)] + ELLIPSIS


def render_row(e: LeaderboardEntry, metric: str, name_width: int = NAME_WIDTH) -> str:
    name = f"{trunc(e.name, name_width):<{name_width}}"
    if metric == METRIC_COMMITS:
        return f"  {e.rank:2d}. {name} {e.value:5d} commits"
    if metric == METRIC_LINES:
        return f"  {e.rank:2d}. {name} {e.value:7d} lines (+{e.insertions}/-{e.deletions})"
    if metric == METRIC_FILES:
        return f"  {e.rank:2d}. {name} {e.value:5d} files"
    raise ValueError(f"Unknown metric: {metric!r}")


def render_table(entries: list[LeaderboardEntry], metric: str, name_width: int = NAME_WIDTH) -> str:
    if not entries:
        return NO_DATA + "\n"
    return "".join(render_row(e, metric, name_width) + "\n" for e in entries)


def render_window(report: WindowReport, top_n: int, name_width: int = NAME_WIDTH) -> str:
    boards = rank_all(report.totals.values(), top_n)
    lines: list[str] = []
    lines.append(f"=== Top Contributors ({report.window.label}) ===")
    lines.append(f"Since: {report.window.since_iso}")
    lines.append("")
    for metric, title in TABLE_TITLES.items():
        lines.append(title)
        lines.append(render_table(boards[metric], metric, name_width).rstrip("\n"))
        lines.append("")
    return "\n".join(lines) + "\n"


def render_header(*, repo_label: str, branch: str, generated_on: str) -> str:
    lines = [
        BANNER_RULE,
        "          GIT CONTRIBUTOR LEADERBOARD         ",
        BANNER_RULE,
        f"Repository: {repo_label or 'Local repository'}",
        f"Current branch: {branch or 'unknown'}",
        f"Generated on: {generated_on}",
        "",
    ]
    return "\n".join(lines) + "\n"
