from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Protocol

from .errors import HistoryQueryError
from .git import has_commits, run_git
from .identity import AuthorIdentity
from .models import DiffStats
from .windows import ContributionWindow

_SHORTSTAT_FILES_RE = re.compile(r"(\d+) files? changed")
_SHORTSTAT_INS_RE = re.compile(r"(\d+) insertions?\(\+\)")
_SHORTSTAT_DEL_RE = re.compile(r"(\d+) deletions?\(-\)")


class HistoryProvider(Protocol):
    def list_commit_authors(self, window: ContributionWindow) -> list[tuple[str, str]]: ...

    def author_diff_stats(self, identity: AuthorIdentity, window: ContributionWindow) -> DiffStats: ...

    def author_touched_files(self, identity: AuthorIdentity, window: ContributionWindow) -> set[str]: ...


def parse_author_lines(lines: Iterable[str]) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            continue
        name, sep, email = line.partition("\t")
        if not sep:
            # no separator at all: keep the record so identity resolution can warn about it
            out.append((name, ""))
            continue
        out.append((name, email))
    return out


def parse_shortstat(lines: Iterable[str]) -> DiffStats:
    """
    Sum `git log --shortstat` summary lines, e.g.
      " 3 files changed, 40 insertions(+), 10 deletions(-)"
    Commits without a summary line (renames only, empty commits) contribute nothing.
    """
    files = 0
    insertions = 0
    deletions = 0
    for line in lines:
        m = _SHORTSTAT_FILES_RE.search(line)
        if not m:
            continue
        files += int(m.group(1))
        m_ins = _SHORTSTAT_INS_RE.search(line)
        if m_ins:
            insertions += int(m_ins.group(1))
        m_del = _SHORTSTAT_DEL_RE.search(line)
        if m_del:
            deletions += int(m_del.group(1))
    return DiffStats(files_changed=files, insertions=insertions, deletions=deletions)


def parse_name_only(lines: Iterable[str]) -> set[str]:
    return {line.strip() for line in lines if line.strip()}


class GitHistoryProvider:
    def __init__(self, repo: Path, *, include_merges: bool = False, timeout_s: float = 60) -> None:
        self.repo = repo
        self.include_merges = include_merges
        self.timeout_s = timeout_s

    def _log(self, window: ContributionWindow, extra: list[str]) -> str:
        cmd = ["-c", "core.quotePath=false", "log"]
        if not self.include_merges:
            cmd.append("--no-merges")
        cmd.extend(window.git_args())
        cmd.extend(extra)
        code, out, err = run_git(cmd, cwd=self.repo, timeout_s=self.timeout_s)
        if code != 0:
            raise HistoryQueryError(f"git log exited {code}: {err.strip()[:500]}")
        return out

    def _author_args(self, identity: AuthorIdentity) -> list[str]:
        return ["--fixed-strings", f"--author=<{identity.email}>"]

    def list_commit_authors(self, window: ContributionWindow) -> list[tuple[str, str]]:
        if not has_commits(self.repo):
            return []
        out = self._log(window, ["--format=%aN%x09%aE"])
        return parse_author_lines(out.splitlines())

    def author_diff_stats(self, identity: AuthorIdentity, window: ContributionWindow) -> DiffStats:
        out = self._log(window, [*self._author_args(identity), "--shortstat", "--format="])
        return parse_shortstat(out.splitlines())

    def author_touched_files(self, identity: AuthorIdentity, window: ContributionWindow) -> set[str]:
        out = self._log(window, [*self._author_args(identity), "--name-only", "--format="])
        return parse_name_only(out.splitlines())
