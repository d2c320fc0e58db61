from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from .errors import HistoryQueryError, RepositoryError


def run_git(args: list[str], cwd: Path, timeout_s: float = 300) -> tuple[int, str, str]:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_s,
        )
    except FileNotFoundError as e:
        raise RepositoryError(f"git executable not found: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise HistoryQueryError(f"git timed out after {timeout_s:g}s: git {' '.join(args)[:200]}") from e
    return proc.returncode, proc.stdout, proc.stderr


def get_repo_toplevel(candidate: Path) -> Optional[Path]:
    if not candidate.is_dir():
        return None
    code, out, _ = run_git(["rev-parse", "--show-toplevel"], cwd=candidate)
    if code != 0:
        return None
    top = out.strip()
    if not top:
        return None
    return Path(top).resolve()


def require_repo(candidate: Path) -> Path:
    top = get_repo_toplevel(candidate)
    if top is None:
        raise RepositoryError(f"not a git repository: {candidate}")
    return top


def get_remote_origin(repo: Path) -> str:
    code, out, _ = run_git(["config", "--get", "remote.origin.url"], cwd=repo)
    if code == 0:
        return out.strip()
    return ""


def get_current_branch(repo: Path) -> str:
    code, out, _ = run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo)
    if code != 0:
        # unborn branch: HEAD has no commit yet
        code, out, _ = run_git(["symbolic-ref", "--short", "-q", "HEAD"], cwd=repo)
        if code != 0:
            return ""
    branch = out.strip()
    if branch == "HEAD":
        return "(detached)"
    return branch


def has_commits(repo: Path) -> bool:
    code, _, _ = run_git(["rev-parse", "--verify", "-q", "HEAD"], cwd=repo)
    return code == 0
