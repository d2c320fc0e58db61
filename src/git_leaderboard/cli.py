from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_MAX_CONTRIBUTORS, DEFAULT_MONTH_DAYS, DEFAULT_TIMEOUT_S, DEFAULT_WEEK_DAYS, build_settings, load_config
from .errors import ConfigError, HistoryQueryError, RepositoryError
from .run import run_leaderboard


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-leaderboard",
        description="Show contribution statistics (commits, lines changed, files changed) for a git repository.",
    )
    parser.add_argument("-C", "--repo", type=Path, default=None, help="Repository checkout to analyze (default: current directory).")
    parser.add_argument("-w", "--week", type=int, default=None, metavar="DAYS", help=f"Set custom week period (default: {DEFAULT_WEEK_DAYS} days).")
    parser.add_argument("-m", "--month", type=int, default=None, metavar="DAYS", help=f"Set custom month period (default: {DEFAULT_MONTH_DAYS} days).")
    parser.add_argument("-n", "--number", type=int, default=None, metavar="N", help=f"Show top N contributors (default: {DEFAULT_MAX_CONTRIBUTORS}).")
    parser.add_argument("-j", "--jobs", type=int, default=None, help="Parallel per-author git queries (default: CPU count, max 8).")
    parser.add_argument("--timeout", type=float, default=None, metavar="SECONDS", help=f"Timeout per git query (default: {DEFAULT_TIMEOUT_S}s).")
    parser.add_argument("--include-merges", action="store_true", help="Include merge commits in stats.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config is not None else {}
        settings = build_settings(config, args)
        return run_leaderboard(settings)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (RepositoryError, HistoryQueryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
