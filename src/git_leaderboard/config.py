from __future__ import annotations

import argparse
import dataclasses
import datetime as dt
import json
from pathlib import Path

from .aggregate import default_jobs
from .errors import ConfigError
from .ranking import validate_top_n
from .render import NAME_WIDTH
from .windows import MONTH_LABEL, WEEK_LABEL, ContributionWindow, window_for_days

DEFAULT_WEEK_DAYS = 7
DEFAULT_MONTH_DAYS = 30
DEFAULT_MAX_CONTRIBUTORS = 10
DEFAULT_TIMEOUT_S = 60

CONFIG_KEYS = (
    "week_days",
    "month_days",
    "max_contributors",
    "jobs",
    "timeout_s",
    "include_merges",
    "name_width",
    "windows",
)


@dataclasses.dataclass(frozen=True)
class Settings:
    repo: Path
    windows: tuple[tuple[str, int], ...]  # (label, days)
    max_contributors: int = DEFAULT_MAX_CONTRIBUTORS
    jobs: int = 1
    timeout_s: float = DEFAULT_TIMEOUT_S
    include_merges: bool = False
    name_width: int = NAME_WIDTH

    def build_windows(self, *, today: dt.date | None = None) -> list[ContributionWindow]:
        return [window_for_days(label, days, today=today) for label, days in self.windows]


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")
    return data


def _positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"Invalid {name}: {value!r} (expected a positive integer)")
    return value


def _parse_windows(value: object) -> tuple[tuple[str, int], ...]:
    if not isinstance(value, list) or not value:
        raise ConfigError("`windows` must be a non-empty list of {\"label\": ..., \"days\": ...} objects")
    out: list[tuple[str, int]] = []
    seen: set[str] = set()
    for item in value:
        if not isinstance(item, dict):
            raise ConfigError(f"Invalid window entry: {item!r}")
        label = str(item.get("label", "") or "").strip()
        if not label:
            raise ConfigError(f"Window entry without a label: {item!r}")
        if label in seen:
            raise ConfigError(f"Duplicate window label: {label}")
        seen.add(label)
        out.append((label, _positive_int(f"days for window {label!r}", item.get("days"))))
    return tuple(out)


def _pick(args: argparse.Namespace | None, attr: str, config: dict, key: str, default: object) -> object:
    value = getattr(args, attr, None) if args is not None else None
    if value is not None:
        return value
    if key in config:
        return config[key]
    return default


def build_settings(config: dict, args: argparse.Namespace | None = None) -> Settings:
    """Merge defaults, the JSON config, and CLI flags (flags win) into validated Settings."""
    repo = Path(getattr(args, "repo", None) or ".")

    max_contributors = _pick(args, "number", config, "max_contributors", DEFAULT_MAX_CONTRIBUTORS)
    validate_top_n(max_contributors)  # type: ignore[arg-type]

    week_flag = getattr(args, "week", None) if args is not None else None
    month_flag = getattr(args, "month", None) if args is not None else None
    if "windows" in config and week_flag is None and month_flag is None:
        windows = _parse_windows(config["windows"])
    else:
        week_days = _positive_int("week length", _pick(args, "week", config, "week_days", DEFAULT_WEEK_DAYS))
        month_days = _positive_int("month length", _pick(args, "month", config, "month_days", DEFAULT_MONTH_DAYS))
        windows = ((WEEK_LABEL, week_days), (MONTH_LABEL, month_days))

    jobs = _positive_int("jobs", _pick(args, "jobs", config, "jobs", default_jobs()))

    timeout_s = _pick(args, "timeout", config, "timeout_s", DEFAULT_TIMEOUT_S)
    if isinstance(timeout_s, bool) or not isinstance(timeout_s, (int, float)) or timeout_s <= 0:
        raise ConfigError(f"Invalid timeout: {timeout_s!r} (expected a positive number of seconds)")

    include_merges = bool(getattr(args, "include_merges", False)) or bool(config.get("include_merges", False))
    name_width = _positive_int("name_width", config.get("name_width", NAME_WIDTH))

    return Settings(
        repo=repo,
        windows=windows,
        max_contributors=int(max_contributors),  # type: ignore[arg-type]
        jobs=jobs,
        timeout_s=float(timeout_s),
        include_merges=include_merges,
        name_width=name_width,
    )
