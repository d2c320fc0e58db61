from __future__ import annotations

import dataclasses
import datetime as dt

from .errors import ConfigError

WEEK_LABEL = "Past Week"
MONTH_LABEL = "Past Month"


@dataclasses.dataclass(frozen=True)
class ContributionWindow:
    label: str
    since: dt.date  # inclusive

    @property
    def since_iso(self) -> str:
        return self.since.isoformat()

    @property
    def since_arg(self) -> str:
        return f"{self.since_iso}T00:00:00"

    def git_args(self) -> list[str]:
        return [f"--since={self.since_arg}"]


def window_for_days(label: str, days: int, *, today: dt.date | None = None) -> ContributionWindow:
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ConfigError(f"Invalid window length for {label!r}: {days!r} (expected a positive number of days)")
    if not (label or "").strip():
        raise ConfigError("Window label must not be empty")
    if today is None:
        today = dt.date.today()
    return ContributionWindow(label=label.strip(), since=today - dt.timedelta(days=days))


def default_windows(week_days: int, month_days: int, *, today: dt.date | None = None) -> list[ContributionWindow]:
    return [
        window_for_days(WEEK_LABEL, week_days, today=today),
        window_for_days(MONTH_LABEL, month_days, today=today),
    ]
