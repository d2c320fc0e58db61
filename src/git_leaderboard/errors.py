from __future__ import annotations


class LeaderboardError(Exception):
    pass


class ConfigError(LeaderboardError, ValueError):
    pass


class RepositoryError(LeaderboardError, RuntimeError):
    pass


class HistoryQueryError(LeaderboardError, RuntimeError):
    pass
