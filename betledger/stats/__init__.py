"""Dashboard statistics."""

from betledger.stats.aggregator import (
    active_bets,
    build_dashboard,
    compute_stats,
    daily_profit_series,
    filter_by_period,
    recent_bets,
)
from betledger.stats.dashboard import Dashboard

__all__ = [
    "Dashboard",
    "active_bets",
    "build_dashboard",
    "compute_stats",
    "daily_profit_series",
    "filter_by_period",
    "recent_bets",
]
