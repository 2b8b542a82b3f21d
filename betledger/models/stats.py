"""
Dashboard statistics data models.

Everything here is derived from a bet snapshot and never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from betledger.models.bet import Bet


class Period(str, Enum):
    """Dashboard time window."""

    DAY = "1d"
    WEEK = "1w"
    MONTH = "1m"
    ALL = "all"


@dataclass
class DashboardStats:
    """Aggregate metrics over the active bets of a snapshot."""

    total_bets: int = 0
    won_bets: int = 0
    lost_bets: int = 0
    pending_bets: int = 0

    total_stake: float = 0.0
    total_profit: float = 0.0

    roi: float = 0.0  # Percent, 1dp, sign preserved
    success_rate: float = 0.0  # Percent, 1dp
    avg_odds: float = 0.0  # 2dp

    biggest_win: float = 0.0
    biggest_loss: float = 0.0  # Absolute value

    longest_winning_streak: int = 0
    longest_losing_streak: int = 0

    @property
    def settled_bets(self) -> int:
        return self.won_bets + self.lost_bets


@dataclass
class DailyProfitSeries:
    """Fixed-length daily profit series for charting, oldest day first."""

    days: list[datetime] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def total(self) -> float:
        return sum(self.values)


@dataclass
class DashboardSnapshot:
    """
    Everything the dashboard renders for one bet snapshot.

    ``stats`` covers all active bets; ``period_stats`` only those inside
    the selected period. The daily series always covers the trailing days
    regardless of the period.
    """

    period: Period
    stats: DashboardStats
    period_stats: DashboardStats
    daily_profit: DailyProfitSeries
    recent_bets: list[Bet] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)
