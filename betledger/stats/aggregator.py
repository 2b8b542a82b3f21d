"""
Statistics Aggregator.

Pure functions from a bet snapshot to dashboard metrics. Every result
is recomputed in full from the snapshot; nothing depends on the account
balance, which may lag behind or run ahead of the bets.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from betledger.models import (
    Bet,
    BetStatus,
    DailyProfitSeries,
    DashboardSnapshot,
    DashboardStats,
    Period,
)
from betledger.utils.dates import subtract_months, to_local_naive, trailing_days

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DEFAULT_CHART_DAYS = 7
DEFAULT_RECENT_LIMIT = 5


def _reference_time(now: Optional[datetime]) -> datetime:
    return to_local_naive(now) if now else datetime.now()


def active_bets(bets: Iterable[Bet]) -> list[Bet]:
    """Drop soft-deleted bets."""
    return [bet for bet in bets if bet.status != BetStatus.DELETED]


def _longest_streaks(bets: list[Bet]) -> tuple[int, int]:
    """Longest runs of wins and losses by date. Pending bets don't break a run."""
    longest_win = longest_loss = 0
    current_win = current_loss = 0

    for bet in sorted(bets, key=lambda b: b.date):
        match bet.status:
            case BetStatus.WON:
                current_win += 1
                current_loss = 0
                longest_win = max(longest_win, current_win)
            case BetStatus.LOST:
                current_loss += 1
                current_win = 0
                longest_loss = max(longest_loss, current_loss)
            case BetStatus.PENDING | BetStatus.DELETED:
                continue

    return longest_win, longest_loss


def compute_stats(bets: Iterable[Bet]) -> DashboardStats:
    """
    Aggregate metrics over the active bets.

    Args:
        bets: Bet snapshot, in any order

    Returns:
        DashboardStats; all zero for an empty snapshot
    """
    active = active_bets(bets)
    total = len(active)
    if total == 0:
        return DashboardStats()

    won = [b for b in active if b.status == BetStatus.WON]
    lost = [b for b in active if b.status == BetStatus.LOST]
    pending = [b for b in active if b.status == BetStatus.PENDING]

    total_stake = sum(b.stake for b in active)
    total_profit = sum(b.profit_loss for b in active)

    biggest_win = max([0.0] + [b.profit_loss for b in won])
    biggest_loss = min([0.0] + [b.profit_loss for b in lost])

    roi = round(total_profit / total_stake * 100, 1) if total_stake > 0 else 0.0
    longest_win, longest_loss = _longest_streaks(active)

    return DashboardStats(
        total_bets=total,
        won_bets=len(won),
        lost_bets=len(lost),
        pending_bets=len(pending),
        total_stake=total_stake,
        total_profit=total_profit,
        roi=roi,
        success_rate=round(len(won) / total * 100, 1),
        avg_odds=round(sum(b.odds for b in active) / total, 2),
        biggest_win=round(biggest_win, 2),
        biggest_loss=round(abs(biggest_loss), 2),
        longest_winning_streak=longest_win,
        longest_losing_streak=longest_loss,
    )


def filter_by_period(
    bets: Iterable[Bet],
    period: Period,
    now: Optional[datetime] = None,
) -> list[Bet]:
    """
    Active bets whose date falls inside the period.

    Args:
        bets: Bet snapshot
        period: 1d (same calendar day), 1w (last 7 days),
            1m (last calendar month) or all
        now: Reference time (default: now)

    Returns:
        Filtered active bets
    """
    now = _reference_time(now)
    active = active_bets(bets)

    match period:
        case Period.DAY:
            today = now.date()
            return [b for b in active if b.date.date() == today]
        case Period.WEEK:
            cutoff = now - timedelta(days=7)
            return [b for b in active if b.date >= cutoff]
        case Period.MONTH:
            cutoff = subtract_months(now, 1)
            return [b for b in active if b.date >= cutoff]
        case Period.ALL:
            return active


def daily_profit_series(
    bets: Iterable[Bet],
    now: Optional[datetime] = None,
    days: int = DEFAULT_CHART_DAYS,
) -> DailyProfitSeries:
    """
    Profit per calendar day for the trailing ``days`` days ending today.

    Always returns exactly ``days`` points, oldest first; days without
    bets are 0.
    """
    now = _reference_time(now)
    active = active_bets(bets)
    day_starts = trailing_days(now, days)

    values = []
    for day in day_starts:
        next_day = day + timedelta(days=1)
        values.append(sum(b.profit_loss for b in active if day <= b.date < next_day))

    return DailyProfitSeries(
        days=day_starts,
        labels=[WEEKDAY_LABELS[day.weekday()] for day in day_starts],
        values=values,
    )


def recent_bets(bets: Iterable[Bet], limit: int = DEFAULT_RECENT_LIMIT) -> list[Bet]:
    """Newest active bets first."""
    return sorted(active_bets(bets), key=lambda b: b.date, reverse=True)[:limit]


def build_dashboard(
    bets: Iterable[Bet],
    period: Period = Period.MONTH,
    now: Optional[datetime] = None,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
    chart_days: int = DEFAULT_CHART_DAYS,
) -> DashboardSnapshot:
    """
    Compute everything the dashboard shows for one snapshot.

    Args:
        bets: Bet snapshot
        period: Selected time window for ``period_stats``
        now: Reference time (default: now)
        recent_limit: Size of the recent bets view
        chart_days: Length of the daily profit series

    Returns:
        DashboardSnapshot
    """
    now = _reference_time(now)
    snapshot = list(bets)

    return DashboardSnapshot(
        period=period,
        stats=compute_stats(snapshot),
        period_stats=compute_stats(filter_by_period(snapshot, period, now)),
        daily_profit=daily_profit_series(snapshot, now, chart_days),
        recent_bets=recent_bets(snapshot, recent_limit),
        generated_at=now,
    )
