"""
Plain-text dashboard summary.

Renders a DashboardSnapshot and the account for console or file output.
"""

from typing import Optional

from config import settings
from betledger.models import Account, DashboardSnapshot, DashboardStats

PERIOD_NAMES = {
    "1d": "Today",
    "1w": "Last 7 days",
    "1m": "Last month",
    "all": "All time",
}


def _stats_lines(stats: DashboardStats, currency: str) -> list[str]:
    return [
        f"  Total Bets:   {stats.total_bets:>10}",
        f"  Won:          {stats.won_bets:>10}",
        f"  Lost:         {stats.lost_bets:>10}",
        f"  Pending:      {stats.pending_bets:>10}",
        f"  Total Stake:  {currency}{stats.total_stake:>10.2f}",
        f"  Profit/Loss:  {currency}{stats.total_profit:>+10.2f}",
        f"  ROI:          {stats.roi:>+10.1f}%",
        f"  Success Rate: {stats.success_rate:>10.1f}%",
        f"  Avg Odds:     {stats.avg_odds:>10.2f}",
    ]


def format_summary(
    snapshot: DashboardSnapshot,
    account: Account,
    currency: Optional[str] = None,
) -> str:
    """
    Format the dashboard as fixed-width text.

    Args:
        snapshot: Computed dashboard snapshot
        account: Current account state
        currency: Currency symbol (default from settings)

    Returns:
        Multi-line report
    """
    currency = currency if currency is not None else settings.ledger.currency_symbol
    stats = snapshot.stats
    title = f"BET LEDGER - {account.username}" if account.username else "BET LEDGER"

    lines = [
        "=" * 60,
        title,
        f"Generated: {snapshot.generated_at.strftime('%Y-%m-%d %H:%M')}",
        "=" * 60,
        "",
        "ACCOUNT",
        "-" * 40,
        f"  Balance:      {currency}{account.balance:>10.2f}",
        f"  Deposits:     {currency}{account.total_deposits:>10.2f}",
        f"  Withdrawals:  {currency}{account.total_withdrawals:>10.2f}",
    ]

    if account.last_transaction:
        tx = account.last_transaction
        lines.append(
            f"  Last:         {tx.type.value} {currency}{tx.amount:.2f} "
            f"on {tx.date.strftime('%d %b %Y')}"
        )

    lines.extend(["", "ALL TIME", "-" * 40])
    lines.extend(_stats_lines(stats, currency))
    lines.extend([
        f"  Biggest Win:  {currency}{stats.biggest_win:>10.2f}",
        f"  Biggest Loss: {currency}{stats.biggest_loss:>10.2f}",
        f"  Win Streak:   {stats.longest_winning_streak:>10}",
        f"  Loss Streak:  {stats.longest_losing_streak:>10}",
    ])

    period_name = PERIOD_NAMES.get(snapshot.period.value, snapshot.period.value)
    lines.extend(["", period_name.upper(), "-" * 40])
    lines.extend(_stats_lines(snapshot.period_stats, currency))

    lines.extend(["", "DAILY PROFIT", "-" * 40])
    for label, value in zip(snapshot.daily_profit.labels, snapshot.daily_profit.values):
        lines.append(f"  {label}  {currency}{value:>+10.2f}")

    lines.extend(["", "RECENT BETS", "-" * 40])
    if not snapshot.recent_bets:
        lines.append("  No bets")
    for bet in snapshot.recent_bets:
        lines.append(
            f"  {bet.date.strftime('%d %b')}  {bet.match[:24]:<24} "
            f"{currency}{bet.stake:.2f} @ {bet.odds:.2f}  {bet.status.value.upper()}"
        )

    lines.extend(["", "=" * 60])
    return "\n".join(lines)
