"""Data models for the bet ledger."""

from betledger.models.account import (
    Account,
    LastTransaction,
    TransactionType,
)
from betledger.models.bet import (
    Bet,
    BetDraft,
    BetSnapshot,
    BetStatus,
    calculate_profit_loss,
)
from betledger.models.stats import (
    DailyProfitSeries,
    DashboardSnapshot,
    DashboardStats,
    Period,
)

__all__ = [
    # Bet models
    "Bet",
    "BetDraft",
    "BetSnapshot",
    "BetStatus",
    "calculate_profit_loss",
    # Account models
    "Account",
    "LastTransaction",
    "TransactionType",
    # Stats models
    "DailyProfitSeries",
    "DashboardSnapshot",
    "DashboardStats",
    "Period",
]
