"""Utility functions."""

from betledger.utils.dates import (
    parse_datetime,
    start_of_day,
    subtract_months,
    to_local_naive,
    trailing_days,
)
from betledger.utils.numbers import coerce_float
from betledger.utils.odds import (
    calculate_back_profit,
    calculate_return,
    is_valid_odds,
)
from betledger.utils.retries import with_async_retry

__all__ = [
    # Date utilities
    "parse_datetime",
    "start_of_day",
    "subtract_months",
    "to_local_naive",
    "trailing_days",
    # Odds utilities
    "calculate_back_profit",
    "calculate_return",
    "is_valid_odds",
    # Numeric utilities
    "coerce_float",
    # Retry utilities
    "with_async_retry",
]
