"""
Odds and payout utilities.

All odds are decimal odds: a winning stake returns ``stake * odds``,
of which ``stake * (odds - 1)`` is profit.
"""

MIN_VALID_ODDS = 1.0  # Exclusive lower bound


def calculate_back_profit(stake: float, odds: float) -> float:
    """
    Net profit of a winning bet.

    Args:
        stake: Stake amount
        odds: Decimal odds

    Returns:
        Profit if the bet wins
    """
    return stake * (odds - 1)


def calculate_return(stake: float, odds: float) -> float:
    """Total payout of a winning bet, stake included."""
    return stake * odds


def is_valid_odds(odds: float) -> bool:
    """Odds of 1.0 or below imply a non-positive or undefined return."""
    return odds > MIN_VALID_ODDS
