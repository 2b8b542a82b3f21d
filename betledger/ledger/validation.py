"""
Input validation for ledger operations.

Every check runs before any store is touched.
"""

import math
from dataclasses import replace
from typing import Any

from betledger.exceptions import ValidationError
from betledger.models import BetDraft, BetStatus
from betledger.utils.dates import parse_datetime
from betledger.utils.odds import is_valid_odds

RECORDABLE_STATUSES = (BetStatus.PENDING, BetStatus.WON, BetStatus.LOST)


def _require_number(field: str, value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise ValidationError(field, "is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValidationError(field, "must be a finite number")
    return number


def validate_bet_draft(draft: BetDraft) -> BetDraft:
    """
    Validate user-supplied bet fields.

    Args:
        draft: Fields as entered

    Returns:
        Normalized draft (trimmed match, float stake/odds, parsed status,
        naive local date)

    Raises:
        ValidationError: naming the first rule violated
    """
    if not isinstance(draft.match, str) or not draft.match.strip():
        raise ValidationError("match", "is required")

    stake = _require_number("stake", draft.stake)
    if stake <= 0:
        raise ValidationError("stake", "must be greater than 0")

    odds = _require_number("odds", draft.odds)
    if not is_valid_odds(odds):
        raise ValidationError("odds", "must be greater than 1")

    status = BetStatus.parse(draft.status)
    if status not in RECORDABLE_STATUSES:
        raise ValidationError("status", "must be pending, won or lost")

    bet_date = None
    if draft.date is not None:
        bet_date = parse_datetime(draft.date)
        if bet_date is None:
            raise ValidationError("date", "must be a date or ISO-8601 timestamp")

    return replace(
        draft,
        match=draft.match.strip(),
        stake=stake,
        odds=odds,
        status=status,
        date=bet_date,
    )


def validate_amount(amount: Any) -> float:
    """Deposit and withdrawal amounts must be positive."""
    value = _require_number("amount", amount)
    if value <= 0:
        raise ValidationError("amount", "must be greater than 0")
    return value
