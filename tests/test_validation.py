"""Tests for bet and amount validation."""

from datetime import datetime, timezone

import pytest

from betledger.exceptions import ValidationError
from betledger.ledger import validate_amount, validate_bet_draft
from betledger.models import BetDraft, BetStatus


@pytest.mark.parametrize(
    "draft,field",
    [
        (BetDraft(match="", stake=10, odds=2), "match"),
        (BetDraft(match="   ", stake=10, odds=2), "match"),
        (BetDraft(match="A v B", stake=0, odds=2), "stake"),
        (BetDraft(match="A v B", stake=-5, odds=2), "stake"),
        (BetDraft(match="A v B", stake=None, odds=2), "stake"),
        (BetDraft(match="A v B", stake=float("nan"), odds=2), "stake"),
        (BetDraft(match="A v B", stake=10, odds=1.0), "odds"),
        (BetDraft(match="A v B", stake=10, odds=0.5), "odds"),
        (BetDraft(match="A v B", stake=10, odds="evens"), "odds"),
        (BetDraft(match="A v B", stake=10, odds=2, status=BetStatus.DELETED), "status"),
        (BetDraft(match="A v B", stake=10, odds=2, status="void"), "status"),
        (BetDraft(match="A v B", stake=10, odds=2, date="last tuesday"), "date"),
        (BetDraft(match="A v B", stake=10, odds=2, date=20240301), "date"),
    ],
)
def test_invalid_drafts_are_rejected(draft, field) -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_bet_draft(draft)
    assert exc_info.value.field == field


def test_rule_is_reported() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_bet_draft(BetDraft(match="A v B", stake=10, odds=1))
    assert exc_info.value.rule == "must be greater than 1"
    assert str(exc_info.value) == "odds: must be greater than 1"


def test_valid_draft_is_normalized() -> None:
    draft = validate_bet_draft(BetDraft(match="  A v B ", stake="10", odds=2, status="Won"))

    assert draft.match == "A v B"
    assert draft.stake == 10.0
    assert draft.odds == 2.0
    assert draft.status == BetStatus.WON
    assert draft.date is None


def test_aware_date_is_made_naive() -> None:
    aware = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    draft = validate_bet_draft(BetDraft(match="A v B", stake=10, odds=2, date=aware))
    assert draft.date.tzinfo is None


def test_amount_must_be_positive() -> None:
    assert validate_amount(50) == 50.0
    for amount in (0, -1, None, "lots"):
        with pytest.raises(ValidationError):
            validate_amount(amount)


def test_calendar_date_and_iso_string_are_accepted() -> None:
    from_date = validate_bet_draft(
        BetDraft(match="A v B", stake=10, odds=2, date=datetime(2024, 3, 1).date())
    )
    from_text = validate_bet_draft(
        BetDraft(match="A v B", stake=10, odds=2, date="2024-03-01T18:45:00")
    )

    assert from_date.date == datetime(2024, 3, 1)
    assert from_text.date == datetime(2024, 3, 1, 18, 45)
