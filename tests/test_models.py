"""Tests for the bet and account models."""

from datetime import datetime

import pytest

from betledger.exceptions import ValidationError
from betledger.models import (
    Account,
    Bet,
    BetDraft,
    BetStatus,
    TransactionType,
    calculate_profit_loss,
)


@pytest.mark.parametrize(
    "stake,odds,expected",
    [(10.0, 3.0, 20.0), (25.0, 1.5, 12.5), (4.0, 1.01, 0.04)],
)
def test_won_profit_is_stake_times_odds_minus_one(stake, odds, expected) -> None:
    profit = calculate_profit_loss(BetStatus.WON, stake, odds)
    assert profit == pytest.approx(expected)
    assert profit > 0


def test_lost_profit_is_negative_stake() -> None:
    assert calculate_profit_loss(BetStatus.LOST, 10.0, 3.0) == -10.0
    assert calculate_profit_loss(BetStatus.LOST, 7.5, 1.2) == -7.5


@pytest.mark.parametrize("status", [BetStatus.PENDING, BetStatus.DELETED])
def test_unsettled_profit_is_zero(status) -> None:
    assert calculate_profit_loss(status, 10.0, 3.0) == 0.0


def test_status_parse_is_case_insensitive() -> None:
    assert BetStatus.parse("WON ") == BetStatus.WON
    assert BetStatus.parse(BetStatus.LOST) == BetStatus.LOST


def test_status_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValidationError) as exc_info:
        BetStatus.parse("void")
    assert exc_info.value.field == "status"


def test_settled_statuses() -> None:
    assert BetStatus.WON.is_settled
    assert BetStatus.LOST.is_settled
    assert not BetStatus.PENDING.is_settled
    assert not BetStatus.DELETED.is_settled


def test_draft_potential_return() -> None:
    draft = BetDraft(match="A v B", stake=10.0, odds=2.5)
    assert draft.potential_return == pytest.approx(25.0)
    assert draft.profit_loss == 0.0


def test_draft_fields_omit_missing_date() -> None:
    fields = BetDraft(match=" A v B ", stake=10, odds=2, status=BetStatus.WON).to_fields()
    assert fields == {"match": "A v B", "stake": 10.0, "odds": 2.0, "status": "won"}


def test_bet_from_document_tolerates_missing_numbers() -> None:
    bet = Bet.from_document("x1", {"match": "A v B", "status": "won", "odds": "abc"})

    assert bet.stake == 0.0
    assert bet.odds == 0.0
    assert bet.profit_loss == 0.0


def test_bet_from_document_parses_dates() -> None:
    bet = Bet.from_document(
        "x1",
        {
            "match": "A v B",
            "stake": "10",
            "odds": 2.0,
            "status": "pending",
            "date": "2024-03-01T10:00:00",
            "created_at": "2024-03-02T09:00:00",
        },
    )

    assert bet.stake == 10.0
    assert bet.date == datetime(2024, 3, 1, 10, 0)
    assert bet.created_at == datetime(2024, 3, 2, 9, 0)


def test_bet_date_falls_back_to_created_at() -> None:
    bet = Bet.from_document(
        "x1",
        {"match": "A v B", "stake": 1, "odds": 2, "created_at": "2024-03-02T09:00:00"},
    )
    assert bet.date == datetime(2024, 3, 2, 9, 0)
    assert bet.status == BetStatus.PENDING


def test_bet_utc_date_becomes_naive() -> None:
    bet = Bet.from_document("x1", {"match": "A v B", "date": "2024-03-01T10:00:00Z"})
    assert bet.date.tzinfo is None


def test_bet_document_round_trip(make_bet) -> None:
    bet = make_bet(status="lost", stake=12.0, odds=1.8)
    restored = Bet.from_document(bet.id, bet.to_document())
    assert restored == bet


def test_missing_account_reads_as_zero() -> None:
    account = Account.from_document(None)

    assert account.balance == 0.0
    assert account.total_deposits == 0.0
    assert account.total_withdrawals == 0.0
    assert account.last_transaction is None


def test_account_from_document() -> None:
    account = Account.from_document(
        {
            "balance": 120.0,
            "total_deposits": 150,
            "total_withdrawals": "30",
            "username": "sam",
            "last_transaction": {
                "type": "withdrawal",
                "amount": 30,
                "date": "2024-03-30T12:00:00",
            },
        }
    )

    assert account.balance == 120.0
    assert account.net_deposits == 120.0
    assert account.username == "sam"
    assert account.last_transaction.type == TransactionType.WITHDRAWAL
    assert account.last_transaction.date == datetime(2024, 3, 30, 12, 0)


def test_account_ignores_malformed_last_transaction() -> None:
    account = Account.from_document({"balance": 5, "last_transaction": {"type": "bonus"}})
    assert account.last_transaction is None
