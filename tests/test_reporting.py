"""Tests for the plain-text summary."""

from datetime import timedelta

from config import settings
from betledger.models import Account, LastTransaction, Period, TransactionType
from betledger.reporting import format_summary
from betledger.stats import build_dashboard


def test_summary_sections(make_bet, now) -> None:
    bets = [
        make_bet("won", stake=10, odds=3, match="Arsenal v Chelsea"),
        make_bet("lost", stake=5, date=now - timedelta(days=3)),
    ]
    account = Account(
        balance=120.0,
        total_deposits=100.0,
        username="sam",
        last_transaction=LastTransaction(TransactionType.DEPOSIT, 50.0, now),
    )
    snapshot = build_dashboard(bets, period=Period.WEEK, now=now)

    text = format_summary(snapshot, account, currency="$")

    assert "BET LEDGER - sam" in text
    assert "Generated: 2024-03-31 15:30" in text
    assert "$    120.00" in text
    assert "deposit $50.00 on 31 Mar 2024" in text
    assert "LAST 7 DAYS" in text
    assert "Arsenal v Chelsea" in text
    assert "WON" in text
    assert "Biggest Win:  $     20.00" in text


def test_summary_chart_has_a_line_per_day(now) -> None:
    snapshot = build_dashboard([], period=Period.ALL, now=now)

    text = format_summary(snapshot, Account(), currency="€")

    for label in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        assert f"  {label}  €" in text
    assert "No bets" in text
    assert text.splitlines()[1] == "BET LEDGER"


def test_summary_defaults_to_configured_currency(now) -> None:
    snapshot = build_dashboard([], now=now)
    text = format_summary(snapshot, Account())

    assert f"Balance:      {settings.ledger.currency_symbol}" in text
    assert "LAST MONTH" in text
