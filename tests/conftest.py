"""Shared fixtures for the ledger tests."""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import LedgerSettings
from betledger.ledger import BalanceReconciler
from betledger.models import Bet, BetStatus
from betledger.stores import InMemoryAccountStore, InMemoryBetStore

# A Sunday; one calendar month back is 29 Feb 2024
NOW = datetime(2024, 3, 31, 15, 30)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def ledger_settings() -> LedgerSettings:
    return LedgerSettings(
        account_id="main",
        recent_bets_limit=5,
        chart_days=7,
        default_period="1m",
        reverse_on_delete=False,
        currency_symbol="€",
    )


@pytest.fixture
def bet_store(clock) -> InMemoryBetStore:
    return InMemoryBetStore(clock=clock)


@pytest.fixture
def account_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def reconciler(bet_store, account_store, ledger_settings, clock) -> BalanceReconciler:
    return BalanceReconciler(bet_store, account_store, ledger_settings, clock=clock)


@pytest.fixture
def make_bet():
    """Factory for Bet instances with sensible defaults."""
    counter = {"n": 0}

    def factory(
        status: str = "won",
        stake: float = 10.0,
        odds: float = 2.0,
        date: Optional[datetime] = None,
        match: str = "Home v Away",
    ) -> Bet:
        counter["n"] += 1
        return Bet(
            id=f"bet-{counter['n']}",
            match=match,
            stake=stake,
            odds=odds,
            status=BetStatus(status),
            date=date or NOW,
        )

    return factory
