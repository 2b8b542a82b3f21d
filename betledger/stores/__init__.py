"""Document stores the ledger reads from and writes to."""

from betledger.stores.base import (
    AccountStore,
    BetStore,
    bet_from_stored,
    bets_from_documents,
)
from betledger.stores.memory import InMemoryAccountStore, InMemoryBetStore
from betledger.stores.sql import SqlAccountStore, SqlBetStore

__all__ = [
    "AccountStore",
    "BetStore",
    "bet_from_stored",
    "bets_from_documents",
    "InMemoryAccountStore",
    "InMemoryBetStore",
    "SqlAccountStore",
    "SqlBetStore",
]
