"""Database module."""

from betledger.database.connection import DatabaseConnection, db
from betledger.database.repositories import AccountRepository, BetRepository
from betledger.database.schema import AccountRecord, Base, BetRecord

__all__ = [
    # Connection
    "DatabaseConnection",
    "db",
    # Repositories
    "AccountRepository",
    "BetRepository",
    # Schema
    "AccountRecord",
    "Base",
    "BetRecord",
]
