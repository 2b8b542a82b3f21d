"""
SQLAlchemy ORM models for database tables.

Defines the database schema using SQLAlchemy 2.0 style.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Float, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BetRecord(Base):
    """Recorded wagers."""

    __tablename__ = "bets"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    match: Mapped[str] = mapped_column(String(200), nullable=False)
    stake: Mapped[float] = mapped_column(Float, nullable=False)
    odds: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending")

    # When the bet logically happened, distinct from the audit timestamps
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    __table_args__ = (
        Index("idx_bets_status", "status"),
        Index("idx_bets_date", "date"),
    )

    def to_document(self) -> dict[str, Any]:
        """Document view consumed by Bet.from_document."""
        return {
            "match": self.match,
            "stake": self.stake,
            "odds": self.odds,
            "status": self.status,
            "date": self.date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class AccountRecord(Base):
    """Account aggregate, one row per account id."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), default="")
    balance: Mapped[float] = mapped_column(Float, default=0.0)
    total_deposits: Mapped[float] = mapped_column(Float, default=0.0)
    total_withdrawals: Mapped[float] = mapped_column(Float, default=0.0)
    last_transaction: Mapped[Optional[dict]] = mapped_column(JSON)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    def to_document(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "balance": self.balance,
            "total_deposits": self.total_deposits,
            "total_withdrawals": self.total_withdrawals,
            "last_transaction": self.last_transaction,
            "updated_at": self.updated_at,
        }
