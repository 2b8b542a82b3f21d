"""
Database repositories for CRUD operations.

Provides clean interfaces for interacting with database tables.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from config.logging_config import get_logger
from betledger.database.schema import AccountRecord, BetRecord

logger = get_logger(__name__)

ACCOUNT_COLUMNS = {
    "username",
    "balance",
    "total_deposits",
    "total_withdrawals",
    "last_transaction",
    "updated_at",
}


class BetRepository:
    """Repository for bet data."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(
        self,
        bet_id: str,
        match: str,
        stake: float,
        odds: float,
        status: str,
        date: datetime,
        created_at: datetime,
    ) -> None:
        """Insert a new bet."""
        record = BetRecord(
            id=bet_id,
            match=match,
            stake=stake,
            odds=odds,
            status=status,
            date=date,
            created_at=created_at,
        )
        self.session.add(record)
        await self.session.flush()

    async def get(self, bet_id: str) -> Optional[BetRecord]:
        """Get a bet by ID."""
        return await self.session.get(BetRecord, bet_id)

    async def update_fields(self, bet_id: str, values: dict[str, Any]) -> bool:
        """Update columns of a bet. Returns False if the bet does not exist."""
        result = await self.session.execute(
            update(BetRecord).where(BetRecord.id == bet_id).values(**values)
        )
        return result.rowcount > 0

    async def remove(self, bet_id: str) -> bool:
        """Delete a bet. Returns False if it did not exist."""
        result = await self.session.execute(delete(BetRecord).where(BetRecord.id == bet_id))
        return result.rowcount > 0

    async def get_all(self) -> list[BetRecord]:
        """Get every bet, newest first."""
        result = await self.session.execute(
            select(BetRecord).order_by(BetRecord.date.desc())
        )
        return list(result.scalars().all())


class AccountRepository:
    """Repository for the account aggregate."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, account_id: str) -> Optional[AccountRecord]:
        """Get the account row, or None if it was never written."""
        return await self.session.get(AccountRecord, account_id)

    async def merge(self, account_id: str, values: dict[str, Any]) -> AccountRecord:
        """
        Merge values into the account row, creating it if needed.

        Unknown keys are ignored; columns not named keep their values.
        """
        values = {k: v for k, v in values.items() if k in ACCOUNT_COLUMNS}
        record = await self.get(account_id)

        if record:
            for key, value in values.items():
                setattr(record, key, value)
        else:
            record = AccountRecord(
                id=account_id,
                username=values.get("username", ""),
                balance=values.get("balance", 0.0),
                total_deposits=values.get("total_deposits", 0.0),
                total_withdrawals=values.get("total_withdrawals", 0.0),
                last_transaction=values.get("last_transaction"),
                updated_at=values.get("updated_at"),
            )
            self.session.add(record)
            logger.info("Account created", account_id=account_id)

        await self.session.flush()
        return record
