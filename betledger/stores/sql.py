"""
SQL-backed document stores.

Implements the store protocols on top of the async SQLAlchemy
repositories. Database errors surface as StoreUnavailable and change
notifications are published only after the transaction commits.
"""

import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from config import settings
from config.logging_config import get_logger
from betledger.database import AccountRepository, BetRepository, DatabaseConnection
from betledger.events import EventChannel, Subscription
from betledger.exceptions import NotFound, StoreUnavailable
from betledger.models import Account, Bet, BetDraft
from betledger.stores.base import (
    AccountCallback,
    BetsCallback,
    bet_from_stored,
    bets_from_documents,
)
from betledger.utils.dates import parse_datetime

logger = get_logger(__name__)

BET_COLUMNS = {"match", "stake", "odds", "status", "date"}


def _bet_values(fields: dict[str, Any]) -> dict[str, Any]:
    """Map document fields onto bet columns."""
    values = {k: v for k, v in fields.items() if k in BET_COLUMNS}
    if "date" in values:
        values["date"] = parse_datetime(values["date"])
        if values["date"] is None:
            del values["date"]
    return values


def _account_values(fields: dict[str, Any]) -> dict[str, Any]:
    values = dict(fields)
    if "updated_at" in values:
        values["updated_at"] = parse_datetime(values["updated_at"])
    return values


class SqlBetStore:
    """Bet collection stored in the ``bets`` table."""

    def __init__(
        self,
        database: DatabaseConnection,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._db = database
        self._clock = clock
        self._channel: EventChannel[list[Bet]] = EventChannel("bets")

    async def create(self, draft: BetDraft) -> str:
        now = self._clock()
        bet_id = uuid.uuid4().hex
        try:
            async with self._db.session() as session:
                await BetRepository(session).add(
                    bet_id=bet_id,
                    match=draft.match.strip(),
                    stake=float(draft.stake),
                    odds=float(draft.odds),
                    status=draft.status.value,
                    date=draft.date or now,
                    created_at=now,
                )
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"bets.create failed: {e}") from e

        await self._notify()
        return bet_id

    async def read(self, bet_id: str) -> Bet:
        try:
            async with self._db.session() as session:
                record = await BetRepository(session).get(bet_id)
                document = record.to_document() if record else None
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"bets.read failed: {e}") from e

        if document is None:
            raise NotFound("bet", bet_id)
        return bet_from_stored(bet_id, document)

    async def update(self, bet_id: str, fields: dict[str, Any]) -> None:
        values = _bet_values(fields)
        values["updated_at"] = self._clock()
        try:
            async with self._db.session() as session:
                found = await BetRepository(session).update_fields(bet_id, values)
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"bets.update failed: {e}") from e

        if not found:
            raise NotFound("bet", bet_id)
        await self._notify()

    async def delete(self, bet_id: str) -> None:
        try:
            async with self._db.session() as session:
                removed = await BetRepository(session).remove(bet_id)
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"bets.delete failed: {e}") from e

        if removed:
            await self._notify()

    async def fetch_all(self) -> list[Bet]:
        try:
            async with self._db.session() as session:
                records = await BetRepository(session).get_all()
                documents = [(r.id, r.to_document()) for r in records]
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"bets.fetch_all failed: {e}") from e
        return bets_from_documents(documents)

    async def subscribe_collection(self, callback: BetsCallback) -> Subscription:
        subscription = self._channel.subscribe(callback)
        await self._channel.deliver(subscription, await self.fetch_all())
        return subscription

    async def _notify(self) -> None:
        if self._channel.subscriber_count == 0:
            return
        try:
            snapshot = await self.fetch_all()
        except StoreUnavailable as e:
            # The write itself committed; listeners catch up on the next change
            logger.error("Could not load bets for notification", error=str(e))
            return
        await self._channel.publish(snapshot)


class SqlAccountStore:
    """Account document stored as a row of the ``accounts`` table."""

    def __init__(self, database: DatabaseConnection, account_id: Optional[str] = None) -> None:
        self._db = database
        self._account_id = account_id or settings.ledger.account_id
        self._channel: EventChannel[Account] = EventChannel("account")

    async def read(self) -> Account:
        try:
            async with self._db.session() as session:
                record = await AccountRepository(session).get(self._account_id)
                document = record.to_document() if record else None
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"account.read failed: {e}") from e
        return Account.from_document(document)

    async def merge_write(self, fields: dict[str, Any]) -> None:
        try:
            async with self._db.session() as session:
                record = await AccountRepository(session).merge(
                    self._account_id, _account_values(fields)
                )
                document = record.to_document()
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"account.merge_write failed: {e}") from e

        await self._channel.publish(Account.from_document(document))

    async def subscribe_document(self, callback: AccountCallback) -> Subscription:
        subscription = self._channel.subscribe(callback)
        await self._channel.deliver(subscription, await self.read())
        return subscription
