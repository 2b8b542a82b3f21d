"""
In-memory document stores.

Dict-backed implementations of the store protocols with the same
notification behaviour as a remote document service. Used by the tests
and for running the ledger without a database.
"""

import copy
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from betledger.events import EventChannel, Subscription
from betledger.exceptions import NotFound, StoreUnavailable
from betledger.models import Account, Bet, BetDraft
from betledger.stores.base import (
    AccountCallback,
    BetsCallback,
    bet_from_stored,
    bets_from_documents,
)


class FailureInjector:
    """Makes the next N calls of an operation fail with StoreUnavailable."""

    def __init__(self, store_name: str) -> None:
        self._store_name = store_name
        self._pending: dict[Optional[str], int] = {}

    def fail_next(self, operation: Optional[str] = None, times: int = 1) -> None:
        """
        Schedule failures.

        Args:
            operation: Operation name (e.g. "merge_write"), or None for any
            times: Number of calls to fail
        """
        self._pending[operation] = self._pending.get(operation, 0) + times

    def check(self, operation: str) -> None:
        for key in (operation, None):
            if self._pending.get(key, 0) > 0:
                self._pending[key] -= 1
                raise StoreUnavailable(f"{self._store_name}.{operation} failed")


class InMemoryBetStore:
    """Bet collection held in a dict keyed by id."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._docs: dict[str, dict[str, Any]] = {}
        self._channel: EventChannel[list[Bet]] = EventChannel("bets")
        self.failures = FailureInjector("bets")

    def fail_next(self, operation: Optional[str] = None, times: int = 1) -> None:
        self.failures.fail_next(operation, times)

    def insert_document(self, doc_id: str, data: dict[str, Any]) -> None:
        """Place a raw document in the collection without notifying."""
        self._docs[doc_id] = copy.deepcopy(data)

    async def create(self, draft: BetDraft) -> str:
        self.failures.check("create")

        now = self._clock()
        doc_id = uuid.uuid4().hex
        fields = draft.to_fields()
        fields.setdefault("date", now.isoformat())
        fields["created_at"] = now.isoformat()
        self._docs[doc_id] = fields

        await self._notify()
        return doc_id

    async def read(self, bet_id: str) -> Bet:
        self.failures.check("read")

        data = self._docs.get(bet_id)
        if data is None:
            raise NotFound("bet", bet_id)
        return bet_from_stored(bet_id, copy.deepcopy(data))

    async def update(self, bet_id: str, fields: dict[str, Any]) -> None:
        self.failures.check("update")

        data = self._docs.get(bet_id)
        if data is None:
            raise NotFound("bet", bet_id)
        data.update(copy.deepcopy(fields))
        data["updated_at"] = self._clock().isoformat()

        await self._notify()

    async def delete(self, bet_id: str) -> None:
        self.failures.check("delete")

        if self._docs.pop(bet_id, None) is not None:
            await self._notify()

    async def fetch_all(self) -> list[Bet]:
        self.failures.check("fetch_all")
        return self._snapshot()

    async def subscribe_collection(self, callback: BetsCallback) -> Subscription:
        subscription = self._channel.subscribe(callback)
        await self._channel.deliver(subscription, self._snapshot())
        return subscription

    def _snapshot(self) -> list[Bet]:
        return bets_from_documents(
            (doc_id, copy.deepcopy(data)) for doc_id, data in self._docs.items()
        )

    async def _notify(self) -> None:
        await self._channel.publish(self._snapshot())


class InMemoryAccountStore:
    """Single account document held in memory."""

    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self._doc: Optional[dict[str, Any]] = copy.deepcopy(initial) if initial else None
        self._channel: EventChannel[Account] = EventChannel("account")
        self.failures = FailureInjector("account")

    def fail_next(self, operation: Optional[str] = None, times: int = 1) -> None:
        self.failures.fail_next(operation, times)

    @property
    def exists(self) -> bool:
        return self._doc is not None

    async def read(self) -> Account:
        self.failures.check("read")
        return Account.from_document(copy.deepcopy(self._doc))

    async def merge_write(self, fields: dict[str, Any]) -> None:
        self.failures.check("merge_write")

        merged = dict(self._doc or {})
        merged.update(copy.deepcopy(fields))
        self._doc = merged

        await self._channel.publish(Account.from_document(copy.deepcopy(self._doc)))

    async def subscribe_document(self, callback: AccountCallback) -> Subscription:
        subscription = self._channel.subscribe(callback)
        await self._channel.deliver(subscription, Account.from_document(copy.deepcopy(self._doc)))
        return subscription
