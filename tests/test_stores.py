"""Tests for the in-memory document stores."""

import asyncio

import pytest

from betledger.exceptions import NotFound, StoreUnavailable
from betledger.models import BetDraft, BetStatus
from betledger.stores import InMemoryAccountStore


def test_create_assigns_id_and_timestamps(bet_store, now) -> None:
    async def run() -> None:
        bet_id = await bet_store.create(BetDraft(match="A v B", stake=10, odds=2))

        bet = await bet_store.read(bet_id)
        assert bet.id == bet_id
        assert bet.date == now
        assert bet.created_at == now
        assert bet.status == BetStatus.PENDING

    asyncio.run(run())


def test_missing_bet_operations(bet_store) -> None:
    async def run() -> None:
        with pytest.raises(NotFound):
            await bet_store.read("missing")
        with pytest.raises(NotFound):
            await bet_store.update("missing", {"status": "won"})
        await bet_store.delete("missing")

    asyncio.run(run())


def test_update_merges_fields(bet_store, now) -> None:
    async def run() -> None:
        bet_id = await bet_store.create(BetDraft(match="A v B", stake=10, odds=2))
        await bet_store.update(bet_id, {"status": "won"})

        bet = await bet_store.read(bet_id)
        assert bet.status == BetStatus.WON
        assert bet.match == "A v B"
        assert bet.updated_at == now

    asyncio.run(run())


def test_collection_subscription(bet_store) -> None:
    snapshots = []

    async def run() -> None:
        await bet_store.create(BetDraft(match="A v B", stake=10, odds=2))

        subscription = await bet_store.subscribe_collection(snapshots.append)
        bet_id = await bet_store.create(BetDraft(match="C v D", stake=5, odds=3))
        await bet_store.delete(bet_id)
        await bet_store.delete(bet_id)

        subscription.unsubscribe()
        await bet_store.create(BetDraft(match="E v F", stake=1, odds=4))

    asyncio.run(run())

    # Initial snapshot, the create and one effective delete
    assert [len(snapshot) for snapshot in snapshots] == [1, 2, 1]


def test_unknown_status_documents_are_skipped(bet_store) -> None:
    bet_store.insert_document("good", {"match": "A v B", "stake": 1, "odds": 2, "status": "won"})
    bet_store.insert_document("bad", {"match": "C v D", "stake": 1, "odds": 2, "status": "void"})

    bets = asyncio.run(bet_store.fetch_all())

    assert [bet.id for bet in bets] == ["good"]


def test_injected_failures(bet_store) -> None:
    async def run() -> None:
        bet_store.fail_next("read")
        with pytest.raises(StoreUnavailable):
            await bet_store.read("anything")
        # Only the scheduled call fails
        with pytest.raises(NotFound):
            await bet_store.read("anything")

        bet_store.fail_next(times=2)
        for _ in range(2):
            with pytest.raises(StoreUnavailable):
                await bet_store.fetch_all()
        assert await bet_store.fetch_all() == []

    asyncio.run(run())


def test_account_merge_write_creates_and_merges() -> None:
    store = InMemoryAccountStore()

    async def run() -> None:
        assert (await store.read()).balance == 0.0
        assert not store.exists

        await store.merge_write({"balance": 10.0, "username": "sam"})
        await store.merge_write({"balance": 12.5})

        account = await store.read()
        assert account.balance == 12.5
        assert account.username == "sam"

    asyncio.run(run())


def test_account_subscription() -> None:
    store = InMemoryAccountStore({"balance": 3.0})
    balances = []

    async def run() -> None:
        subscription = await store.subscribe_document(lambda a: balances.append(a.balance))
        await store.merge_write({"balance": 4.0})
        subscription.unsubscribe()
        await store.merge_write({"balance": 5.0})

    asyncio.run(run())

    assert balances == [3.0, 4.0]


def test_reading_unknown_status_document_is_not_found(bet_store) -> None:
    bet_store.insert_document("bad", {"match": "C v D", "stake": 1, "odds": 2, "status": "void"})

    with pytest.raises(NotFound) as exc_info:
        asyncio.run(bet_store.read("bad"))

    assert exc_info.value.key == "bad"
