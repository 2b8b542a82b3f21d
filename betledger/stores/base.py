"""
Store interfaces.

The ledger talks to its document stores only through these protocols,
so any backend offering read / write / subscribe can be injected.
"""

from typing import Any, Awaitable, Callable, Iterable, Protocol, Union

from config.logging_config import get_logger
from betledger.events import Subscription
from betledger.exceptions import NotFound, ValidationError
from betledger.models import Account, Bet, BetDraft

logger = get_logger(__name__)

BetsCallback = Callable[[list[Bet]], Union[None, Awaitable[None]]]
AccountCallback = Callable[[Account], Union[None, Awaitable[None]]]


class BetStore(Protocol):
    """Collection of bet documents addressable by id."""

    async def create(self, draft: BetDraft) -> str:
        """Store a new bet, stamping server timestamps. Returns the new id."""
        ...

    async def read(self, bet_id: str) -> Bet:
        """Read a bet. Raises NotFound if it does not exist."""
        ...

    async def update(self, bet_id: str, fields: dict[str, Any]) -> None:
        """Merge fields into a bet. Raises NotFound if it does not exist."""
        ...

    async def delete(self, bet_id: str) -> None:
        """Remove a bet. Deleting a missing bet is a no-op."""
        ...

    async def fetch_all(self) -> list[Bet]:
        """Current collection snapshot."""
        ...

    async def subscribe_collection(self, callback: BetsCallback) -> Subscription:
        """Deliver the current snapshot now and on every change."""
        ...


class AccountStore(Protocol):
    """Single account document with merge-write semantics."""

    async def read(self) -> Account:
        """Read the account; an absent document reads as a zeroed account."""
        ...

    async def merge_write(self, fields: dict[str, Any]) -> None:
        """Merge fields into the account document, creating it if needed."""
        ...

    async def subscribe_document(self, callback: AccountCallback) -> Subscription:
        """Deliver the current account now and on every change."""
        ...


def bet_from_stored(doc_id: str, data: dict[str, Any]) -> Bet:
    """
    Parse a single stored bet for a read.

    A document with an unrecognized status is corrupt, not bad input: it
    is logged and reported as NotFound, matching how snapshots skip it.
    """
    try:
        return Bet.from_document(doc_id, data)
    except ValidationError as e:
        logger.error("Unreadable bet document", bet_id=doc_id, error=str(e))
        raise NotFound("bet", doc_id) from e


def bets_from_documents(documents: Iterable[tuple[str, dict[str, Any]]]) -> list[Bet]:
    """
    Convert raw documents into a bet snapshot.

    Documents with an unrecognized status are logged and skipped.

    Args:
        documents: (id, fields) pairs

    Returns:
        Parsed bets
    """
    bets = []
    for doc_id, data in documents:
        try:
            bets.append(Bet.from_document(doc_id, data))
        except ValidationError as e:
            logger.warning("Skipping unreadable bet document", bet_id=doc_id, error=str(e))
    return bets
