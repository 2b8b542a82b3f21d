"""
Balance Reconciler.

Keeps the account balance consistent with bet settlement. A bet's
balance contribution is its derived profit/loss; every create or edit
applies the difference between the new and previous contribution.

The bet write and the balance write are two separate store calls. When
the second one fails the bet stays recorded without its balance effect
and SettlementNotApplied is raised so the caller can reconcile.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from config import LedgerSettings, settings
from config.logging_config import get_logger
from betledger.exceptions import (
    InsufficientBalance,
    NotFound,
    SettlementNotApplied,
    StoreUnavailable,
    ValidationError,
)
from betledger.ledger.validation import validate_amount, validate_bet_draft
from betledger.models import (
    Account,
    BetDraft,
    BetSnapshot,
    BetStatus,
    LastTransaction,
    TransactionType,
)
from betledger.stores.base import AccountStore, BetStore

logger = get_logger(__name__)


@dataclass
class Settlement:
    """Outcome of a bet operation."""

    bet_id: str
    delta: float = 0.0
    balance: Optional[float] = None  # New balance, None when untouched

    @property
    def applied(self) -> bool:
        return self.balance is not None


def balance_delta(old: Optional[BetSnapshot], new: Optional[BetSnapshot]) -> float:
    """
    Balance change implied by replacing one bet state with another.

    Both states go through the same profit/loss function, so every
    transition (pending to won, won to lost, stake or odds corrections)
    is handled uniformly. None stands for "no bet".
    """
    old_profit = old.profit_loss if old else 0.0
    new_profit = new.profit_loss if new else 0.0
    return new_profit - old_profit


class BalanceReconciler:
    """
    Applies bet settlement and manual movements to the account.

    Responsibilities:
    - Validate input before any write
    - Record bets and apply their balance delta
    - Deposit and withdraw funds
    """

    def __init__(
        self,
        bet_store: BetStore,
        account_store: AccountStore,
        ledger_settings: Optional[LedgerSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._bets = bet_store
        self._accounts = account_store
        self._settings = ledger_settings or settings.ledger
        self._clock = clock

    async def create_bet(self, draft: BetDraft) -> Settlement:
        """
        Record a new bet and apply its balance effect.

        Args:
            draft: Bet fields; status must be pending, won or lost

        Returns:
            Settlement with the new bet id

        Raises:
            ValidationError: Input rejected, nothing written
            StoreUnavailable: The bet write failed, nothing written
            SettlementNotApplied: Bet recorded, balance not updated
        """
        draft = validate_bet_draft(draft)
        bet_id = await self._bets.create(draft)

        delta = balance_delta(None, BetSnapshot.of(draft))
        logger.info(
            "Bet created",
            bet_id=bet_id,
            match=draft.match,
            stake=draft.stake,
            odds=draft.odds,
            status=draft.status.value,
            delta=delta,
        )

        if not draft.status.is_settled:
            return Settlement(bet_id=bet_id)

        balance = await self._apply_delta(bet_id, delta)
        return Settlement(bet_id=bet_id, delta=delta, balance=balance)

    async def edit_bet(self, bet_id: str, draft: BetDraft) -> Settlement:
        """
        Update a bet and apply the change in its balance contribution.

        Args:
            bet_id: Bet to edit
            draft: New fields; a None date keeps the stored date

        Raises:
            ValidationError: Input rejected, nothing written
            NotFound: The bet no longer exists (or was soft-deleted)
            StoreUnavailable: The bet read or write failed
            SettlementNotApplied: Bet updated, balance not updated
        """
        draft = validate_bet_draft(draft)

        # A bet deleted since the caller read it raises NotFound here
        original = await self._bets.read(bet_id)
        if not original.is_active:
            raise NotFound("bet", bet_id)

        await self._bets.update(bet_id, draft.to_fields())

        delta = balance_delta(BetSnapshot.of(original), BetSnapshot.of(draft))
        logger.info(
            "Bet updated",
            bet_id=bet_id,
            old_status=original.status.value,
            new_status=draft.status.value,
            delta=delta,
        )

        if delta == 0:
            return Settlement(bet_id=bet_id)

        balance = await self._apply_delta(bet_id, delta)
        return Settlement(bet_id=bet_id, delta=delta, balance=balance)

    async def delete_bet(self, bet_id: str, soft: bool = False) -> Settlement:
        """
        Delete a bet.

        A hard delete removes the document; a soft delete marks it
        ``deleted``. Either way the bet's historical balance effect stays
        in the account unless ``reverse_on_delete`` is enabled.

        Args:
            bet_id: Bet to delete
            soft: Mark as deleted instead of removing

        Raises:
            NotFound: Soft delete (or a reversing delete) of a missing bet
            StoreUnavailable: The bet read or write failed
            SettlementNotApplied: Bet deleted, reversal not applied
        """
        reverse = self._settings.reverse_on_delete
        original = None
        if soft or reverse:
            original = await self._bets.read(bet_id)
            if not original.is_active:
                logger.info("Bet already deleted", bet_id=bet_id)
                return Settlement(bet_id=bet_id)

        if soft:
            await self._bets.update(bet_id, {"status": BetStatus.DELETED.value})
        else:
            await self._bets.delete(bet_id)

        delta = 0.0
        if reverse and original is not None:
            delta = balance_delta(BetSnapshot.of(original), None)

        logger.info("Bet deleted", bet_id=bet_id, soft=soft, delta=delta)

        if delta == 0:
            return Settlement(bet_id=bet_id)

        balance = await self._apply_delta(bet_id, delta)
        return Settlement(bet_id=bet_id, delta=delta, balance=balance)

    async def deposit(self, amount: float) -> Account:
        """
        Add funds to the account.

        Raises:
            ValidationError: amount is not positive
            StoreUnavailable: account read or write failed
        """
        amount = validate_amount(amount)
        account = await self._accounts.read()
        now = self._clock()

        updated = replace(
            account,
            balance=account.balance + amount,
            total_deposits=account.total_deposits + amount,
            last_transaction=LastTransaction(TransactionType.DEPOSIT, amount, now),
            updated_at=now,
        )
        await self._write_movement(updated)

        logger.info("Deposit recorded", amount=amount, balance=updated.balance)
        return updated

    async def withdraw(self, amount: float) -> Account:
        """
        Take funds out of the account.

        Raises:
            ValidationError: amount is not positive
            InsufficientBalance: amount exceeds the balance, nothing written
            StoreUnavailable: account read or write failed
        """
        amount = validate_amount(amount)
        account = await self._accounts.read()

        if amount > account.balance:
            logger.warning(
                "Withdrawal rejected",
                amount=amount,
                balance=account.balance,
            )
            raise InsufficientBalance(amount, account.balance)

        now = self._clock()
        updated = replace(
            account,
            balance=account.balance - amount,
            total_withdrawals=account.total_withdrawals + amount,
            last_transaction=LastTransaction(TransactionType.WITHDRAWAL, amount, now),
            updated_at=now,
        )
        await self._write_movement(updated)

        logger.info("Withdrawal recorded", amount=amount, balance=updated.balance)
        return updated

    async def set_username(self, username: str) -> Account:
        """Store the display name on the account."""
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("username", "is required")

        account = await self._accounts.read()
        now = self._clock()
        updated = replace(account, username=username.strip(), updated_at=now)
        await self._accounts.merge_write(
            {"username": updated.username, "updated_at": now.isoformat()}
        )

        logger.info("Username saved", username=updated.username)
        return updated

    async def _write_movement(self, account: Account) -> None:
        await self._accounts.merge_write(
            {
                "balance": account.balance,
                "total_deposits": account.total_deposits,
                "total_withdrawals": account.total_withdrawals,
                "last_transaction": account.last_transaction.to_document(),
                "updated_at": account.updated_at.isoformat(),
            }
        )

    async def _apply_delta(self, bet_id: str, delta: float) -> float:
        """
        Read-modify-write the balance.

        There is no version check: a concurrent writer between the read
        and the merge loses its update.
        """
        try:
            account = await self._accounts.read()
            balance = account.balance + delta
            await self._accounts.merge_write(
                {"balance": balance, "updated_at": self._clock().isoformat()}
            )
        except StoreUnavailable as e:
            logger.error(
                "Settlement not applied",
                bet_id=bet_id,
                delta=delta,
                error=str(e),
            )
            raise SettlementNotApplied(bet_id, delta, str(e)) from e

        logger.info("Balance updated", bet_id=bet_id, delta=delta, balance=balance)
        return balance
