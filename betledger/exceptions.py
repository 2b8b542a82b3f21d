"""Ledger error taxonomy."""

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger errors."""

    pass


class ValidationError(LedgerError):
    """Input rejected before any store mutation."""

    def __init__(self, field: str, rule: str):
        super().__init__(f"{field}: {rule}")
        self.field = field
        self.rule = rule


class NotFound(LedgerError):
    """Referenced bet or account no longer exists."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class InsufficientBalance(LedgerError):
    """Withdrawal exceeds the current balance."""

    def __init__(self, requested: float, available: float):
        super().__init__(
            f"Insufficient balance: requested {requested:.2f}, available {available:.2f}"
        )
        self.requested = requested
        self.available = available


class StoreUnavailable(LedgerError):
    """Underlying store read or write failed."""

    pass


class SettlementNotApplied(LedgerError):
    """
    The bet write succeeded but the balance write did not.

    The bet is persisted without its balance effect. Callers must
    reconcile manually by applying ``delta`` to the account.
    """

    def __init__(self, bet_id: str, delta: float, reason: Optional[str] = None):
        message = f"Bet {bet_id} saved but balance delta {delta:+.2f} was not applied"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.bet_id = bet_id
        self.delta = delta
