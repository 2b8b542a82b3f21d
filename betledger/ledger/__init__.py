"""Balance reconciliation."""

from betledger.ledger.reconciler import BalanceReconciler, Settlement, balance_delta
from betledger.ledger.validation import validate_amount, validate_bet_draft

__all__ = [
    "BalanceReconciler",
    "Settlement",
    "balance_delta",
    "validate_amount",
    "validate_bet_draft",
]
