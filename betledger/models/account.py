"""
Account data models.

The account is a singleton aggregate. Reading an account that was never
written is valid and yields a zeroed account.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from betledger.utils.dates import parse_datetime
from betledger.utils.numbers import coerce_float


class TransactionType(str, Enum):
    """Manual account movement."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass
class LastTransaction:
    """Most recent manual deposit or withdrawal. Informational only."""

    type: TransactionType
    amount: float
    date: datetime

    def to_document(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_document(cls, data: Any) -> Optional["LastTransaction"]:
        if not isinstance(data, dict):
            return None
        try:
            tx_type = TransactionType(data.get("type"))
        except ValueError:
            return None
        return cls(
            type=tx_type,
            amount=coerce_float(data.get("amount")),
            date=parse_datetime(data.get("date")) or datetime.min,
        )


@dataclass
class Account:
    """Spendable balance plus running deposit/withdrawal totals."""

    balance: float = 0.0
    total_deposits: float = 0.0
    total_withdrawals: float = 0.0
    last_transaction: Optional[LastTransaction] = None
    username: str = ""
    updated_at: Optional[datetime] = None

    @property
    def net_deposits(self) -> float:
        """Deposits minus withdrawals."""
        return self.total_deposits - self.total_withdrawals

    @classmethod
    def from_document(cls, data: Optional[dict[str, Any]]) -> "Account":
        """Build from a stored document; None means the account does not exist yet."""
        if not data:
            return cls()
        return cls(
            balance=coerce_float(data.get("balance")),
            total_deposits=coerce_float(data.get("total_deposits")),
            total_withdrawals=coerce_float(data.get("total_withdrawals")),
            last_transaction=LastTransaction.from_document(data.get("last_transaction")),
            username=str(data.get("username") or ""),
            updated_at=parse_datetime(data.get("updated_at")),
        )
