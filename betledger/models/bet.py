"""
Bet data models.

A bet's balance contribution is a pure function of (status, stake, odds).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from betledger.exceptions import ValidationError
from betledger.utils.dates import parse_datetime
from betledger.utils.numbers import coerce_float
from betledger.utils.odds import calculate_back_profit, calculate_return, is_valid_odds


class BetStatus(str, Enum):
    """Settlement status of a bet."""

    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    DELETED = "deleted"  # Soft delete marker

    @classmethod
    def parse(cls, value: Any) -> "BetStatus":
        """Parse a stored status, rejecting anything outside the enumeration."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError("status", f"unknown status {value!r}") from None

    @property
    def is_settled(self) -> bool:
        """Whether the status carries a balance effect."""
        return self in (BetStatus.WON, BetStatus.LOST)


def calculate_profit_loss(status: BetStatus, stake: float, odds: float) -> float:
    """
    Realised profit or loss for a bet.

    Args:
        status: Bet status
        stake: Stake amount
        odds: Decimal odds

    Returns:
        ``stake * (odds - 1)`` if won, ``-stake`` if lost, otherwise 0.
        A malformed record (stake not positive or odds not above 1)
        contributes 0 whatever its status.
    """
    if stake <= 0 or not is_valid_odds(odds):
        return 0.0

    match status:
        case BetStatus.WON:
            return calculate_back_profit(stake, odds)
        case BetStatus.LOST:
            return -stake
        case BetStatus.PENDING | BetStatus.DELETED:
            return 0.0


@dataclass
class BetDraft:
    """User-supplied bet fields, used for both create and edit."""

    match: str
    stake: float
    odds: float
    status: BetStatus = BetStatus.PENDING
    date: Optional[Union[datetime, str]] = None  # Parsed by validation

    @property
    def profit_loss(self) -> float:
        return calculate_profit_loss(self.status, self.stake, self.odds)

    @property
    def potential_return(self) -> float:
        """Payout if the bet wins."""
        return calculate_return(self.stake, self.odds)

    def to_fields(self) -> dict[str, Any]:
        """Document fields for a store write."""
        fields: dict[str, Any] = {
            "match": self.match.strip(),
            "stake": float(self.stake),
            "odds": float(self.odds),
            "status": self.status.value,
        }
        if self.date is not None:
            fields["date"] = self.date.isoformat()
        return fields


@dataclass
class Bet:
    """A recorded wager."""

    id: str
    match: str
    stake: float
    odds: float
    status: BetStatus
    date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def profit_loss(self) -> float:
        """Derived profit/loss; never stored."""
        return calculate_profit_loss(self.status, self.stake, self.odds)

    @property
    def potential_return(self) -> float:
        return calculate_return(self.stake, self.odds)

    @property
    def is_active(self) -> bool:
        """Soft-deleted bets are excluded from every aggregate."""
        return self.status != BetStatus.DELETED

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "Bet":
        """
        Build a bet from a raw store document.

        Missing numeric fields become 0 so a malformed record contributes
        nothing to the statistics. An unrecognized status raises
        ValidationError.

        Args:
            doc_id: Store-assigned id
            data: Document fields

        Returns:
            Bet instance
        """
        created_at = parse_datetime(data.get("created_at"))
        bet_date = parse_datetime(data.get("date")) or created_at or datetime.min

        return cls(
            id=doc_id,
            match=str(data.get("match") or ""),
            stake=coerce_float(data.get("stake")),
            odds=coerce_float(data.get("odds")),
            status=BetStatus.parse(data.get("status", BetStatus.PENDING.value)),
            date=bet_date,
            created_at=created_at,
            updated_at=parse_datetime(data.get("updated_at")),
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize to store document fields (id excluded)."""
        doc: dict[str, Any] = {
            "match": self.match,
            "stake": self.stake,
            "odds": self.odds,
            "status": self.status.value,
            "date": self.date.isoformat(),
        }
        if self.created_at is not None:
            doc["created_at"] = self.created_at.isoformat()
        if self.updated_at is not None:
            doc["updated_at"] = self.updated_at.isoformat()
        return doc


@dataclass
class BetSnapshot:
    """The three fields a balance contribution depends on."""

    status: BetStatus
    stake: float
    odds: float

    @property
    def profit_loss(self) -> float:
        return calculate_profit_loss(self.status, self.stake, self.odds)

    @classmethod
    def of(cls, bet: "Bet | BetDraft") -> "BetSnapshot":
        return cls(status=bet.status, stake=bet.stake, odds=bet.odds)
