"""
Transaction Record Module

Immutable records of balance-affecting events. A record lives in its
account's history and, independently, in the ledger's global log.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Dict, Any
from enum import Enum


def _now() -> datetime:
    """Wall clock, UTC, second resolution"""
    return datetime.now(timezone.utc).replace(microsecond=0)


class TransactionKind(Enum):
    """Kinds of balance-affecting events"""
    DEPOSIT = ("deposit", 1, "Dep +")
    WITHDRAW = ("withdraw", -1, "Wdr -")
    TRANSFER_IN = ("transfer_in", 1, "TIn +")
    TRANSFER_OUT = ("transfer_out", -1, "TOut -")

    def __init__(self, code: str, sign: int, label: str):
        self.code = code
        self.sign = sign
        self.label = label

    @property
    def is_credit(self) -> bool:
        """Check if this kind increases the balance"""
        return self.sign > 0

    @property
    def is_debit(self) -> bool:
        """Check if this kind decreases the balance"""
        return self.sign < 0

    @classmethod
    def from_code(cls, code: str) -> 'TransactionKind':
        for kind in cls:
            if kind.code == code:
                return kind
        raise ValueError(f"Unknown transaction kind: {code}")


@dataclass(frozen=True)
class Transaction:
    """
    One balance-affecting event

    Amount is always positive; the direction comes from the kind.
    """
    account_id: int
    kind: TransactionKind
    amount: Decimal
    note: str = ""
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if self.amount <= Decimal('0'):
            raise ValueError("Transaction amount must be positive")

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign of its effect on the balance"""
        return self.amount * self.kind.sign

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary"""
        return {
            "account_id": self.account_id,
            "kind": self.kind.code,
            "amount": str(self.amount),
            "note": self.note,
            "created_at": self.created_at.isoformat(),
        }
