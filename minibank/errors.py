"""
Error Taxonomy Module

Every mutating ledger operation returns a Result carrying either its value or
a structured LedgerError. Callers that prefer exceptions call Result.unwrap().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Reasons a ledger operation can be rejected"""
    INVALID_AMOUNT = "invalid_amount"          # Amount <= 0, or negative initial balance
    INSUFFICIENT_FUNDS = "insufficient_funds"  # Would breach the overdraft policy
    NOT_FOUND = "not_found"                    # Unknown account identifier
    SAME_ACCOUNT = "same_account"              # Transfer source equals destination
    NOTHING_TO_UNDO = "nothing_to_undo"        # Undo on an empty global log


@dataclass(frozen=True)
class LedgerError:
    """Structured failure: a kind plus a human-readable reason"""
    kind: ErrorKind
    reason: str

    def __str__(self) -> str:
        return self.reason

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "reason": self.reason}


class LedgerException(Exception):
    """Raised by Result.unwrap() when the result holds an error"""

    def __init__(self, error: LedgerError):
        super().__init__(error.reason)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a ledger operation

    Exactly one of value/error is meaningful: a failed result always has an
    error, a successful one never does (its value may legitimately be None).
    """
    value: Optional[T] = None
    error: Optional[LedgerError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, reason: str) -> 'Result[T]':
        return cls(error=LedgerError(kind, reason))

    @classmethod
    def from_error(cls, error: LedgerError) -> 'Result[T]':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success"""
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        """Return the value or raise LedgerException"""
        if self.error is not None:
            raise LedgerException(self.error)
        return self.value

    def __bool__(self) -> bool:
        return self.ok
