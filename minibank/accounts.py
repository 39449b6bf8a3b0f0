"""
Account Module

Accounts own their balance and their ordered transaction history. The
overdraft rule is data (an OverdraftPolicy value) rather than a subclass, so
every withdrawal and every reversal goes through the same policy check.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional
from enum import Enum

from .currency import AmountLike, DEFAULT_PRECISION, format_amount, quantize_amount, to_amount
from .errors import ErrorKind, Result
from .transactions import Transaction, TransactionKind


class PolicyKind(Enum):
    """Overdraft policy variants"""
    NO_OVERDRAFT = "no_overdraft"  # Balance may never go below zero
    CREDIT_LIMIT = "credit_limit"  # Balance may go down to -credit_limit


@dataclass(frozen=True)
class OverdraftPolicy:
    """How far below zero an account's balance may go"""
    kind: PolicyKind = PolicyKind.NO_OVERDRAFT
    credit_limit: Decimal = Decimal('0')

    def __post_init__(self):
        if not isinstance(self.credit_limit, Decimal):
            object.__setattr__(self, 'credit_limit', Decimal(str(self.credit_limit)))

        if self.credit_limit < Decimal('0'):
            raise ValueError("Credit limit cannot be negative")

        if self.kind == PolicyKind.NO_OVERDRAFT and self.credit_limit != Decimal('0'):
            raise ValueError("No-overdraft policy cannot carry a credit limit")

    @classmethod
    def no_overdraft(cls) -> 'OverdraftPolicy':
        return cls()

    @classmethod
    def with_credit_limit(cls, limit: AmountLike) -> 'OverdraftPolicy':
        return cls(PolicyKind.CREDIT_LIMIT, to_amount(limit))

    @property
    def floor(self) -> Decimal:
        """Lowest balance this policy allows"""
        return -self.credit_limit

    def permits(self, balance_after: Decimal) -> bool:
        """Check if a resulting balance is allowed"""
        return balance_after >= self.floor


class AccountSummary(NamedTuple):
    """Read-only (id, owner, balance) triple for listings"""
    account_id: int
    owner: str
    balance: Decimal


@dataclass
class Account:
    """
    Balance-holding entity with its own transaction history

    Invariant: balance == net_history_balance(), and the policy permits the
    balance. Failed operations touch neither balance nor history.
    """
    id: int
    owner: str
    policy: OverdraftPolicy = field(default_factory=OverdraftPolicy.no_overdraft)
    precision: int = DEFAULT_PRECISION
    balance: Decimal = Decimal('0')
    history: List[Transaction] = field(default_factory=list)

    def deposit(
        self,
        amount: AmountLike,
        note: str = "",
        kind: TransactionKind = TransactionKind.DEPOSIT
    ) -> Result[Transaction]:
        """
        Add funds to the account

        Args:
            amount: Positive amount
            note: Free-text note stored with the transaction
            kind: DEPOSIT or TRANSFER_IN

        Returns:
            Result holding the recorded Transaction, or INVALID_AMOUNT
        """
        if not kind.is_credit:
            raise ValueError(f"{kind.name} does not credit an account")

        checked = self._check_amount(amount)
        if not checked.ok:
            return checked
        value = checked.value

        if not self._fits(self.balance + value):
            return Result.failure(
                ErrorKind.INVALID_AMOUNT,
                f"Deposit of {value} would overflow account {self.id}"
            )

        transaction = Transaction(self.id, kind, value, note)
        self.balance += value
        self.history.append(transaction)
        return Result.success(transaction)

    def withdraw(
        self,
        amount: AmountLike,
        note: str = "",
        kind: TransactionKind = TransactionKind.WITHDRAW
    ) -> Result[Transaction]:
        """
        Remove funds from the account, subject to the overdraft policy

        Args:
            amount: Positive amount
            note: Free-text note stored with the transaction
            kind: WITHDRAW or TRANSFER_OUT

        Returns:
            Result holding the recorded Transaction, or INVALID_AMOUNT /
            INSUFFICIENT_FUNDS
        """
        if not kind.is_debit:
            raise ValueError(f"{kind.name} does not debit an account")

        checked = self._check_amount(amount)
        if not checked.ok:
            return checked
        value = checked.value

        if not self.policy.permits(self.balance - value):
            return self._insufficient(value)
        if not self._fits(self.balance - value):
            return Result.failure(
                ErrorKind.INVALID_AMOUNT,
                f"Withdrawal of {value} would overflow account {self.id}"
            )

        transaction = Transaction(self.id, kind, value, note)
        self.balance -= value
        self.history.append(transaction)
        return Result.success(transaction)

    def can_revert(self, transaction: Transaction) -> bool:
        """Check if reverting the transaction keeps the policy satisfied"""
        return self.policy.permits(self.balance - transaction.signed_amount)

    def holds(self, transaction: Transaction) -> bool:
        """Check if this exact transaction is still in history"""
        return any(t is transaction for t in self.history)

    def revert(self, transaction: Transaction) -> Result[Transaction]:
        """
        Take a transaction back out of this account

        The entry is removed from history and its effect on the balance
        reversed. Entries recorded after it stay where they are. Fails with
        NOT_FOUND if the entry is not in history, and taking back a credit
        can fail with INSUFFICIENT_FUNDS.
        """
        for index in range(len(self.history) - 1, -1, -1):
            if self.history[index] is transaction:
                break
        else:
            return Result.failure(
                ErrorKind.NOT_FOUND,
                f"Transaction is not in the history of account {self.id}"
            )

        if not self.can_revert(transaction):
            return self._insufficient(transaction.amount)

        del self.history[index]
        self.balance -= transaction.signed_amount
        return Result.success(transaction)

    def net_history_balance(self) -> Decimal:
        """Recompute the balance from history"""
        return sum((t.signed_amount for t in self.history), Decimal('0'))

    def summary(self) -> AccountSummary:
        return AccountSummary(self.id, self.owner, self.balance)

    def render(self, precision: Optional[int] = None) -> str:
        """Human-readable dump of the account and its history"""
        places = self.precision if precision is None else precision
        lines = [
            f"Account {self.id} ({self.owner}) balance={format_amount(self.balance, places)}"
        ]
        for t in self.history:
            when = t.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
            lines.append(
                f"  [{when}] {t.kind.label} {format_amount(t.amount, places)} | {t.note}"
            )
        return "\n".join(lines)

    def _check_amount(self, amount: AmountLike) -> Result[Decimal]:
        try:
            value = to_amount(amount, self.precision)
        except ValueError as e:
            return Result.failure(ErrorKind.INVALID_AMOUNT, str(e))

        if value <= Decimal('0'):
            return Result.failure(
                ErrorKind.INVALID_AMOUNT, f"Amount must be positive, got {amount}"
            )
        return Result.success(value)

    def _fits(self, balance: Decimal) -> bool:
        try:
            quantize_amount(balance, self.precision)
        except ValueError:
            return False
        return True

    def _insufficient(self, amount: Decimal) -> Result[Transaction]:
        return Result.failure(
            ErrorKind.INSUFFICIENT_FUNDS,
            f"Insufficient funds in account {self.id}: balance "
            f"{format_amount(self.balance, self.precision)}, "
            f"requested {format_amount(amount, self.precision)}"
        )
