"""
Ledger Engine

Owns every account and the global, append-only transaction log. Orchestrates
multi-account operations (transfers) and single-depth undo of the most recent
log entry or transfer pair.

Every operation is atomic: it either commits all of its balance changes and
log appends or returns a failed Result having changed nothing.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import threading

from .accounts import Account, AccountSummary, OverdraftPolicy
from .config import MiniBankConfig, get_config
from .currency import AmountLike, format_amount, to_amount
from .errors import ErrorKind, LedgerError, Result
from .logging_config import get_logger, log_action
from .transactions import Transaction, TransactionKind


@dataclass(frozen=True)
class UndoOutcome:
    """What an undo reversed, oldest entry first"""
    reversed: Tuple[Transaction, ...]
    was_transfer: bool = False


def _route_note(direction: str, account_id: int, note: str) -> str:
    """Annotate a transfer leg, e.g. "to 2: rent" or "from 1" """
    base = f"{direction} {account_id}"
    return f"{base}: {note}" if note else base


class Ledger:
    """
    The bank: accounts keyed by integer id plus the global log

    Ids come from a counter starting at 1 and are never reused. Each history
    append has exactly one matching global log entry, in the same order.
    """

    def __init__(self, config: Optional[MiniBankConfig] = None):
        self.config = config or get_config()
        self._accounts: Dict[int, Account] = {}
        self._log: List[Transaction] = []
        self._next_id = 1
        self._lock = threading.RLock()
        self.logger = get_logger("minibank.ledger")

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    @property
    def log(self) -> Tuple[Transaction, ...]:
        """Snapshot of the global log"""
        with self._lock:
            return tuple(self._log)

    def create_account(
        self,
        owner: str,
        initial_balance: AmountLike = 0,
        policy: Optional[OverdraftPolicy] = None
    ) -> Result[int]:
        """
        Open a new account

        Args:
            owner: Owner name (free text)
            initial_balance: Non-negative opening balance
            policy: Overdraft policy, no overdraft if omitted

        Returns:
            Result holding the new account id, or INVALID_AMOUNT
        """
        precision = self.config.amount_precision
        try:
            opening = to_amount(initial_balance, precision)
        except ValueError as e:
            return self._rejected("create_account", None, LedgerError(ErrorKind.INVALID_AMOUNT, str(e)))

        if opening < Decimal('0'):
            return self._rejected("create_account", None, LedgerError(
                ErrorKind.INVALID_AMOUNT,
                f"Initial balance cannot be negative, got {initial_balance}"
            ))

        with self._lock:
            account_id = self._next_id
            account = Account(
                id=account_id,
                owner=owner,
                policy=policy or OverdraftPolicy.no_overdraft(),
                precision=precision
            )

            if opening > Decimal('0'):
                seeded = account.deposit(opening, self.config.initial_note)
                self._log.append(seeded.unwrap())

            self._accounts[account_id] = account
            self._next_id += 1

        log_action(
            self.logger, "info", f"Account created for {owner}",
            account_id=account_id, action="create_account",
            resource=f"account:{account_id}",
            extra={"initial_balance": str(opening)}
        )
        return Result.success(account_id)

    def lookup(self, account_id: int) -> Result[Account]:
        """Resolve an account id, NOT_FOUND if unknown"""
        account = self._accounts.get(account_id)
        if account is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"Account {account_id} not found")
        return Result.success(account)

    def get_account(self, account_id: int) -> Account:
        """Resolve an account id, raising LedgerException if unknown"""
        return self.lookup(account_id).unwrap()

    def history(self, account_id: int) -> Result[Tuple[Transaction, ...]]:
        """Snapshot of one account's history"""
        with self._lock:
            found = self.lookup(account_id)
            if not found.ok:
                return Result.from_error(found.error)
            return Result.success(tuple(found.value.history))

    def deposit(self, account_id: int, amount: AmountLike, note: str = "") -> Result[Transaction]:
        """Deposit into an account and record it in the global log"""
        with self._lock:
            found = self.lookup(account_id)
            if not found.ok:
                return self._rejected("deposit", account_id, found.error)

            result = found.value.deposit(amount, note)
            if not result.ok:
                return self._rejected("deposit", account_id, result.error)

            self._log.append(result.value)

        self._committed("deposit", result.value)
        return result

    def withdraw(self, account_id: int, amount: AmountLike, note: str = "") -> Result[Transaction]:
        """Withdraw from an account and record it in the global log"""
        with self._lock:
            found = self.lookup(account_id)
            if not found.ok:
                return self._rejected("withdraw", account_id, found.error)

            result = found.value.withdraw(amount, note)
            if not result.ok:
                return self._rejected("withdraw", account_id, result.error)

            self._log.append(result.value)

        self._committed("withdraw", result.value)
        return result

    def transfer(
        self,
        from_id: int,
        to_id: int,
        amount: AmountLike,
        note: str = ""
    ) -> Result[Tuple[Transaction, Transaction]]:
        """
        Move funds between two accounts

        The amount is validated and both accounts resolved before either is
        touched, so once the source leg succeeds the destination leg cannot
        fail on input. The global log gets TRANSFER_OUT then TRANSFER_IN.

        Returns:
            Result holding (outgoing, incoming) transactions, or
            SAME_ACCOUNT / INVALID_AMOUNT / NOT_FOUND / INSUFFICIENT_FUNDS
        """
        if from_id == to_id:
            return self._rejected("transfer", from_id, LedgerError(
                ErrorKind.SAME_ACCOUNT, f"Cannot transfer from account {from_id} to itself"
            ))

        try:
            value = to_amount(amount, self.config.amount_precision)
        except ValueError as e:
            return self._rejected("transfer", from_id, LedgerError(ErrorKind.INVALID_AMOUNT, str(e)))

        if value <= Decimal('0'):
            return self._rejected("transfer", from_id, LedgerError(
                ErrorKind.INVALID_AMOUNT, f"Amount must be positive, got {amount}"
            ))

        with self._lock:
            for account_id in (from_id, to_id):
                found = self.lookup(account_id)
                if not found.ok:
                    return self._rejected("transfer", account_id, found.error)

            source = self._accounts[from_id]
            destination = self._accounts[to_id]

            outgoing = source.withdraw(
                value, _route_note("to", to_id, note), TransactionKind.TRANSFER_OUT
            )
            if not outgoing.ok:
                return self._rejected("transfer", from_id, outgoing.error)

            incoming = destination.deposit(
                value, _route_note("from", from_id, note), TransactionKind.TRANSFER_IN
            )
            if not incoming.ok:
                # Put the source leg back so no money is destroyed
                source.revert(outgoing.value)
                return self._rejected("transfer", to_id, incoming.error)

            self._log.append(outgoing.value)
            self._log.append(incoming.value)

        log_action(
            self.logger, "info", f"Transfer {from_id} -> {to_id}",
            account_id=from_id, action="transfer",
            resource=f"account:{from_id}",
            extra={"to_account": to_id, "amount": str(value)}
        )
        return Result.success((outgoing.value, incoming.value))

    def undo(self) -> Result[UndoOutcome]:
        """
        Reverse the most recent global log entry

        A TRANSFER_IN directly preceded by a TRANSFER_OUT of the same amount
        is treated as one transfer and both legs are reversed together.
        Reversed entries are removed from the global log and from their
        accounts' histories. Only one level deep: there is no redo.
        """
        with self._lock:
            if not self._log:
                return self._rejected("undo", None, LedgerError(
                    ErrorKind.NOTHING_TO_UNDO, "Nothing to undo"
                ))

            last = self._log[-1]
            if last.kind == TransactionKind.TRANSFER_IN and len(self._log) >= 2:
                previous = self._log[-2]
                if (previous.kind == TransactionKind.TRANSFER_OUT
                        and previous.amount == last.amount):
                    return self._undo_transfer(previous, last)

            account = self._accounts[last.account_id]
            result = account.revert(last)
            if not result.ok:
                return self._rejected("undo", last.account_id, result.error)

            self._log.pop()

        outcome = UndoOutcome(reversed=(last,))
        self._reversed(outcome)
        return Result.success(outcome)

    def _undo_transfer(self, outgoing: Transaction, incoming: Transaction) -> Result[UndoOutcome]:
        source = self._accounts[outgoing.account_id]
        destination = self._accounts[incoming.account_id]

        # Check before touching anything so a failure leaves both accounts intact
        for account, leg in ((source, outgoing), (destination, incoming)):
            if not account.holds(leg):
                return self._rejected("undo", account.id, LedgerError(
                    ErrorKind.NOT_FOUND,
                    f"Transaction is not in the history of account {account.id}"
                ))

        if not destination.can_revert(incoming):
            return self._rejected("undo", destination.id, LedgerError(
                ErrorKind.INSUFFICIENT_FUNDS,
                f"Insufficient funds in account {destination.id} to undo transfer of "
                f"{format_amount(incoming.amount, self.config.display_precision)}"
            ))

        destination.revert(incoming).unwrap()
        source.revert(outgoing).unwrap()
        del self._log[-2:]

        outcome = UndoOutcome(reversed=(outgoing, incoming), was_transfer=True)
        self._reversed(outcome)
        return Result.success(outcome)

    def list_accounts(self) -> List[AccountSummary]:
        """(id, owner, balance) for every account, in creation order"""
        with self._lock:
            return [account.summary() for account in self._accounts.values()]

    def _committed(self, action: str, transaction: Transaction) -> None:
        log_action(
            self.logger, "info", f"{action.capitalize()} recorded",
            account_id=transaction.account_id, action=action,
            resource=f"account:{transaction.account_id}",
            extra={"amount": str(transaction.amount), "note": transaction.note}
        )

    def _reversed(self, outcome: UndoOutcome) -> None:
        log_action(
            self.logger, "info",
            "Undo transfer" if outcome.was_transfer else "Undo",
            account_id=outcome.reversed[-1].account_id, action="undo",
            extra={"reversed": [t.to_dict() for t in outcome.reversed]}
        )

    def _rejected(self, action: str, account_id: Optional[int], error: LedgerError) -> Result:
        log_action(
            self.logger, "warning", f"{action} rejected: {error.reason}",
            account_id=account_id, action=action,
            extra={"kind": error.kind.value}
        )
        return Result.from_error(error)
