"""
Interactive Shell

Menu-driven console front end for a single Ledger. All rendering of results
and errors happens here; the ledger itself never prints.
"""

import sys
from typing import Callable, List, Optional, TextIO

from .config import MiniBankConfig, get_config
from .currency import decimal_from_string, format_amount
from .errors import Result
from .ledger import Ledger
from .logging_config import setup_logging

MENU = (
    "\nMenu:\n"
    "\t1 Create account\n"
    "\t2 Deposit\n"
    "\t3 Withdraw\n"
    "\t4 Transfer\n"
    "\t5 List accounts\n"
    "\t6 Print account\n"
    "\t7 Undo last\n"
    "\t0 Exit\n"
    "Choose: "
)


def _parse_id(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"Invalid account id: {token!r}")


class BankShell:
    """
    Reads menu commands and drives the ledger

    Args:
        ledger: The one ledger this shell operates on
        input_fn: Returns the next input line; raises EOFError at end of input
        out: Stream results are written to
    """

    def __init__(
        self,
        ledger: Ledger,
        input_fn: Callable[[], str] = input,
        out: Optional[TextIO] = None
    ):
        self.ledger = ledger
        self.input_fn = input_fn
        self.out = out or sys.stdout
        self.precision = ledger.config.display_precision

    def run(self) -> None:
        """Loop until exit or end of input"""
        self._write("Mini bank (no overdraft) interactive\n")
        while True:
            self._write(MENU)
            try:
                command = self.input_fn().strip()
            except EOFError:
                break

            try:
                if not self.handle(command):
                    break
            except EOFError:
                break
            except ValueError as e:
                self._write(f"Error: {e}\n")

    def handle(self, command: str) -> bool:
        """Run one menu command; False means exit"""
        if command == "1":
            owner = self._ask("Owner: ").strip()
            initial = decimal_from_string(self._ask("Initial: ").strip())
            result = self.ledger.create_account(owner, initial)
            self._report(result, f"Created account id={result.value}")
        elif command == "2":
            account_id, amount = self._ask_id_amount("acc id, amount: ")
            self._report(self.ledger.deposit(account_id, amount, "manual"))
        elif command == "3":
            account_id, amount = self._ask_id_amount("acc id, amount: ")
            self._report(self.ledger.withdraw(account_id, amount, "manual"))
        elif command == "4":
            tokens = self._ask_tokens("from to amount: ", 3)
            result = self.ledger.transfer(
                _parse_id(tokens[0]), _parse_id(tokens[1]),
                decimal_from_string(tokens[2]), "manual"
            )
            self._report(result)
        elif command == "5":
            self._write("Accounts:\n")
            for summary in self.ledger.list_accounts():
                self._write(
                    f" id={summary.account_id} owner={summary.owner} "
                    f"bal={format_amount(summary.balance, self.precision)}\n"
                )
        elif command == "6":
            account_id = _parse_id(self._ask_tokens("acc id: ", 1)[0])
            found = self.ledger.lookup(account_id)
            if found.ok:
                self._write(found.value.render(self.precision) + "\n")
            else:
                self._write(f"Error: {found.error}\n")
        elif command == "7":
            result = self.ledger.undo()
            if result.ok:
                self._write("Undo ok\n")
            else:
                self._write(f"Undo failed: {result.error}\n")
        elif command == "0":
            self._write("Bye\n")
            return False
        else:
            self._write("Unknown\n")
        return True

    def _report(self, result: Result, success: str = "OK") -> None:
        if result.ok:
            self._write(success + "\n")
        else:
            self._write(f"Error: {result.error}\n")

    def _ask(self, prompt: str) -> str:
        self._write(prompt)
        return self.input_fn()

    def _ask_tokens(self, prompt: str, count: int) -> List[str]:
        tokens = self._ask(prompt).split()
        if len(tokens) != count:
            raise ValueError(f"Expected {count} value(s), got {len(tokens)}")
        return tokens

    def _ask_id_amount(self, prompt: str):
        tokens = self._ask_tokens(prompt, 2)
        return _parse_id(tokens[0]), decimal_from_string(tokens[1])

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()


def main(config: Optional[MiniBankConfig] = None) -> None:
    """Start an interactive session on a fresh ledger"""
    config = config or get_config()
    setup_logging(config.log_level, "minibank", config.log_format, config.log_file)
    BankShell(Ledger(config)).run()
