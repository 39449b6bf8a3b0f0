"""
Pydantic schemas for API requests and responses
"""

from typing import List
from pydantic import BaseModel, Field

from ..accounts import AccountSummary
from ..currency import format_amount


class CreateAccountRequest(BaseModel):
    owner: str
    initial_balance: str = Field("0", description="Decimal amount as string")


class DepositRequest(BaseModel):
    account_id: int
    amount: str = Field(..., description="Decimal amount as string")
    note: str = ""


class WithdrawRequest(BaseModel):
    account_id: int
    amount: str = Field(..., description="Decimal amount as string")
    note: str = ""


class TransferRequest(BaseModel):
    from_account_id: int
    to_account_id: int
    amount: str = Field(..., description="Decimal amount as string")
    note: str = ""


class TransactionModel(BaseModel):
    account_id: int
    kind: str
    amount: str
    note: str
    created_at: str


class AccountSummaryModel(BaseModel):
    account_id: int
    owner: str
    balance: str

    @classmethod
    def from_summary(cls, summary: AccountSummary, precision: int) -> 'AccountSummaryModel':
        return cls(
            account_id=summary.account_id,
            owner=summary.owner,
            balance=format_amount(summary.balance, precision)
        )


class AccountDetailModel(AccountSummaryModel):
    history: List[TransactionModel]


class UndoResponse(BaseModel):
    was_transfer: bool
    reversed: List[TransactionModel]
