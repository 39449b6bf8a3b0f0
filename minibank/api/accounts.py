"""
Account endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from .deps import get_ledger, unwrap_or_raise
from .schemas import (
    AccountDetailModel, AccountSummaryModel, CreateAccountRequest, TransactionModel
)
from ..ledger import Ledger


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_account(
    request: CreateAccountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Open an account"""
    account_id = unwrap_or_raise(
        ledger.create_account(request.owner, request.initial_balance)
    )
    return {
        "account_id": account_id,
        "message": "Account created successfully"
    }


@router.get("", response_model=List[AccountSummaryModel])
def list_accounts(ledger: Ledger = Depends(get_ledger)):
    """List every account with its balance"""
    precision = ledger.config.display_precision
    return [
        AccountSummaryModel.from_summary(summary, precision)
        for summary in ledger.list_accounts()
    ]


@router.get("/{account_id}", response_model=AccountDetailModel)
def get_account(account_id: int, ledger: Ledger = Depends(get_ledger)):
    """Get account details and history"""
    account = unwrap_or_raise(ledger.lookup(account_id))
    history = unwrap_or_raise(ledger.history(account_id))
    summary = AccountSummaryModel.from_summary(
        account.summary(), ledger.config.display_precision
    )
    return AccountDetailModel(
        **summary.model_dump(),
        history=[TransactionModel(**t.to_dict()) for t in history]
    )


@router.get("/{account_id}/statement", response_class=PlainTextResponse)
def get_statement(account_id: int, ledger: Ledger = Depends(get_ledger)):
    """Plain-text account statement"""
    account = unwrap_or_raise(ledger.lookup(account_id))
    return account.render(ledger.config.display_precision)
