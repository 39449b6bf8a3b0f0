"""
Transaction endpoints
"""

from typing import List
from fastapi import APIRouter, Depends

from .deps import get_ledger, unwrap_or_raise
from .schemas import (
    DepositRequest, TransactionModel, TransferRequest, UndoResponse, WithdrawRequest
)
from ..ledger import Ledger


router = APIRouter()


@router.post("/deposit", response_model=TransactionModel)
def deposit(request: DepositRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a deposit"""
    transaction = unwrap_or_raise(
        ledger.deposit(request.account_id, request.amount, request.note)
    )
    return TransactionModel(**transaction.to_dict())


@router.post("/withdraw", response_model=TransactionModel)
def withdraw(request: WithdrawRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a withdrawal"""
    transaction = unwrap_or_raise(
        ledger.withdraw(request.account_id, request.amount, request.note)
    )
    return TransactionModel(**transaction.to_dict())


@router.post("/transfer", response_model=List[TransactionModel])
def transfer(request: TransferRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a transfer between accounts"""
    legs = unwrap_or_raise(ledger.transfer(
        request.from_account_id,
        request.to_account_id,
        request.amount,
        request.note
    ))
    return [TransactionModel(**t.to_dict()) for t in legs]


@router.post("/undo", response_model=UndoResponse)
def undo(ledger: Ledger = Depends(get_ledger)):
    """Undo the most recent operation"""
    outcome = unwrap_or_raise(ledger.undo())
    return UndoResponse(
        was_transfer=outcome.was_transfer,
        reversed=[TransactionModel(**t.to_dict()) for t in outcome.reversed]
    )


@router.get("/log", response_model=List[TransactionModel])
def global_log(ledger: Ledger = Depends(get_ledger)):
    """Global transaction log, oldest first"""
    return [TransactionModel(**t.to_dict()) for t in ledger.log]
