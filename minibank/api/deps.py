"""
Ledger dependency and error mapping
"""

from fastapi import HTTPException, Request, status

from ..errors import ErrorKind, Result
from ..ledger import Ledger

ERROR_STATUS = {
    ErrorKind.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_409_CONFLICT,
    ErrorKind.SAME_ACCOUNT: status.HTTP_409_CONFLICT,
    ErrorKind.NOTHING_TO_UNDO: status.HTTP_409_CONFLICT,
}


def get_ledger(request: Request) -> Ledger:
    """The ledger this app was created around"""
    return request.app.state.ledger


def unwrap_or_raise(result: Result):
    """Return the result's value or raise the matching HTTPException"""
    if not result.ok:
        raise HTTPException(
            status_code=ERROR_STATUS[result.error.kind],
            detail=result.error.to_dict()
        )
    return result.value
