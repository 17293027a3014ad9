"""
Balance API routes.

- GET /user/balance - Current and withdrawn points
- POST /user/balance/withdraw - Spend points on an order
- GET /user/withdrawals - Withdrawal history
"""

from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.application.use_cases.get_balance import GetBalance
from comptable.application.use_cases.list_withdrawals import ListWithdrawals
from comptable.application.use_cases.withdraw_points import WithdrawPoints
from comptable.di.dependencies import (
    get_db_session,
    get_get_balance,
    get_list_withdrawals,
    get_withdraw_points,
)
from comptable.domain.exceptions import (
    InsufficientFundsError,
    InvalidOrderNumberError,
    ValidationError,
)
from comptable.infrastructure.monitoring import get_logger
from comptable.presentation.api.middleware.auth import get_current_login
from comptable.presentation.schemas.balance_schemas import (
    BalanceResponse,
    WithdrawalResponse,
    WithdrawRequest,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/user", tags=["Balance"])


# ================================================================
# Balance
# ================================================================


@router.get(
    "/balance",
    response_model=BalanceResponse,
    status_code=status.HTTP_200_OK,
    summary="Get balance",
    description="Current spendable points and lifetime withdrawn total",
)
async def get_balance(
    login: str = Depends(get_current_login),
    use_case: GetBalance = Depends(get_get_balance),
) -> BalanceResponse:
    """
    Get the caller's balance.

    Raises:
        HTTPException: 500 on storage failure
    """
    try:
        balance = await use_case.execute(login)
    except Exception:
        logger.exception("Balance lookup failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get balance",
        )

    return BalanceResponse.from_entity(balance)


@router.post(
    "/balance/withdraw",
    status_code=status.HTTP_200_OK,
    summary="Withdraw points",
    description="Spend points against a new order number",
    responses={
        400: {"description": "Malformed request"},
        401: {"description": "Not authenticated"},
        402: {"description": "Insufficient points"},
        422: {"description": "Order number fails Luhn check"},
    },
)
async def withdraw(
    request: WithdrawRequest,
    login: str = Depends(get_current_login),
    use_case: WithdrawPoints = Depends(get_withdraw_points),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Withdraw points.

    Raises:
        HTTPException: 402 if balance is insufficient
        HTTPException: 422 if order number fails Luhn check
        HTTPException: 500 on storage failure
    """
    try:
        await use_case.execute(
            login=login,
            order_number=request.order,
            amount=request.sum,
        )
        await session.commit()
    except InvalidOrderNumberError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message
        )
    except InsufficientFundsError as e:
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED, detail=e.message
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except Exception:
        logger.exception("Withdrawal failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to withdraw",
        )

    return Response(status_code=status.HTTP_200_OK)


# ================================================================
# History
# ================================================================


@router.get(
    "/withdrawals",
    response_model=list[WithdrawalResponse],
    status_code=status.HTTP_200_OK,
    summary="List withdrawals",
    description="Oldest first; 204 when the user never withdrew",
    responses={204: {"description": "No withdrawals"}},
)
async def list_withdrawals(
    login: str = Depends(get_current_login),
    use_case: ListWithdrawals = Depends(get_list_withdrawals),
) -> Union[list[WithdrawalResponse], Response]:
    """
    List the caller's withdrawals.

    Raises:
        HTTPException: 500 on storage failure
    """
    try:
        withdrawals = await use_case.execute(login)
    except Exception:
        logger.exception("Listing withdrawals failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list withdrawals",
        )

    if not withdrawals:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return [WithdrawalResponse.from_entity(w) for w in withdrawals]
