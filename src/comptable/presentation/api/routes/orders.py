"""
Order API routes.

- POST /user/orders - Upload order number (text/plain body)
- GET /user/orders - List uploaded orders
"""

from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.application.use_cases.list_orders import ListOrders
from comptable.application.use_cases.submit_order import SubmitOrder
from comptable.di.dependencies import (
    get_db_session,
    get_list_orders,
    get_submit_order,
)
from comptable.domain.entities.order import SubmissionResult
from comptable.domain.exceptions import (
    InvalidOrderNumberError,
    OrderOwnedByOtherUserError,
    ValidationError,
)
from comptable.infrastructure.monitoring import get_logger
from comptable.presentation.api.middleware.auth import get_current_login
from comptable.presentation.schemas.order_schemas import OrderResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/user/orders", tags=["Orders"])


# ================================================================
# Upload
# ================================================================


@router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Upload order number",
    description=(
        "202 when the number is new, 200 when the caller already uploaded it. "
        "Body is the bare order number as text/plain."
    ),
    responses={
        200: {"description": "Already uploaded by this user"},
        400: {"description": "Malformed request"},
        401: {"description": "Not authenticated"},
        409: {"description": "Uploaded by another user"},
        422: {"description": "Order number fails Luhn check"},
    },
)
async def submit_order(
    request: Request,
    login: str = Depends(get_current_login),
    use_case: SubmitOrder = Depends(get_submit_order),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Upload an order number for accrual.

    Raises:
        HTTPException: 400 if body is not a text digit string
        HTTPException: 409 if another user owns the number
        HTTPException: 422 if number fails Luhn check
        HTTPException: 500 on storage failure
    """
    if "text" not in request.headers.get("content-type", ""):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Content-Type must be text/plain",
        )

    try:
        raw_number = (await request.body()).decode("utf-8").strip()
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Body must be UTF-8 text",
        )

    try:
        result = await use_case.execute(login=login, raw_number=raw_number)
        # Accepted means stored, so commit before answering
        await session.commit()
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidOrderNumberError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message
        )
    except OrderOwnedByOtherUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except Exception:
        logger.exception("Order upload failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload order",
        )

    if result.result == SubmissionResult.ALREADY_UPLOADED:
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_202_ACCEPTED)


# ================================================================
# Listing
# ================================================================


@router.get(
    "",
    response_model=list[OrderResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="List uploaded orders",
    description="Oldest upload first; 204 when the user has no orders",
    responses={204: {"description": "No orders"}},
)
async def list_orders(
    login: str = Depends(get_current_login),
    use_case: ListOrders = Depends(get_list_orders),
) -> Union[list[OrderResponse], Response]:
    """
    List orders uploaded by the caller.

    Raises:
        HTTPException: 500 on storage failure
    """
    try:
        orders = await use_case.execute(login)
    except Exception:
        logger.exception("Listing orders failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list orders",
        )

    if not orders:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return [OrderResponse.from_entity(order) for order in orders]
