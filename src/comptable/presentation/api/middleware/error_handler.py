"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from comptable.domain.exceptions import ComptableException
from comptable.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

STATUS_CODE_MAP = {
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "INVALID_ORDER_NUMBER": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "ORDER_OWNED_BY_OTHER_USER": status.HTTP_409_CONFLICT,
    "INSUFFICIENT_FUNDS": status.HTTP_402_PAYMENT_REQUIRED,
}


async def comptable_exception_handler(
    request: Request, exc: ComptableException
) -> JSONResponse:
    """
    Handle Comptable domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500:
        logger.error(f"Unmapped domain error {exc.code}: {exc.message}")
        message = "Internal server error"
    else:
        message = exc.message

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": message,
        },
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed request bodies as 400.

    422 is reserved for order numbers failing the Luhn check.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "MALFORMED_REQUEST",
            "message": "Request body is malformed",
            "details": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )
