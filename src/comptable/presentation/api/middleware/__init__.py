"""API middleware."""

from comptable.presentation.api.middleware.error_handler import (
    comptable_exception_handler,
    request_validation_exception_handler,
)

__all__ = [
    "comptable_exception_handler",
    "request_validation_exception_handler",
]
