"""
Accrual system exceptions.

Never surfaced to HTTP callers; the reconciliation poller catches them
and retries the affected orders on a later tick.
"""

from typing import Optional

from comptable.domain.exceptions.base import ComptableException


class AccrualServiceError(ComptableException):
    """Raised when accrual system is unreachable or answers garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, code="ACCRUAL_SERVICE_ERROR")


class AccrualRateLimitedError(ComptableException):
    """Raised when accrual system answers 429 Too Many Requests."""

    def __init__(self, retry_after: Optional[float] = None):
        self.retry_after = retry_after
        super().__init__(
            f"Accrual system rate limit hit (retry after {retry_after}s)",
            code="ACCRUAL_RATE_LIMITED",
        )
