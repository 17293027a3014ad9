"""
Accrual system HTTP client.

Asks the external accrual system for the verdict on one order:
GET {base}/api/orders/{number}.
"""

import asyncio
import time
from decimal import Decimal
from typing import Literal, Optional

import httpx
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from comptable.domain.exceptions import AccrualRateLimitedError, AccrualServiceError
from comptable.domain.services.i_accrual_client import IAccrualClient
from comptable.domain.value_objects.accrual_outcome import AccrualOutcome
from comptable.infrastructure.accrual.circuit_breaker import CircuitBreaker
from comptable.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class AccrualResponse(BaseModel):
    """Body of a 200 answer from the accrual system."""

    order: str
    status: Literal["REGISTERED", "INVALID", "PROCESSING", "PROCESSED"]
    accrual: Optional[Decimal] = Field(default=None, ge=0)


class AccrualClient(IAccrualClient):
    """
    Query order verdicts from the accrual system.

    Response handling:
    - 200: REGISTERED/PROCESSING are pending, INVALID and PROCESSED are final
    - 204: order not registered there yet, pending
    - 429: AccrualRateLimitedError with Retry-After seconds
    - 5xx, timeouts, network errors, malformed body: AccrualServiceError
    - other 4xx: the accrual system rejects the number, INVALID

    Lifecycle:
    - httpx client is lazily created on first use under a lock
    - close() releases connections
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 1.0,
        circuit_breaker: Optional[CircuitBreaker] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize accrual client.

        Args:
            base_url: Accrual system base URL
            timeout: Per-request timeout in seconds
            circuit_breaker: Optional breaker wrapped around each request
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.circuit_breaker = circuit_breaker
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """
        Ensure HTTP client is initialized.

        Returns:
            Initialized AsyncClient instance
        """
        if self._client is None:
            async with self._lock:
                # Double-check pattern
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        base_url=self.base_url,
                        timeout=self.timeout,
                        transport=self._transport,
                        limits=httpx.Limits(
                            max_connections=10,
                            max_keepalive_connections=5,
                        ),
                    )
        return self._client

    async def query(self, order_number: str) -> AccrualOutcome:
        """
        Fetch accrual verdict for an order.

        Args:
            order_number: Order number to look up

        Returns:
            AccrualOutcome (pending, invalid or processed)

        Raises:
            AccrualRateLimitedError: If accrual system throttles us
            AccrualServiceError: On transport errors, bad payload or any
                non-order-specific error status
            CircuitBreakerError: If breaker is open
        """
        if self.circuit_breaker is not None:
            return await self.circuit_breaker.call(self._fetch, order_number)
        return await self._fetch(order_number)

    async def _fetch(self, order_number: str) -> AccrualOutcome:
        client = await self._ensure_client()
        start_time = time.time()

        try:
            response = await client.get(f"/api/orders/{order_number}")
        except httpx.TimeoutException as e:
            metrics.accrual_requests_total.labels(result="timeout").inc()
            raise AccrualServiceError(
                f"Accrual request for order {order_number} timed out: {e}"
            )
        except httpx.RequestError as e:
            metrics.accrual_requests_total.labels(result="network_error").inc()
            raise AccrualServiceError(
                f"Network error querying accrual for order {order_number}: {e}"
            )
        finally:
            metrics.accrual_request_duration_seconds.observe(time.time() - start_time)

        metrics.accrual_requests_total.labels(result=str(response.status_code)).inc()
        return self._to_outcome(order_number, response)

    def _to_outcome(
        self, order_number: str, response: httpx.Response
    ) -> AccrualOutcome:
        """Map an HTTP answer to an outcome or raise."""
        status_code = response.status_code

        if status_code == 200:
            try:
                body = AccrualResponse.model_validate(response.json())
            except (ValueError, PydanticValidationError) as e:
                raise AccrualServiceError(
                    f"Malformed accrual response for order {order_number}: {e}",
                    status_code=status_code,
                )

            if body.order != order_number:
                raise AccrualServiceError(
                    f"Accrual response is for order {body.order}, "
                    f"expected {order_number}",
                    status_code=status_code,
                )

            if body.status == "PROCESSED":
                return AccrualOutcome.processed(body.accrual or Decimal("0"))
            if body.status == "INVALID":
                return AccrualOutcome.invalid()
            return AccrualOutcome.pending()

        if status_code == 204:
            return AccrualOutcome.pending()

        if status_code == 429:
            raise AccrualRateLimitedError(
                retry_after=_parse_retry_after(response.headers.get("Retry-After"))
            )

        # 422 is the only answer scoped to the order itself. Other 4xx
        # (401, 403, 404, 408, ...) point at us or the link, not the number.
        if status_code == 422:
            logger.warning(
                f"Accrual system rejected order {order_number} with {status_code}",
                extra={"order_number": order_number, "status_code": status_code},
            )
            return AccrualOutcome.invalid()

        raise AccrualServiceError(
            f"Accrual system error {status_code} for order {order_number}",
            status_code=status_code,
        )

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Read Retry-After given in seconds; HTTP-date form is ignored."""
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None
