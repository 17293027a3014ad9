"""
Background accrual reconciliation loop.
"""

import asyncio
import time
from typing import Optional

from comptable.application.use_cases.reconcile_accruals import (
    ReconcileAccruals,
    ReconciliationReport,
)
from comptable.domain.exceptions import AccrualRateLimitedError
from comptable.infrastructure.accrual.circuit_breaker import CircuitBreakerError
from comptable.infrastructure.monitoring import get_logger, log_performance, metrics

logger = get_logger(__name__)


class AccrualPoller:
    """
    Periodically runs ReconcileAccruals until stopped.

    Design:
    - One pass per interval; a pass is never run concurrently with itself
    - Rate limiting from the accrual system stretches the next wait to
      its Retry-After (or rate_limit_pause when absent)
    - An open circuit skips the pass
    - Any other error is logged and the loop carries on
    - stop() wakes the loop immediately and cancels an in-flight pass
    """

    def __init__(
        self,
        reconcile: ReconcileAccruals,
        interval: float = 2.0,
        rate_limit_pause: float = 60.0,
    ):
        """
        Initialize poller.

        Args:
            reconcile: Use case executed once per tick
            interval: Seconds between ticks
            rate_limit_pause: Pause after 429 without Retry-After
        """
        self.reconcile = reconcile
        self.interval = interval
        self.rate_limit_pause = rate_limit_pause
        self._task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start background loop (no-op if already running)."""
        if self.is_running:
            return

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name="accrual-poller")
        logger.info(f"Accrual poller started (interval: {self.interval}s)")

    async def stop(self) -> None:
        """Stop background loop and wait for it to exit."""
        if self._task is None:
            return

        self._stop_event.set()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Accrual poller stopped")

    async def run_once(self) -> float:
        """
        Run a single tick.

        Returns:
            Seconds to wait before the next tick
        """
        start_time = time.time()
        try:
            report = await self.reconcile.execute()
        except AccrualRateLimitedError as e:
            pause = self.rate_limit_pause
            if e.retry_after is not None:
                pause = e.retry_after
            logger.warning(f"Accrual system rate limited us, pausing {pause}s")
            metrics.reconciliation_ticks_total.labels(result="rate_limited").inc()
            return max(self.interval, pause)
        except CircuitBreakerError as e:
            logger.warning(f"Skipping reconciliation tick: {e}")
            metrics.reconciliation_ticks_total.labels(result="circuit_open").inc()
            return self.interval
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Reconciliation tick failed")
            metrics.reconciliation_ticks_total.labels(result="error").inc()
            return self.interval

        metrics.reconciliation_ticks_total.labels(result="ok").inc()
        self._log_report(report, start_time)
        return self.interval

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            delay = await self.run_once()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass

    def _log_report(self, report: ReconciliationReport, start_time: float) -> None:
        if report.total == 0:
            return
        if report.failed:
            logger.warning(
                f"{report.failed} order(s) will be retried next tick",
                extra={"failed_orders": report.failed_orders},
            )
        log_performance(logger, "Reconciliation tick", start_time)
