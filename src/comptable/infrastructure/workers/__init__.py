"""Background workers."""

from comptable.infrastructure.workers.accrual_poller import AccrualPoller

__all__ = ["AccrualPoller"]
