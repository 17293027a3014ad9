"""
Monitoring and observability infrastructure.
"""

from comptable.infrastructure.monitoring import metrics
from comptable.infrastructure.monitoring.logger import (
    get_logger,
    log_performance,
    set_request_id,
    setup_logging,
)

__all__ = [
    "metrics",
    "get_logger",
    "set_request_id",
    "setup_logging",
    "log_performance",
]
