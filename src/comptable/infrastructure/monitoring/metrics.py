"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "comptable_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "comptable_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "comptable_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Ledger Metrics
# ============================================================

orders_submitted_total = Counter(
    "comptable_orders_submitted_total",
    "Order uploads by result",
    ["result"],
)

withdrawals_total = Counter(
    "comptable_withdrawals_total",
    "Withdrawal attempts by result",
    ["result"],
)

order_outcomes_applied_total = Counter(
    "comptable_order_outcomes_applied_total",
    "Final order statuses written by reconciliation",
    ["status"],
)

# ============================================================
# Accrual System Metrics
# ============================================================

accrual_requests_total = Counter(
    "comptable_accrual_requests_total",
    "Total accrual system requests",
    ["result"],
)

accrual_request_duration_seconds = Histogram(
    "comptable_accrual_request_duration_seconds",
    "Accrual system request duration in seconds",
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

circuit_breaker_state = Gauge(
    "comptable_accrual_circuit_breaker_open",
    "1 if accrual circuit breaker is open, else 0",
)

# ============================================================
# Reconciliation Metrics
# ============================================================

reconciliation_ticks_total = Counter(
    "comptable_reconciliation_ticks_total",
    "Reconciliation ticks by result",
    ["result"],
)

reconciliation_errors_total = Counter(
    "comptable_reconciliation_errors_total",
    "Per-order reconciliation failures",
    ["error_type"],
)

pending_orders = Gauge(
    "comptable_pending_orders",
    "Orders awaiting a final accrual status",
    ["status"],
)
