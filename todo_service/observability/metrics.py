"""
Prometheus metric definitions

All metrics live here; middleware and handlers import what they need.
"""

from prometheus_client import Counter, Histogram

# ── Request metrics ──

REQUEST_TOTAL = Counter(
    "todo_request_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "todo_request_duration_ms",
    "HTTP request latency (ms)",
    ["method", "endpoint"],
    buckets=[5, 10, 25, 50, 100, 200, 500, 1000, 2000, 5000, 15000],
)

# ── Business metrics ──

TODO_CREATED_TOTAL = Counter(
    "todo_created_total",
    "Todos successfully created",
)

# ── Errors ──

ERROR_TOTAL = Counter(
    "todo_error_total",
    "Errors by type",
    ["error_type"],  # storage/timeout/unauthorized
)
