"""Prometheus metrics for the installment billing service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- installment_plans_created_total: Plans created
- installment_plans_closed_total: Plans cancelled, completed or deleted
- installment_financed_amount: Financed amount per new plan
- installment_payments_recorded_total: Payments recorded by method
- installment_payment_status_changes_total: Manual status transitions
- installment_reminders_generated_total: Reminders created by type

Technical Metrics (for Engineering/SRE):
- installment_notification_latency_seconds: Reminder delivery latency
- installment_notification_retry_total: Reminder delivery retries
- installment_reminders_sent_total: Reminder deliveries by outcome
- installment_exchange_rate_fetch_total: Exchange-rate refreshes by outcome
- installment_exchange_rate_latency_seconds: Exchange-rate API latency
- installment_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from decimal import Decimal
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

plans_created_total = Counter(
    "installment_plans_created_total",
    "Total number of installment plans created",
    ["interest"],  # interest_free, interest_bearing
)

plans_closed_total = Counter(
    "installment_plans_closed_total",
    "Total number of plans leaving the active state",
    ["outcome"],  # cancelled, completed, deleted
)

financed_amount = Histogram(
    "installment_financed_amount",
    "Financed amount (total minus down payment) per new plan",
    buckets=[1000, 5000, 10000, 25000, 50000, 100000, 250000, 500000],
)

payments_recorded_total = Counter(
    "installment_payments_recorded_total",
    "Total number of payments recorded as paid",
    ["method"],
)

payment_status_changes_total = Counter(
    "installment_payment_status_changes_total",
    "Manual payment status transitions",
    ["from_status", "to_status"],
)

reminders_generated_total = Counter(
    "installment_reminders_generated_total",
    "Reminders created by type",
    ["reminder_type"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

notification_latency = Histogram(
    "installment_notification_latency_seconds",
    "Reminder delivery latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

notification_retries = Counter(
    "installment_notification_retry_total",
    "Total number of reminder delivery retries",
)

reminders_sent_total = Counter(
    "installment_reminders_sent_total",
    "Reminder deliveries by outcome",
    ["outcome"],  # success, failure
)

exchange_rate_fetch_total = Counter(
    "installment_exchange_rate_fetch_total",
    "Exchange-rate refreshes by outcome",
    ["status", "error_type"],
)

exchange_rate_latency = Histogram(
    "installment_exchange_rate_latency_seconds",
    "Exchange-rate API latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

http_requests_total = Counter(
    "installment_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "installment_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_plan_created(financed: Decimal, interest_rate: Decimal) -> None:
    """Record a newly created plan."""
    interest = "interest_bearing" if interest_rate > 0 else "interest_free"
    plans_created_total.labels(interest=interest).inc()
    financed_amount.observe(float(financed))


def record_plan_closed(outcome: str) -> None:
    plans_closed_total.labels(outcome=outcome).inc()


def record_payment_recorded(method: str | None) -> None:
    payments_recorded_total.labels(method=method or "unspecified").inc()


def record_status_change(from_status: str, to_status: str) -> None:
    payment_status_changes_total.labels(
        from_status=from_status, to_status=to_status
    ).inc()


def record_reminder_generated(reminder_type: str) -> None:
    reminders_generated_total.labels(reminder_type=reminder_type).inc()


@contextmanager
def track_notification_latency() -> Generator[None, None, None]:
    """Context manager to track reminder delivery latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        notification_latency.observe(time.perf_counter() - start)


@contextmanager
def track_exchange_rate_latency() -> Generator[None, None, None]:
    """Context manager to track exchange-rate API latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        exchange_rate_latency.observe(time.perf_counter() - start)


def record_notification_retry() -> None:
    notification_retries.inc()


def record_notification_success() -> None:
    reminders_sent_total.labels(outcome="success").inc()


def record_notification_failure() -> None:
    """Record a failed delivery (after all retries)."""
    reminders_sent_total.labels(outcome="failure").inc()


def record_exchange_rate_success() -> None:
    exchange_rate_fetch_total.labels(status="success", error_type="").inc()


def record_exchange_rate_failure(error_type: str) -> None:
    exchange_rate_fetch_total.labels(status="failure", error_type=error_type).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
