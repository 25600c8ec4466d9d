"""Prometheus metrics for overdue rates, balances due, and rental backend health"""

from prometheus_client import Counter, Histogram

from cube_billing.domain.models import OverdueResult

# Evaluation metrics
overdue_evaluation_counter = Counter(
    "cube_billing_overdue_evaluations_total",
    "Total overdue evaluations performed",
    ["outcome"],  # overdue | current
)

balance_due_bucket_counter = Counter(
    "cube_billing_balance_due_bucket",
    "Balances due from completed cycles by bucket",
    ["bucket"],  # $0, $0-$100, $100-$500, $500+
)

reminders_planned_counter = Counter(
    "cube_billing_reminders_planned_total",
    "Payment reminders planned",
    ["reminder_type"],
)

# Rental backend metrics
rental_store_failures_counter = Counter(
    "rental_store_failures_total",
    "Failed rental backend calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_overdue_evaluation(result: OverdueResult) -> None:
    """Record evaluation outcome and bucket the balance due"""
    outcome = "overdue" if result.should_trigger_overdue else "current"
    overdue_evaluation_counter.labels(outcome=outcome).inc()

    balance = result.balance_due_cents
    if balance == 0:
        bucket = "$0"
    elif balance <= 10_000:
        bucket = "$0-$100"
    elif balance <= 50_000:
        bucket = "$100-$500"
    else:
        bucket = "$500+"

    balance_due_bucket_counter.labels(bucket=bucket).inc()
