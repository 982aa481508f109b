"""Prometheus metrics for the zkredit Gateway service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- zkredit_remittance_total: Remittances by outcome
- zkredit_remittance_volume_total: Gross remitted volume
- zkredit_loan_decision_total: Loan decisions by strategy and outcome
- zkredit_loan_amount_bucket: Approved loan amounts by bucket

Technical Metrics (for Engineering/SRE):
- zkredit_payment_latency_seconds: Ledger settlement latency
- zkredit_payment_failures_total: Settlement failures
- zkredit_proof_latency_seconds: Proof generation latency
- zkredit_proof_failures_total: Proof generation/verification failures
- zkredit_http_requests_total: HTTP requests by endpoint/status
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

remittance_total = Counter(
    "zkredit_remittance_total",
    "Total number of remittance attempts",
    ["outcome"],  # settled, rejected, failed, unrecorded
)

remittance_volume = Counter(
    "zkredit_remittance_volume_total",
    "Gross volume of settled remittances in settlement currency",
)

loan_decision_total = Counter(
    "zkredit_loan_decision_total",
    "Total number of loan decisions",
    ["strategy", "outcome"],
)

loan_amount_bucket = Counter(
    "zkredit_loan_amount_bucket",
    "Approved loan amounts by bucket",
    ["bucket"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

payment_latency = Histogram(
    "zkredit_payment_latency_seconds",
    "Ledger settlement latency in seconds",
    ["mode"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

payment_failures = Counter(
    "zkredit_payment_failures_total",
    "Total number of settlement failures",
    ["reason"],  # status, timeout, gateway
)

proof_latency = Histogram(
    "zkredit_proof_latency_seconds",
    "Proof generation latency in seconds",
    ["proof_type"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

proof_failures = Counter(
    "zkredit_proof_failures_total",
    "Total number of proof failures",
    ["proof_type", "reason"],  # insufficient, timeout, error, unverified
)

http_requests_total = Counter(
    "zkredit_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "zkredit_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_remittance(outcome: str, gross_amount: Decimal | None = None) -> None:
    """Record a remittance attempt."""
    remittance_total.labels(outcome=outcome).inc()
    if outcome == "settled" and gross_amount is not None:
        remittance_volume.inc(float(gross_amount))


def record_loan_decision(strategy: str, approved: bool, amount: Decimal) -> None:
    """Record a loan decision in metrics."""
    outcome = "approved" if approved else "declined"
    loan_decision_total.labels(strategy=strategy, outcome=outcome).inc()
    if approved:
        loan_amount_bucket.labels(bucket=_get_loan_amount_bucket(amount)).inc()


def _get_loan_amount_bucket(amount: Decimal) -> str:
    """Map an approved amount to a bucket label."""
    if amount <= 100:
        return "0-100"
    elif amount <= 200:
        return "100-200"
    elif amount <= 300:
        return "200-300"
    elif amount <= 500:
        return "300-500"
    else:
        return "500+"


@contextmanager
def track_payment_latency(mode: str) -> Generator[None, None, None]:
    """Context manager to track settlement latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        payment_latency.labels(mode=mode).observe(duration)


@contextmanager
def track_proof_latency(proof_type: str) -> Generator[None, None, None]:
    """Context manager to track proof generation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        proof_latency.labels(proof_type=proof_type).observe(duration)


def record_payment_failure(reason: str) -> None:
    """Record a settlement failure."""
    payment_failures.labels(reason=reason).inc()


def record_proof_failure(proof_type: str, reason: str) -> None:
    """Record a proof failure."""
    proof_failures.labels(proof_type=proof_type, reason=reason).inc()


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
