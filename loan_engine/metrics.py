"""
Prometheus metrics for the loan decision engine.

The engine exposes no endpoint of its own; whoever hosts it serves the
default registry (e.g. with `prometheus_client.generate_latest`).

1. Business Impact Metrics
   - Decision outcomes, rejection reasons, requested and approved amounts

2. Technical Metrics
   - Evaluation latency
"""
from prometheus_client import Counter, Histogram, Info

from loan_engine.config import settings
from loan_engine.scoring.models import DecisionOutcome

# =============================================================================
# SERVICE INFO
# =============================================================================

SERVICE_INFO = Info(
    "loan_engine_service",
    "Service information"
)
SERVICE_INFO.info({
    "version": "0.1.0",
    "service": settings.service_name,
})

# =============================================================================
# BUSINESS IMPACT METRICS
# =============================================================================

# Counter: Total decisions made by outcome
DECISION_TOTAL = Counter(
    "loan_decision_total",
    "Total loan decisions made",
    ["outcome"]  # approved, rejected
)

# Counter: Rejections by category and sub-reason
REJECTION_TOTAL = Counter(
    "loan_rejection_total",
    "Total rejected loan decisions",
    ["reason", "detail"]  # detail: debt, bad_credit_score, none
)

# Histogram: Requested amounts distribution
REQUESTED_AMOUNT = Histogram(
    "loan_requested_amount",
    "Distribution of requested loan amounts in euros (requests that passed validation)",
    buckets=[2000, 3000, 4000, 5000, 6000, 8000, 10000]
)

# Histogram: Approved amounts distribution
APPROVED_AMOUNT = Histogram(
    "loan_approved_amount",
    "Distribution of approved loan amounts in euros",
    buckets=[2000, 3000, 4000, 5000, 6000, 8000, 10000]
)

# =============================================================================
# TECHNICAL METRICS
# =============================================================================

DECISION_LATENCY = Histogram(
    "loan_decision_latency_seconds",
    "Time to evaluate a loan request",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def record_decision(outcome: DecisionOutcome, latency_seconds: float) -> None:
    """
    Record all metrics for a single loan decision.

    Args:
        outcome: The Approved or Rejected value returned to the caller
        latency_seconds: Time taken to make the decision
    """
    if not settings.metrics_enabled:
        return

    if outcome.approved:
        DECISION_TOTAL.labels(outcome="approved").inc()
        APPROVED_AMOUNT.observe(outcome.amount)
    else:
        DECISION_TOTAL.labels(outcome="rejected").inc()
        detail = (outcome.detail or "none").replace(" ", "_")
        REJECTION_TOTAL.labels(reason=outcome.reason.value, detail=detail).inc()

    DECISION_LATENCY.observe(latency_seconds)


def record_requested_amount(amount: int) -> None:
    """Record the requested amount for distribution tracking."""
    if settings.metrics_enabled:
        REQUESTED_AMOUNT.observe(amount)
