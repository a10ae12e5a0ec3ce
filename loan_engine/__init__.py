"""
Loan decision engine: approval amount and period from a personal ID code.

Hosts call `loan_engine.logging.configure_logging()` once at startup;
until then structlog prints its default development output.
"""
from loan_engine.scoring.models import Approved, DecisionOutcome, Rejected, RejectionReason
from loan_engine.services.decision import DecisionEngine, evaluate

__all__ = [
    "Approved",
    "DecisionEngine",
    "DecisionOutcome",
    "Rejected",
    "RejectionReason",
    "evaluate",
]
