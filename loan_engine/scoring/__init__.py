"""Loan scoring stages for credit decisions."""
from loan_engine.scoring.age import check_age
from loan_engine.scoring.identity import is_valid_identity_code
from loan_engine.scoring.models import Approved, DecisionOutcome, Rejected, RejectionReason
from loan_engine.scoring.search import credit_score, find_approvable_loan
from loan_engine.scoring.segments import RiskSegment, segment_for
from loan_engine.scoring.validation import validate_inputs

__all__ = [
    "Approved",
    "DecisionOutcome",
    "Rejected",
    "RejectionReason",
    "RiskSegment",
    "check_age",
    "credit_score",
    "find_approvable_loan",
    "is_valid_identity_code",
    "segment_for",
    "validate_inputs",
]
