"""Pydantic schemas for callers that marshal requests and decisions."""
from typing import Optional

from pydantic import BaseModel, Field

from loan_engine.scoring.models import DecisionOutcome


class DecisionRequest(BaseModel):
    """A loan decision request."""
    identity_code: str = Field(..., description="Applicant's personal ID code")
    loan_amount: int = Field(..., description="Requested loan amount in euros")
    loan_period: int = Field(..., description="Requested loan period in months")


class DecisionResponse(BaseModel):
    """
    Flat view of a decision.

    On approval `loan_amount` and `loan_period` are set and `error_message`
    is None; on rejection only `error_message` is set.
    """
    loan_amount: Optional[int] = None
    loan_period: Optional[int] = None
    error_message: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: DecisionOutcome) -> "DecisionResponse":
        """Build the response for an Approved or Rejected outcome."""
        if outcome.approved:
            return cls(loan_amount=outcome.amount, loan_period=outcome.period)
        return cls(error_message=outcome.message)
