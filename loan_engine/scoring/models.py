"""Decision value types shared by the scoring stages and the decision service."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class RejectionReason(str, Enum):
    """Category of a rejected decision."""
    INVALID_IDENTITY_CODE = "invalid_identity_code"
    INVALID_LOAN_AMOUNT = "invalid_loan_amount"
    INVALID_LOAN_PERIOD = "invalid_loan_period"
    AGE_NOT_ALLOWED = "age_not_allowed"
    NO_VALID_LOAN = "no_valid_loan"


# Sub-reasons for NO_VALID_LOAN
DEBT = "debt"
BAD_CREDIT_SCORE = "bad credit score"


@dataclass(frozen=True)
class LoanOffer:
    """Amount and period found by the approval search."""
    amount: int  # euros
    period: int  # months


@dataclass(frozen=True)
class Approved:
    """Loan can be granted up to `amount` over `period` months."""
    amount: int
    period: int

    @property
    def approved(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Loan cannot be granted; `message` is shown to the applicant."""
    reason: RejectionReason
    message: str
    detail: Optional[str] = None  # "debt" or "bad credit score" for NO_VALID_LOAN

    @property
    def approved(self) -> bool:
        return False


DecisionOutcome = Union[Approved, Rejected]
