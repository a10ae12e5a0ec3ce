"""Request bounds and identity code checks run before any scoring."""
from typing import Callable, Optional

from loan_engine.scoring.constants import (
    MAXIMUM_LOAN_AMOUNT,
    MAXIMUM_LOAN_PERIOD,
    MINIMUM_LOAN_AMOUNT,
    MINIMUM_LOAN_PERIOD,
)
from loan_engine.scoring.models import Rejected, RejectionReason

INVALID_IDENTITY_CODE_MESSAGE = "Invalid personal ID code!"
INVALID_LOAN_AMOUNT_MESSAGE = "Invalid loan amount!"
INVALID_LOAN_PERIOD_MESSAGE = "Invalid loan period!"


def validate_inputs(
    identity_code: str,
    loan_amount: int,
    loan_period: int,
    is_well_formed: Callable[[str], bool],
) -> Optional[Rejected]:
    """
    Check the request against the identity oracle and the loan bounds.

    Checks run identity, then amount, then period. The first failure is
    returned and the remaining checks are skipped.

    Args:
        identity_code: Applicant's personal ID code
        loan_amount: Requested amount in euros
        loan_period: Requested period in months
        is_well_formed: Oracle deciding whether the code is valid

    Returns:
        None when the request may proceed, otherwise the rejection
    """
    if not is_well_formed(identity_code):
        return Rejected(RejectionReason.INVALID_IDENTITY_CODE, INVALID_IDENTITY_CODE_MESSAGE)

    if not MINIMUM_LOAN_AMOUNT <= loan_amount <= MAXIMUM_LOAN_AMOUNT:
        return Rejected(RejectionReason.INVALID_LOAN_AMOUNT, INVALID_LOAN_AMOUNT_MESSAGE)

    if not MINIMUM_LOAN_PERIOD <= loan_period <= MAXIMUM_LOAN_PERIOD:
        return Rejected(RejectionReason.INVALID_LOAN_PERIOD, INVALID_LOAN_PERIOD_MESSAGE)

    return None
