"""
Age gate.

The oldest eligible applicant is tied to the longest loan term: with a
60 month maximum period, nobody older than 75 may borrow, so no loan is
still being repaid past the age of 80.
"""
from datetime import date
from typing import Optional

from loan_engine.logging import get_logger
from loan_engine.scoring.constants import MAXIMUM_AGE, MINIMUM_AGE
from loan_engine.scoring.identity import InvalidIdentityCodeError, birth_date_from_code
from loan_engine.scoring.models import Rejected, RejectionReason

logger = get_logger(__name__)


def age_on(birth_date: date, today: date) -> int:
    """
    Whole years between `birth_date` and `today`.

    A year only counts once the birthday has been reached, so someone born
    on 29 February turns a year older on 1 March in non-leap years.
    """
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def check_age(identity_code: str, today: date) -> Optional[Rejected]:
    """
    Reject applicants outside [MINIMUM_AGE, MAXIMUM_AGE].

    A birth date that cannot be read from the code is rejected under the
    same category rather than defaulted.
    """
    try:
        birth_date = birth_date_from_code(identity_code)
    except InvalidIdentityCodeError as e:
        logger.warning("birth_date_unreadable", error=str(e))
        return Rejected(
            RejectionReason.AGE_NOT_ALLOWED,
            f"Loan cannot be approved due to age constraints. {e}",
        )

    age = age_on(birth_date, today)
    if age < MINIMUM_AGE or age > MAXIMUM_AGE:
        logger.debug("age_out_of_range", age=age, minimum=MINIMUM_AGE, maximum=MAXIMUM_AGE)
        return Rejected(
            RejectionReason.AGE_NOT_ALLOWED,
            f"Loan cannot be approved due to age constraints. Age: {age}",
        )

    return None
