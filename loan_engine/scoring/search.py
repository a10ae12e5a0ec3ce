"""
Approval search and credit score.

The engine offers the largest amount the applicant's segment supports,
`credit_modifier * period`, at the shortest period that reaches the
minimum loan amount. The period is advanced one month at a time from
the requested period and never beyond MAXIMUM_LOAN_PERIOD.
"""
from loan_engine.logging import get_logger
from loan_engine.scoring.constants import (
    MAXIMUM_LOAN_AMOUNT,
    MAXIMUM_LOAN_PERIOD,
    MINIMUM_LOAN_AMOUNT,
)
from loan_engine.scoring.models import LoanOffer

logger = get_logger(__name__)


def highest_valid_amount(credit_modifier: int, loan_period: int) -> int:
    """Largest loan the modifier supports over `loan_period` months, uncapped."""
    return credit_modifier * loan_period


def find_approvable_loan(credit_modifier: int, requested_period: int) -> LoanOffer:
    """
    Find the shortest period at or after `requested_period` that reaches
    MINIMUM_LOAN_AMOUNT, and the capped amount at that period.

    If no period up to MAXIMUM_LOAN_PERIOD qualifies, the offer is made at
    MAXIMUM_LOAN_PERIOD anyway; the credit score gate decides whether it
    stands.

    Args:
        credit_modifier: Modifier of the applicant's segment (> 0)
        requested_period: Period asked for, in months

    Returns:
        LoanOffer with amount <= MAXIMUM_LOAN_AMOUNT and
        period <= MAXIMUM_LOAN_PERIOD
    """
    period = min(requested_period, MAXIMUM_LOAN_PERIOD)
    while (
        highest_valid_amount(credit_modifier, period) < MINIMUM_LOAN_AMOUNT
        and period < MAXIMUM_LOAN_PERIOD
    ):
        period += 1

    amount = min(highest_valid_amount(credit_modifier, period), MAXIMUM_LOAN_AMOUNT)

    if period != requested_period:
        logger.debug(
            "loan_period_adjusted",
            requested_period=requested_period,
            adjusted_period=period,
        )

    return LoanOffer(amount=amount, period=period)


def credit_score(credit_modifier: int, requested_amount: int, loan_period: int) -> float:
    """
    Viability ratio `credit_modifier / requested_amount * loan_period`.

    The product is formed before dividing so that a ratio of exactly 1 is
    not lost to floating point rounding.

    Example:
        >>> credit_score(300, 2000, 12)
        1.8
    """
    return credit_modifier * loan_period / requested_amount


def passes_credit_score(credit_modifier: int, requested_amount: int, loan_period: int) -> bool:
    """True when the score reaches 1."""
    return credit_score(credit_modifier, requested_amount, loan_period) >= 1
