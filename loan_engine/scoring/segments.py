"""
Risk segmentation from the identity code.

This is a stand-in for a credit registry lookup: the last four digits of
the code are partitioned into four fixed ranges. A live integration would
replace `segment_for` behind the same `CreditRegistry` signature.

    0000-2499  DEBT          modifier 0 (automatic rejection)
    2500-4999  SEGMENT_LOW   modifier 100
    5000-7499  SEGMENT_MID   modifier 300
    7500-9999  SEGMENT_HIGH  modifier 1000
"""
from enum import Enum
from typing import Callable

from loan_engine.logging import get_logger
from loan_engine.scoring.constants import (
    SEGMENT_HIGH_CREDIT_MODIFIER,
    SEGMENT_LOW_CREDIT_MODIFIER,
    SEGMENT_MID_CREDIT_MODIFIER,
)
from loan_engine.scoring.identity import last_four_digits

logger = get_logger(__name__)


class RiskSegment(Enum):
    """Risk segment and the credit modifier it carries."""
    DEBT = ("debt", 0)
    SEGMENT_LOW = ("low", SEGMENT_LOW_CREDIT_MODIFIER)
    SEGMENT_MID = ("mid", SEGMENT_MID_CREDIT_MODIFIER)
    SEGMENT_HIGH = ("high", SEGMENT_HIGH_CREDIT_MODIFIER)

    def __init__(self, label: str, credit_modifier: int):
        self.label = label
        self.credit_modifier = credit_modifier

    @property
    def has_debt(self) -> bool:
        return self is RiskSegment.DEBT


# Inclusive lower bound of each range, highest first
SEGMENT_THRESHOLDS = [
    (7500, RiskSegment.SEGMENT_HIGH),
    (5000, RiskSegment.SEGMENT_MID),
    (2500, RiskSegment.SEGMENT_LOW),
    (0, RiskSegment.DEBT),
]

CreditRegistry = Callable[[str], RiskSegment]


def segment_for(identity_code: str) -> RiskSegment:
    """
    Map an identity code to its risk segment.

    Example:
        >>> segment_for("49002010965")
        <RiskSegment.DEBT: ('debt', 0)>
        >>> segment_for("50307172740").label
        'low'
    """
    suffix = last_four_digits(identity_code)

    for threshold, segment in SEGMENT_THRESHOLDS:
        if suffix >= threshold:
            logger.debug("segment_mapped", suffix_threshold=threshold, segment=segment.label)
            return segment

    # last_four_digits never yields a negative number
    return RiskSegment.DEBT
