"""Decision service for loan approvals."""
import time
from datetime import date
from typing import Callable, Optional

from loan_engine import metrics
from loan_engine.logging import (
    TimedOperation,
    clear_decision_context,
    generate_decision_id,
    get_logger,
    log_decision,
    set_decision_context,
)
from loan_engine.schemas import DecisionRequest
from loan_engine.scoring.age import check_age
from loan_engine.scoring.identity import (
    InvalidIdentityCodeError,
    is_valid_identity_code,
    mask_identity_code,
)
from loan_engine.scoring.models import (
    BAD_CREDIT_SCORE,
    DEBT,
    Approved,
    DecisionOutcome,
    Rejected,
    RejectionReason,
)
from loan_engine.scoring.search import find_approvable_loan, passes_credit_score
from loan_engine.scoring.segments import CreditRegistry, segment_for
from loan_engine.scoring.validation import INVALID_IDENTITY_CODE_MESSAGE, validate_inputs

logger = get_logger(__name__)

DEBT_MESSAGE = "No valid loan found! Reason: debt"
BAD_CREDIT_SCORE_MESSAGE = "Not approved due to bad credit score!"


class DecisionEngine:
    """
    Computes loan decisions.

    This engine runs, in order:
    1. Input validation (identity code oracle, amount and period bounds)
    2. The age gate
    3. Risk segmentation through the credit registry
    4. The approval search for an amount and period
    5. The credit score gate

    Any stage may end the evaluation with a Rejected outcome. The engine
    keeps no per-call state, so one instance can serve concurrent callers.

    The engine does not configure logging. The host process calls
    `loan_engine.logging.configure_logging()` once at startup so that
    output is JSON and `settings.log_level` applies.
    """

    def __init__(
        self,
        is_well_formed: Optional[Callable[[str], bool]] = None,
        clock: Optional[Callable[[], date]] = None,
        registry: Optional[CreditRegistry] = None,
    ):
        """
        Initialize the decision engine.

        Args:
            is_well_formed: Identity code oracle (defaults to the Estonian
                personal code checksum validator)
            clock: Source of the current date (defaults to date.today)
            registry: Maps an identity code to a risk segment (defaults to
                the mock suffix-range registry)
        """
        self.is_well_formed = is_well_formed or is_valid_identity_code
        self.clock = clock or date.today
        self.registry = registry or segment_for

    def evaluate(self, identity_code: str, loan_amount: int, loan_period: int) -> DecisionOutcome:
        """
        Decide on a loan request.

        Args:
            identity_code: Applicant's personal ID code
            loan_amount: Requested amount in euros
            loan_period: Requested period in months

        Returns:
            Approved with the maximum amount and its period, or Rejected
            with the reason. Never raises for bad input.
        """
        set_decision_context(generate_decision_id())
        applicant = mask_identity_code(identity_code)
        start_time = time.perf_counter()

        try:
            logger.info(
                "decision_requested",
                applicant=applicant,
                loan_amount=loan_amount,
                loan_period=loan_period,
            )
            with TimedOperation("decision", logger, applicant=applicant) as timer:
                outcome = self._decide(identity_code, loan_amount, loan_period)
                timer.add_fields(outcome="approved" if outcome.approved else "rejected")

            if outcome.approved:
                log_decision(
                    logger,
                    applicant=applicant,
                    approved=True,
                    loan_amount=outcome.amount,
                    loan_period=outcome.period,
                    reason=None,
                )
            else:
                log_decision(
                    logger,
                    applicant=applicant,
                    approved=False,
                    loan_amount=None,
                    loan_period=None,
                    reason=outcome.reason.value,
                    detail=outcome.detail,
                )

            metrics.record_decision(outcome, time.perf_counter() - start_time)
            return outcome
        finally:
            clear_decision_context()

    def evaluate_request(self, request: DecisionRequest) -> DecisionOutcome:
        """Decide on a request that was already parsed into a DecisionRequest."""
        return self.evaluate(request.identity_code, request.loan_amount, request.loan_period)

    def _decide(self, identity_code: str, loan_amount: int, loan_period: int) -> DecisionOutcome:
        rejection = validate_inputs(identity_code, loan_amount, loan_period, self.is_well_formed)
        if rejection is not None:
            return rejection

        metrics.record_requested_amount(loan_amount)

        rejection = check_age(identity_code, self.clock())
        if rejection is not None:
            return rejection

        try:
            segment = self.registry(identity_code)
        except InvalidIdentityCodeError as e:
            logger.warning("segment_lookup_failed", error=str(e))
            return Rejected(RejectionReason.INVALID_IDENTITY_CODE, INVALID_IDENTITY_CODE_MESSAGE)

        if segment.has_debt:
            return Rejected(RejectionReason.NO_VALID_LOAN, DEBT_MESSAGE, DEBT)

        credit_modifier = segment.credit_modifier
        offer = find_approvable_loan(credit_modifier, loan_period)

        # Scored against the requested amount, not the offer
        if not passes_credit_score(credit_modifier, loan_amount, offer.period):
            return Rejected(RejectionReason.NO_VALID_LOAN, BAD_CREDIT_SCORE_MESSAGE, BAD_CREDIT_SCORE)

        return Approved(amount=offer.amount, period=offer.period)


_default_engine = DecisionEngine()


def evaluate(identity_code: str, loan_amount: int, loan_period: int) -> DecisionOutcome:
    """Decide on a loan request with the default collaborators."""
    return _default_engine.evaluate(identity_code, loan_amount, loan_period)
