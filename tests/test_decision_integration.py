"""
Decision Integration Tests for the loan decision engine.

These tests run full evaluations through DecisionEngine with a fixed clock.
Most inject an oracle that accepts every code so that identity codes can
be written with any suffix; the default checksum oracle is covered
separately.
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest
from prometheus_client import REGISTRY
from structlog.testing import capture_logs

from loan_engine import evaluate
from loan_engine.schemas import DecisionRequest
from loan_engine.scoring.constants import (
    MAXIMUM_LOAN_AMOUNT,
    MAXIMUM_LOAN_PERIOD,
    MINIMUM_LOAN_AMOUNT,
)
from loan_engine.scoring.models import Approved, Rejected, RejectionReason
from loan_engine.scoring.segments import RiskSegment
from loan_engine.services.decision import DecisionEngine

TODAY = date(2026, 10, 18)

# Born 1990-02-01; last four digits pick the segment
DEBT_CODE = "49002012499"
LOW_CODE = "49002012500"
MID_CODE = "49002015000"
HIGH_CODE = "49002017500"


def accept_all(code: str) -> bool:
    return True


@pytest.fixture
def engine():
    """Engine with a permissive oracle and a fixed date."""
    return DecisionEngine(is_well_formed=accept_all, clock=lambda: TODAY)


# =============================================================================
# INPUT VALIDATION
# =============================================================================

class TestInputValidation:
    """Bounds checks, first failure wins."""

    def setup_method(self):
        self.engine = DecisionEngine(clock=lambda: TODAY)

    def test_invalid_identity_code(self):
        outcome = self.engine.evaluate("49002010966", 4000, 12)
        assert outcome == Rejected(RejectionReason.INVALID_IDENTITY_CODE, "Invalid personal ID code!")

    @pytest.mark.parametrize("amount", [0, 1999, 10001, -5])
    def test_invalid_amount(self, amount):
        outcome = self.engine.evaluate("49002010965", amount, 12)
        assert outcome == Rejected(RejectionReason.INVALID_LOAN_AMOUNT, "Invalid loan amount!")

    @pytest.mark.parametrize("period", [0, 11, 61])
    def test_invalid_period(self, period):
        outcome = self.engine.evaluate("49002010965", 4000, period)
        assert outcome == Rejected(RejectionReason.INVALID_LOAN_PERIOD, "Invalid loan period!")

    def test_identity_checked_before_amount_and_period(self):
        outcome = self.engine.evaluate("123", 1, 1)
        assert outcome.reason is RejectionReason.INVALID_IDENTITY_CODE

    def test_amount_checked_before_period(self):
        outcome = self.engine.evaluate("49002010965", 1, 1)
        assert outcome.reason is RejectionReason.INVALID_LOAN_AMOUNT

    def test_validation_runs_before_age(self, engine):
        outcome = engine.evaluate("50810197500", 1, 12)  # 17 years old
        assert outcome.reason is RejectionReason.INVALID_LOAN_AMOUNT

    def test_bounds_are_inclusive(self, engine):
        assert engine.evaluate(HIGH_CODE, MINIMUM_LOAN_AMOUNT, 12).approved
        assert engine.evaluate(HIGH_CODE, MAXIMUM_LOAN_AMOUNT, MAXIMUM_LOAN_PERIOD).approved


# =============================================================================
# AGE GATE
# =============================================================================

class TestAgeGate:
    """Age boundaries through the full evaluation."""

    def test_exactly_eighteen_is_eligible(self, engine):
        assert engine.evaluate("50810187500", 4000, 12).approved

    def test_seventeen_is_rejected(self, engine):
        outcome = engine.evaluate("50810197500", 4000, 12)
        assert outcome.reason is RejectionReason.AGE_NOT_ALLOWED
        assert outcome.message.endswith("Age: 17")

    def test_exactly_seventy_five_is_eligible(self, engine):
        assert engine.evaluate("35110187500", 4000, 12).approved

    def test_seventy_six_is_rejected(self, engine):
        outcome = engine.evaluate("35010187500", 4000, 12)
        assert outcome.reason is RejectionReason.AGE_NOT_ALLOWED
        assert outcome.message.endswith("Age: 76")

    def test_impossible_birth_date_is_rejected_not_raised(self, engine):
        outcome = engine.evaluate("49013017500", 4000, 12)
        assert outcome.reason is RejectionReason.AGE_NOT_ALLOWED

    def test_age_uses_injected_clock(self):
        later = DecisionEngine(is_well_formed=accept_all, clock=lambda: date(2026, 10, 19))
        assert later.evaluate("50810197500", 4000, 12).approved


# =============================================================================
# SEGMENTS
# =============================================================================

class TestDebt:
    """Debt segment always ends in rejection."""

    @pytest.mark.parametrize("suffix", ["0000", "0965", "1234", "2499"])
    @pytest.mark.parametrize("amount,period", [(2000, 12), (10000, 60), (5000, 36)])
    def test_debt_always_rejected(self, engine, suffix, amount, period):
        outcome = engine.evaluate("4900201" + suffix, amount, period)
        assert outcome == Rejected(
            RejectionReason.NO_VALID_LOAN, "No valid loan found! Reason: debt", "debt"
        )

    def test_custom_registry_reporting_debt(self):
        engine = DecisionEngine(
            is_well_formed=accept_all,
            clock=lambda: TODAY,
            registry=lambda code: RiskSegment.DEBT,
        )
        assert engine.evaluate(HIGH_CODE, 2000, 12).detail == "debt"

    def test_custom_registry_is_used(self):
        engine = DecisionEngine(
            is_well_formed=accept_all,
            clock=lambda: TODAY,
            registry=lambda code: RiskSegment.SEGMENT_HIGH,
        )
        assert engine.evaluate(DEBT_CODE, 2000, 12) == Approved(amount=10000, period=12)

    def test_non_numeric_suffix_is_rejected_not_raised(self, engine):
        outcome = engine.evaluate("4900201x500", 2000, 12)
        assert outcome.reason is RejectionReason.INVALID_IDENTITY_CODE

    @pytest.mark.parametrize("code", ["4900201²²²²", "4900201٧٥٠٠"])
    def test_unicode_digit_suffix_is_rejected_not_raised(self, engine, code):
        outcome = engine.evaluate(code, 4000, 12)
        assert outcome == Rejected(RejectionReason.INVALID_IDENTITY_CODE, "Invalid personal ID code!")


# =============================================================================
# APPROVAL SEARCH AND CREDIT SCORE
# =============================================================================

class TestDecisionOutcomes:
    """Worked examples and boundaries."""

    def test_low_segment_bad_credit_score(self, engine):
        # Search reaches 2000 at period 20, but 100 / 4000 * 20 = 0.5
        outcome = engine.evaluate(LOW_CODE, 4000, 12)
        assert outcome == Rejected(
            RejectionReason.NO_VALID_LOAN,
            "Not approved due to bad credit score!",
            "bad credit score",
        )

    def test_mid_segment_approved_at_requested_period(self, engine):
        assert engine.evaluate(MID_CODE, 2000, 12) == Approved(amount=3600, period=12)

    def test_credit_score_exactly_one_is_approved(self, engine):
        assert engine.evaluate(LOW_CODE, 2000, 12) == Approved(amount=2000, period=20)

    def test_credit_score_just_below_one_is_rejected(self, engine):
        outcome = engine.evaluate(LOW_CODE, 2001, 12)
        assert outcome.detail == "bad credit score"
        assert not hasattr(outcome, "amount")

    def test_high_segment_capped_at_maximum_amount(self, engine):
        assert engine.evaluate(HIGH_CODE, 10000, 60) == Approved(amount=10000, period=60)

    def test_offer_can_exceed_request(self, engine):
        # The maximum approvable amount is offered, not the amount asked for
        assert engine.evaluate(MID_CODE, 2000, 24) == Approved(amount=7200, period=24)

    @pytest.mark.parametrize("code", [LOW_CODE, MID_CODE, HIGH_CODE])
    @pytest.mark.parametrize("amount", [2000, 3500, 6000, 10000])
    @pytest.mark.parametrize("period", [12, 25, 48, 60])
    def test_ceiling_invariant(self, engine, code, amount, period):
        outcome = engine.evaluate(code, amount, period)
        if outcome.approved:
            assert MINIMUM_LOAN_AMOUNT <= outcome.amount <= MAXIMUM_LOAN_AMOUNT
            assert period <= outcome.period <= MAXIMUM_LOAN_PERIOD
        else:
            assert outcome.reason is RejectionReason.NO_VALID_LOAN

    def test_deterministic(self, engine):
        first = engine.evaluate(MID_CODE, 5000, 18)
        second = engine.evaluate(MID_CODE, 5000, 18)
        assert first == second

    def test_concurrent_evaluations_do_not_interfere(self, engine):
        requests = [(LOW_CODE, 4000, 12), (MID_CODE, 2000, 12), (HIGH_CODE, 10000, 60)] * 50
        expected = [engine.evaluate(*r) for r in requests]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda r: engine.evaluate(*r), requests))

        assert results == expected


# =============================================================================
# ENTRY POINTS AND LOGGING
# =============================================================================

class TestEntryPoints:
    """Module-level evaluate and schema-based requests."""

    def test_module_level_evaluate_uses_checksum_oracle(self):
        # Valid checksum, suffix 0965 is in the debt range
        outcome = evaluate("49002010965", 4000, 12)
        assert outcome.detail == "debt"

    def test_module_level_evaluate_rejects_bad_checksum(self):
        assert evaluate("49002010966", 4000, 12).reason is RejectionReason.INVALID_IDENTITY_CODE

    def test_valid_code_end_to_end(self):
        engine = DecisionEngine(clock=lambda: TODAY)
        # 49002017508 carries a valid check digit and a high segment suffix
        assert engine.evaluate("49002017508", 2000, 12) == Approved(amount=10000, period=12)

    def test_evaluate_request(self, engine):
        request = DecisionRequest(identity_code=MID_CODE, loan_amount=2000, loan_period=12)
        assert engine.evaluate_request(request) == Approved(amount=3600, period=12)


class TestDecisionLogging:
    """Structured log events emitted per evaluation."""

    def test_approved_events(self, engine):
        with capture_logs() as logs:
            engine.evaluate(MID_CODE, 2000, 12)

        events = [entry["event"] for entry in logs]
        assert "decision_requested" in events
        completed = next(entry for entry in logs if entry["event"] == "decision_completed")
        assert completed["outcome"] == "approved"
        assert completed["duration_ms"] >= 0
        approved = next(entry for entry in logs if entry["event"] == "decision_approved")
        assert approved["loan_amount"] == 3600
        assert approved["loan_period"] == 12
        assert approved["outcome"] == "approved"

    def test_rejected_event_carries_reason(self, engine):
        with capture_logs() as logs:
            engine.evaluate(DEBT_CODE, 2000, 12)

        rejected = next(entry for entry in logs if entry["event"] == "decision_rejected")
        assert rejected["reason"] == "no_valid_loan"
        assert rejected["detail"] == "debt"
        completed = next(entry for entry in logs if entry["event"] == "decision_completed")
        assert completed["outcome"] == "rejected"

    def test_identity_code_is_masked(self, engine):
        with capture_logs() as logs:
            engine.evaluate(MID_CODE, 2000, 12)

        for entry in logs:
            assert MID_CODE not in map(str, entry.values())
        requested = next(entry for entry in logs if entry["event"] == "decision_requested")
        assert requested["applicant"] == "4900201****"


class TestDecisionMetrics:
    """Metrics recorded per evaluation."""

    def _requested_count(self) -> float:
        return REGISTRY.get_sample_value("loan_requested_amount_count") or 0.0

    @pytest.mark.parametrize("amount", [-5, 1999, 10001])
    def test_out_of_bounds_amount_not_recorded(self, engine, amount):
        before = self._requested_count()
        engine.evaluate(MID_CODE, amount, 12)
        assert self._requested_count() == before

    def test_invalid_identity_code_not_recorded(self):
        engine = DecisionEngine(clock=lambda: TODAY)
        before = self._requested_count()
        engine.evaluate("49002010966", 4000, 12)
        assert self._requested_count() == before

    def test_valid_request_recorded_even_when_rejected_later(self, engine):
        before = self._requested_count()
        engine.evaluate(DEBT_CODE, 4000, 12)
        assert self._requested_count() == before + 1
