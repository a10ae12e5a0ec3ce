"""Service layer for the loan decision engine."""
from loan_engine.services.decision import DecisionEngine, evaluate

__all__ = ["DecisionEngine", "evaluate"]
