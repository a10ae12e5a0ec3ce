"""
Structured logging configuration for the loan decision engine.

All logs are JSON-formatted with these standard fields:
- timestamp: ISO 8601 timestamp
- event: The log event name (first positional argument)
- decision_id: UUID tying together every line of one evaluation
- duration_ms: Operation duration in milliseconds
- outcome: Result of the evaluation (for decision events)

Identity codes are personal data and are only ever logged masked.
"""
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Optional

import structlog

from loan_engine.config import settings

# Context variable for evaluation-scoped data
decision_id_ctx: ContextVar[str] = ContextVar("decision_id", default="")


def add_context_vars(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that adds context variables to log entries."""
    decision_id = decision_id_ctx.get()

    if decision_id:
        event_dict["decision_id"] = decision_id

    return event_dict


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog with JSON output and context processors."""
    level = level or settings.log_level

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())
    logging.getLogger().setLevel(level.upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            add_context_vars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def set_decision_context(decision_id: str) -> None:
    """Set the evaluation context for logging."""
    decision_id_ctx.set(decision_id)


def clear_decision_context() -> None:
    """Clear the evaluation context after the decision is returned."""
    decision_id_ctx.set("")


def generate_decision_id() -> str:
    """Generate a unique decision ID."""
    return str(uuid.uuid4())


class TimedOperation:
    """Context manager for timing operations and logging duration."""

    def __init__(
        self,
        event: str,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
        **extra_fields: Any,
    ):
        self.event = event
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time: float = 0
        self.duration_ms: float = 0

    def add_fields(self, **fields: Any) -> None:
        """Attach fields known only after the operation ran to the completion event."""
        self.extra_fields.update(fields)

    def __enter__(self) -> "TimedOperation":
        self.start_time = time.perf_counter()
        self.logger.debug(f"{self.event}_started", **self.extra_fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is not None:
            self.logger.error(
                f"{self.event}_failed",
                duration_ms=round(self.duration_ms, 2),
                error=str(exc_val),
                **self.extra_fields,
            )
        else:
            self.logger.info(
                f"{self.event}_completed",
                duration_ms=round(self.duration_ms, 2),
                **self.extra_fields,
            )


def log_decision(
    logger: structlog.stdlib.BoundLogger,
    applicant: str,
    approved: bool,
    loan_amount: Optional[int],
    loan_period: Optional[int],
    reason: Optional[str],
    detail: Optional[str] = None,
) -> None:
    """Log a loan decision with standard fields."""
    outcome = "approved" if approved else "rejected"

    logger.info(
        f"decision_{outcome}",
        applicant=applicant,
        outcome=outcome,
        approved=approved,
        loan_amount=loan_amount,
        loan_period=loan_period,
        reason=reason,
        detail=detail,
    )
