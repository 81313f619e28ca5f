"""Typed failures raised by the payoff and goal calculators."""

from __future__ import annotations


class PlannerError(ValueError):
    """Base class for calculator input failures.

    ``subject`` names the debt or goal the failure is attributable to, when
    there is one.
    """

    kind = "planner_error"

    def __init__(self, message: str, *, subject: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.subject = subject

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message, "subject": self.subject}


class EmptyInputError(PlannerError):
    """No debts were supplied to the allocator."""

    kind = "empty_input"


class InvalidPaymentError(PlannerError):
    """Payment is not positive or never retires the balance."""

    kind = "invalid_payment"


class InvalidDebtError(PlannerError):
    """Debt balance or APR is negative."""

    kind = "invalid_debt"


class InvalidGoalError(PlannerError):
    """Savings goal cannot be projected (target amount must be positive)."""

    kind = "invalid_goal"


__all__ = [
    "PlannerError",
    "EmptyInputError",
    "InvalidDebtError",
    "InvalidPaymentError",
    "InvalidGoalError",
]
