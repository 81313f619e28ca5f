"""Savings goal projections."""

from __future__ import annotations

import calendar
from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable

from ..errors import InvalidGoalError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SavingsGoal:
    """A target amount to accumulate by a given date."""

    title: str
    target_amount: float
    current_amount: float
    target_date: date


@dataclass(frozen=True, slots=True)
class GoalProjection:
    """Derived monthly figures for a savings goal."""

    title: str
    months_remaining: int
    remaining_amount: float
    monthly_savings_needed: float
    monthly_spending_ceiling: float
    progress_percent: float

    def as_dict(self) -> dict:
        return asdict(self)


def months_between(start: date, end: date) -> int:
    """Return the number of whole calendar months from ``start`` to ``end``.

    A month only counts once its day-of-month is reached. A short following
    month is the one exception: ending on its last day completes it, so
    Jan 31 to Feb 28 is one month while Jan 31 to Apr 30 is only two.
    Negative when ``end`` precedes ``start``.
    """

    if end < start:
        return -months_between(end, start)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    end_is_month_end = end.day == calendar.monthrange(end.year, end.month)[1]
    if end.day < start.day and not (end_is_month_end and months == 1):
        months -= 1
    return months


def project_goal(
    target: float,
    current: float,
    target_date: date,
    today: date,
    monthly_budget: float,
    *,
    title: str = "",
) -> GoalProjection:
    """Size the monthly contribution for a goal and the spending left over.

    Once the target date is reached or passed the whole remainder is due in
    the current month. The spending ceiling is clamped at zero and progress
    at 100 percent.
    """

    target = float(target)
    current = float(current)
    if target <= 0:
        raise InvalidGoalError(
            f"Target amount for {title or 'goal'!r} must be greater than zero.",
            subject=title or None,
        )

    months_remaining = max(0, months_between(today, target_date))
    remaining = target - current
    if months_remaining <= 0:
        savings_needed = remaining
    else:
        savings_needed = remaining / months_remaining

    projection = GoalProjection(
        title=title,
        months_remaining=months_remaining,
        remaining_amount=remaining,
        monthly_savings_needed=savings_needed,
        monthly_spending_ceiling=max(0.0, float(monthly_budget) - savings_needed),
        progress_percent=min(100.0, current / target * 100),
    )
    logger.debug(
        "Goal projected",
        extra={"goal": title, "months_remaining": months_remaining},
    )
    return projection


def project_savings_goal(goal: SavingsGoal, *, today: date, monthly_budget: float) -> GoalProjection:
    return project_goal(
        goal.target_amount,
        goal.current_amount,
        goal.target_date,
        today,
        monthly_budget,
        title=goal.title,
    )


def project_goals(
    goals: Iterable[SavingsGoal], *, today: date, monthly_budget: float
) -> list[GoalProjection]:
    """Project every goal against the same monthly budget, preserving order."""

    return [
        project_savings_goal(goal, today=today, monthly_budget=monthly_budget) for goal in goals
    ]


__all__ = [
    "GoalProjection",
    "SavingsGoal",
    "months_between",
    "project_goal",
    "project_goals",
    "project_savings_goal",
]
