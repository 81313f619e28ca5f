"""Budget overview figures derived from already-aggregated spending."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Iterable, Mapping, Protocol


class SpendingSource(Protocol):
    """Abstraction over the aggregation layer that owns expense data."""

    def month_to_date_total(self) -> float:  # pragma: no cover - interface
        """Return the sum of expenses recorded so far this month."""
        ...

    def category_totals(self) -> Iterable[tuple[str, float]]:  # pragma: no cover - interface
        """Return (category, amount) pairs for the current month."""
        ...

    def stored_budget(self) -> float:  # pragma: no cover - interface
        """Return the monthly budget the user has saved."""
        ...

    def transaction_count(self) -> int:  # pragma: no cover - interface
        """Return how many expenses were recorded this month."""
        ...


@dataclass(slots=True)
class StaticSpending:
    """In-memory spending figures handed over by a caller."""

    budget: float
    total_spent: float
    transactions: int = 0
    categories: Mapping[str, float] = field(default_factory=dict)

    def month_to_date_total(self) -> float:
        return self.total_spent

    def category_totals(self) -> Iterable[tuple[str, float]]:
        return list(self.categories.items())

    def stored_budget(self) -> float:
        return self.budget

    def transaction_count(self) -> int:
        return self.transactions


@dataclass(slots=True)
class CategoryShare:
    """Lightweight DTO for a category's slice of spending."""

    category: str
    amount: float
    percent: float


@dataclass(slots=True)
class BudgetOverview:
    budget: float
    total_spent: float
    budget_left: float
    percent_used: float
    transaction_count: int
    average_per_day: float
    categories: list[CategoryShare]

    def as_dict(self) -> dict:
        return asdict(self)


def category_breakdown(totals: Iterable[tuple[str, float]]) -> list[CategoryShare]:
    """Merge per-category totals and express each as a share of the whole.

    Largest categories come first; equal amounts are ordered by name.
    """

    merged: dict[str, float] = {}
    for category, amount in totals:
        merged[category] = merged.get(category, 0.0) + float(amount)

    grand_total = sum(merged.values())
    ordered = sorted(merged.items(), key=lambda item: (-item[1], item[0]))
    return [
        CategoryShare(
            category=category,
            amount=amount,
            percent=(amount / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category, amount in ordered
    ]


def budget_overview(source: SpendingSource, *, today: date) -> BudgetOverview:
    """Compose the month-to-date budget snapshot for display."""

    budget = float(source.stored_budget())
    total = float(source.month_to_date_total())
    count = int(source.transaction_count())

    return BudgetOverview(
        budget=budget,
        total_spent=total,
        budget_left=max(0.0, budget - total),
        percent_used=(total / budget * 100) if budget > 0 else 0.0,
        transaction_count=count,
        average_per_day=(total / today.day) if count > 0 else 0.0,
        categories=category_breakdown(source.category_totals()),
    )


__all__ = [
    "BudgetOverview",
    "CategoryShare",
    "SpendingSource",
    "StaticSpending",
    "budget_overview",
    "category_breakdown",
]
