"""Debt payoff planning using the avalanche method.

Every debt receives its minimum payment and the whole extra payment goes to
the debt with the highest APR. Each debt is then amortized on its own with
that payment held constant for its full term. Payments freed up when a debt
is retired are not rolled onto the next one, so reported totals are those of
independent per-debt plans rather than a rollover simulation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

from ..errors import EmptyInputError, InvalidDebtError, InvalidPaymentError
from ..logging_config import get_logger
from .amortization import amortize

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Debt:
    """Represents a liability input for payoff projections."""

    id: int | str
    name: str
    balance: float
    apr: float  # annual percentage, e.g. 18.0 for 18%
    minimum_payment: float


@dataclass(frozen=True, slots=True)
class PaymentPlanEntry:
    """Projected payoff of a single debt under the allocated payment."""

    debt_id: int | str
    debt_name: str
    apr: float
    monthly_payment: float
    months_to_payoff: int
    total_interest: float
    total_paid: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PlanSummary:
    """Aggregate figures reported alongside a plan."""

    total_balance: float
    total_minimum_payments: float
    total_interest: float
    average_months: float
    extra_payment: float
    total_monthly_payment: float

    def as_dict(self) -> dict:
        return asdict(self)


def avalanche_order(debts: Iterable[Debt]) -> list[Debt]:
    """Return debts sorted by APR, highest first.

    ``sorted`` is stable, so debts sharing an APR keep their input order.
    """

    return sorted(debts, key=lambda d: d.apr, reverse=True)


def build_plan(debts: Sequence[Debt], extra_payment: float = 0.0) -> list[PaymentPlanEntry]:
    """Return one payoff entry per debt in avalanche order.

    Raises:
        EmptyInputError: no debts were supplied.
        InvalidDebtError: a balance or APR is negative.
        InvalidPaymentError: a minimum payment is not positive, or the
            payment assigned to a debt never covers its monthly interest.
            ``subject`` carries the debt name.
    """

    debts = list(debts)
    if not debts:
        raise EmptyInputError("Add at least one debt to calculate a payoff plan.")
    extra_payment = float(extra_payment or 0.0)
    if extra_payment < 0:
        raise ValueError("Extra payment must be at least zero.")

    for debt in debts:
        if debt.balance < 0:
            raise InvalidDebtError(
                f"Balance for {debt.name!r} must be at least zero.", subject=debt.name
            )
        if debt.apr < 0:
            raise InvalidDebtError(
                f"APR for {debt.name!r} must be at least zero.", subject=debt.name
            )
        if debt.minimum_payment <= 0:
            raise InvalidPaymentError(
                f"Minimum payment for {debt.name!r} must be greater than zero.",
                subject=debt.name,
            )

    ordered = avalanche_order(debts)
    entries: list[PaymentPlanEntry] = []
    for position, debt in enumerate(ordered):
        payment = float(debt.minimum_payment) + (extra_payment if position == 0 else 0.0)
        try:
            result = amortize(debt.balance, debt.apr, payment)
        except InvalidPaymentError as exc:
            logger.warning(
                "Debt cannot be amortized",
                extra={"debt": debt.name, "apr": debt.apr, "payment": payment},
            )
            raise InvalidPaymentError(f"{debt.name}: {exc.message}", subject=debt.name) from exc

        logger.debug(
            "Debt amortized",
            extra={"debt": debt.name, "payment": payment, "months": result.months},
        )
        entries.append(
            PaymentPlanEntry(
                debt_id=debt.id,
                debt_name=debt.name,
                apr=float(debt.apr),
                monthly_payment=payment,
                months_to_payoff=result.months,
                total_interest=result.total_interest,
                total_paid=result.total_paid,
            )
        )

    logger.info(
        "Payoff plan computed",
        extra={"debt_count": len(entries), "extra_payment": extra_payment},
    )
    return entries


def summarize_plan(
    entries: Sequence[PaymentPlanEntry],
    debts: Iterable[Debt],
    *,
    extra_payment: float = 0.0,
) -> PlanSummary:
    """Aggregate balances, minimums, interest and the mean payoff time.

    ``average_months`` is a simple mean across entries, not weighted by
    balance.
    """

    debts = list(debts)
    total_minimums = sum(float(d.minimum_payment) for d in debts)
    average_months = (
        sum(e.months_to_payoff for e in entries) / len(entries) if entries else 0.0
    )
    return PlanSummary(
        total_balance=sum(float(d.balance) for d in debts),
        total_minimum_payments=total_minimums,
        total_interest=sum(e.total_interest for e in entries),
        average_months=average_months,
        extra_payment=float(extra_payment or 0.0),
        total_monthly_payment=sum(e.monthly_payment for e in entries),
    )


__all__ = [
    "Debt",
    "PaymentPlanEntry",
    "PlanSummary",
    "avalanche_order",
    "build_plan",
    "summarize_plan",
]
