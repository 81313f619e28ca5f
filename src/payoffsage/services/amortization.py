"""Fixed-payment loan amortization math."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date

from ..errors import InvalidPaymentError

# Absorbs float noise so an exact ratio such as 1000 / 250 stays at 4 months.
_CEIL_EPSILON = 1e-9

# One hundred years of monthly rows.
MAX_SCHEDULE_MONTHS = 1200


@dataclass(frozen=True, slots=True)
class AmortizationResult:
    """Outcome of retiring a balance with a level monthly payment."""

    months: int
    total_interest: float
    total_paid: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class PaymentProjection:
    """Represents a single projected payment for a balance."""

    period: int
    due_date: date
    payment: float
    principal: float
    interest: float
    remaining_balance: float

    def as_dict(self) -> dict:
        data = asdict(self)
        data["due_date"] = self.due_date.isoformat()
        return data


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate into a monthly periodic fraction."""

    return float(annual_rate_percent) / 100.0 / 12.0


def _ceil_months(value: float) -> int:
    return max(int(math.ceil(value - _CEIL_EPSILON)), 1)


def _check_inputs(balance: float, annual_rate_percent: float, payment: float) -> None:
    if balance < 0:
        raise ValueError("Balance must be at least zero.")
    if annual_rate_percent < 0:
        raise ValueError("Interest rate must be at least zero.")
    if payment <= 0:
        raise InvalidPaymentError("Monthly payment must be greater than zero.")
    rate = monthly_rate(annual_rate_percent)
    if balance > 0 and rate > 0 and payment <= balance * rate:
        raise InvalidPaymentError(
            f"Non-amortizing payment: {payment:.2f} does not cover monthly interest "
            f"of {balance * rate:.2f}."
        )


def amortize(balance: float, annual_rate_percent: float, monthly_payment: float) -> AmortizationResult:
    """Return months, total interest and total paid for a level payment.

    A zero rate divides the balance by the payment and reports the balance
    itself as the total paid, since the last installment only clears what is
    left. A positive rate uses the closed form
    ``n = -ln(1 - B*r/P) / ln(1 + r)`` and charges every month in full, so
    ``total_paid = P * n``. Months are always rounded up.

    Raises ``InvalidPaymentError`` when the payment is not positive or does
    not exceed one month of interest.
    """

    balance = float(balance)
    annual_rate_percent = float(annual_rate_percent)
    payment = float(monthly_payment)
    _check_inputs(balance, annual_rate_percent, payment)

    if balance == 0:
        return AmortizationResult(months=0, total_interest=0.0, total_paid=0.0)

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        months = _ceil_months(balance / payment)
        return AmortizationResult(months=months, total_interest=0.0, total_paid=balance)

    periods = -math.log(1 - balance * rate / payment) / math.log(1 + rate)
    months = _ceil_months(periods)
    total_paid = payment * months
    return AmortizationResult(
        months=months,
        total_interest=total_paid - balance,
        total_paid=total_paid,
    )


def _advance_month(current: date) -> date:
    """Return the first day of the following month."""

    month = current.month + 1
    year = current.year + (month - 1) // 12
    month = ((month - 1) % 12) + 1
    return date(year, month, 1)


def _normalize_currency(amount: float) -> float:
    """Round to cents using half-up rounding."""

    return round(amount + 1e-9, 2)


def amortization_schedule(
    balance: float,
    annual_rate_percent: float,
    monthly_payment: float,
    *,
    start: date | None = None,
    months: int | None = None,
) -> list[PaymentProjection]:
    """Project the balance month by month with cent-rounded interest.

    Unlike :func:`amortize` the final row only pays what is still owed, so
    the summed payments are the cash actually handed over. Rows are dated on
    the first of each month starting at ``start`` (default: this month).

    When ``months`` is ``None`` the schedule runs until the balance reaches
    zero, and payoffs longer than ``MAX_SCHEDULE_MONTHS`` are refused with
    ``InvalidPaymentError``. Otherwise a preview of at most ``months`` rows
    (never more than ``MAX_SCHEDULE_MONTHS``) is returned.
    """

    balance = float(balance)
    payment = float(monthly_payment)
    _check_inputs(balance, float(annual_rate_percent), payment)

    if months is not None:
        if months <= 0:
            return []
        months = min(months, MAX_SCHEDULE_MONTHS)
    else:
        projected = amortize(balance, annual_rate_percent, payment).months
        if projected > MAX_SCHEDULE_MONTHS:
            raise InvalidPaymentError(
                f"Payoff takes {projected} months; schedules are limited to "
                f"{MAX_SCHEDULE_MONTHS} months."
            )

    rate = monthly_rate(annual_rate_percent)
    due = (start or date.today()).replace(day=1)
    schedule: list[PaymentProjection] = []

    remaining = _normalize_currency(balance)
    period = 0
    while remaining > 0 and (months is None or period < months):
        period += 1
        interest = _normalize_currency(remaining * rate)
        installment = _normalize_currency(min(payment, remaining + interest))
        principal = _normalize_currency(installment - interest)
        if principal <= 0:
            # Cent rounding can swallow a payment that barely clears interest.
            raise InvalidPaymentError(
                f"Non-amortizing payment: {payment:.2f} does not reduce the balance."
            )
        remaining = _normalize_currency(remaining - principal)
        if remaining < 0.01:
            remaining = 0.0

        schedule.append(
            PaymentProjection(
                period=period,
                due_date=due,
                payment=installment,
                principal=principal,
                interest=interest,
                remaining_balance=remaining,
            )
        )
        due = _advance_month(due)

    return schedule


__all__ = [
    "MAX_SCHEDULE_MONTHS",
    "AmortizationResult",
    "PaymentProjection",
    "amortization_schedule",
    "amortize",
    "monthly_rate",
]
