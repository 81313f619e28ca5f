"""Planner form definitions and validation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List

from ...services.debts import Debt
from ...services.goals import SavingsGoal

MAX_APR = Decimal("100")


@dataclass(slots=True)
class _Form:
    """Shared parsing helpers; subclasses fill ``errors`` per field."""

    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def _error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def _parse_currency(
        self,
        field_name: str,
        value: Any,
        *,
        minimum: Decimal,
        required: bool = True,
        default: Decimal | None = None,
    ) -> Decimal | None:
        """Parse and validate numeric input, storing errors when parsing fails."""

        if value is None or value == "":
            if not required:
                return default
            self._error(field_name, "This field is required.")
            return None

        if isinstance(value, bool):
            self._error(field_name, "Enter a valid number.")
            return None

        if not isinstance(value, Decimal):
            try:
                value = Decimal(str(value).replace(",", "").strip())
            except (InvalidOperation, TypeError, ValueError):
                self._error(field_name, "Enter a valid number.")
                return None

        if not value.is_finite():
            self._error(field_name, "Enter a valid number.")
            return None

        if value < minimum:
            message = (
                "Amount must be greater than zero."
                if minimum > 0
                else "Amount must be at least zero."
            )
            self._error(field_name, message)
        return value

    def _parse_date(self, field_name: str, value: Any, *, required: bool = True) -> date | None:
        if isinstance(value, date):
            return value
        if value is None or value == "":
            if required:
                self._error(field_name, "This field is required.")
            return None
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError:
            self._error(field_name, "Enter a date as YYYY-MM-DD.")
            return None

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages


@dataclass(slots=True)
class DebtForm(_Form):
    """Represents debt inputs and associated validation errors."""

    name: str = ""
    balance: Any = None
    apr: Any = None
    minimum_payment: Any = None
    id: Any = None

    @classmethod
    def from_mapping(cls, data: Any, *, position: int) -> "DebtForm":
        if not isinstance(data, dict):
            data = {}
        return cls(
            name=str(data.get("name") or ""),
            balance=data.get("balance"),
            apr=data.get("apr"),
            minimum_payment=data.get("minimum_payment"),
            id=data.get("id", position),
        )

    def validate(self) -> bool:
        """Validate debt inputs returning True when all values are acceptable."""

        self.errors.clear()

        if not self.name or not self.name.strip():
            self._error("name", "Enter the creditor or account name.")
        else:
            self.name = self.name.strip()

        self.balance = self._parse_currency("balance", self.balance, minimum=Decimal("0"))
        self.apr = self._parse_currency("apr", self.apr, minimum=Decimal("0"))
        self.minimum_payment = self._parse_currency(
            "minimum_payment", self.minimum_payment, minimum=Decimal("0.01")
        )

        if isinstance(self.apr, Decimal) and self.apr > MAX_APR:
            self._error("apr", "APR must be between 0 and 100 percent.")

        if isinstance(self.id, bool) or not isinstance(self.id, (int, str)) or (
            isinstance(self.id, str) and not self.id.strip()
        ):
            self._error("id", "Debt id must be a number or a non-empty string.")

        return not self.errors

    def to_debt(self) -> Debt:
        """Build the calculator input; call after a successful ``validate``."""

        return Debt(
            id=self.id,
            name=self.name,
            balance=float(self.balance),
            apr=float(self.apr),
            minimum_payment=float(self.minimum_payment),
        )


@dataclass(slots=True)
class GoalForm(_Form):
    """Represents savings goal inputs and associated validation errors."""

    title: str = ""
    target_amount: Any = None
    current_amount: Any = None
    target_date: Any = None

    @classmethod
    def from_mapping(cls, data: Any) -> "GoalForm":
        if not isinstance(data, dict):
            data = {}
        return cls(
            title=str(data.get("title") or ""),
            target_amount=data.get("target_amount"),
            current_amount=data.get("current_amount"),
            target_date=data.get("target_date"),
        )

    def validate(self) -> bool:
        self.errors.clear()

        if not self.title or not self.title.strip():
            self._error("title", "Give the goal a title.")
        else:
            self.title = self.title.strip()

        # A non-positive target is left to the calculator, which rejects it by name.
        self.target_amount = self._parse_currency(
            "target_amount", self.target_amount, minimum=Decimal("-Infinity")
        )
        self.current_amount = self._parse_currency(
            "current_amount",
            self.current_amount,
            minimum=Decimal("0"),
            required=False,
            default=Decimal("0"),
        )
        self.target_date = self._parse_date("target_date", self.target_date)

        return not self.errors

    def to_goal(self) -> SavingsGoal:
        return SavingsGoal(
            title=self.title,
            target_amount=float(self.target_amount),
            current_amount=float(self.current_amount),
            target_date=self.target_date,
        )


def duplicate_debt_ids(forms: Iterable[DebtForm]) -> Dict[str, Dict[str, List[str]]]:
    """Return id errors keyed like ``debts[<index>]`` for every repeated debt id."""

    seen: Dict[Any, int] = {}
    errors: Dict[str, Dict[str, List[str]]] = {}
    for index, form in enumerate(forms):
        if "id" in form.errors:
            continue
        if form.id in seen:
            errors[f"debts[{index}]"] = {
                "id": [f"Duplicate debt id {form.id!r} (also used by debts[{seen[form.id]}])."]
            }
        else:
            seen[form.id] = index
    return errors


def parse_amount(value: Any, *, field_name: str, minimum: Decimal = Decimal("0"), default: Decimal | None = None):
    """Parse a single top-level amount, returning (value, errors)."""

    form = _Form()
    parsed = form._parse_currency(
        field_name, value, minimum=minimum, required=default is None, default=default
    )
    return parsed, dict(form.errors)


def parse_date(value: Any, *, field_name: str, default: date):
    """Parse an optional ISO date, returning (value, errors)."""

    form = _Form()
    parsed = form._parse_date(field_name, value, required=False)
    return (parsed or default), dict(form.errors)


__all__ = ["DebtForm", "GoalForm", "duplicate_debt_ids", "parse_amount", "parse_date"]
