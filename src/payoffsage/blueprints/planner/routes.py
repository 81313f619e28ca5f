"""Planner routes: JSON endpoints over the payoff and goal calculators."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from flask import current_app, jsonify, request

from ...errors import PlannerError
from ...logging_config import get_logger
from ...services.amortization import amortization_schedule, amortize
from ...services.budgeting import StaticSpending, budget_overview
from ...services.debts import build_plan, summarize_plan
from ...services.goals import project_goals
from . import bp
from .forms import DebtForm, GoalForm, duplicate_debt_ids, parse_amount, parse_date

logger = get_logger(__name__)


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _validation_failed(fields: dict):
    return jsonify({"error": "validation_failed", "fields": fields}), 400


def _default_extra_payment() -> Decimal:
    config = current_app.config.get("PAYOFFSAGE_CONFIG")
    return Decimal(str(getattr(config, "DEFAULT_EXTRA_PAYMENT", 0.0)))


@bp.errorhandler(PlannerError)
def handle_planner_error(exc: PlannerError):
    """Report calculator input failures as unprocessable requests."""

    logger.warning(
        "Planner request rejected",
        extra={"kind": exc.kind, "subject": exc.subject, "path": request.path},
    )
    return jsonify(exc.to_dict()), 422


@bp.get("/health")
def health():
    return jsonify({"status": "ok"})


@bp.post("/debts/plan")
def debt_plan():
    """Compute an avalanche payoff plan for the posted debts."""

    payload = _payload()
    raw_debts = payload.get("debts", [])
    if not isinstance(raw_debts, list):
        return _validation_failed({"debts": ["Provide a list of debts."]})

    errors: dict = {}
    forms = [DebtForm.from_mapping(item, position=i + 1) for i, item in enumerate(raw_debts)]
    for index, form in enumerate(forms):
        if not form.validate():
            errors[f"debts[{index}]"] = form.errors
    for key, messages in duplicate_debt_ids(forms).items():
        errors.setdefault(key, {}).update(messages)

    extra, extra_errors = parse_amount(
        payload.get("extra_payment"),
        field_name="extra_payment",
        default=_default_extra_payment(),
    )
    errors.update(extra_errors)
    if errors:
        return _validation_failed(errors)

    debts = [form.to_debt() for form in forms]
    extra_payment = float(extra)
    entries = build_plan(debts, extra_payment)
    summary = summarize_plan(entries, debts, extra_payment=extra_payment)
    return jsonify(
        {
            "entries": [entry.as_dict() for entry in entries],
            "summary": summary.as_dict(),
        }
    )


@bp.post("/goals/projection")
def goal_projection():
    """Project monthly savings and spending ceilings for the posted goals."""

    payload = _payload()
    raw_goals = payload.get("goals", [])
    if not isinstance(raw_goals, list):
        return _validation_failed({"goals": ["Provide a list of goals."]})

    errors: dict = {}
    forms = [GoalForm.from_mapping(item) for item in raw_goals]
    for index, form in enumerate(forms):
        if not form.validate():
            errors[f"goals[{index}]"] = form.errors

    budget, budget_errors = parse_amount(payload.get("monthly_budget"), field_name="monthly_budget")
    today, today_errors = parse_date(payload.get("today"), field_name="today", default=date.today())
    errors.update(budget_errors)
    errors.update(today_errors)
    if errors:
        return _validation_failed(errors)

    projections = project_goals(
        [form.to_goal() for form in forms], today=today, monthly_budget=float(budget)
    )
    return jsonify({"projections": [p.as_dict() for p in projections]})


@bp.post("/budget/overview")
def overview():
    """Summarize month-to-date spending against the stored budget."""

    payload = _payload()
    errors: dict = {}

    budget, field_errors = parse_amount(payload.get("budget"), field_name="budget")
    errors.update(field_errors)
    spent, field_errors = parse_amount(payload.get("total_spent"), field_name="total_spent")
    errors.update(field_errors)
    count, field_errors = parse_amount(
        payload.get("transaction_count"), field_name="transaction_count", default=Decimal("0")
    )
    errors.update(field_errors)
    today, field_errors = parse_date(payload.get("today"), field_name="today", default=date.today())
    errors.update(field_errors)

    raw_categories = payload.get("categories") or {}
    categories: dict[str, float] = {}
    if not isinstance(raw_categories, dict):
        errors["categories"] = ["Provide category totals as an object."]
    else:
        for name, value in raw_categories.items():
            amount, field_errors = parse_amount(value, field_name=f"categories.{name}")
            errors.update(field_errors)
            if amount is not None:
                categories[str(name)] = float(amount)

    if errors:
        return _validation_failed(errors)

    source = StaticSpending(
        budget=float(budget),
        total_spent=float(spent),
        transactions=int(count),
        categories=categories,
    )
    return jsonify(budget_overview(source, today=today).as_dict())


@bp.post("/amortize")
def amortize_balance():
    """Amortize a single balance, optionally with its month-by-month schedule."""

    payload = _payload()
    errors: dict = {}
    balance, field_errors = parse_amount(payload.get("balance"), field_name="balance")
    errors.update(field_errors)
    apr, field_errors = parse_amount(payload.get("apr"), field_name="apr")
    errors.update(field_errors)
    payment, field_errors = parse_amount(
        payload.get("monthly_payment"), field_name="monthly_payment", minimum=Decimal("0.01")
    )
    errors.update(field_errors)
    start, field_errors = parse_date(payload.get("start"), field_name="start", default=date.today())
    errors.update(field_errors)
    months = None
    if payload.get("months") not in (None, ""):
        months, field_errors = parse_amount(
            payload.get("months"), field_name="months", minimum=Decimal("1")
        )
        errors.update(field_errors)
    if errors:
        return _validation_failed(errors)

    result = amortize(float(balance), float(apr), float(payment))
    body = result.as_dict()
    if payload.get("schedule"):
        # Payoffs beyond MAX_SCHEDULE_MONTHS raise InvalidPaymentError (422) unless previewed.
        rows = amortization_schedule(
            float(balance),
            float(apr),
            float(payment),
            start=start,
            months=int(months) if months is not None else None,
        )
        body["schedule"] = [row.as_dict() for row in rows]
    return jsonify(body)
