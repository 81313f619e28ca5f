"""Flask CLI commands for PayoffSage."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import click

from .errors import PlannerError


def _config_extra_payment(app) -> float:
    config = app.config.get("PAYOFFSAGE_CONFIG")
    return float(getattr(config, "DEFAULT_EXTRA_PAYMENT", 0.0))


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("payoff-plan")
    @click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option(
        "--extra",
        type=click.FloatRange(min=0),
        default=None,
        help="Extra monthly payment for the highest-APR debt.",
    )
    def payoff_plan(csv_path: Path, extra: float | None) -> None:
        """Print an avalanche payoff plan for the debts in CSV_PATH."""

        from .services.debts import build_plan, summarize_plan
        from .services.import_csv import load_debts_csv

        extra_payment = _config_extra_payment(app) if extra is None else extra
        try:
            debts = load_debts_csv(csv_path=csv_path)
            entries = build_plan(debts, extra_payment)
        except PlannerError as exc:
            raise click.ClickException(exc.message) from exc
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc

        for position, entry in enumerate(entries, start=1):
            click.echo(
                f"{position}. {entry.debt_name}: {entry.months_to_payoff} months at "
                f"{entry.monthly_payment:.2f}/mo, interest {entry.total_interest:.2f}, "
                f"total {entry.total_paid:.2f}"
            )
        summary = summarize_plan(entries, debts, extra_payment=extra_payment)
        click.echo(
            f"Total debt {summary.total_balance:.2f} | minimums {summary.total_minimum_payments:.2f}"
            f" | interest {summary.total_interest:.2f} | avg months {summary.average_months:.1f}"
        )

    @app.cli.command("goal-projection")
    @click.option("--title", default="Savings goal", show_default=True)
    @click.option("--target", type=float, required=True, help="Target amount.")
    @click.option("--current", type=click.FloatRange(min=0), default=0.0, show_default=True)
    @click.option("--target-date", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
    @click.option("--budget", type=click.FloatRange(min=0), required=True, help="Monthly budget.")
    @click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
    def goal_projection(
        title: str,
        target: float,
        current: float,
        target_date: datetime,
        budget: float,
        today: datetime | None,
    ) -> None:
        """Print the monthly savings needed for a goal and the spending left over."""

        from .services.goals import project_goal

        try:
            projection = project_goal(
                target,
                current,
                target_date.date(),
                today.date() if today else date.today(),
                budget,
                title=title,
            )
        except PlannerError as exc:
            raise click.ClickException(exc.message) from exc

        click.echo(f"{projection.title}: {projection.progress_percent:.1f}% complete")
        click.echo(f"Months remaining: {projection.months_remaining}")
        click.echo(f"Save per month: {projection.monthly_savings_needed:.2f}")
        click.echo(f"Spending ceiling: {projection.monthly_spending_ceiling:.2f}")
