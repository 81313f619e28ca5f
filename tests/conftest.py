"""Pytest configuration and shared fixtures for PayoffSage tests.

Provides value factories for debts and goals, a Flask app/client pair wired to
a temporary data directory, and float comparison helpers for money values.
"""

from __future__ import annotations

from datetime import date

import pytest

from payoffsage import create_app
from payoffsage.services.debts import Debt
from payoffsage.services.goals import SavingsGoal


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep log files and other instance data inside the test's tmp dir."""

    monkeypatch.setenv("PAYOFFSAGE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PAYOFFSAGE_DEFAULT_EXTRA_PAYMENT", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_DEV_MODE", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_SECRET_KEY", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_LOG_LEVEL", raising=False)
    return tmp_path


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app():
    app = create_app("testing")
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


# =============================================================================
# Value Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for creating Debt values with sensible defaults."""

    counter = {"next_id": 1}

    def _create(**kwargs) -> Debt:
        debt_id = kwargs.pop("id", counter["next_id"])
        counter["next_id"] += 1
        defaults = {
            "name": f"Debt {debt_id}",
            "balance": 1000.0,
            "apr": 12.0,
            "minimum_payment": 50.0,
        }
        defaults.update(kwargs)
        return Debt(id=debt_id, **defaults)

    return _create


@pytest.fixture
def goal_factory():
    """Factory for creating SavingsGoal values with sensible defaults."""

    def _create(**kwargs) -> SavingsGoal:
        defaults = {
            "title": "Emergency fund",
            "target_amount": 5000.0,
            "current_amount": 1000.0,
            "target_date": date(2027, 10, 19),
        }
        defaults.update(kwargs)
        return SavingsGoal(**defaults)

    return _create


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
