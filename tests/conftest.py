"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime
from fastapi.testclient import TestClient
from obligation_engine.api.main import create_app
from obligation_engine.domain.models import (
    Bill,
    Budget,
    BudgetPeriod,
    Goal,
    LoanTerms,
    Transaction,
    TransactionType,
)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def now() -> datetime:
    """Fixed wall-clock moment shared by status and alert tests"""
    return datetime(2025, 3, 10, 14, 0)


@pytest.fixture
def reference_loan() -> LoanTerms:
    """10k at 12% over a year, paid on the 1st"""
    return LoanTerms(
        principal=10_000.0,
        annual_rate=12.0,
        term=12,
        start_date=date(2025, 1, 1),
        payment_day=1,
    )


@pytest.fixture
def sample_bills() -> list[Bill]:
    """One bill in each unpaid state relative to 2025-03-10, plus a paid one"""
    return [
        Bill(id="rent", name="Rent", amount=1500.0, due_day=5, next_due_date=date(2025, 3, 5)),
        Bill(id="power", name="Electricity", amount=120.0, due_day=12, next_due_date=date(2025, 3, 12)),
        Bill(id="gym", name="Gym", amount=45.0, due_day=28, next_due_date=date(2025, 3, 28)),
        Bill(
            id="phone",
            name="Phone",
            amount=60.0,
            due_day=11,
            next_due_date=date(2025, 4, 11),
            is_paid=True,
            last_paid_date=datetime(2025, 3, 9, 8, 30),
        ),
    ]


@pytest.fixture
def sample_budgets() -> list[Budget]:
    """On track, near limit and over limit budgets"""
    return [
        Budget(
            id="groceries",
            name="Groceries",
            budget_amount=1000.0,
            spent=400.0,
            period=BudgetPeriod.MONTHLY,
            start_date=date(2025, 3, 1),
        ),
        Budget(
            id="dining",
            name="Dining out",
            budget_amount=1000.0,
            spent=850.0,
            period=BudgetPeriod.MONTHLY,
            start_date=date(2025, 3, 1),
        ),
        Budget(
            id="fun",
            name="Entertainment",
            budget_amount=200.0,
            spent=250.0,
            period=BudgetPeriod.WEEKLY,
            start_date=date(2025, 3, 3),
        ),
    ]


@pytest.fixture
def sample_goals() -> list[Goal]:
    return [
        Goal(
            id="trip",
            name="Trip to Lisbon",
            target_amount=4000.0,
            current_amount=2000.0,
            target_date=date(2025, 12, 31),
        ),
        Goal(
            id="car",
            name="New car",
            target_amount=20000.0,
            current_amount=1000.0,
            target_date=date(2027, 1, 1),
        ),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    return [
        Transaction(id="t1", type=TransactionType.EXPENSE, amount=1500.0, description="Laptop"),
        Transaction(id="t2", type=TransactionType.INCOME, amount=5000.0, description="Salary"),
        Transaction(id="t3", type=TransactionType.EXPENSE, amount=80.0, description="Groceries"),
    ]
