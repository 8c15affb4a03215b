"""Canonical test fixtures used across engine and API tests.

Napa: $825K 3-unit house hack, 3.5% down, 6.75% for 30 years, $5,600/month rent.
Seller-financed: $1M interest-only note at 5% (years 1-2) then 5.5% (years 3-4), paid off after year 4.
Zero-rate: $360K interest-free loan over 30 years.
"""

import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from dealbook.api.app import app
from dealbook.api.deps import get_db, init_db
from dealbook.config import settings
from dealbook.models.financing import (
    FinancingTerms,
    OperatingAssumptions,
    ProjectionInputs,
    RateTier,
)


@pytest.fixture
def napa_inputs() -> ProjectionInputs:
    """House hack with a lump-sum expense figure."""
    return ProjectionInputs(
        financing=FinancingTerms(
            purchase_price=Decimal("825000"),
            down_payment=Decimal("28875"),
            annual_interest_rate=Decimal("0.0675"),
            loan_term_years=30,
        ),
        operating=OperatingAssumptions(
            gross_monthly_rent=Decimal("5600"),
            rent_growth_rate=Decimal("0.03"),
            vacancy_rate=Decimal("0.05"),
            operating_expenses=Decimal("16756"),
            expense_growth_rate=Decimal("0.025"),
            appreciation_rate=Decimal("0.05"),
        ),
        horizon_years=30,
    )


@pytest.fixture
def seller_financed_inputs() -> ProjectionInputs:
    """Interest-only tiered note with a year-4 payoff, projected for 10 years."""
    return ProjectionInputs(
        financing=FinancingTerms(
            purchase_price=Decimal("1250000"),
            loan_amount_override=Decimal("1000000"),
            interest_only=True,
            rate_tiers=(
                RateTier(start_year=1, end_year=2, rate=Decimal("0.05")),
                RateTier(start_year=3, end_year=4, rate=Decimal("0.055")),
            ),
            payoff_year=4,
        ),
        operating=OperatingAssumptions(
            gross_monthly_rent=Decimal("12000"),
            operating_expenses=Decimal("40000"),
        ),
        horizon_years=10,
    )


@pytest.fixture
def zero_rate_inputs() -> ProjectionInputs:
    return ProjectionInputs(
        financing=FinancingTerms(
            purchase_price=Decimal("400000"),
            loan_amount_override=Decimal("360000"),
            annual_interest_rate=Decimal("0"),
            loan_term_years=30,
        ),
        operating=OperatingAssumptions(
            gross_monthly_rent=Decimal("3000"),
            operating_expenses=Decimal("6000"),
        ),
        horizon_years=30,
    )


@pytest.fixture
def napa_request() -> dict:
    """Napa deal as a camelCase request body with percent-style rates."""
    return {
        "purchasePrice": 825000,
        "downPaymentAmount": 28875,
        "annualInterestRate": 6.75,
        "loanTermYears": 30,
        "grossMonthlyRent": 5600,
        "rentGrowthRate": 3,
        "vacancyRate": 5,
        "operatingExpenses": 16756,
        "expenseGrowthRate": 2.5,
        "appreciationRate": 5,
    }


@pytest.fixture
def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(init_db(engine))
    yield engine
    asyncio.run(engine.dispose())


def _client_for(engine, monkeypatch) -> TestClient:
    monkeypatch.setattr(settings, "cache_enabled", False)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def client(db_engine, monkeypatch):
    """API client on a fresh SQLite database, cache disabled."""
    yield _client_for(db_engine, monkeypatch)
    app.dependency_overrides.clear()


@pytest.fixture
def client_without_tables(tmp_path, monkeypatch):
    """API client whose database has no schema, so every query fails."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}", poolclass=NullPool)
    yield _client_for(engine, monkeypatch)
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())
