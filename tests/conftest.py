"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_gateway.api.main import create_app
from cashflow_gateway.api.dependencies import get_today
from cashflow_gateway.infrastructure.database.models import Base
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.domain.models import Account, Transaction, INGRESO, EGRESO


# Fixed reference date: a Thursday, day 20 of the month
TODAY = date(2025, 3, 20)

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_account(
    name: str = "Monetaria",
    type: str = "BANK",
    balance: str = "0",
    currency: str = "GTQ",
    **kwargs,
) -> Account:
    return Account(
        id=kwargs.pop("id", name.lower().replace(" ", "-")),
        name=name,
        type=type,
        currency=currency,
        balance=Decimal(balance),
        **kwargs,
    )


def make_transaction(description, amount: str, on: date, type: str = EGRESO) -> Transaction:
    return Transaction(type=type, amount=Decimal(amount), date=on, description=description)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed today"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def salary_history() -> list[Transaction]:
    """Three monthly salary deposits on days 1, 1 and 2"""
    return [
        make_transaction("Salario", "10000", date(2025, 1, 1), INGRESO),
        make_transaction("Salario", "10050", date(2025, 2, 1), INGRESO),
        make_transaction("Salario", "9950", date(2025, 3, 2), INGRESO),
    ]


@pytest.fixture
def mixed_history(salary_history) -> list[Transaction]:
    """Salary, steady rent, noisy groceries and a one-off purchase"""
    history = list(salary_history)
    for month in (1, 2, 3):
        history.append(make_transaction("Renta oficina", "3500", date(2025, month, 5)))
    history.extend(
        [
            make_transaction("Supermercado", "100", TODAY - timedelta(days=30)),
            make_transaction("Supermercado", "500", TODAY - timedelta(days=20)),
            make_transaction("Supermercado", "50", TODAY - timedelta(days=10)),
            make_transaction("Laptop", "8000", TODAY - timedelta(days=15)),
        ]
    )
    return history
