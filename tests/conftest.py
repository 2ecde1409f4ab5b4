"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before fintrack.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import uuid
import pytest
from datetime import date
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from fintrack.api.main import create_app
from fintrack.infrastructure.database.models import Base
from fintrack.infrastructure.database.session import get_db
from fintrack.domain.models import Budget, Expense


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_USER = "user_alice"


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
    """Create FastAPI test client with test database, acting as TEST_USER"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app, headers={"X-User-ID": TEST_USER})


@pytest.fixture
def make_budget() -> Callable[..., Budget]:
    """Factory for domain budgets with sensible defaults"""

    def _make(
        amount: str = "100",
        category: str = "Food & Dining",
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 1, 31),
        alert_threshold: int = 80,
        is_active: bool = True,
    ) -> Budget:
        return Budget(
            id=uuid.uuid4(),
            user_id=TEST_USER,
            category=category,
            amount=Decimal(amount),
            period="monthly",
            start_date=start_date,
            end_date=end_date,
            alert_threshold=alert_threshold,
            is_active=is_active,
        )

    return _make


@pytest.fixture
def make_expense() -> Callable[..., Expense]:
    """Factory for domain expenses with sensible defaults"""

    def _make(
        amount: str = "10",
        category: str = "Food & Dining",
        day: date = date(2024, 1, 15),
        description: str = "Lunch",
    ) -> Expense:
        return Expense(
            id=uuid.uuid4(),
            user_id=TEST_USER,
            amount=Decimal(amount),
            category=category,
            description=description,
            date=day,
        )

    return _make
