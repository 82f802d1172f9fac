# backend/tests/conftest.py
"""
Pytest configuration.

Every test gets a fresh in-memory SQLite database (StaticPool, so the
session and the TestClient share one connection). Settings are switched
to testing mode before anything from ``carwash`` is imported.
"""

import os

# Set testing mode BEFORE any carwash imports
os.environ["IS_TESTING"] = "true"
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from carwash.api.dependencies.database import get_db
from carwash.auth import create_access_token, get_password_hash
from carwash.core.config import settings
from carwash.database import Base, build_engine
from carwash.main import app
from carwash.models.service import Service
from carwash.models.user import User
from carwash.models.worker import Worker
from carwash.seed import standard_schedule

settings.is_testing = True

TEST_PASSWORD = "Password123"


@pytest.fixture(scope="function")
def db():
    """Create a new database session for each test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    TestSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestSessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db: Session):
    """Create a test client with the test database."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    # Don't use context manager; lifespan would touch the default engine
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


def _create_user(db: Session, email: str, document_number: str) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(TEST_PASSWORD),
        full_name="Test Client",
        phone="3001234567",
        document_type="CC",
        document_number=document_number,
        vehicle_plate="ABC123",
        vehicle_type="car",
        is_active=True,
        profile_completed=True,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def test_user(db: Session) -> User:
    return _create_user(db, "client@example.com", "1010101010")


@pytest.fixture
def other_user(db: Session) -> User:
    return _create_user(db, "other.client@example.com", "2020202020")


@pytest.fixture
def test_worker(db: Session) -> Worker:
    """Worker on standard hours: weekdays 08:00-18:00, Saturday 09:00-14:00."""
    worker = Worker(
        name="Carlos Ramírez",
        email="carlos@carwash.example.com",
        schedule=standard_schedule(),
    )
    db.add(worker)
    db.commit()
    return worker


@pytest.fixture
def inactive_worker(db: Session) -> Worker:
    worker = Worker(
        name="Inactive Worker",
        email="inactive@carwash.example.com",
        is_active=False,
        schedule=standard_schedule(),
    )
    db.add(worker)
    db.commit()
    return worker


@pytest.fixture
def test_service(db: Session) -> Service:
    service = Service(
        name="Basic Wash",
        description="Exterior hand wash, rinse and dry.",
        price=Decimal("30000.00"),
        duration_minutes=45,
        category="wash",
    )
    db.add(service)
    db.commit()
    return service


@pytest.fixture
def inactive_service(db: Session) -> Service:
    service = Service(
        name="Retired Wash",
        description="No longer offered.",
        price=Decimal("20000.00"),
        duration_minutes=30,
        is_active=False,
    )
    db.add(service)
    db.commit()
    return service


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    token = create_access_token(data={"sub": test_user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    token = create_access_token(data={"sub": other_user.id})
    return {"Authorization": f"Bearer {token}"}
