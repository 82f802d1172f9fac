# backend/tests/services/test_history_service.py
from datetime import timedelta
from decimal import Decimal

import pytest

from carwash.core.enums import ReservationStatus
from carwash.core.exceptions import ValidationException
from carwash.core.timezone_utils import to_business_time, utc_now
from carwash.models.service import Service
from carwash.services.history_service import HistoryService
from tests.helpers import make_reservation


@pytest.fixture
def service(db) -> HistoryService:
    return HistoryService(db)


@pytest.fixture
def premium(db) -> Service:
    premium = Service(
        name="Premium Wash",
        description="Wash, wax and interior vacuum.",
        price=Decimal("50000.00"),
        duration_minutes=60,
    )
    db.add(premium)
    db.commit()
    return premium


@pytest.fixture
def history(db, test_user, test_service, premium, test_worker):
    now = utc_now()
    make_reservation(db, test_user, test_service, worker=test_worker, start=now - timedelta(days=2))
    make_reservation(db, test_user, test_service, start=now - timedelta(days=5))
    make_reservation(db, test_user, premium, worker=test_worker, start=now - timedelta(days=400))
    make_reservation(
        db, test_user, premium, start=now - timedelta(days=1), status=ReservationStatus.CANCELLED
    )


def test_stats_default_period(service, test_user, history):
    stats = service.stats(test_user.id)

    assert stats["total_reservations"] == 2
    assert stats["total_spent"] == 60000.0
    assert stats["average_spent"] == 30000.0
    assert stats["unique_services"] == 1
    assert stats["unique_workers"] == 1


def test_stats_custom_period(service, test_user, history):
    now = utc_now()
    stats = service.stats(test_user.id, start=now - timedelta(days=500), end=now)
    assert stats["total_reservations"] == 3
    assert stats["total_spent"] == 110000.0


def test_stats_empty(service, other_user):
    stats = service.stats(other_user.id)
    assert stats["total_reservations"] == 0
    assert stats["average_spent"] == 0.0


def test_stats_rejects_inverted_period(service, test_user):
    now = utc_now()
    with pytest.raises(ValidationException):
        service.stats(test_user.id, start=now, end=now - timedelta(days=1))


def test_monthly_stats_shape(service, test_user, history):
    months = service.monthly_stats(test_user.id, months=3)

    assert len(months) == 3
    assert months[-1]["month"] == to_business_time(utc_now()).strftime("%Y-%m")
    assert sum(m["reservations"] for m in months) == 2
    assert sum(m["spent"] for m in months) == 60000.0


@pytest.mark.parametrize("months", [0, 13])
def test_monthly_stats_bounds(service, test_user, months):
    with pytest.raises(ValidationException):
        service.monthly_stats(test_user.id, months=months)


def test_filtered_history(service, test_user, test_worker, premium, history):
    now = utc_now()
    by_worker = service.filtered_history(
        test_user.id, start=now - timedelta(days=500), end=now, worker_id=test_worker.id
    )
    assert len(by_worker) == 2

    by_service = service.filtered_history(
        test_user.id, start=now - timedelta(days=500), end=now, service_id=premium.id
    )
    assert len(by_service) == 1


def test_summary(service, test_user, test_service, history):
    summary = service.summary(test_user.id)

    assert summary["completed"] == 3
    assert summary["cancelled"] == 1
    assert summary["total_spent"] == 110000.0
    assert summary["favorite_service"] == {"id": test_service.id, "name": "Basic Wash", "times": 2}


def test_summary_without_history(service, other_user):
    assert service.summary(other_user.id)["favorite_service"] is None
