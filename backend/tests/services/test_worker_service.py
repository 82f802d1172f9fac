# backend/tests/services/test_worker_service.py
from decimal import Decimal

import pytest

from carwash.core.enums import ReservationStatus
from carwash.core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from carwash.models.worker import Worker
from carwash.seed import standard_schedule
from carwash.services.worker_service import WorkerService
from carwash.services.worker_stats_service import WorkerStatsService
from tests.helpers import business_instant, make_reservation, next_weekday


@pytest.fixture
def service(db) -> WorkerService:
    return WorkerService(db)


@pytest.fixture
def crew(db, test_worker, inactive_worker):
    extra = [
        Worker(name="Andrea Gómez", schedule=standard_schedule(), average_rating=Decimal("4.80")),
        Worker(name="Luis Herrera", schedule=standard_schedule(), average_rating=Decimal("3.50")),
    ]
    db.add_all(extra)
    test_worker.average_rating = Decimal("4.20")
    db.commit()
    return [test_worker, *extra]


def test_list_only_active_workers(service, crew, inactive_worker):
    page = service.list_workers()
    assert page["total"] == 3
    assert inactive_worker.id not in {w.id for w in page["items"]}
    assert [w.name for w in page["items"]] == sorted(w.name for w in page["items"])
    assert service.count_active() == 3


def test_get_inactive_worker_is_not_found(service, inactive_worker):
    with pytest.raises(NotFoundException):
        service.get_worker(inactive_worker.id)
    assert service.exists_and_active(inactive_worker.id) is False


def test_search_is_case_insensitive(service, crew):
    page = service.search_workers("andrea")
    assert [w.name for w in page["items"]] == ["Andrea Gómez"]


@pytest.mark.parametrize("term", ["a", " ", "x" * 101])
def test_search_term_length(service, term):
    with pytest.raises(ValidationException):
        service.search_workers(term)


def test_min_rating_filter(service, crew):
    names = [w.name for w in service.list_by_min_rating(4.0)]
    assert names == ["Andrea Gómez", "Carlos Ramírez"]


@pytest.mark.parametrize("min_rating", [0, 5.5])
def test_min_rating_bounds(service, min_rating):
    with pytest.raises(ValidationException):
        service.list_by_min_rating(min_rating)


def test_check_availability_delegates(service, test_worker):
    monday = next_weekday(0)
    assert service.check_availability(test_worker.id, business_instant(monday, 9), 60) is True
    assert service.check_availability(test_worker.id, business_instant(monday, 17, 30), 60) is False


@pytest.mark.parametrize("operation", ["create_worker", "update_worker", "deactivate_worker"])
def test_public_writes_are_rejected(service, operation):
    with pytest.raises(BusinessRuleException) as exc_info:
        getattr(service, operation)("anything")
    assert exc_info.value.code == "ADMIN_ONLY"


def test_top_workers(db, crew):
    top = WorkerStatsService(db).top_workers(limit=2)
    assert [w["name"] for w in top] == ["Andrea Gómez", "Carlos Ramírez"]
    assert top[0]["average_rating"] == 4.8


def test_worker_stats(db, test_user, test_service, test_worker):
    make_reservation(db, test_user, test_service, worker=test_worker)
    make_reservation(db, test_user, test_service, worker=test_worker)
    make_reservation(db, test_user, test_service, worker=test_worker, status=ReservationStatus.CANCELLED)

    stats = WorkerStatsService(db).worker_stats(test_worker.id)

    assert stats["total_reservations"] == 3
    assert stats["completed"] == 2
    assert stats["cancelled"] == 1
    assert stats["completion_rate"] == pytest.approx(66.67)
    assert stats["total_earnings"] == 60000.0
    assert stats["average_rating"] is None


def test_worker_stats_unknown_worker(db):
    with pytest.raises(NotFoundException):
        WorkerStatsService(db).worker_stats("missing")
