# backend/tests/unit/test_availability_service.py
"""
Unit tests for AvailabilityService with mocked repositories.

Covers the availability predicate properties: day off, inside window,
inclusive close boundary, block overlap, missing/inactive worker, and
repository failures turning into "not available".
"""

from datetime import date, datetime, timedelta
from unittest.mock import Mock

import pytest
from sqlalchemy.orm import Session

from carwash.core.exceptions import RepositoryException
from carwash.core.weekly_schedule import WeeklySchedule
from carwash.models.worker import Worker
from carwash.seed import standard_schedule
from carwash.services.availability_service import AvailabilityService
from tests.helpers import business_instant

MONDAY = date(2025, 1, 6)
SUNDAY = date(2025, 1, 12)


@pytest.fixture
def worker() -> Worker:
    return Worker(id="01JGWORKER00000000000000AA", name="Ana", is_active=True, schedule=standard_schedule())


@pytest.fixture
def worker_repo(worker):
    repo = Mock()
    repo.get_by_id.return_value = worker
    return repo


@pytest.fixture
def block_repo():
    repo = Mock()
    repo.has_overlap.return_value = False
    return repo


@pytest.fixture
def service(worker_repo, block_repo) -> AvailabilityService:
    return AvailabilityService(
        Mock(spec=Session), worker_repository=worker_repo, block_repository=block_repo
    )


def test_inside_window_without_blocks(service, worker):
    assert service.is_available(worker.id, business_instant(MONDAY, 9, 0), 60) is True


def test_start_without_offset_is_business_local(service, worker):
    assert service.is_available(worker.id, datetime(2025, 1, 6, 9, 0), 60) is True
    assert service.is_available(worker.id, datetime(2025, 1, 6, 17, 30), 60) is False


def test_exceeding_window_close(service, worker):
    assert service.is_available(worker.id, business_instant(MONDAY, 17, 30), 60) is False


def test_end_exactly_at_close_is_available(service, worker):
    assert service.is_available(worker.id, business_instant(MONDAY, 17, 0), 60) is True


def test_sunday_without_window(service, worker):
    for hour in (8, 12, 16):
        assert service.is_available(worker.id, business_instant(SUNDAY, hour, 0), 30) is False


def test_overlapping_block_wins_over_window(service, worker, block_repo):
    block_repo.has_overlap.return_value = True

    start = business_instant(MONDAY, 9, 30)
    assert service.is_available(worker.id, start, 30) is False

    _, called_start, called_end = block_repo.has_overlap.call_args.args
    assert called_end - called_start == timedelta(minutes=30)


def test_missing_worker(service, worker_repo, block_repo):
    worker_repo.get_by_id.return_value = None
    assert service.is_available("missing", business_instant(MONDAY, 9, 0), 60) is False
    block_repo.has_overlap.assert_not_called()


def test_inactive_worker(service, worker):
    worker.is_active = False
    assert service.is_available(worker.id, business_instant(MONDAY, 9, 0), 60) is False


def test_worker_without_any_schedule(service, worker):
    worker.schedule = WeeklySchedule()
    assert service.is_available(worker.id, business_instant(MONDAY, 9, 0), 60) is False


def test_non_positive_duration(service, worker):
    assert service.is_available(worker.id, business_instant(MONDAY, 9, 0), 0) is False


def test_repository_failure_is_not_raised(service, worker, worker_repo):
    worker_repo.get_by_id.side_effect = RepositoryException("connection lost")
    assert service.is_available(worker.id, business_instant(MONDAY, 9, 0), 60) is False
