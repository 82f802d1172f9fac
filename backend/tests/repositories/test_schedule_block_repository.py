# backend/tests/repositories/test_schedule_block_repository.py
from datetime import datetime, timedelta, timezone

import pytest

from carwash.models.schedule_block import ScheduleBlock
from carwash.repositories.factory import RepositoryFactory
from tests.helpers import business_instant, next_weekday


@pytest.fixture
def repository(db):
    return RepositoryFactory.create_schedule_block_repository(db)


@pytest.fixture
def lunch_block(db, test_worker):
    """Monday 12:00-13:00 business time."""
    monday = next_weekday(0)
    block = ScheduleBlock(
        worker_id=test_worker.id,
        start=business_instant(monday, 12),
        end=business_instant(monday, 13),
        reason="Lunch",
    )
    db.add(block)
    db.commit()
    return block


def test_block_instants_are_stored_in_utc(db, lunch_block):
    db.expire(lunch_block)
    stored = lunch_block.start
    naive = stored.replace(tzinfo=None) if stored.tzinfo else stored
    expected = business_instant(next_weekday(0), 12).astimezone(timezone.utc).replace(tzinfo=None)
    assert naive == expected


def test_overlap_detection(repository, test_worker, lunch_block):
    monday = next_weekday(0)
    assert repository.has_overlap(test_worker.id, business_instant(monday, 12, 30), business_instant(monday, 13, 30))
    assert repository.has_overlap(test_worker.id, business_instant(monday, 11), business_instant(monday, 14))


def test_touching_boundaries_do_not_overlap(repository, test_worker, lunch_block):
    monday = next_weekday(0)
    assert not repository.has_overlap(test_worker.id, business_instant(monday, 11), business_instant(monday, 12))
    assert not repository.has_overlap(test_worker.id, business_instant(monday, 13), business_instant(monday, 14))


def test_overlap_accepts_any_timezone(repository, test_worker, lunch_block):
    start = business_instant(next_weekday(0), 12, 15).astimezone(timezone.utc)
    assert repository.has_overlap(test_worker.id, start, start + timedelta(minutes=10))


def test_overlap_is_per_worker(db, repository, inactive_worker, lunch_block):
    monday = next_weekday(0)
    assert not repository.has_overlap(inactive_worker.id, business_instant(monday, 12), business_instant(monday, 13))


def test_active_at(repository, test_worker, lunch_block):
    monday = next_weekday(0)
    assert len(repository.active_at(test_worker.id, business_instant(monday, 12))) == 1
    assert repository.active_at(test_worker.id, business_instant(monday, 13)) == []


def test_list_by_worker_orders_by_start(db, repository, test_worker, lunch_block):
    early = ScheduleBlock(
        worker_id=test_worker.id,
        start=datetime(2020, 1, 1, 13, tzinfo=timezone.utc),
        end=datetime(2020, 1, 1, 14, tzinfo=timezone.utc),
    )
    db.add(early)
    db.commit()

    assert [b.id for b in repository.list_by_worker(test_worker.id)] == [early.id, lunch_block.id]


def test_delete_block_frees_slot(db, repository, test_worker, lunch_block):
    monday = next_weekday(0)
    assert repository.delete(lunch_block.id) is True
    db.commit()

    assert not repository.has_overlap(test_worker.id, business_instant(monday, 12), business_instant(monday, 13))
    assert repository.delete(lunch_block.id) is False
