# backend/tests/services/test_seed.py
from carwash.models.service import Service
from carwash.models.worker import Worker
from carwash.seed import SERVICES, WORKER_NAMES, seed_database


def test_seed_is_idempotent(db):
    first = seed_database(db)
    second = seed_database(db)

    assert first == {"services": len(SERVICES), "workers": len(WORKER_NAMES)}
    assert second == {"services": 0, "workers": 0}
    assert db.query(Service).count() == len(SERVICES)
    assert db.query(Worker).count() == len(WORKER_NAMES)


def test_seeded_workers_follow_shop_hours(db):
    seed_database(db)
    worker = db.query(Worker).filter_by(email="worker1@carwash.example.com").one()

    schedule = worker.schedule
    assert schedule.to_dict()["sunday"] is None
    assert schedule.to_dict()["monday"] == {"open": "08:00", "close": "18:00"}
