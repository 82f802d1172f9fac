# backend/carwash/seed.py
"""
Demo data loader.

Creates the service catalog and eight workers on the standard shop hours
(weekdays 08:00-18:00, Saturday 09:00-14:00, closed Sunday). Existing rows
are left alone, so running it twice is harmless.

Usage:
    python -m carwash.seed
"""

from datetime import time
from decimal import Decimal
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from .core.enums import Weekday
from .core.weekly_schedule import TimeWindow, WeeklySchedule
from .database import SessionLocal, init_db
from .repositories.factory import RepositoryFactory

logger = logging.getLogger(__name__)

SERVICES: List[Dict] = [
    {
        "name": "Basic Wash",
        "description": "Exterior hand wash, rinse and dry.",
        "price": Decimal("30000"),
        "duration_minutes": 45,
        "category": "wash",
    },
    {
        "name": "Premium Wash",
        "description": "Exterior wash plus interior vacuum and dashboard cleaning.",
        "price": Decimal("50000"),
        "duration_minutes": 60,
        "category": "wash",
    },
    {
        "name": "Full Detailing",
        "description": "Deep interior and exterior detailing with wax finish.",
        "price": Decimal("120000"),
        "duration_minutes": 180,
        "category": "detailing",
    },
    {
        "name": "Engine Wash",
        "description": "Degreasing and low-pressure engine bay cleaning.",
        "price": Decimal("40000"),
        "duration_minutes": 45,
        "category": "wash",
    },
    {
        "name": "Upholstery Cleaning",
        "description": "Seat and carpet shampoo with extraction.",
        "price": Decimal("80000"),
        "duration_minutes": 120,
        "category": "detailing",
    },
]

WORKER_NAMES = [
    "Carlos Ramírez",
    "Andrés Gómez",
    "Juan Pablo Torres",
    "Luis Fernando Díaz",
    "Miguel Ángel Castro",
    "Santiago Herrera",
    "Diego Moreno",
    "Felipe Rojas",
]


def standard_schedule() -> WeeklySchedule:
    weekday = TimeWindow(time(8, 0), time(18, 0))
    windows = {
        day: weekday
        for day in (
            Weekday.MONDAY,
            Weekday.TUESDAY,
            Weekday.WEDNESDAY,
            Weekday.THURSDAY,
            Weekday.FRIDAY,
        )
    }
    windows[Weekday.SATURDAY] = TimeWindow(time(9, 0), time(14, 0))
    return WeeklySchedule(windows)


def seed_database(db: Session) -> Dict[str, int]:
    """Insert missing demo services and workers. Returns how many were created."""
    service_repo = RepositoryFactory.create_service_repository(db)
    worker_repo = RepositoryFactory.create_worker_repository(db)
    created = {"services": 0, "workers": 0}

    for data in SERVICES:
        if service_repo.find_one_by(name=data["name"]) is None:
            service_repo.create(**data)
            created["services"] += 1

    for index, name in enumerate(WORKER_NAMES, start=1):
        email = f"worker{index}@carwash.example.com"
        if worker_repo.find_one_by(email=email) is None:
            worker_repo.create(
                name=name,
                email=email,
                phone=f"+57 300 000 00{index:02d}",
                schedule=standard_schedule(),
            )
            created["workers"] += 1

    db.commit()
    logger.info(f"Seeded {created['services']} services and {created['workers']} workers")
    return created


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    init_db()
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
