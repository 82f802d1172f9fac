# backend/tests/helpers.py
"""Shared builders for tests that need specific times or reservation states."""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from carwash.core.enums import ReservationStatus
from carwash.core.timezone_utils import get_business_timezone, to_business_time, utc_now
from carwash.models.reservation import Reservation
from carwash.models.service import Service
from carwash.models.user import User
from carwash.models.worker import Worker


def business_instant(day: date, hour: int, minute: int = 0) -> datetime:
    """Wall-clock time in the business timezone as an aware datetime."""
    return get_business_timezone().localize(datetime.combine(day, time(hour, minute)))


def next_weekday(weekday: int) -> date:
    """Date of the next given weekday (0 = Monday), always at least one day ahead."""
    today = to_business_time(utc_now()).date()
    days_ahead = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def make_reservation(
    db: Session,
    user: User,
    service: Service,
    worker: Optional[Worker] = None,
    start: Optional[datetime] = None,
    status: ReservationStatus = ReservationStatus.COMPLETED,
) -> Reservation:
    """Insert a reservation directly, bypassing the booking rules."""
    start = start or (utc_now() - timedelta(days=3))
    reservation = Reservation(
        user_id=user.id,
        service_id=service.id,
        worker_id=worker.id if worker else None,
        start=start,
        end=start + timedelta(minutes=service.duration_minutes),
        status=status.value,
        final_price=service.price,
    )
    if status == ReservationStatus.COMPLETED:
        reservation.completed_at = start + timedelta(minutes=service.duration_minutes)
    db.add(reservation)
    db.commit()
    return reservation
