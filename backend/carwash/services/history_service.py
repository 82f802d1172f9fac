# backend/carwash/services/history_service.py
"""
Client history and spending statistics.

All figures are computed over completed reservations only. Months are
calendar months in the business timezone.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import ReservationStatus
from ..core.exceptions import ValidationException
from ..core.timezone_utils import from_client_time, get_business_timezone, to_business_time, utc_now
from ..models.reservation import Reservation
from ..repositories.factory import RepositoryFactory
from .base import BaseService

DEFAULT_PERIOD_DAYS = 365


def _month_key(dt: datetime) -> str:
    return to_business_time(dt).strftime("%Y-%m")


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class HistoryService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.reservation_repository = RepositoryFactory.create_reservation_repository(db)

    @BaseService.measure_operation("history_stats")
    def stats(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        end = from_client_time(end) if end else utc_now()
        start = from_client_time(start) if start else end - timedelta(days=DEFAULT_PERIOD_DAYS)
        if start >= end:
            raise ValidationException("Start date must be before end date")

        reservations = self.reservation_repository.list_completed_between(user_id, start, end)
        total_spent = sum((Decimal(str(r.final_price)) for r in reservations), Decimal("0"))
        count = len(reservations)
        return {
            "period_start": start,
            "period_end": end,
            "total_reservations": count,
            "total_spent": float(total_spent),
            "average_spent": round(float(total_spent) / count, 2) if count else 0.0,
            "unique_services": len({r.service_id for r in reservations}),
            "unique_workers": len({r.worker_id for r in reservations if r.worker_id}),
        }

    @BaseService.measure_operation("monthly_stats")
    def monthly_stats(self, user_id: str, months: int = 6) -> List[Dict[str, Any]]:
        """Per-month count and spend, oldest month first, current month included."""
        if not 1 <= months <= 12:
            raise ValidationException("Months must be between 1 and 12")

        tz = get_business_timezone()
        now_local = to_business_time(utc_now())
        first_year, first_month = _shift_month(now_local.year, now_local.month, -(months - 1))
        next_year, next_month = _shift_month(now_local.year, now_local.month, 1)
        period_start = tz.localize(datetime(first_year, first_month, 1))
        period_end = tz.localize(datetime(next_year, next_month, 1))

        buckets: Dict[str, Dict[str, Any]] = {}
        for offset in range(months):
            year, month = _shift_month(first_year, first_month, offset)
            key = f"{year:04d}-{month:02d}"
            buckets[key] = {"month": key, "reservations": 0, "spent": Decimal("0")}

        for reservation in self.reservation_repository.list_completed_between(
            user_id, period_start, period_end
        ):
            bucket = buckets.get(_month_key(reservation.start))
            if bucket is not None:
                bucket["reservations"] += 1
                bucket["spent"] += Decimal(str(reservation.final_price))

        return [{**b, "spent": float(b["spent"])} for b in buckets.values()]

    @BaseService.measure_operation("filtered_history")
    def filtered_history(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        service_id: Optional[str] = None,
        worker_id: Optional[str] = None,
    ) -> List[Reservation]:
        end = from_client_time(end) if end else utc_now()
        start = from_client_time(start) if start else end - timedelta(days=DEFAULT_PERIOD_DAYS)
        if start >= end:
            raise ValidationException("Start date must be before end date")
        return self.reservation_repository.list_completed_between(
            user_id, start, end, service_id=service_id, worker_id=worker_id
        )

    @BaseService.measure_operation("history_summary")
    def summary(self, user_id: str) -> Dict[str, Any]:
        repo = self.reservation_repository
        return {
            "completed": repo.count_by_status(user_id, ReservationStatus.COMPLETED),
            "cancelled": repo.count_by_status(user_id, ReservationStatus.CANCELLED),
            "total_spent": float(repo.total_spent(user_id)),
            "favorite_service": repo.favorite_service(user_id),
        }
