# backend/carwash/services/availability_service.py
"""
Worker availability resolution.

``is_available`` answers whether a worker can be booked for exactly
[start, start + duration). It is a total predicate: every disqualifying
condition (missing or inactive worker, overlapping schedule block, day
off, outside the weekly window) yields False and nothing is raised.

The check is advisory. It neither reserves nor locks the slot, and it
runs before the reservation insert rather than in the same transaction,
so two concurrent bookings for one slot can both pass it.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..core.timezone_utils import from_client_time
from ..core.weekly_schedule import fits_window
from ..models.worker import Worker
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..repositories.schedule_block_repository import ScheduleBlockRepository
from ..repositories.worker_repository import WorkerRepository
from .base import BaseService


class AvailabilityService(BaseService):
    """Availability predicate over a worker's weekly window and schedule blocks."""

    def __init__(
        self,
        db: Session,
        worker_repository: Optional[WorkerRepository] = None,
        block_repository: Optional[ScheduleBlockRepository] = None,
    ):
        super().__init__(db)
        self.worker_repository = worker_repository or RepositoryFactory.create_worker_repository(db)
        self.block_repository = (
            block_repository or RepositoryFactory.create_schedule_block_repository(db)
        )

    @BaseService.measure_operation("is_available")
    def is_available(self, worker_id: str, start: datetime, duration_minutes: int) -> bool:
        """
        Check whether the worker may be booked for the exact interval.

        Args:
            worker_id: Worker to check
            start: Candidate start instant (naive values are treated as UTC)
            duration_minutes: Candidate length

        Returns:
            True only if the worker is active, no block overlaps the
            interval, and the interval sits inside that weekday's window.
        """
        try:
            available = self._evaluate(worker_id, start, duration_minutes)
        except RepositoryException as e:
            self.logger.error(f"Availability check failed for worker {worker_id}: {e}")
            available = False

        prometheus_metrics.inc_availability_check(available)
        return available

    def _evaluate(self, worker_id: str, start: datetime, duration_minutes: int) -> bool:
        if duration_minutes <= 0:
            return False

        worker: Optional[Worker] = self.worker_repository.get_by_id(worker_id)
        if worker is None or not worker.is_active:
            self.logger.debug(f"Worker {worker_id} missing or inactive")
            return False

        start = from_client_time(start)
        end = start + timedelta(minutes=duration_minutes)

        if self.block_repository.has_overlap(worker_id, start, end):
            self.logger.debug(f"Worker {worker_id} blocked between {start} and {end}")
            return False

        return fits_window(worker.schedule, start, end)
