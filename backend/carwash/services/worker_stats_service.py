# backend/carwash/services/worker_stats_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from ..core.enums import ReservationStatus
from ..core.exceptions import NotFoundException
from ..repositories.factory import RepositoryFactory
from .base import BaseService


class WorkerStatsService(BaseService):
    """Workload, completion and earnings figures per worker."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.worker_repository = RepositoryFactory.create_worker_repository(db)
        self.reservation_repository = RepositoryFactory.create_reservation_repository(db)
        self.rating_repository = RepositoryFactory.create_rating_repository(db)

    @BaseService.measure_operation("worker_stats")
    def worker_stats(self, worker_id: str) -> Dict[str, Any]:
        if self.worker_repository.get_by_id(worker_id) is None:
            raise NotFoundException("Worker not found")

        counts = self.reservation_repository.worker_status_counts(worker_id)
        total = sum(counts.values())
        completed = counts.get(ReservationStatus.COMPLETED.value, 0)
        ratings = self.rating_repository.worker_score_aggregates(worker_id)
        average = ratings["average"]

        return {
            "worker_id": worker_id,
            "total_reservations": total,
            "completed": completed,
            "cancelled": counts.get(ReservationStatus.CANCELLED.value, 0),
            "completion_rate": round(completed * 100 / total, 2) if total else 0.0,
            "average_rating": round(average, 2) if average is not None else None,
            "total_ratings": ratings["total"],
            "total_earnings": float(self.reservation_repository.worker_earnings(worker_id)),
        }

    @BaseService.measure_operation("top_workers")
    def top_workers(self, limit: int = 5) -> List[Dict[str, Any]]:
        return [
            {"id": w.id, "name": w.name, "average_rating": float(w.average_rating or 0)}
            for w in self.worker_repository.top_rated(limit)
        ]
