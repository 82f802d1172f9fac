# backend/carwash/repositories/rating_repository.py
"""
Rating repository: creation lookups plus the aggregates that feed
worker averages and per-service statistics.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.rating import Rating
from .base_repository import BaseRepository


class RatingRepository(BaseRepository[Rating]):
    def __init__(self, db: Session):
        super().__init__(db, Rating)

    def exists_for_reservation(self, reservation_id: str) -> bool:
        return self.exists(reservation_id=reservation_id)

    def get_by_reservation(self, reservation_id: str) -> Optional[Rating]:
        return self.find_one_by(reservation_id=reservation_id)

    def list_for_user(self, user_id: str, skip: int = 0, limit: int = 10) -> Tuple[List[Rating], int]:
        query = (
            self.db.query(Rating)
            .filter(Rating.user_id == user_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        return self._paginate(query, skip, limit)

    def list_for_worker(
        self, worker_id: str, skip: int = 0, limit: int = 10
    ) -> Tuple[List[Rating], int]:
        query = (
            self.db.query(Rating)
            .filter(Rating.worker_id == worker_id, Rating.worker_score.isnot(None))
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        return self._paginate(query, skip, limit)

    def worker_score_aggregates(self, worker_id: str) -> Dict[str, Any]:
        """Average over every worker score the worker has received."""
        try:
            row = (
                self.db.query(
                    func.avg(Rating.worker_score).label("average"),
                    func.count(Rating.worker_score).label("total"),
                )
                .filter(Rating.worker_id == worker_id, Rating.worker_score.isnot(None))
                .one()
            )
            mapping = row._mapping
            average = mapping["average"]
            return {
                "average": float(average) if average is not None else None,
                "total": int(mapping["total"] or 0),
            }
        except SQLAlchemyError as e:
            self.logger.error(f"Error aggregating ratings for worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to aggregate worker ratings: {str(e)}")

    def service_score_distribution(self, service_id: str) -> Dict[int, int]:
        try:
            rows = (
                self.db.query(Rating.service_score, func.count(Rating.id))
                .filter(Rating.service_id == service_id)
                .group_by(Rating.service_score)
                .all()
            )
            distribution = {score: 0 for score in range(1, 6)}
            for score, count in rows:
                distribution[int(score)] = int(count)
            return distribution
        except SQLAlchemyError as e:
            self.logger.error(f"Error aggregating ratings for service {service_id}: {str(e)}")
            raise RepositoryException(f"Failed to aggregate service ratings: {str(e)}")
