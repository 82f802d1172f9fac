# backend/carwash/repositories/worker_repository.py
"""
Worker directory queries.

Reads are filtered to active workers unless stated otherwise; inactive
workers stay in the table for historical reservations.
"""

from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..models.worker import Worker
from .base_repository import BaseRepository


class WorkerRepository(BaseRepository[Worker]):
    def __init__(self, db: Session):
        super().__init__(db, Worker)

    def _active(self) -> Query:
        return self.db.query(Worker).filter(Worker.is_active.is_(True))

    def get_active(self, worker_id: str) -> Optional[Worker]:
        try:
            return self._active().filter(Worker.id == worker_id).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting active worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve worker: {str(e)}")

    def list_active(self, skip: int = 0, limit: int = 10) -> Tuple[List[Worker], int]:
        return self._paginate(self._active().order_by(Worker.name.asc()), skip, limit)

    def search_by_name(self, term: str, skip: int = 0, limit: int = 10) -> Tuple[List[Worker], int]:
        query = self._active().filter(Worker.name.ilike(f"%{term}%")).order_by(Worker.name.asc())
        return self._paginate(query, skip, limit)

    def list_all_active(self) -> List[Worker]:
        try:
            return self._active().order_by(Worker.name.asc()).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing active workers: {str(e)}")
            raise RepositoryException(f"Failed to list workers: {str(e)}")

    def count_active(self) -> int:
        try:
            return self._active().count()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting workers: {str(e)}")
            raise RepositoryException(f"Failed to count workers: {str(e)}")

    def list_by_min_rating(self, min_rating: float) -> List[Worker]:
        try:
            return (
                self._active()
                .filter(Worker.average_rating >= min_rating)
                .order_by(Worker.average_rating.desc(), Worker.name.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error filtering workers by rating: {str(e)}")
            raise RepositoryException(f"Failed to filter workers: {str(e)}")

    def top_rated(self, limit: int = 5) -> List[Worker]:
        try:
            return (
                self._active()
                .order_by(Worker.average_rating.desc(), Worker.name.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing top workers: {str(e)}")
            raise RepositoryException(f"Failed to list top workers: {str(e)}")

    def set_average_rating(self, worker_id: str, average: Decimal) -> Optional[Worker]:
        return self.update(worker_id, average_rating=average)
