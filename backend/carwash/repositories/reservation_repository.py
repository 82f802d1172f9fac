# backend/carwash/repositories/reservation_repository.py
"""
ReservationRepository: data access for reservations.

Covers the client-facing reads (active reservation, history, pending
ratings) and the aggregates used by the statistics services.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..core.enums import ReservationStatus
from ..core.exceptions import RepositoryException
from ..core.timezone_utils import ensure_utc
from ..models.rating import Rating
from ..models.reservation import Reservation
from ..models.service import Service
from .base_repository import BaseRepository

_ACTIVE = [s.value for s in ReservationStatus.active()]


class ReservationRepository(BaseRepository[Reservation]):
    def __init__(self, db: Session):
        super().__init__(db, Reservation)

    def get_with_details(self, reservation_id: str) -> Optional[Reservation]:
        try:
            return (
                self.db.query(Reservation)
                .options(joinedload(Reservation.service), joinedload(Reservation.worker))
                .filter(Reservation.id == reservation_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting reservation {reservation_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve reservation: {str(e)}")

    def get_active_for_user(self, user_id: str) -> Optional[Reservation]:
        try:
            return (
                self.db.query(Reservation)
                .filter(Reservation.user_id == user_id, Reservation.status.in_(_ACTIVE))
                .order_by(Reservation.start.asc())
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting active reservation for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve active reservation: {str(e)}")

    def list_for_user(
        self,
        user_id: str,
        status: Optional[ReservationStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Reservation], int]:
        query = self.db.query(Reservation).filter(Reservation.user_id == user_id)
        if status is not None:
            query = query.filter(Reservation.status == status.value)
        return self._paginate(query.order_by(Reservation.start.desc()), skip, limit)

    def list_completed(self, user_id: str, skip: int = 0, limit: int = 10) -> Tuple[List[Reservation], int]:
        return self.list_for_user(user_id, ReservationStatus.COMPLETED, skip, limit)

    def list_pending_rating(self, user_id: str) -> List[Reservation]:
        """Completed reservations that have no rating yet."""
        try:
            return (
                self.db.query(Reservation)
                .outerjoin(Rating, Rating.reservation_id == Reservation.id)
                .filter(
                    Reservation.user_id == user_id,
                    Reservation.status == ReservationStatus.COMPLETED.value,
                    Rating.id.is_(None),
                )
                .order_by(Reservation.start.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing pending ratings for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list reservations: {str(e)}")

    def count_by_status(self, user_id: str, status: ReservationStatus) -> int:
        return self.count(user_id=user_id, status=status.value)

    def list_completed_between(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        service_id: Optional[str] = None,
        worker_id: Optional[str] = None,
    ) -> List[Reservation]:
        try:
            query = self.db.query(Reservation).filter(
                Reservation.user_id == user_id,
                Reservation.status == ReservationStatus.COMPLETED.value,
                Reservation.start >= ensure_utc(start),
                Reservation.start < ensure_utc(end),
            )
            if service_id:
                query = query.filter(Reservation.service_id == service_id)
            if worker_id:
                query = query.filter(Reservation.worker_id == worker_id)
            return query.order_by(Reservation.start.desc()).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing history for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list reservation history: {str(e)}")

    def total_spent(self, user_id: str) -> Decimal:
        try:
            value = (
                self.db.query(func.coalesce(func.sum(Reservation.final_price), 0))
                .filter(
                    Reservation.user_id == user_id,
                    Reservation.status == ReservationStatus.COMPLETED.value,
                )
                .scalar()
            )
            return Decimal(str(value or 0))
        except SQLAlchemyError as e:
            self.logger.error(f"Error summing spend for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to compute spend: {str(e)}")

    def favorite_service(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Most frequently completed service for a client."""
        try:
            row = (
                self.db.query(Service.id, Service.name, func.count(Reservation.id).label("times"))
                .join(Reservation, Reservation.service_id == Service.id)
                .filter(
                    Reservation.user_id == user_id,
                    Reservation.status == ReservationStatus.COMPLETED.value,
                )
                .group_by(Service.id, Service.name)
                .order_by(func.count(Reservation.id).desc(), Service.name.asc())
                .first()
            )
            if row is None:
                return None
            mapping = row._mapping
            return {"id": mapping["id"], "name": mapping["name"], "times": int(mapping["times"])}
        except SQLAlchemyError as e:
            self.logger.error(f"Error computing favorite service for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to compute favorite service: {str(e)}")

    def worker_status_counts(self, worker_id: str) -> Dict[str, int]:
        try:
            rows = (
                self.db.query(Reservation.status, func.count(Reservation.id))
                .filter(Reservation.worker_id == worker_id)
                .group_by(Reservation.status)
                .all()
            )
            return {str(status): int(count) for status, count in rows}
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting reservations for worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to count worker reservations: {str(e)}")

    def worker_earnings(self, worker_id: str) -> Decimal:
        try:
            value = (
                self.db.query(func.coalesce(func.sum(Reservation.final_price), 0))
                .filter(
                    Reservation.worker_id == worker_id,
                    Reservation.status == ReservationStatus.COMPLETED.value,
                )
                .scalar()
            )
            return Decimal(str(value or 0))
        except SQLAlchemyError as e:
            self.logger.error(f"Error summing earnings for worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to compute earnings: {str(e)}")
