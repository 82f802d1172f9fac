# backend/carwash/services/rating_service.py
"""
RatingService: business logic for ratings.

Implements:
- Eligibility and submission (one per completed reservation, owner only)
- Score and comment validation
- Worker average recomputation over all of the worker's scores
- Per-service score statistics
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.enums import ReservationStatus
from ..core.exceptions import (
    BusinessRuleException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..models.rating import Rating
from ..repositories.factory import RepositoryFactory
from ..schemas.rating import RatingCreate, RatingUpdate
from .base import BaseService
from .notification_service import NotificationService

MAX_COMMENT_LENGTH = 1000


class RatingService(BaseService):
    """Service layer for ratings."""

    def __init__(self, db: Session, notification_service: Optional[NotificationService] = None):
        super().__init__(db)
        self.repository = RepositoryFactory.create_rating_repository(db)
        self.reservation_repository = RepositoryFactory.create_reservation_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.worker_repository = RepositoryFactory.create_worker_repository(db)
        self.service_repository = RepositoryFactory.create_service_repository(db)
        self.notification_service = notification_service or NotificationService(db)

    @BaseService.measure_operation("create_rating")
    def create_rating(self, user_id: str, data: RatingCreate) -> Rating:
        if self.user_repository.get_by_id(user_id) is None:
            raise NotFoundException("User not found")

        reservation = self.reservation_repository.get_by_id(data.reservation_id)
        if reservation is None:
            raise NotFoundException("Reservation not found")
        if reservation.user_id != user_id:
            raise ForbiddenException("You can only rate your own reservations")
        if reservation.status != ReservationStatus.COMPLETED.value:
            raise BusinessRuleException("Only completed reservations can be rated")
        if self.repository.exists_for_reservation(reservation.id):
            raise BusinessRuleException(
                "This reservation has already been rated", code="ALREADY_RATED"
            )

        self._validate_scores(data.service_score, data.worker_score)
        self._validate_comment(data.service_comment, "Service comment")
        self._validate_comment(data.worker_comment, "Worker comment")

        with self.transaction():
            rating = self.repository.create(
                reservation_id=reservation.id,
                user_id=user_id,
                service_id=reservation.service_id,
                worker_id=reservation.worker_id,
                service_score=data.service_score,
                worker_score=data.worker_score,
                service_comment=data.service_comment,
                worker_comment=data.worker_comment,
            )
            if reservation.worker_id and data.worker_score is not None:
                self._recompute_worker_average(reservation.worker_id)
            self.notification_service.notify_rating(user_id, rating.id)

        self.log_operation("create_rating", rating_id=rating.id, reservation_id=reservation.id)
        return rating

    @BaseService.measure_operation("get_rating")
    def get_rating(self, rating_id: str, user_id: str) -> Rating:
        rating = self.repository.get_by_id(rating_id)
        if rating is None:
            raise NotFoundException("Rating not found")
        if rating.user_id != user_id:
            raise ForbiddenException("You do not have access to this rating")
        return rating

    @BaseService.measure_operation("list_user_ratings")
    def list_user_ratings(self, user_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.list_for_user(user_id, skip, limit)
        return self.page_result(items, total, page, limit)

    @BaseService.measure_operation("list_worker_ratings")
    def list_worker_ratings(self, worker_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        if self.worker_repository.get_by_id(worker_id) is None:
            raise NotFoundException("Worker not found")
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.list_for_worker(worker_id, skip, limit)
        result = self.page_result(items, total, page, limit)
        result["worker_id"] = worker_id
        result["average"] = self.repository.worker_score_aggregates(worker_id)["average"]
        return result

    @BaseService.measure_operation("update_rating")
    def update_rating(self, rating_id: str, user_id: str, data: RatingUpdate) -> Rating:
        rating = self.get_rating(rating_id, user_id)
        changes = data.model_dump(exclude_unset=True)

        self._validate_scores(
            changes.get("service_score", rating.service_score),
            changes.get("worker_score", rating.worker_score),
        )
        self._validate_comment(changes.get("service_comment"), "Service comment")
        self._validate_comment(changes.get("worker_comment"), "Worker comment")

        with self.transaction():
            for key, value in changes.items():
                setattr(rating, key, value)
            self.db.flush()
            if rating.worker_id and "worker_score" in changes:
                self._recompute_worker_average(rating.worker_id)
        return rating

    @BaseService.measure_operation("service_stats")
    def service_stats(self, service_id: str) -> Dict[str, Any]:
        if self.service_repository.get_by_id(service_id) is None:
            raise NotFoundException("Service not found")
        distribution = self.repository.service_score_distribution(service_id)
        total = sum(distribution.values())
        weighted = sum(score * count for score, count in distribution.items())
        return {
            "service_id": service_id,
            "average": round(weighted / total, 2) if total else None,
            "total": total,
            "distribution": distribution,
        }

    def _recompute_worker_average(self, worker_id: str) -> None:
        """Full recompute over every worker score; runs inside the caller's transaction."""
        aggregates = self.repository.worker_score_aggregates(worker_id)
        average = aggregates["average"]
        value = (
            Decimal(str(average)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
            if average is not None
            else Decimal("0")
        )
        self.worker_repository.set_average_rating(worker_id, value)
        self.logger.info(f"Worker {worker_id} average rating now {value} ({aggregates['total']} scores)")

    @staticmethod
    def _validate_scores(service_score: Any, worker_score: Any) -> None:
        if not _is_score(service_score):
            raise ValidationException("Service score must be an integer between 1 and 5")
        if worker_score is not None and not _is_score(worker_score):
            raise ValidationException("Worker score must be an integer between 1 and 5")

    @staticmethod
    def _validate_comment(comment: Optional[str], label: str) -> None:
        if comment is not None and len(comment) > MAX_COMMENT_LENGTH:
            raise ValidationException(f"{label} must be at most {MAX_COMMENT_LENGTH} characters")


def _is_score(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 5
