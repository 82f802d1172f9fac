# backend/carwash/services/reservation_service.py
"""
Reservation Service for the car-wash platform.

Handles the reservation lifecycle:

    pending -> confirmed -> in_progress -> completed
    pending | confirmed -> cancelled (at least one hour before start)

Public bookings are created directly in ``confirmed`` with the service
price copied onto the reservation.

A client holds at most one non-terminal reservation. The pre-check gives
a clear error; the partial unique index on reservations makes the rule
hold under concurrent requests too. Worker availability is only checked,
never locked, so two clients can still book the same worker slot.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import RESERVATION_TRANSITIONS, ReservationEvent, ReservationStatus
from ..core.exceptions import (
    ActiveReservationExistsException,
    BusinessRuleException,
    ForbiddenException,
    NotFoundException,
    RepositoryException,
    ValidationException,
    WorkerUnavailableException,
)
from ..core.timezone_utils import ensure_utc, from_client_time, to_business_time, utc_now
from ..models.reservation import Reservation
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.reservation import ReservationCreate
from .availability_service import AvailabilityService
from .base import BaseService
from .notification_service import NotificationService

_EVENT_FOR_STATUS: Dict[ReservationStatus, ReservationEvent] = {
    ReservationStatus.CONFIRMED: ReservationEvent.CONFIRMED,
    ReservationStatus.IN_PROGRESS: ReservationEvent.STARTED,
    ReservationStatus.COMPLETED: ReservationEvent.COMPLETED,
    ReservationStatus.CANCELLED: ReservationEvent.CANCELLED,
}

DEFAULT_CANCELLATION_REASON = "Cancelled by user"


class ReservationService(BaseService):
    """Service layer for reservation operations."""

    def __init__(
        self,
        db: Session,
        availability_service: Optional[AvailabilityService] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        super().__init__(db)
        self.repository = RepositoryFactory.create_reservation_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.service_repository = RepositoryFactory.create_service_repository(db)
        self.worker_repository = RepositoryFactory.create_worker_repository(db)
        self.availability_service = availability_service or AvailabilityService(db)
        self.notification_service = notification_service or NotificationService(db)

    @BaseService.measure_operation("create_reservation")
    def create_reservation(self, user_id: str, data: ReservationCreate) -> Reservation:
        """
        Book a service for a client.

        Raises:
            NotFoundException: user, service or worker does not exist
            ActiveReservationExistsException: client already holds an active reservation
            BusinessRuleException: service inactive, worker inactive or unavailable
            ValidationException: start not in the future or spanning midnight
        """
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")

        active = self.repository.get_active_for_user(user_id)
        if active is not None:
            raise ActiveReservationExistsException(active.id)

        service = self.service_repository.get_by_id(data.service_id)
        if service is None:
            raise NotFoundException("Service not found")
        if not service.is_active:
            raise BusinessRuleException("Service is not available")

        start = from_client_time(data.start)
        if start <= utc_now():
            raise ValidationException("Reservation start must be in the future")

        end = start + timedelta(minutes=service.duration_minutes)
        if to_business_time(end).date() != to_business_time(start).date():
            raise ValidationException("Reservations must start and end on the same day")

        if data.worker_id:
            self._check_worker(data.worker_id, start, service.duration_minutes)

        with self.transaction():
            try:
                reservation = self.repository.create(
                    user_id=user_id,
                    service_id=service.id,
                    worker_id=data.worker_id,
                    start=start,
                    end=end,
                    status=ReservationStatus.CONFIRMED.value,
                    final_price=service.price,
                    service_address=data.service_address,
                    client_notes=data.client_notes,
                )
            except RepositoryException as e:
                if not self._lost_active_race(e, user_id):
                    raise
                self.logger.warning(f"Reservation insert rejected for user {user_id}: {e}")
                raise ActiveReservationExistsException()
            self.notification_service.notify_reservation_event(
                user_id, reservation.id, ReservationEvent.CREATED
            )

        prometheus_metrics.inc_reservation_event("created")
        self.log_operation("create_reservation", reservation_id=reservation.id, user_id=user_id)
        return reservation

    def _lost_active_race(self, error: RepositoryException, user_id: str) -> bool:
        """True when the insert hit the one-active-reservation index."""
        if not isinstance(error.__cause__, IntegrityError):
            return False
        return self.repository.get_active_for_user(user_id) is not None

    def _check_worker(self, worker_id: str, start: datetime, duration_minutes: int) -> None:
        worker = self.worker_repository.get_by_id(worker_id)
        if worker is None:
            raise NotFoundException("Worker not found")
        if not worker.is_active:
            raise BusinessRuleException("Worker is not active")
        if not self.availability_service.is_available(worker_id, start, duration_minutes):
            raise WorkerUnavailableException(worker_id)

    @BaseService.measure_operation("list_user_reservations")
    def list_user_reservations(
        self,
        user_id: str,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        skip, limit = self.check_pagination(page, limit)
        status_filter = self.validate_status(status) if status else None
        items, total = self.repository.list_for_user(user_id, status_filter, skip, limit)
        return self.page_result(items, total, page, limit)

    @BaseService.measure_operation("get_reservation")
    def get_reservation(self, reservation_id: str, user_id: str) -> Reservation:
        reservation = self.repository.get_with_details(reservation_id)
        if reservation is None:
            raise NotFoundException("Reservation not found")
        if reservation.user_id != user_id:
            raise ForbiddenException("You do not have access to this reservation")
        return reservation

    def get_active_reservation(self, user_id: str) -> Optional[Reservation]:
        return self.repository.get_active_for_user(user_id)

    @BaseService.measure_operation("cancel_reservation")
    def cancel_reservation(
        self, reservation_id: str, user_id: str, reason: Optional[str] = None
    ) -> Reservation:
        """
        Cancel a reservation on behalf of its owner.

        Only pending/confirmed reservations with at least the configured
        lead time before start can be cancelled.
        """
        reservation = self.get_reservation(reservation_id, user_id)

        if not reservation.is_cancellable:
            raise BusinessRuleException(
                f"Reservations in status '{reservation.status}' cannot be cancelled",
                code="NOT_CANCELLABLE",
            )

        self._check_cancellation_window(reservation)

        with self.transaction():
            reservation.cancel(reason or DEFAULT_CANCELLATION_REASON)
            self.notification_service.notify_reservation_event(
                user_id, reservation.id, ReservationEvent.CANCELLED
            )

        prometheus_metrics.inc_reservation_event("cancelled")
        self.log_operation("cancel_reservation", reservation_id=reservation.id)
        return reservation

    @staticmethod
    def _check_cancellation_window(reservation: Reservation) -> None:
        lead = ensure_utc(reservation.start) - utc_now()
        if lead < timedelta(minutes=settings.cancellation_lead_minutes):
            raise BusinessRuleException(
                "Reservations can only be cancelled at least 1 hour before start",
                code="CANCELLATION_WINDOW_CLOSED",
            )

    @BaseService.measure_operation("update_status")
    def update_status(self, reservation_id: str, new_status: str) -> Reservation:
        """Administrative transition along the lifecycle. Terminal states have no exits."""
        reservation = self.repository.get_by_id(reservation_id)
        if reservation is None:
            raise NotFoundException("Reservation not found")

        target = self.validate_status(new_status)
        current = reservation.status_enum
        if target not in RESERVATION_TRANSITIONS[current]:
            raise BusinessRuleException(
                f"Cannot move reservation from '{current.value}' to '{target.value}'",
                code="INVALID_TRANSITION",
            )
        if target == ReservationStatus.CANCELLED:
            self._check_cancellation_window(reservation)

        with self.transaction():
            if target == ReservationStatus.COMPLETED:
                reservation.complete()
            elif target == ReservationStatus.CANCELLED:
                reservation.cancel(reservation.cancellation_reason)
            else:
                reservation.status = target.value
            self.notification_service.notify_reservation_event(
                reservation.user_id, reservation.id, _EVENT_FOR_STATUS[target]
            )

        if target in (ReservationStatus.COMPLETED, ReservationStatus.CANCELLED):
            prometheus_metrics.inc_reservation_event(target.value)
        return reservation

    @BaseService.measure_operation("list_pending_rating")
    def list_pending_rating(self, user_id: str) -> List[Reservation]:
        return self.repository.list_pending_rating(user_id)

    @BaseService.measure_operation("list_history")
    def list_history(self, user_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.list_completed(user_id, skip, limit)
        return self.page_result(items, total, page, limit)

    def count_completed(self, user_id: str) -> int:
        return self.repository.count_by_status(user_id, ReservationStatus.COMPLETED)

    @staticmethod
    def validate_status(status: str) -> ReservationStatus:
        try:
            return ReservationStatus(status)
        except ValueError:
            raise ValidationException(
                f"Invalid reservation status: {status}",
                details={"allowed": [s.value for s in ReservationStatus]},
            )
