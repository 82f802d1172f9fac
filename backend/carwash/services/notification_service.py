# backend/carwash/services/notification_service.py
"""
Notification inbox service.

Reservation and rating services call the ``notify_*`` helpers as a side
effect of lifecycle changes. Helpers only flush; the caller's
transaction commits them together with the change that triggered them.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import NotificationType, ReservationEvent
from ..core.exceptions import NotFoundException, ValidationException
from ..models.notification import Notification
from ..repositories.factory import RepositoryFactory
from .base import BaseService

RESERVATION_MESSAGES: Dict[ReservationEvent, Dict[str, str]] = {
    ReservationEvent.CREATED: {
        "title": "Reservation created",
        "message": "Your reservation has been created successfully.",
    },
    ReservationEvent.CONFIRMED: {
        "title": "Reservation confirmed",
        "message": "Your reservation has been confirmed.",
    },
    ReservationEvent.STARTED: {
        "title": "Service started",
        "message": "Our team has started working on your vehicle.",
    },
    ReservationEvent.COMPLETED: {
        "title": "Service completed",
        "message": "Your service is complete. Tell us how it went!",
    },
    ReservationEvent.CANCELLED: {
        "title": "Reservation cancelled",
        "message": "Your reservation has been cancelled.",
    },
}


class NotificationService(BaseService):
    """Inbox reads, read-state updates, deletion, and lifecycle notifications."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_notification_repository(db)

    # Creation helpers (no commit)

    def notify_reservation_event(
        self, user_id: str, reservation_id: str, event: ReservationEvent
    ) -> Notification:
        template = RESERVATION_MESSAGES[event]
        return self.repository.create_notification(
            user_id=user_id,
            type=NotificationType.RESERVATION,
            title=template["title"],
            message=template["message"],
            data={"reservation_id": reservation_id, "event": event.value},
        )

    def notify_rating(self, user_id: str, rating_id: str) -> Notification:
        return self.repository.create_notification(
            user_id=user_id,
            type=NotificationType.RATING,
            title="Thanks for your rating",
            message="Your rating has been recorded. Thank you for your feedback!",
            data={"rating_id": rating_id},
        )

    # Reads

    @BaseService.measure_operation("list_notifications")
    def list_notifications(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 20,
        is_read: Optional[bool] = None,
    ) -> Dict[str, Any]:
        skip, limit = self.check_pagination(page, limit)
        items = self.repository.get_user_notifications(user_id, limit=limit, offset=skip, is_read=is_read)
        total = self.repository.get_user_notification_count(user_id, is_read=is_read)
        return self.page_result(items, total, page, limit)

    @BaseService.measure_operation("list_unread")
    def list_unread(self, user_id: str, limit: int = 50) -> Dict[str, Any]:
        items = self.repository.get_user_notifications(user_id, limit=limit, is_read=False)
        return {"items": items, "count": self.repository.get_unread_count(user_id)}

    def get_unread_count(self, user_id: str) -> int:
        return self.repository.get_unread_count(user_id)

    @BaseService.measure_operation("list_by_type")
    def list_by_type(self, user_id: str, type: str) -> List[Notification]:
        try:
            notification_type = NotificationType(type)
        except ValueError:
            raise ValidationException(
                "Invalid notification type",
                details={"allowed": [t.value for t in NotificationType]},
            )
        return self.repository.get_by_type(user_id, notification_type)

    # Updates

    @BaseService.measure_operation("mark_read")
    def mark_read(self, user_id: str, notification_id: str) -> Notification:
        notification = self.repository.get_by_id(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFoundException("Notification not found")

        if not notification.is_read:
            with self.transaction():
                notification.mark_read()
        return notification

    @BaseService.measure_operation("mark_all_read")
    def mark_all_read(self, user_id: str) -> int:
        with self.transaction():
            count = self.repository.mark_all_as_read(user_id)
        self.logger.info(f"Marked {count} notifications read for user {user_id}")
        return count

    @BaseService.measure_operation("delete_notification")
    def delete_notification(self, user_id: str, notification_id: str) -> None:
        with self.transaction():
            deleted = self.repository.delete_for_user(user_id, notification_id)
            if not deleted:
                raise NotFoundException("Notification not found")

    @BaseService.measure_operation("delete_all_read")
    def delete_all_read(self, user_id: str) -> int:
        with self.transaction():
            return self.repository.delete_all_read(user_id)
