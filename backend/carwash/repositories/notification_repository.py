"""Repository for the client notification inbox."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional, cast

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from ..core.enums import NotificationType
from ..core.exceptions import RepositoryException
from ..models.notification import Notification
from .base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Data access for inbox entries."""

    def __init__(self, db: Session) -> None:
        super().__init__(db, Notification)

    def _for_user(self, user_id: str, is_read: Optional[bool] = None) -> Query:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if is_read is not None:
            query = query.filter(Notification.is_read.is_(is_read))
        return query

    def create_notification(
        self,
        user_id: str,
        type: NotificationType | str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        try:
            type_value = NotificationType(type).value
        except ValueError:
            raise RepositoryException(f"Invalid notification type: {type}")
        notification = Notification(
            user_id=user_id,
            type=type_value,
            title=title,
            message=message,
            data=data,
        )
        self.db.add(notification)
        self.db.flush()
        self.db.refresh(notification)
        return notification

    def get_user_notifications(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
        is_read: Optional[bool] = None,
    ) -> List[Notification]:
        query = (
            self._for_user(user_id, is_read)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return cast(List[Notification], query.all())

    def get_user_notification_count(self, user_id: str, is_read: Optional[bool] = None) -> int:
        query = self.db.query(func.count(Notification.id)).filter(Notification.user_id == user_id)
        if is_read is not None:
            query = query.filter(Notification.is_read.is_(is_read))
        return int(query.scalar() or 0)

    def get_unread_count(self, user_id: str) -> int:
        return self.get_user_notification_count(user_id, is_read=False)

    def get_by_type(self, user_id: str, type: NotificationType) -> List[Notification]:
        query = (
            self._for_user(user_id)
            .filter(Notification.type == type.value)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        return cast(List[Notification], query.all())

    def mark_as_read_for_user(self, user_id: str, notification_id: str) -> bool:
        now = datetime.now(timezone.utc)
        updated = (
            self.db.query(Notification)
            .filter(
                Notification.id == notification_id,
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
            .update({"is_read": True, "read_at": now}, synchronize_session="fetch")
        )
        return bool(updated)

    def mark_all_as_read(self, user_id: str) -> int:
        now = datetime.now(timezone.utc)
        updated = (
            self._for_user(user_id, is_read=False)
            .update({"is_read": True, "read_at": now}, synchronize_session="fetch")
        )
        return int(updated or 0)

    def delete_for_user(self, user_id: str, notification_id: str) -> bool:
        deleted = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .delete(synchronize_session="fetch")
        )
        return bool(deleted)

    def delete_all_read(self, user_id: str) -> int:
        deleted = self._for_user(user_id, is_read=True).delete(synchronize_session="fetch")
        return int(deleted or 0)
