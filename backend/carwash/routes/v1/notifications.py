# backend/carwash/routes/v1/notifications.py
"""Notification inbox routes - API v1."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_active_user, get_notification_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.base import PageResponse, StatusResponse
from ...schemas.notification import (
    NotificationResponse,
    NotificationUnreadCountResponse,
    NotificationUnreadResponse,
)
from ...services.notification_service import NotificationService

router = APIRouter(tags=["notifications-v1"])


@router.get("", response_model=PageResponse[NotificationResponse])
def list_notifications(
    page: int = Query(1),
    limit: int = Query(20),
    is_read: Optional[bool] = Query(None),
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> PageResponse[NotificationResponse]:
    """List notifications for the current user, newest first."""
    try:
        result = service.list_notifications(current_user.id, page=page, limit=limit, is_read=is_read)
    except DomainException as e:
        handle_domain_exception(e)
    return PageResponse[NotificationResponse](
        items=[NotificationResponse.model_validate(n) for n in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


@router.get("/unread", response_model=NotificationUnreadResponse)
def list_unread(
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationUnreadResponse:
    result = service.list_unread(current_user.id)
    return NotificationUnreadResponse(
        items=[NotificationResponse.model_validate(n) for n in result["items"]],
        count=result["count"],
    )


@router.get("/unread-count", response_model=NotificationUnreadCountResponse)
def get_unread_count(
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationUnreadCountResponse:
    return NotificationUnreadCountResponse(unread_count=service.get_unread_count(current_user.id))


@router.get("/type/{notification_type}", response_model=List[NotificationResponse])
def list_by_type(
    notification_type: str,
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> List[NotificationResponse]:
    try:
        return [
            NotificationResponse.model_validate(n)
            for n in service.list_by_type(current_user.id, notification_type)
        ]
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/read-all", response_model=StatusResponse)
def mark_all_notifications_read(
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> StatusResponse:
    count = service.mark_all_read(current_user.id)
    return StatusResponse(success=True, message=f"Marked {count} notifications as read", count=count)


@router.delete("/read", response_model=StatusResponse)
def delete_read_notifications(
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> StatusResponse:
    deleted = service.delete_all_read(current_user.id)
    return StatusResponse(success=True, message=f"Deleted {deleted} notifications", count=deleted)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: str,
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    try:
        return NotificationResponse.model_validate(
            service.mark_read(current_user.id, notification_id)
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{notification_id}", response_model=StatusResponse)
def delete_notification(
    notification_id: str,
    current_user: User = Depends(get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
) -> StatusResponse:
    try:
        service.delete_notification(current_user.id, notification_id)
    except DomainException as e:
        handle_domain_exception(e)
    return StatusResponse(success=True, message="Notification deleted")
