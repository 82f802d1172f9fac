# backend/carwash/schemas/notification.py
"""Schemas for notification inbox endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import StrictModel


class NotificationResponse(StrictModel):
    """Notification inbox entry."""

    id: str
    type: str
    title: str
    message: str
    data: dict[str, Any] | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime | None


class NotificationUnreadResponse(StrictModel):
    items: list[NotificationResponse]
    count: int = Field(..., ge=0)


class NotificationUnreadCountResponse(StrictModel):
    unread_count: int = Field(..., ge=0)
