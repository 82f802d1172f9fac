# backend/carwash/api/dependencies/__init__.py
"""
FastAPI dependencies.

Import from here rather than from the individual modules.
"""

from .auth import get_current_active_user, get_current_user
from .database import get_db
from .services import (
    get_auth_service,
    get_availability_service,
    get_cache_service_dep,
    get_catalog_service,
    get_history_service,
    get_notification_service,
    get_payment_method_service,
    get_rating_service,
    get_reservation_service,
    get_user_service,
    get_worker_service,
    get_worker_stats_service,
)

__all__ = [
    "get_auth_service",
    "get_availability_service",
    "get_cache_service_dep",
    "get_catalog_service",
    "get_current_active_user",
    "get_current_user",
    "get_db",
    "get_history_service",
    "get_notification_service",
    "get_payment_method_service",
    "get_rating_service",
    "get_reservation_service",
    "get_user_service",
    "get_worker_service",
    "get_worker_stats_service",
]
