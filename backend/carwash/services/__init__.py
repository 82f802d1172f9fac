# backend/carwash/services/__init__.py
"""Service layer: business rules on top of the repositories."""

from .auth_service import AuthService
from .availability_service import AvailabilityService
from .base import BaseService
from .catalog_service import CatalogService
from .history_service import HistoryService
from .notification_service import NotificationService
from .payment_method_service import PaymentMethodService
from .rating_service import RatingService
from .reservation_service import ReservationService
from .user_service import UserService
from .worker_service import WorkerService
from .worker_stats_service import WorkerStatsService

__all__ = [
    "AuthService",
    "AvailabilityService",
    "BaseService",
    "CatalogService",
    "HistoryService",
    "NotificationService",
    "PaymentMethodService",
    "RatingService",
    "ReservationService",
    "UserService",
    "WorkerService",
    "WorkerStatsService",
]
