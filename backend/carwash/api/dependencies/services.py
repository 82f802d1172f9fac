# backend/carwash/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.auth_service import AuthService
from ...services.availability_service import AvailabilityService
from ...services.cache_service import CacheService, get_cache_service
from ...services.catalog_service import CatalogService
from ...services.history_service import HistoryService
from ...services.notification_service import NotificationService
from ...services.payment_method_service import PaymentMethodService
from ...services.rating_service import RatingService
from ...services.reservation_service import ReservationService
from ...services.user_service import UserService
from ...services.worker_service import WorkerService
from ...services.worker_stats_service import WorkerStatsService
from .database import get_db


@lru_cache(maxsize=1)
def get_cache_service_singleton() -> CacheService:
    """Get singleton cache service instance."""
    return get_cache_service()


def get_cache_service_dep() -> CacheService:
    """Get cache service instance for dependency injection."""
    return get_cache_service_singleton()


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_worker_service(
    db: Session = Depends(get_db),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> WorkerService:
    return WorkerService(db, availability_service=availability_service)


def get_worker_stats_service(db: Session = Depends(get_db)) -> WorkerStatsService:
    return WorkerStatsService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_reservation_service(
    db: Session = Depends(get_db),
    availability_service: AvailabilityService = Depends(get_availability_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> ReservationService:
    """
    Get reservation service instance.

    The availability and notification services share the request session
    so a reservation and its notification commit together.
    """
    return ReservationService(
        db,
        availability_service=availability_service,
        notification_service=notification_service,
    )


def get_rating_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
) -> RatingService:
    return RatingService(db, notification_service=notification_service)


def get_payment_method_service(db: Session = Depends(get_db)) -> PaymentMethodService:
    return PaymentMethodService(db)


def get_history_service(db: Session = Depends(get_db)) -> HistoryService:
    return HistoryService(db)
