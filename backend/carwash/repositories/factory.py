# backend/carwash/repositories/factory.py
"""
Repository Factory for the car-wash platform.

Centralizes repository creation so services share one construction path.
"""

from sqlalchemy.orm import Session

from .notification_repository import NotificationRepository
from .payment_method_repository import PaymentMethodRepository
from .rating_repository import RatingRepository
from .refresh_token_repository import RefreshTokenRepository
from .reservation_repository import ReservationRepository
from .schedule_block_repository import ScheduleBlockRepository
from .service_repository import ServiceRepository
from .user_repository import UserRepository
from .worker_repository import WorkerRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_user_repository(db: Session) -> UserRepository:
        return UserRepository(db)

    @staticmethod
    def create_refresh_token_repository(db: Session) -> RefreshTokenRepository:
        return RefreshTokenRepository(db)

    @staticmethod
    def create_service_repository(db: Session) -> ServiceRepository:
        return ServiceRepository(db)

    @staticmethod
    def create_worker_repository(db: Session) -> WorkerRepository:
        return WorkerRepository(db)

    @staticmethod
    def create_schedule_block_repository(db: Session) -> ScheduleBlockRepository:
        return ScheduleBlockRepository(db)

    @staticmethod
    def create_reservation_repository(db: Session) -> ReservationRepository:
        return ReservationRepository(db)

    @staticmethod
    def create_rating_repository(db: Session) -> RatingRepository:
        return RatingRepository(db)

    @staticmethod
    def create_payment_method_repository(db: Session) -> PaymentMethodRepository:
        return PaymentMethodRepository(db)

    @staticmethod
    def create_notification_repository(db: Session) -> NotificationRepository:
        return NotificationRepository(db)
