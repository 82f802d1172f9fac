# backend/carwash/models/__init__.py
"""
SQLAlchemy models. Importing this package registers every mapper on
``Base.metadata``.
"""

from .notification import Notification
from .payment_method import PaymentMethod
from .rating import Rating
from .refresh_token import RefreshToken
from .reservation import Reservation
from .schedule_block import ScheduleBlock
from .service import Service
from .user import User
from .worker import Worker

__all__ = [
    "Notification",
    "PaymentMethod",
    "Rating",
    "RefreshToken",
    "Reservation",
    "ScheduleBlock",
    "Service",
    "User",
    "Worker",
]
