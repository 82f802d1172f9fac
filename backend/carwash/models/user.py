# backend/carwash/models/user.py
"""
User model for the car-wash platform.

Users are the clients of the marketplace: they book reservations,
rate completed jobs and store payment methods. Vehicle data lives on
the user because a client books for a single vehicle.
"""

import logging
from typing import Any

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base

logger = logging.getLogger(__name__)


class User(Base):
    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(150), nullable=False, default="")
    phone = Column(String(20), nullable=True)

    document_type = Column(String(20), nullable=True)
    document_number = Column(String(30), unique=True, nullable=True)

    vehicle_plate = Column(String(10), nullable=True)
    vehicle_type = Column(String(20), nullable=True)
    vehicle_brand = Column(String(50), nullable=True)
    vehicle_model = Column(String(50), nullable=True)
    vehicle_color = Column(String(30), nullable=True)

    profile_photo_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    profile_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    reservations = relationship("Reservation", back_populates="user")
    payment_methods = relationship(
        "PaymentMethod", back_populates="user", cascade="all, delete-orphan"
    )
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")
    refresh_tokens = relationship(
        "RefreshToken", back_populates="user", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint(
            "document_type IS NULL OR document_type IN ('CC', 'CE', 'PASSPORT')",
            name="ck_users_document_type",
        ),
        CheckConstraint(
            "vehicle_type IS NULL OR vehicle_type IN ('car', 'motorcycle', 'pickup')",
            name="ck_users_vehicle_type",
        ),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        logger.info(f"Creating user with email {self.email}")

    def __repr__(self) -> str:
        return f"<User {self.email}>"
