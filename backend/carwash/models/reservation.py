# backend/carwash/models/reservation.py
"""
Reservation model for the car-wash platform.

A reservation books one service for one client, optionally with a
specific worker, over [start, end). The price is a snapshot of the
service price at booking time.

Lifecycle: pending -> confirmed -> in_progress -> completed, with
cancelled reachable from pending/confirmed. Public bookings start in
``confirmed``.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func
import ulid

from ..core.enums import ReservationStatus
from ..core.timezone_utils import ensure_utc
from ..database import Base

logger = logging.getLogger(__name__)

_ACTIVE_STATUS_SQL = "status IN ('pending', 'confirmed', 'in_progress')"


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))

    user_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    service_id = Column(String(26), ForeignKey("services.id"), nullable=False)
    worker_id = Column(String(26), ForeignKey("workers.id"), nullable=True, index=True)

    start = Column(DateTime(timezone=True), nullable=False, index=True)
    end = Column(DateTime(timezone=True), nullable=False)

    status = Column(String(20), nullable=False, default=ReservationStatus.CONFIRMED.value, index=True)
    final_price = Column(Numeric(10, 2), nullable=False)
    service_address = Column(String(255), nullable=True)
    client_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    user = relationship("User", back_populates="reservations")
    service = relationship("Service", back_populates="reservations")
    worker = relationship("Worker", back_populates="reservations")
    rating = relationship("Rating", back_populates="reservation", uselist=False)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'in_progress', 'completed', 'cancelled')",
            name="ck_reservations_status",
        ),
        CheckConstraint('"start" < "end"', name="check_reservation_range"),
        CheckConstraint("final_price >= 0", name="check_reservation_price_non_negative"),
        # At most one non-terminal reservation per client
        Index(
            "uq_reservations_user_active",
            "user_id",
            unique=True,
            sqlite_where=text(_ACTIVE_STATUS_SQL),
            postgresql_where=text(_ACTIVE_STATUS_SQL),
        ),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.status:
            self.status = ReservationStatus.CONFIRMED.value

    @validates("start", "end")
    def _normalize_instant(self, key: str, value: datetime) -> datetime:
        return ensure_utc(value) if value is not None else value

    def __repr__(self) -> str:
        return (
            f"<Reservation {self.id}: user={self.user_id}, worker={self.worker_id}, "
            f"{self.start}-{self.end}, status={self.status}>"
        )

    @property
    def status_enum(self) -> ReservationStatus:
        return ReservationStatus(self.status)

    @property
    def is_active(self) -> bool:
        return self.status_enum in ReservationStatus.active()

    @property
    def is_cancellable(self) -> bool:
        return self.status_enum in ReservationStatus.cancellable()

    def cancel(self, reason: Optional[str] = None) -> None:
        self.status = ReservationStatus.CANCELLED.value
        self.cancelled_at = datetime.now(timezone.utc)
        self.cancellation_reason = reason
        logger.info(f"Reservation {self.id} cancelled")

    def complete(self) -> None:
        self.status = ReservationStatus.COMPLETED.value
        self.completed_at = datetime.now(timezone.utc)
        logger.info(f"Reservation {self.id} marked as completed")
