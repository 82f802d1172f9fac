# backend/carwash/models/rating.py
"""
Rating model.

One rating per completed reservation. The service score is mandatory;
the worker score is optional and feeds the worker's average rating.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Rating(Base):
    __tablename__ = "ratings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    reservation_id = Column(String(26), ForeignKey("reservations.id"), nullable=False)
    user_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    service_id = Column(String(26), ForeignKey("services.id"), nullable=False, index=True)
    worker_id = Column(String(26), ForeignKey("workers.id"), nullable=True, index=True)

    service_score = Column(Integer, nullable=False)
    worker_score = Column(Integer, nullable=True)
    service_comment = Column(Text, nullable=True)
    worker_comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    reservation = relationship("Reservation", back_populates="rating")

    __table_args__ = (
        UniqueConstraint("reservation_id", name="uq_ratings_reservation"),
        CheckConstraint("service_score BETWEEN 1 AND 5", name="ck_ratings_service_score"),
        CheckConstraint(
            "worker_score IS NULL OR worker_score BETWEEN 1 AND 5",
            name="ck_ratings_worker_score",
        ),
    )

    def __repr__(self) -> str:
        return f"<Rating {self.id} reservation={self.reservation_id} score={self.service_score}>"
