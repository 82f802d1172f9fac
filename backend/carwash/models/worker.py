# backend/carwash/models/worker.py
"""
Worker model.

Workers are managed administratively; the public API only reads them.
``average_rating`` is recomputed whenever one of their ratings changes.
"""

from typing import Any, Mapping, Optional

from sqlalchemy import JSON, Boolean, Column, DateTime, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.weekly_schedule import WeeklySchedule
from ..database import Base


class Worker(Base):
    __tablename__ = "workers"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=True)
    phone = Column(String(20), nullable=True)
    profile_photo_url = Column(String(500), nullable=True)
    average_rating = Column(Numeric(3, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    # {"monday": {"open": "08:00", "close": "18:00"}, ..., "sunday": null}
    weekly_schedule = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    schedule_blocks = relationship(
        "ScheduleBlock",
        back_populates="worker",
        cascade="all, delete-orphan",
        order_by="ScheduleBlock.start",
    )
    reservations = relationship("Reservation", back_populates="worker")

    def __init__(self, schedule: Optional[WeeklySchedule] = None, **kwargs: Any) -> None:
        if schedule is not None:
            kwargs["weekly_schedule"] = schedule.to_dict()
        super().__init__(**kwargs)

    @property
    def schedule(self) -> WeeklySchedule:
        raw: Optional[Mapping[str, Any]] = self.weekly_schedule
        return WeeklySchedule.from_mapping(raw)

    @schedule.setter
    def schedule(self, value: WeeklySchedule) -> None:
        self.weekly_schedule = value.to_dict()

    def __repr__(self) -> str:
        return f"<Worker {self.name} active={self.is_active}>"
