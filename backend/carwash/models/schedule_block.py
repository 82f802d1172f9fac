# backend/carwash/models/schedule_block.py
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func
import ulid

from ..core.timezone_utils import ensure_utc
from ..database import Base


class ScheduleBlock(Base):
    """
    A full-timestamp range during which a worker cannot be booked
    (vacation, sick day), regardless of their weekly hours.
    """

    __tablename__ = "schedule_blocks"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    worker_id = Column(String(26), ForeignKey("workers.id", ondelete="CASCADE"), nullable=False)
    start = Column(DateTime(timezone=True), nullable=False)
    end = Column(DateTime(timezone=True), nullable=False)
    reason = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    worker = relationship("Worker", back_populates="schedule_blocks")

    __table_args__ = (
        CheckConstraint('"start" < "end"', name="check_block_range"),
        Index("ix_schedule_blocks_worker_range", "worker_id", "start", "end"),
    )

    @validates("start", "end")
    def _normalize_instant(self, key: str, value: datetime) -> datetime:
        # Stored as UTC wall-clock; SQLite keeps no offset
        return ensure_utc(value) if value is not None else value

    def __repr__(self) -> str:
        return f"<ScheduleBlock worker={self.worker_id} {self.start}..{self.end}>"
