# backend/carwash/repositories/schedule_block_repository.py
"""
Schedule block queries.

Overlap uses the half-open test ``block.start < end AND block.end > start``,
so blocks that merely touch a range do not count.
"""

from datetime import datetime
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..core.timezone_utils import ensure_utc
from ..models.schedule_block import ScheduleBlock
from .base_repository import BaseRepository


class ScheduleBlockRepository(BaseRepository[ScheduleBlock]):
    def __init__(self, db: Session):
        super().__init__(db, ScheduleBlock)

    def list_by_worker(self, worker_id: str) -> List[ScheduleBlock]:
        try:
            return (
                self.db.query(ScheduleBlock)
                .filter(ScheduleBlock.worker_id == worker_id)
                .order_by(ScheduleBlock.start.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing blocks for worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to list schedule blocks: {str(e)}")

    def find_overlapping(self, worker_id: str, start: datetime, end: datetime) -> List[ScheduleBlock]:
        try:
            return (
                self.db.query(ScheduleBlock)
                .filter(
                    ScheduleBlock.worker_id == worker_id,
                    ScheduleBlock.start < ensure_utc(end),
                    ScheduleBlock.end > ensure_utc(start),
                )
                .order_by(ScheduleBlock.start.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding overlapping blocks for worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to query schedule blocks: {str(e)}")

    def has_overlap(self, worker_id: str, start: datetime, end: datetime) -> bool:
        return len(self.find_overlapping(worker_id, start, end)) > 0

    def active_at(self, worker_id: str, instant: datetime) -> List[ScheduleBlock]:
        """Blocks in force at a single instant (start inclusive, end exclusive)."""
        try:
            moment = ensure_utc(instant)
            return (
                self.db.query(ScheduleBlock)
                .filter(
                    ScheduleBlock.worker_id == worker_id,
                    ScheduleBlock.start <= moment,
                    ScheduleBlock.end > moment,
                )
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding active blocks for worker {worker_id}: {str(e)}")
            raise RepositoryException(f"Failed to query schedule blocks: {str(e)}")
