# backend/carwash/schemas/worker.py
from datetime import datetime
from typing import Dict, Optional

from pydantic import Field

from .base import StrictModel

ScheduleWindow = Optional[Dict[str, str]]


class WorkerSummary(StrictModel):
    id: str
    name: str
    profile_photo_url: Optional[str] = None
    average_rating: float


class WorkerResponse(StrictModel):
    id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    profile_photo_url: Optional[str]
    average_rating: float
    is_active: bool
    weekly_schedule: Dict[str, ScheduleWindow] = Field(default_factory=dict)
    created_at: Optional[datetime]


class AvailabilityResponse(StrictModel):
    worker_id: str
    start: datetime
    duration_minutes: int
    available: bool


class WorkerStatsResponse(StrictModel):
    worker_id: str
    total_reservations: int
    completed: int
    cancelled: int
    completion_rate: float
    average_rating: Optional[float]
    total_ratings: int
    total_earnings: float
