# backend/carwash/schemas/rating.py
from datetime import datetime
from typing import Dict, List, Optional

from .base import StrictModel, StrictRequestModel


class RatingCreate(StrictRequestModel):
    reservation_id: str
    service_score: int
    worker_score: Optional[int] = None
    service_comment: Optional[str] = None
    worker_comment: Optional[str] = None


class RatingUpdate(StrictRequestModel):
    service_score: Optional[int] = None
    worker_score: Optional[int] = None
    service_comment: Optional[str] = None
    worker_comment: Optional[str] = None


class RatingResponse(StrictModel):
    id: str
    reservation_id: str
    user_id: str
    service_id: str
    worker_id: Optional[str]
    service_score: int
    worker_score: Optional[int]
    service_comment: Optional[str]
    worker_comment: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class WorkerRatingsResponse(StrictModel):
    worker_id: str
    average: Optional[float]
    items: List[RatingResponse]
    total: int
    page: int
    pages: int


class ServiceRatingStats(StrictModel):
    service_id: str
    average: Optional[float]
    total: int
    distribution: Dict[int, int]
