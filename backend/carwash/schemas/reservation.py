# backend/carwash/schemas/reservation.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import Money, StrictModel, StrictRequestModel
from .catalog import ServiceResponse
from .worker import WorkerSummary


class ReservationCreate(StrictRequestModel):
    service_id: str = Field(..., min_length=1)
    start: datetime = Field(..., description="Start instant; values without an offset are business-local time")
    worker_id: Optional[str] = None
    service_address: Optional[str] = Field(None, max_length=255)
    client_notes: Optional[str] = Field(None, max_length=1000)


class ReservationCancel(StrictRequestModel):
    reason: Optional[str] = Field(None, max_length=500)


class ReservationStatsResponse(StrictModel):
    completed: int = Field(..., ge=0)


class ReservationResponse(StrictModel):
    id: str
    user_id: str
    service_id: str
    worker_id: Optional[str]
    start: datetime
    end: datetime
    status: str
    final_price: Money
    service_address: Optional[str]
    client_notes: Optional[str]
    created_at: Optional[datetime]
    completed_at: Optional[datetime]
    cancelled_at: Optional[datetime]
    cancellation_reason: Optional[str]


class ReservationDetailResponse(ReservationResponse):
    service: Optional[ServiceResponse] = None
    worker: Optional[WorkerSummary] = None
