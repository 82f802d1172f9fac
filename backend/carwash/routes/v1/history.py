# backend/carwash/routes/v1/history.py
"""Service history and spending statistics - API v1."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import get_current_active_user, get_history_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.history import (
    HistoryStatsResponse,
    HistorySummaryResponse,
    MonthlyStat,
    MonthlyStatsResponse,
)
from ...schemas.reservation import ReservationResponse
from ...services.history_service import HistoryService

router = APIRouter(tags=["history-v1"])


@router.get("/stats", response_model=HistoryStatsResponse)
def get_stats(
    start: Optional[datetime] = Query(None, description="Defaults to one year before end"),
    end: Optional[datetime] = Query(None, description="Defaults to now"),
    current_user: User = Depends(get_current_active_user),
    history_service: HistoryService = Depends(get_history_service),
) -> HistoryStatsResponse:
    try:
        return HistoryStatsResponse(**history_service.stats(current_user.id, start=start, end=end))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/monthly", response_model=MonthlyStatsResponse)
def get_monthly_stats(
    months: int = Query(6),
    current_user: User = Depends(get_current_active_user),
    history_service: HistoryService = Depends(get_history_service),
) -> MonthlyStatsResponse:
    try:
        rows = history_service.monthly_stats(current_user.id, months=months)
    except DomainException as e:
        handle_domain_exception(e)
    return MonthlyStatsResponse(months=[MonthlyStat(**row) for row in rows])


@router.get("/filtered", response_model=List[ReservationResponse])
def get_filtered_history(
    start: Optional[datetime] = Query(None, description="Defaults to one year before end"),
    end: Optional[datetime] = Query(None, description="Defaults to now"),
    service_id: Optional[str] = Query(None),
    worker_id: Optional[str] = Query(None),
    current_user: User = Depends(get_current_active_user),
    history_service: HistoryService = Depends(get_history_service),
) -> List[ReservationResponse]:
    """Completed reservations in a period, optionally narrowed to one service or worker."""
    try:
        reservations = history_service.filtered_history(
            current_user.id, start=start, end=end, service_id=service_id, worker_id=worker_id
        )
    except DomainException as e:
        handle_domain_exception(e)
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.get("/summary", response_model=HistorySummaryResponse)
def get_summary(
    current_user: User = Depends(get_current_active_user),
    history_service: HistoryService = Depends(get_history_service),
) -> HistorySummaryResponse:
    return HistorySummaryResponse(**history_service.summary(current_user.id))
