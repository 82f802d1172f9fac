# backend/carwash/schemas/history.py
from datetime import datetime
from typing import List, Optional

from .base import StrictModel


class HistoryStatsResponse(StrictModel):
    period_start: datetime
    period_end: datetime
    total_reservations: int
    total_spent: float
    average_spent: float
    unique_services: int
    unique_workers: int


class MonthlyStat(StrictModel):
    month: str  # YYYY-MM
    reservations: int
    spent: float


class MonthlyStatsResponse(StrictModel):
    months: List[MonthlyStat]


class FavoriteService(StrictModel):
    id: str
    name: str
    times: int


class HistorySummaryResponse(StrictModel):
    completed: int
    cancelled: int
    total_spent: float
    favorite_service: Optional[FavoriteService]
