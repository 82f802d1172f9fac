# backend/carwash/routes/v1/workers.py
"""
Worker directory routes - API v1

Endpoints:
    GET /                       → Active workers, paginated by name
    GET /search                 → Search workers by name
    GET /top                    → Best rated active workers
    GET /available              → Every active worker, unpaginated
    GET /available/count        → Number of active workers
    GET /by-rating              → Active workers at or above a minimum rating
    GET /{worker_id}            → Worker detail with weekly schedule
    GET /{worker_id}/availability → Can the worker take this interval?
    GET /{worker_id}/ratings    → Ratings received, with average
    GET /{worker_id}/stats      → Reservation and rating statistics
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query

from ...api.dependencies import (
    get_rating_service,
    get_worker_service,
    get_worker_stats_service,
)
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...schemas.base import CountResponse, PageResponse
from ...schemas.rating import RatingResponse, WorkerRatingsResponse
from ...schemas.worker import (
    AvailabilityResponse,
    WorkerResponse,
    WorkerStatsResponse,
    WorkerSummary,
)
from ...services.rating_service import RatingService
from ...services.worker_service import WorkerService
from ...services.worker_stats_service import WorkerStatsService

router = APIRouter(tags=["workers-v1"])


def _to_page(result: dict) -> PageResponse[WorkerResponse]:
    return PageResponse[WorkerResponse](
        items=[WorkerResponse.model_validate(w) for w in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


# Static routes first (before dynamic routes with path parameters)


@router.get("", response_model=PageResponse[WorkerResponse])
def list_workers(
    page: int = Query(1),
    limit: int = Query(10),
    worker_service: WorkerService = Depends(get_worker_service),
) -> PageResponse[WorkerResponse]:
    try:
        return _to_page(worker_service.list_workers(page=page, limit=limit))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/search", response_model=PageResponse[WorkerResponse])
def search_workers(
    q: str = Query(...),
    page: int = Query(1),
    limit: int = Query(10),
    worker_service: WorkerService = Depends(get_worker_service),
) -> PageResponse[WorkerResponse]:
    try:
        return _to_page(worker_service.search_workers(q, page=page, limit=limit))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/top", response_model=List[WorkerSummary])
def top_workers(
    limit: int = Query(5, ge=1, le=50),
    stats_service: WorkerStatsService = Depends(get_worker_stats_service),
) -> List[WorkerSummary]:
    return [WorkerSummary(**row) for row in stats_service.top_workers(limit)]


@router.get("/available", response_model=List[WorkerSummary])
def list_available_workers(
    worker_service: WorkerService = Depends(get_worker_service),
) -> List[WorkerSummary]:
    return [WorkerSummary.model_validate(w) for w in worker_service.list_active()]


@router.get("/available/count", response_model=CountResponse)
def count_available_workers(
    worker_service: WorkerService = Depends(get_worker_service),
) -> CountResponse:
    return CountResponse(count=worker_service.count_active())


@router.get("/by-rating", response_model=List[WorkerSummary])
def workers_by_rating(
    min_rating: float = Query(...),
    worker_service: WorkerService = Depends(get_worker_service),
) -> List[WorkerSummary]:
    try:
        return [
            WorkerSummary.model_validate(w) for w in worker_service.list_by_min_rating(min_rating)
        ]
    except DomainException as e:
        handle_domain_exception(e)


# Dynamic routes with path parameters


@router.get("/{worker_id}", response_model=WorkerResponse)
def get_worker(
    worker_id: str,
    worker_service: WorkerService = Depends(get_worker_service),
) -> WorkerResponse:
    try:
        return WorkerResponse.model_validate(worker_service.get_worker(worker_id))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{worker_id}/availability", response_model=AvailabilityResponse)
def check_availability(
    worker_id: str,
    start: datetime = Query(..., description="Candidate start; values without an offset are business-local time"),
    duration_minutes: int = Query(..., ge=1, le=24 * 60),
    worker_service: WorkerService = Depends(get_worker_service),
) -> AvailabilityResponse:
    """
    Report whether the worker can be booked for [start, start + duration).

    Never errors for unknown or inactive workers; they are simply unavailable.
    """
    available = worker_service.check_availability(worker_id, start, duration_minutes)
    return AvailabilityResponse(
        worker_id=worker_id, start=start, duration_minutes=duration_minutes, available=available
    )


@router.get("/{worker_id}/ratings", response_model=WorkerRatingsResponse)
def list_worker_ratings(
    worker_id: str,
    page: int = Query(1),
    limit: int = Query(10),
    rating_service: RatingService = Depends(get_rating_service),
) -> WorkerRatingsResponse:
    try:
        result = rating_service.list_worker_ratings(worker_id, page=page, limit=limit)
    except DomainException as e:
        handle_domain_exception(e)
    return WorkerRatingsResponse(
        worker_id=result["worker_id"],
        average=result["average"],
        items=[RatingResponse.model_validate(r) for r in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


@router.get("/{worker_id}/stats", response_model=WorkerStatsResponse)
def get_worker_stats(
    worker_id: str,
    stats_service: WorkerStatsService = Depends(get_worker_stats_service),
) -> WorkerStatsResponse:
    try:
        return WorkerStatsResponse(**stats_service.worker_stats(worker_id))
    except DomainException as e:
        handle_domain_exception(e)
