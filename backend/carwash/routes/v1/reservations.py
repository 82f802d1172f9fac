# backend/carwash/routes/v1/reservations.py
"""
Reservation routes - API v1

All business logic delegated to ReservationService. Every endpoint acts on
the authenticated client's own reservations.

Endpoints:
    POST /                  → Book a service (optionally with a worker)
    GET  /                  → Own reservations, optional status filter
    GET  /active            → Current non-terminal reservation, if any
    GET  /pending-rating    → Completed reservations without a rating
    GET  /history           → Completed reservations, paginated
    GET  /stats             → Number of completed reservations
    GET  /{reservation_id}  → Reservation detail
    POST /{reservation_id}/cancel → Cancel with at least one hour of lead time
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...api.dependencies import get_current_active_user, get_reservation_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.base import PageResponse
from ...schemas.reservation import (
    ReservationCancel,
    ReservationCreate,
    ReservationDetailResponse,
    ReservationResponse,
    ReservationStatsResponse,
)
from ...services.reservation_service import ReservationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reservations-v1"])


def _to_page(result: dict) -> PageResponse[ReservationResponse]:
    return PageResponse[ReservationResponse](
        items=[ReservationResponse.model_validate(r) for r in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreate,
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ReservationResponse:
    """
    Create a reservation in the confirmed state.

    The worker availability check is advisory; concurrent bookings of the
    same worker slot are not fenced.
    """
    try:
        reservation = reservation_service.create_reservation(current_user.id, payload)
        return ReservationResponse.model_validate(reservation)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=PageResponse[ReservationResponse])
def list_reservations(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1),
    limit: int = Query(10),
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> PageResponse[ReservationResponse]:
    try:
        return _to_page(
            reservation_service.list_user_reservations(
                current_user.id, status=status_filter, page=page, limit=limit
            )
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/active", response_model=Optional[ReservationResponse])
def get_active_reservation(
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> Optional[ReservationResponse]:
    reservation = reservation_service.get_active_reservation(current_user.id)
    return ReservationResponse.model_validate(reservation) if reservation else None


@router.get("/pending-rating", response_model=List[ReservationResponse])
def list_pending_rating(
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> List[ReservationResponse]:
    return [
        ReservationResponse.model_validate(r)
        for r in reservation_service.list_pending_rating(current_user.id)
    ]


@router.get("/history", response_model=PageResponse[ReservationResponse])
def list_history(
    page: int = Query(1),
    limit: int = Query(10),
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> PageResponse[ReservationResponse]:
    try:
        return _to_page(reservation_service.list_history(current_user.id, page=page, limit=limit))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/stats", response_model=ReservationStatsResponse)
def get_reservation_stats(
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ReservationStatsResponse:
    return ReservationStatsResponse(completed=reservation_service.count_completed(current_user.id))


@router.get("/{reservation_id}", response_model=ReservationDetailResponse)
def get_reservation(
    reservation_id: str,
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ReservationDetailResponse:
    try:
        reservation = reservation_service.get_reservation(reservation_id, current_user.id)
        return ReservationDetailResponse.model_validate(reservation)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: str,
    payload: Optional[ReservationCancel] = Body(None),
    current_user: User = Depends(get_current_active_user),
    reservation_service: ReservationService = Depends(get_reservation_service),
) -> ReservationResponse:
    try:
        reservation = reservation_service.cancel_reservation(
            reservation_id, current_user.id, reason=payload.reason if payload else None
        )
        return ReservationResponse.model_validate(reservation)
    except DomainException as e:
        handle_domain_exception(e)
