# backend/carwash/routes/v1/ratings.py
"""
Rating routes - API v1

Endpoints:
    POST /                          → Rate a completed reservation
    GET  /                          → Own ratings, paginated
    GET  /services/{service_id}/stats → Score distribution for a service (public)
    GET  /{rating_id}               → Own rating
    PUT  /{rating_id}               → Edit own rating
"""

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_current_active_user, get_rating_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.base import PageResponse
from ...schemas.rating import RatingCreate, RatingResponse, RatingUpdate, ServiceRatingStats
from ...services.rating_service import RatingService

router = APIRouter(tags=["ratings-v1"])


@router.post("", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def create_rating(
    payload: RatingCreate,
    current_user: User = Depends(get_current_active_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    """
    Submit a rating for a completed reservation.

    One rating per reservation. A worker score triggers a recompute of the
    worker's average rating.
    """
    try:
        return RatingResponse.model_validate(rating_service.create_rating(current_user.id, payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=PageResponse[RatingResponse])
def list_my_ratings(
    page: int = Query(1),
    limit: int = Query(10),
    current_user: User = Depends(get_current_active_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> PageResponse[RatingResponse]:
    try:
        result = rating_service.list_user_ratings(current_user.id, page=page, limit=limit)
    except DomainException as e:
        handle_domain_exception(e)
    return PageResponse[RatingResponse](
        items=[RatingResponse.model_validate(r) for r in result["items"]],
        total=result["total"],
        page=result["page"],
        pages=result["pages"],
    )


@router.get("/services/{service_id}/stats", response_model=ServiceRatingStats)
def get_service_rating_stats(
    service_id: str,
    rating_service: RatingService = Depends(get_rating_service),
) -> ServiceRatingStats:
    try:
        return ServiceRatingStats(**rating_service.service_stats(service_id))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{rating_id}", response_model=RatingResponse)
def get_rating(
    rating_id: str,
    current_user: User = Depends(get_current_active_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    try:
        return RatingResponse.model_validate(rating_service.get_rating(rating_id, current_user.id))
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/{rating_id}", response_model=RatingResponse)
def update_rating(
    rating_id: str,
    payload: RatingUpdate,
    current_user: User = Depends(get_current_active_user),
    rating_service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    try:
        rating = rating_service.update_rating(rating_id, current_user.id, payload)
        return RatingResponse.model_validate(rating)
    except DomainException as e:
        handle_domain_exception(e)
