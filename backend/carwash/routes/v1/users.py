# backend/carwash/routes/v1/users.py
"""Client profile routes - API v1."""

from fastapi import APIRouter, Depends

from ...api.dependencies import get_current_active_user, get_user_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.user import ProfileComplete, ProfileUpdate, UserResponse
from ...services.user_service import UserService

router = APIRouter(tags=["users-v1"])


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: User = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        return UserResponse.model_validate(user_service.get_profile(current_user.id))
    except DomainException as e:
        handle_domain_exception(e)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        return UserResponse.model_validate(user_service.update_profile(current_user.id, payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/profile/complete", response_model=UserResponse)
def complete_profile(
    payload: ProfileComplete,
    current_user: User = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Finish an account created through /auth/register/initial."""
    try:
        return UserResponse.model_validate(
            user_service.complete_profile(current_user.id, payload)
        )
    except DomainException as e:
        handle_domain_exception(e)
