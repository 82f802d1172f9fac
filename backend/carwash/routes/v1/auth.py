# backend/carwash/routes/v1/auth.py
"""
Auth routes - API v1

Endpoints:
    POST /register          → Full sign-up with vehicle and document data
    POST /register/initial  → Email/password sign-up, profile completed later
    POST /login             → Exchange credentials for a token pair
    POST /refresh           → New access token from a refresh token
    POST /logout            → Revoke a refresh token
    GET  /me                → Current account
"""

import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_auth_service, get_current_active_user
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...models.user import User
from ...schemas.auth import (
    AuthResponse,
    InitialRegisterRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from ...schemas.base import StatusResponse
from ...schemas.user import UserResponse
from ...services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth-v1"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        return AuthResponse(**auth_service.register(payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/register/initial", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register_initial(
    payload: InitialRegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        return AuthResponse(**auth_service.register_initial(payload.email, payload.password))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Login with email and password.

    Unknown email returns 404, wrong password 401 and an inactive
    account 403.
    """
    try:
        return AuthResponse(**auth_service.login(payload.email, payload.password))
    except DomainException as e:
        logger.info(f"Login failed for {payload.email}: {e.code}")
        handle_domain_exception(e)


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    payload: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    try:
        return TokenResponse(**auth_service.refresh(payload.refresh_token))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/logout", response_model=StatusResponse)
def logout(
    payload: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> StatusResponse:
    try:
        auth_service.logout(payload.refresh_token)
    except DomainException as e:
        handle_domain_exception(e)
    return StatusResponse(success=True, message="Logged out")


@router.get("/me", response_model=UserResponse)
def read_me(current_user: User = Depends(get_current_active_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
