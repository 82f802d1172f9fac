# backend/carwash/services/auth_service.py
"""
AuthService: registration, login and token lifecycle.

Login failures are distinguished: an unknown email is a 404 and a wrong
password a 401.
"""

from typing import Any, Dict

from jwt import PyJWTError
from sqlalchemy.orm import Session

from ..auth import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from ..core.config import settings
from ..core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from ..core.timezone_utils import utc_now
from ..core.validators import (
    validate_document_type,
    validate_email,
    validate_password,
    validate_phone,
    validate_plate,
    validate_vehicle_type,
)
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.auth import RegisterRequest
from .base import BaseService


class AuthService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.token_repository = RepositoryFactory.create_refresh_token_repository(db)

    @BaseService.measure_operation("register")
    def register(self, data: RegisterRequest) -> Dict[str, Any]:
        """Create a fully profiled account and issue a token pair."""
        email = validate_email(data.email)
        validate_password(data.password)
        plate = validate_plate(data.vehicle_plate)
        phone = validate_phone(data.phone)
        document_type = validate_document_type(data.document_type)
        vehicle_type = validate_vehicle_type(data.vehicle_type)

        if self.user_repository.email_exists(email):
            raise ConflictException("Email is already registered", code="EMAIL_TAKEN")
        if self.user_repository.document_exists(data.document_number):
            raise ConflictException("Document is already registered", code="DOCUMENT_TAKEN")

        with self.transaction():
            user = self.user_repository.create(
                email=email,
                hashed_password=get_password_hash(data.password),
                full_name=data.full_name.strip(),
                phone=phone,
                document_type=document_type,
                document_number=data.document_number,
                vehicle_plate=plate,
                vehicle_type=vehicle_type,
                vehicle_brand=data.vehicle_brand,
                vehicle_model=data.vehicle_model,
                vehicle_color=data.vehicle_color,
                profile_completed=True,
            )
            tokens = self._issue_tokens(user)

        self.log_operation("register", user_id=user.id)
        return tokens

    @BaseService.measure_operation("register_initial")
    def register_initial(self, email: str, password: str) -> Dict[str, Any]:
        """Email/password sign-up; the profile is completed later."""
        email = validate_email(email)
        validate_password(password)
        if self.user_repository.email_exists(email):
            raise ConflictException("Email is already registered", code="EMAIL_TAKEN")

        with self.transaction():
            user = self.user_repository.create(
                email=email,
                hashed_password=get_password_hash(password),
                full_name="",
                profile_completed=False,
            )
            tokens = self._issue_tokens(user)

        self.log_operation("register_initial", user_id=user.id)
        return tokens

    @BaseService.measure_operation("login")
    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.user_repository.get_by_email(email.strip().lower())
        if user is None:
            raise NotFoundException("User not found")
        if not verify_password(password, user.hashed_password):
            raise UnauthorizedException("Incorrect email or password")
        if not user.is_active:
            raise ForbiddenException("Account is inactive")

        with self.transaction():
            tokens = self._issue_tokens(user)
        return tokens

    @BaseService.measure_operation("refresh")
    def refresh(self, refresh_token: str) -> Dict[str, Any]:
        try:
            payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        except PyJWTError as e:
            self.logger.warning(f"Refresh token rejected: {e}")
            raise UnauthorizedException("Invalid refresh token")

        stored = self.token_repository.get_by_token(refresh_token)
        if stored is None or stored.user_id != payload.get("sub"):
            raise UnauthorizedException("Refresh token not recognized")
        if stored.revoked:
            raise UnauthorizedException("Refresh token has been revoked")
        if stored.is_expired(utc_now()):
            raise UnauthorizedException("Refresh token has expired")

        return {
            "access_token": create_access_token({"sub": stored.user_id}),
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
        }

    @BaseService.measure_operation("logout")
    def logout(self, refresh_token: str) -> bool:
        with self.transaction():
            revoked = self.token_repository.revoke(refresh_token)
        if not revoked:
            self.logger.info("Logout with unknown refresh token")
        return revoked

    def _issue_tokens(self, user: User) -> Dict[str, Any]:
        """Create an access/refresh pair and persist the refresh token (no commit)."""
        refresh_token, expires_at = create_refresh_token(user.id)
        self.token_repository.create(user_id=user.id, token=refresh_token, expires_at=expires_at)
        return {
            "access_token": create_access_token({"sub": user.id}),
            "refresh_token": refresh_token,
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
            "user_id": user.id,
            "profile_completed": bool(user.profile_completed),
        }
