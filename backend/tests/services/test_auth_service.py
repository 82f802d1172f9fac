# backend/tests/services/test_auth_service.py
from datetime import timedelta

import pytest

from carwash.auth import REFRESH_TOKEN_TYPE, create_access_token, decode_token
from carwash.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)
from carwash.core.timezone_utils import utc_now
from carwash.models.refresh_token import RefreshToken
from carwash.models.user import User
from carwash.schemas.auth import RegisterRequest
from carwash.services.auth_service import AuthService


@pytest.fixture
def service(db) -> AuthService:
    return AuthService(db)


def registration(**overrides) -> RegisterRequest:
    fields = {
        "email": "  New.Client@Example.com ",
        "password": "Secret123",
        "full_name": "New Client",
        "phone": "3109876543",
        "document_type": "CC",
        "document_number": "3030303030",
        "vehicle_plate": "xyz-987",
        "vehicle_type": "car",
    }
    fields.update(overrides)
    return RegisterRequest(**fields)


def test_register_creates_complete_profile(db, service):
    result = service.register(registration())

    user = db.get(User, result["user_id"])
    assert user.email == "new.client@example.com"
    assert user.vehicle_plate == "XYZ987"
    assert user.profile_completed is True
    assert result["profile_completed"] is True
    assert result["token_type"] == "bearer"
    assert decode_token(result["access_token"])["sub"] == user.id
    assert decode_token(result["refresh_token"], expected_type=REFRESH_TOKEN_TYPE)["sub"] == user.id


def test_register_duplicate_email(service, test_user):
    with pytest.raises(ConflictException) as exc_info:
        service.register(registration(email="CLIENT@example.com"))
    assert exc_info.value.code == "EMAIL_TAKEN"


def test_register_duplicate_document(service, test_user):
    with pytest.raises(ConflictException) as exc_info:
        service.register(registration(document_number=test_user.document_number))
    assert exc_info.value.code == "DOCUMENT_TAKEN"


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"password": "short"},
        {"phone": "6011234567"},
        {"vehicle_plate": "AB1234"},
        {"document_type": "NIT"},
        {"vehicle_type": "truck"},
    ],
)
def test_register_rejects_invalid_fields(service, overrides):
    with pytest.raises(ValidationException):
        service.register(registration(**overrides))


def test_register_initial_defers_profile(db, service):
    result = service.register_initial("starter@example.com", "Secret123")

    user = db.get(User, result["user_id"])
    assert user.profile_completed is False
    assert user.full_name == ""
    assert result["profile_completed"] is False


def test_login(service, test_user, test_password):
    result = service.login(" Client@Example.com", test_password)
    assert result["user_id"] == test_user.id
    assert result["refresh_token"]


def test_login_unknown_email(service):
    with pytest.raises(NotFoundException):
        service.login("nobody@example.com", "whatever123")


def test_login_wrong_password(service, test_user):
    with pytest.raises(UnauthorizedException):
        service.login(test_user.email, "WrongPassword1")


def test_login_inactive_account(db, service, test_user, test_password):
    test_user.is_active = False
    db.commit()
    with pytest.raises(ForbiddenException):
        service.login(test_user.email, test_password)


def test_refresh_issues_new_access_token(service, test_user, test_password):
    tokens = service.login(test_user.email, test_password)
    refreshed = service.refresh(tokens["refresh_token"])

    assert decode_token(refreshed["access_token"])["sub"] == test_user.id
    assert "refresh_token" not in refreshed


def test_refresh_rejects_access_token(service, test_user):
    with pytest.raises(UnauthorizedException):
        service.refresh(create_access_token({"sub": test_user.id}))


def test_refresh_rejects_garbage(service):
    with pytest.raises(UnauthorizedException):
        service.refresh("not-a-token")


def test_logout_revokes_refresh_token(db, service, test_user, test_password):
    tokens = service.login(test_user.email, test_password)

    assert service.logout(tokens["refresh_token"]) is True
    with pytest.raises(UnauthorizedException):
        service.refresh(tokens["refresh_token"])


def test_logout_unknown_token(service):
    assert service.logout("unknown") is False


def test_expired_stored_token(db, service, test_user, test_password):
    tokens = service.login(test_user.email, test_password)
    stored = db.query(RefreshToken).filter_by(token=tokens["refresh_token"]).one()
    stored.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    with pytest.raises(UnauthorizedException):
        service.refresh(tokens["refresh_token"])
