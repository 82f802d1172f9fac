# backend/carwash/schemas/auth.py
from typing import Optional

from pydantic import Field

from .base import StrictModel, StrictRequestModel


class RegisterRequest(StrictRequestModel):
    email: str
    password: str
    full_name: str = Field(..., min_length=1, max_length=150)
    phone: str
    document_type: str
    document_number: str = Field(..., min_length=4, max_length=30)
    vehicle_plate: str
    vehicle_type: str
    vehicle_brand: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_color: Optional[str] = None


class InitialRegisterRequest(StrictRequestModel):
    email: str
    password: str


class LoginRequest(StrictRequestModel):
    email: str
    password: str


class RefreshRequest(StrictRequestModel):
    refresh_token: str


class TokenResponse(StrictModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: int


class AuthResponse(TokenResponse):
    user_id: str
    profile_completed: bool
