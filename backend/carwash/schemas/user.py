# backend/carwash/schemas/user.py
from datetime import datetime
from typing import Optional

from .base import StrictModel, StrictRequestModel


class ProfileComplete(StrictRequestModel):
    full_name: str
    phone: str
    document_type: str
    document_number: str
    vehicle_plate: str
    vehicle_type: str
    vehicle_brand: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_color: Optional[str] = None


class ProfileUpdate(StrictRequestModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    vehicle_plate: Optional[str] = None
    vehicle_type: Optional[str] = None
    vehicle_brand: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_color: Optional[str] = None
    profile_photo_url: Optional[str] = None


class UserResponse(StrictModel):
    id: str
    email: str
    full_name: str
    phone: Optional[str]
    document_type: Optional[str]
    document_number: Optional[str]
    vehicle_plate: Optional[str]
    vehicle_type: Optional[str]
    vehicle_brand: Optional[str]
    vehicle_model: Optional[str]
    vehicle_color: Optional[str]
    profile_photo_url: Optional[str]
    is_active: bool
    profile_completed: bool
    created_at: Optional[datetime]
