# backend/carwash/core/validators.py
"""Field-level checks shared by registration and profile updates."""

import re
from typing import Optional

from .enums import DocumentType, VehicleType
from .exceptions import ValidationException

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Colombian plates: three letters, three digits
PLATE_RE = re.compile(r"^[A-Z]{3}\d{3}$")
# Colombian mobile numbers, optional +57 prefix
PHONE_RE = re.compile(r"^(?:\+57)?\s?3\d{2}\s?\d{3}\s?\d{4}$")

MIN_PASSWORD_LENGTH = 8


def validate_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not EMAIL_RE.match(normalized):
        raise ValidationException("Invalid email format")
    return normalized


def validate_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def validate_plate(plate: str) -> str:
    normalized = (plate or "").strip().upper().replace(" ", "").replace("-", "")
    if not PLATE_RE.match(normalized):
        raise ValidationException("Invalid vehicle plate, expected format ABC123")
    return normalized


def validate_phone(phone: str) -> str:
    normalized = (phone or "").strip()
    if not PHONE_RE.match(normalized):
        raise ValidationException("Invalid Colombian mobile phone number")
    return normalized


def validate_document_type(value: str) -> str:
    try:
        return DocumentType(value).value
    except ValueError:
        raise ValidationException(
            "Invalid document type", details={"allowed": [d.value for d in DocumentType]}
        )


def validate_vehicle_type(value: Optional[str]) -> str:
    try:
        return VehicleType(value).value
    except ValueError:
        raise ValidationException(
            "Invalid vehicle type", details={"allowed": [v.value for v in VehicleType]}
        )
