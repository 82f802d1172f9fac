# backend/carwash/schemas/catalog.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .base import Money, StrictModel, StrictRequestModel


class ServiceCreate(StrictRequestModel):
    name: str
    description: str
    price: Decimal
    duration_minutes: int
    category: Optional[str] = None
    image_url: Optional[str] = None


class ServiceUpdate(StrictRequestModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    duration_minutes: Optional[int] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class ServiceResponse(StrictModel):
    id: str
    name: str
    description: str
    price: Money
    duration_minutes: int
    category: Optional[str]
    image_url: Optional[str]
    is_active: bool
    created_at: Optional[datetime]
