# backend/carwash/schemas/payment_method.py
from datetime import datetime
from typing import Optional

from .base import StrictModel, StrictRequestModel


class PaymentMethodCreate(StrictRequestModel):
    type: str
    last_four: Optional[str] = None
    holder_name: Optional[str] = None
    expiry: Optional[str] = None  # MM/YY
    brand: Optional[str] = None


class PaymentMethodResponse(StrictModel):
    id: str
    type: str
    last_four: Optional[str]
    holder_name: Optional[str]
    expiry: Optional[str]
    brand: Optional[str]
    is_principal: bool
    is_active: bool
    created_at: Optional[datetime]
