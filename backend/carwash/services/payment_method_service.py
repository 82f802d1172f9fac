# backend/carwash/services/payment_method_service.py
"""
Client payment methods.

Card fields are checked for format only. A client keeps at most
``settings.max_active_payment_methods`` active methods and exactly one
of them is principal whenever any exist.
"""

import re
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import CardBrand, PaymentMethodType
from ..core.exceptions import (
    BusinessRuleException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..models.payment_method import PaymentMethod
from ..repositories.factory import RepositoryFactory
from ..schemas.payment_method import PaymentMethodCreate
from .base import BaseService

LAST_FOUR_RE = re.compile(r"^\d{4}$")
EXPIRY_RE = re.compile(r"^(\d{2})/(\d{2})$")


class PaymentMethodService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_payment_method_repository(db)

    def list_payment_methods(self, user_id: str) -> List[PaymentMethod]:
        return self.repository.list_active_for_user(user_id)

    @BaseService.measure_operation("get_payment_method")
    def get_payment_method(self, method_id: str, user_id: str) -> PaymentMethod:
        method = self.repository.get_by_id(method_id)
        if method is None or not method.is_active:
            raise NotFoundException("Payment method not found")
        if method.user_id != user_id:
            raise ForbiddenException("You do not have access to this payment method")
        return method

    @BaseService.measure_operation("create_payment_method")
    def create_payment_method(self, user_id: str, data: PaymentMethodCreate) -> PaymentMethod:
        try:
            method_type = PaymentMethodType(data.type)
        except ValueError:
            raise ValidationException(
                "Invalid payment method type",
                details={"allowed": [t.value for t in PaymentMethodType]},
            )

        active_count = self.repository.count_active(user_id)
        if active_count >= settings.max_active_payment_methods:
            raise BusinessRuleException(
                f"You can have at most {settings.max_active_payment_methods} active payment methods",
                code="PAYMENT_METHOD_LIMIT",
            )

        card_fields = {}
        if method_type.is_card:
            self.validate_card(data)
            card_fields = {
                "last_four": data.last_four,
                "holder_name": (data.holder_name or "").strip(),
                "expiry": data.expiry,
                "brand": data.brand,
            }

        with self.transaction():
            method = self.repository.create(
                user_id=user_id,
                type=method_type.value,
                is_principal=active_count == 0,
                **card_fields,
            )

        self.log_operation("create_payment_method", method_id=method.id, type=method_type.value)
        return method

    @BaseService.measure_operation("set_principal")
    def set_principal(self, method_id: str, user_id: str) -> PaymentMethod:
        """Make a method principal. Clearing and setting commit together."""
        method = self.get_payment_method(method_id, user_id)
        if method.is_principal:
            return method

        with self.transaction():
            self.repository.clear_principal(user_id)
            method.is_principal = True
            self.db.flush()
        return method

    @BaseService.measure_operation("deactivate_payment_method")
    def deactivate_payment_method(self, method_id: str, user_id: str) -> PaymentMethod:
        """Soft delete. If the principal goes away the oldest remaining method takes over."""
        method = self.get_payment_method(method_id, user_id)
        was_principal = bool(method.is_principal)

        with self.transaction():
            method.is_active = False
            method.is_principal = False
            self.db.flush()
            if was_principal:
                successor = self.repository.oldest_active(user_id)
                if successor is not None:
                    successor.is_principal = True
                    self.db.flush()
        return method

    def get_principal(self, user_id: str) -> Optional[PaymentMethod]:
        return self.repository.get_principal(user_id)

    def count_active(self, user_id: str) -> int:
        return self.repository.count_active(user_id)

    @staticmethod
    def validate_card(data: PaymentMethodCreate) -> None:
        if not data.last_four or not LAST_FOUR_RE.match(data.last_four):
            raise ValidationException("Card last four digits must be exactly 4 digits")
        if not data.holder_name or len(data.holder_name.strip()) < 3:
            raise ValidationException("Card holder name must be at least 3 characters")

        match = EXPIRY_RE.match(data.expiry or "")
        if not match or not 1 <= int(match.group(1)) <= 12:
            raise ValidationException("Card expiry must use the MM/YY format")

        if data.brand not in {b.value for b in CardBrand}:
            raise ValidationException(
                "Unsupported card brand", details={"allowed": [b.value for b in CardBrand]}
            )
