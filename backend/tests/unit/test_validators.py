# backend/tests/unit/test_validators.py
import pytest

from carwash.core.exceptions import ValidationException
from carwash.core.validators import (
    validate_document_type,
    validate_email,
    validate_password,
    validate_phone,
    validate_plate,
    validate_vehicle_type,
)
from carwash.schemas.payment_method import PaymentMethodCreate
from carwash.services.payment_method_service import PaymentMethodService


class TestProfileFields:
    def test_email_is_lowercased(self):
        assert validate_email("  Client@Example.COM ") == "client@example.com"

    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@b", "two words@x.com"])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationException):
            validate_email(email)

    def test_short_password(self):
        with pytest.raises(ValidationException):
            validate_password("short")

    @pytest.mark.parametrize("plate,expected", [("abc123", "ABC123"), ("ABC-123", "ABC123")])
    def test_plate_normalized(self, plate, expected):
        assert validate_plate(plate) == expected

    @pytest.mark.parametrize("plate", ["AB1234", "ABCD12", "123ABC", ""])
    def test_invalid_plate(self, plate):
        with pytest.raises(ValidationException):
            validate_plate(plate)

    @pytest.mark.parametrize("phone", ["3001234567", "+573001234567", "+57 300 123 4567"])
    def test_colombian_mobile(self, phone):
        assert validate_phone(phone) == phone

    @pytest.mark.parametrize("phone", ["2001234567", "300123456", "+1 300 123 4567"])
    def test_invalid_phone(self, phone):
        with pytest.raises(ValidationException):
            validate_phone(phone)

    def test_enumerated_fields(self):
        assert validate_document_type("CC") == "CC"
        assert validate_vehicle_type("motorcycle") == "motorcycle"
        with pytest.raises(ValidationException):
            validate_document_type("DNI")
        with pytest.raises(ValidationException):
            validate_vehicle_type("truck")


def _card(**overrides) -> PaymentMethodCreate:
    data = {
        "type": "credit_card",
        "last_four": "4242",
        "holder_name": "Test Client",
        "expiry": "12/29",
        "brand": "Visa",
    }
    data.update(overrides)
    return PaymentMethodCreate(**data)


class TestCardValidation:
    def test_valid_card(self):
        PaymentMethodService.validate_card(_card())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"last_four": "424"},
            {"last_four": "42a2"},
            {"last_four": None},
            {"holder_name": "Jo"},
            {"expiry": "13/29"},
            {"expiry": "00/29"},
            {"expiry": "1229"},
            {"brand": "Discover"},
        ],
    )
    def test_invalid_card(self, overrides):
        with pytest.raises(ValidationException):
            PaymentMethodService.validate_card(_card(**overrides))
