# backend/tests/services/test_payment_method_service.py
import pytest

from carwash.core.exceptions import (
    BusinessRuleException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from carwash.models.payment_method import PaymentMethod
from carwash.schemas.payment_method import PaymentMethodCreate
from carwash.services.payment_method_service import PaymentMethodService


@pytest.fixture
def service(db) -> PaymentMethodService:
    return PaymentMethodService(db)


def card(**overrides) -> PaymentMethodCreate:
    fields = {
        "type": "credit_card",
        "last_four": "4242",
        "holder_name": "Test Client",
        "expiry": "12/29",
        "brand": "Visa",
    }
    fields.update(overrides)
    return PaymentMethodCreate(**fields)


def principal_ids(db, user_id):
    return [
        m.id
        for m in db.query(PaymentMethod).filter_by(user_id=user_id, is_principal=True).all()
    ]


def test_first_method_becomes_principal(service, test_user):
    first = service.create_payment_method(test_user.id, card())
    second = service.create_payment_method(test_user.id, PaymentMethodCreate(type="cash"))

    assert first.is_principal is True
    assert second.is_principal is False
    assert second.last_four is None


def test_limit_of_active_methods(service, test_user):
    for _ in range(3):
        service.create_payment_method(test_user.id, PaymentMethodCreate(type="cash"))

    with pytest.raises(BusinessRuleException) as exc_info:
        service.create_payment_method(test_user.id, PaymentMethodCreate(type="pse"))
    assert exc_info.value.code == "PAYMENT_METHOD_LIMIT"


def test_deactivated_methods_free_a_slot(service, test_user):
    methods = [
        service.create_payment_method(test_user.id, PaymentMethodCreate(type="cash")) for _ in range(3)
    ]
    service.deactivate_payment_method(methods[1].id, test_user.id)

    assert service.create_payment_method(test_user.id, PaymentMethodCreate(type="pse")).is_active


def test_set_principal_leaves_exactly_one(db, service, test_user):
    first = service.create_payment_method(test_user.id, card())
    second = service.create_payment_method(test_user.id, card(last_four="1111", brand="Mastercard"))

    service.set_principal(second.id, test_user.id)

    assert principal_ids(db, test_user.id) == [second.id]
    db.refresh(first)
    assert first.is_principal is False
    assert service.get_principal(test_user.id).id == second.id


def test_set_principal_on_current_principal_is_noop(db, service, test_user):
    first = service.create_payment_method(test_user.id, card())
    service.set_principal(first.id, test_user.id)
    assert principal_ids(db, test_user.id) == [first.id]


def test_deactivating_principal_promotes_remaining(db, service, test_user):
    first = service.create_payment_method(test_user.id, card())
    second = service.create_payment_method(test_user.id, PaymentMethodCreate(type="cash"))
    third = service.create_payment_method(test_user.id, PaymentMethodCreate(type="pse"))

    removed = service.deactivate_payment_method(first.id, test_user.id)

    assert removed.is_active is False
    assert removed.is_principal is False
    principals = principal_ids(db, test_user.id)
    assert len(principals) == 1
    assert principals[0] in {second.id, third.id}


def test_deactivating_last_method_leaves_none(db, service, test_user):
    only = service.create_payment_method(test_user.id, card())
    service.deactivate_payment_method(only.id, test_user.id)

    assert service.get_principal(test_user.id) is None
    assert service.count_active(test_user.id) == 0
    assert service.list_payment_methods(test_user.id) == []


def test_list_puts_principal_first(service, test_user):
    service.create_payment_method(test_user.id, card())
    second = service.create_payment_method(test_user.id, PaymentMethodCreate(type="cash"))
    service.set_principal(second.id, test_user.id)

    assert service.list_payment_methods(test_user.id)[0].id == second.id


def test_ownership(service, test_user, other_user):
    method = service.create_payment_method(test_user.id, card())

    with pytest.raises(ForbiddenException):
        service.get_payment_method(method.id, other_user.id)
    with pytest.raises(ForbiddenException):
        service.set_principal(method.id, other_user.id)
    with pytest.raises(NotFoundException):
        service.get_payment_method("missing", test_user.id)


def test_deactivated_method_is_not_found(service, test_user):
    method = service.create_payment_method(test_user.id, card())
    service.deactivate_payment_method(method.id, test_user.id)

    with pytest.raises(NotFoundException):
        service.get_payment_method(method.id, test_user.id)


def test_unknown_type(service, test_user):
    with pytest.raises(ValidationException) as exc_info:
        service.create_payment_method(test_user.id, PaymentMethodCreate(type="bitcoin"))
    assert "cash" in exc_info.value.details["allowed"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"last_four": "42"},
        {"last_four": "42a2"},
        {"holder_name": "Al"},
        {"expiry": "13/29"},
        {"expiry": "1229"},
        {"brand": "Discover"},
    ],
)
def test_card_format_rejected(service, test_user, overrides):
    with pytest.raises(ValidationException):
        service.create_payment_method(test_user.id, card(**overrides))
