# backend/tests/services/test_catalog_service.py
from decimal import Decimal

import pytest

from carwash.core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from carwash.schemas.catalog import ServiceCreate, ServiceUpdate
from carwash.services.catalog_service import CatalogService


@pytest.fixture
def service(db) -> CatalogService:
    return CatalogService(db)


def new_service(**overrides) -> ServiceCreate:
    fields = {
        "name": "Engine Wash",
        "description": "Degrease and rinse the engine bay.",
        "price": Decimal("40000"),
        "duration_minutes": 40,
    }
    fields.update(overrides)
    return ServiceCreate(**fields)


def test_list_hides_inactive(service, test_service, inactive_service):
    page = service.list_services()
    assert page["total"] == 1
    assert page["items"][0].id == test_service.id
    assert service.count_available() == 1


def test_get_inactive_service(service, inactive_service):
    with pytest.raises(BusinessRuleException):
        service.get_service(inactive_service.id)


def test_get_missing_and_blank(service):
    with pytest.raises(NotFoundException):
        service.get_service("missing")
    with pytest.raises(ValidationException):
        service.get_service("  ")


def test_search(service, test_service):
    assert service.search_services("basic")["total"] == 1
    assert service.search_services("ceramic")["total"] == 0
    with pytest.raises(ValidationException):
        service.search_services("b")


def test_list_available_orders_by_price(service, test_service):
    service.create_service(new_service(price=Decimal("10000")))
    assert [s.name for s in service.list_available()] == ["Engine Wash", "Basic Wash"]


def test_create_service(service):
    created = service.create_service(new_service())
    assert created.is_active is True
    assert created.price == Decimal("40000")


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "AB"},
        {"description": " "},
        {"price": Decimal("0")},
        {"duration_minutes": 10},
    ],
)
def test_create_service_validation(service, overrides):
    with pytest.raises(ValidationException):
        service.create_service(new_service(**overrides))


def test_update_and_deactivate(service, test_service):
    updated = service.update_service(test_service.id, ServiceUpdate(price=Decimal("32000")))
    assert updated.price == Decimal("32000")

    service.deactivate_service(test_service.id)
    assert service.list_services()["total"] == 0


def test_update_missing(service):
    with pytest.raises(NotFoundException):
        service.update_service("missing", ServiceUpdate(name="Whatever"))
