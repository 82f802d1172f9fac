# backend/carwash/services/catalog_service.py
"""Catalog of wash services: browsing plus administrative maintenance."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from ..models.service import Service
from ..repositories.factory import RepositoryFactory
from ..schemas.catalog import ServiceCreate, ServiceUpdate
from .base import BaseService


class CatalogService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_service_repository(db)

    @BaseService.measure_operation("list_services")
    def list_services(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.list_active(skip, limit)
        return self.page_result(items, total, page, limit)

    @BaseService.measure_operation("get_service")
    def get_service(self, service_id: str) -> Service:
        if not service_id or not service_id.strip():
            raise ValidationException("Service id is required")
        service = self.repository.get_by_id(service_id)
        if service is None:
            raise NotFoundException("Service not found")
        if not service.is_active:
            raise BusinessRuleException("Service is not available")
        return service

    @BaseService.measure_operation("search_services")
    def search_services(self, term: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        term = (term or "").strip()
        if not 2 <= len(term) <= 50:
            raise ValidationException("Search term must be between 2 and 50 characters")
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.search_by_name(term, skip, limit)
        return self.page_result(items, total, page, limit)

    def list_available(self) -> List[Service]:
        return self.repository.list_available()

    def count_available(self) -> int:
        return self.repository.count_active()

    @BaseService.measure_operation("create_service")
    def create_service(self, data: ServiceCreate) -> Service:
        self._validate(data.name, data.description, data.price, data.duration_minutes)
        with self.transaction():
            service = self.repository.create(**data.model_dump())
        self.log_operation("create_service", service_id=service.id)
        return service

    @BaseService.measure_operation("update_service")
    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        service = self.repository.get_by_id(service_id)
        if service is None:
            raise NotFoundException("Service not found")

        changes = data.model_dump(exclude_unset=True)
        self._validate(
            changes.get("name", service.name),
            changes.get("description", service.description),
            changes.get("price", service.price),
            changes.get("duration_minutes", service.duration_minutes),
        )
        with self.transaction():
            self.repository.update(service_id, **changes)
        return service

    @BaseService.measure_operation("deactivate_service")
    def deactivate_service(self, service_id: str) -> Service:
        with self.transaction():
            service = self.repository.update(service_id, is_active=False)
            if service is None:
                raise NotFoundException("Service not found")
        return service

    @staticmethod
    def _validate(
        name: Optional[str],
        description: Optional[str],
        price: Optional[Decimal],
        duration_minutes: Optional[int],
    ) -> None:
        if not name or not 3 <= len(name.strip()) <= 100:
            raise ValidationException("Service name must be between 3 and 100 characters")
        if not description or not description.strip():
            raise ValidationException("Service description is required")
        if price is None or Decimal(str(price)) <= 0:
            raise ValidationException("Service price must be greater than 0")
        if duration_minutes is None or duration_minutes < settings.min_service_duration_minutes:
            raise ValidationException(
                f"Service duration must be at least {settings.min_service_duration_minutes} minutes"
            )
