# backend/carwash/services/worker_service.py
"""
Public worker directory.

Workers are maintained administratively. The write operations exist so
callers get an explicit business-rule error instead of a missing method.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import BusinessRuleException, NotFoundException, ValidationException
from ..models.worker import Worker
from ..repositories.factory import RepositoryFactory
from .availability_service import AvailabilityService
from .base import BaseService

PUBLIC_WRITE_FORBIDDEN = "Operation not allowed from the public API"


class WorkerService(BaseService):
    def __init__(self, db: Session, availability_service: Optional[AvailabilityService] = None):
        super().__init__(db)
        self.repository = RepositoryFactory.create_worker_repository(db)
        self.availability_service = availability_service or AvailabilityService(db)

    @BaseService.measure_operation("list_workers")
    def list_workers(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.list_active(skip, limit)
        return self.page_result(items, total, page, limit)

    @BaseService.measure_operation("get_worker")
    def get_worker(self, worker_id: str) -> Worker:
        worker = self.repository.get_active(worker_id)
        if worker is None:
            raise NotFoundException("Worker not found")
        return worker

    @BaseService.measure_operation("search_workers")
    def search_workers(self, term: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        term = (term or "").strip()
        if not 2 <= len(term) <= 100:
            raise ValidationException("Search term must be between 2 and 100 characters")
        skip, limit = self.check_pagination(page, limit)
        items, total = self.repository.search_by_name(term, skip, limit)
        return self.page_result(items, total, page, limit)

    def list_active(self) -> List[Worker]:
        return self.repository.list_all_active()

    def count_active(self) -> int:
        return self.repository.count_active()

    def exists_and_active(self, worker_id: str) -> bool:
        return self.repository.get_active(worker_id) is not None

    def check_availability(self, worker_id: str, start: datetime, duration_minutes: int) -> bool:
        return self.availability_service.is_available(worker_id, start, duration_minutes)

    @BaseService.measure_operation("list_by_min_rating")
    def list_by_min_rating(self, min_rating: float) -> List[Worker]:
        if not 1 <= min_rating <= 5:
            raise ValidationException("Minimum rating must be between 1 and 5")
        return self.repository.list_by_min_rating(min_rating)

    def create_worker(self, *args: Any, **kwargs: Any) -> Worker:
        raise BusinessRuleException(PUBLIC_WRITE_FORBIDDEN, code="ADMIN_ONLY")

    def update_worker(self, *args: Any, **kwargs: Any) -> Worker:
        raise BusinessRuleException(PUBLIC_WRITE_FORBIDDEN, code="ADMIN_ONLY")

    def deactivate_worker(self, *args: Any, **kwargs: Any) -> None:
        raise BusinessRuleException(PUBLIC_WRITE_FORBIDDEN, code="ADMIN_ONLY")
