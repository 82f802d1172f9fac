# backend/carwash/repositories/service_repository.py
"""Catalog queries. Public reads only ever see active services."""

from typing import List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..models.service import Service
from .base_repository import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    def __init__(self, db: Session):
        super().__init__(db, Service)

    def _active(self) -> Query:
        return self.db.query(Service).filter(Service.is_active.is_(True))

    def list_active(self, skip: int = 0, limit: int = 10) -> Tuple[List[Service], int]:
        return self._paginate(self._active().order_by(Service.name.asc()), skip, limit)

    def search_by_name(self, term: str, skip: int = 0, limit: int = 10) -> Tuple[List[Service], int]:
        query = self._active().filter(Service.name.ilike(f"%{term}%")).order_by(Service.name.asc())
        return self._paginate(query, skip, limit)

    def list_available(self) -> List[Service]:
        try:
            return self._active().order_by(Service.price.asc()).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing available services: {str(e)}")
            raise RepositoryException(f"Failed to list services: {str(e)}")

    def count_active(self) -> int:
        try:
            return self._active().count()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting services: {str(e)}")
            raise RepositoryException(f"Failed to count services: {str(e)}")
