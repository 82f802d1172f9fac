# backend/carwash/repositories/user_repository.py
"""Data access for client accounts."""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup; emails are stored lowercased."""
        try:
            return (
                self.db.query(User)
                .filter(func.lower(User.email) == email.strip().lower())
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user by email: {str(e)}")
            raise RepositoryException(f"Failed to get user by email: {str(e)}")

    def get_by_document(self, document_number: str) -> Optional[User]:
        return self.find_one_by(document_number=document_number)

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def document_exists(self, document_number: str, exclude_user_id: Optional[str] = None) -> bool:
        try:
            query = self.db.query(User.id).filter(User.document_number == document_number)
            if exclude_user_id:
                query = query.filter(User.id != exclude_user_id)
            return query.first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking document: {str(e)}")
            raise RepositoryException(f"Failed to check document: {str(e)}")
