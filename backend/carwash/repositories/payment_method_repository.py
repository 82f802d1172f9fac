# backend/carwash/repositories/payment_method_repository.py
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..models.payment_method import PaymentMethod
from .base_repository import BaseRepository


class PaymentMethodRepository(BaseRepository[PaymentMethod]):
    """Client payment methods. Inactive rows are soft-deleted and never listed."""

    def __init__(self, db: Session):
        super().__init__(db, PaymentMethod)

    def _active_for(self, user_id: str) -> Query:
        return self.db.query(PaymentMethod).filter(
            PaymentMethod.user_id == user_id, PaymentMethod.is_active.is_(True)
        )

    def list_active_for_user(self, user_id: str) -> List[PaymentMethod]:
        """Principal first, then oldest first."""
        try:
            return (
                self._active_for(user_id)
                .order_by(PaymentMethod.is_principal.desc(), PaymentMethod.created_at.asc(), PaymentMethod.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing payment methods for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list payment methods: {str(e)}")

    def count_active(self, user_id: str) -> int:
        try:
            return self._active_for(user_id).count()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting payment methods for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to count payment methods: {str(e)}")

    def get_principal(self, user_id: str) -> Optional[PaymentMethod]:
        try:
            return self._active_for(user_id).filter(PaymentMethod.is_principal.is_(True)).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting principal method for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get principal payment method: {str(e)}")

    def clear_principal(self, user_id: str) -> int:
        """Unflag every principal method for the user. Issued before setting a new one."""
        try:
            count = (
                self.db.query(PaymentMethod)
                .filter(PaymentMethod.user_id == user_id, PaymentMethod.is_principal.is_(True))
                .update({"is_principal": False}, synchronize_session="fetch")
            )
            self.db.flush()
            return int(count or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error clearing principal for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to clear principal payment method: {str(e)}")

    def oldest_active(self, user_id: str) -> Optional[PaymentMethod]:
        try:
            return (
                self._active_for(user_id)
                .order_by(PaymentMethod.created_at.asc(), PaymentMethod.id.asc())
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting oldest payment method for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get payment method: {str(e)}")
