# backend/carwash/repositories/refresh_token_repository.py
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.refresh_token import RefreshToken
from .base_repository import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    def __init__(self, db: Session):
        super().__init__(db, RefreshToken)

    def get_by_token(self, token: str) -> Optional[RefreshToken]:
        return self.find_one_by(token=token)

    def revoke(self, token: str) -> bool:
        """Flag a token revoked. Returns False when the token is unknown."""
        stored = self.get_by_token(token)
        if stored is None:
            return False
        stored.revoked = True
        self.db.flush()
        return True

    def revoke_all_for_user(self, user_id: str) -> int:
        try:
            count = (
                self.db.query(RefreshToken)
                .filter(RefreshToken.user_id == user_id, RefreshToken.revoked.is_(False))
                .update({"revoked": True}, synchronize_session="fetch")
            )
            self.db.flush()
            return int(count or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error revoking tokens for user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to revoke tokens: {str(e)}")
