# backend/carwash/api/dependencies/auth.py
"""
Authentication dependencies.

``get_current_user`` only validates the bearer token; routes that act on
behalf of a client depend on ``get_current_active_user``, which also loads
the account and rejects deactivated ones.
"""

import logging

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_active_user(
    current_user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated and active user.

    Raises:
        HTTPException: 401 if the account no longer exists, 403 if inactive
    """
    user = RepositoryFactory.create_user_repository(db).get_by_id(current_user_id)
    if user is None:
        logger.warning(f"Token subject {current_user_id} has no account")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return user


__all__ = ["get_current_user", "get_current_active_user"]
