# backend/carwash/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import (
    auth,
    history,
    notifications,
    payment_methods,
    ratings,
    reservations,
    services,
    users,
    workers,
)

__all__ = [
    "auth",
    "history",
    "notifications",
    "payment_methods",
    "ratings",
    "reservations",
    "services",
    "users",
    "workers",
]
