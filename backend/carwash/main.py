# backend/carwash/main.py
"""
Car-wash booking API application.

Run with ``uvicorn carwash.main:app`` from the backend directory.
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import is_running_tests, settings
from .database import init_db
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes import health
from .routes.v1 import (
    auth as auth_v1,
    history as history_v1,
    notifications as notifications_v1,
    payment_methods as payment_methods_v1,
    ratings as ratings_v1,
    reservations as reservations_v1,
    services as services_v1,
    users as users_v1,
    workers as workers_v1,
)
from .services.cache_service import get_cache_service

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{settings.project_name} starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    init_db()
    # Wired for health reporting only; business operations do not read it
    app.state.cache = get_cache_service()
    logger.info(f"Cache backend: {app.state.cache.backend}")

    yield

    logger.info(f"{settings.project_name} shutting down...")


app = FastAPI(
    title=settings.project_name,
    description="Car-wash booking backend: services, workers, reservations and ratings",
    version=__version__,
    lifespan=app_lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)

# V1 router - prefixes added per domain
api_v1 = APIRouter(prefix="/api/v1")
api_v1.include_router(auth_v1.router, prefix="/auth")
api_v1.include_router(users_v1.router, prefix="/users")
api_v1.include_router(services_v1.router, prefix="/services")
api_v1.include_router(workers_v1.router, prefix="/workers")
api_v1.include_router(reservations_v1.router, prefix="/reservations")
api_v1.include_router(ratings_v1.router, prefix="/ratings")
api_v1.include_router(payment_methods_v1.router, prefix="/payment-methods")
api_v1.include_router(notifications_v1.router, prefix="/notifications")
api_v1.include_router(history_v1.router, prefix="/history")

app.include_router(api_v1)
app.include_router(health.router)
