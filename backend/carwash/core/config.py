# backend/carwash/core/config.py
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Application settings loaded from the environment and backend/.env."""

    project_name: str = "Car Wash API"
    environment: str = "development"

    # Database
    database_url_raw: str = Field(default="sqlite:///./carwash.db", alias="database_url")
    test_database_url: str = "sqlite://"
    database_echo: bool = False
    is_testing: bool = False  # Set to True when running tests

    # Auth
    secret_key: SecretStr = Field(
        default=SecretStr("change-me-in-production-please-32b"),
        description="Secret key used to sign JWTs",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 7

    # Cache settings
    redis_url: str = "redis://localhost:6379"
    cache_ttl: int = 3600  # 1 hour in seconds

    # Business rules
    business_timezone: str = "America/Bogota"
    max_active_payment_methods: int = 3
    cancellation_lead_minutes: int = 60
    min_service_duration_minutes: int = 15
    default_page_size: int = 10
    max_page_size: int = 100

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, v: str) -> str:
        return (v or "development").strip().lower()

    @field_validator("max_active_payment_methods", "cancellation_lead_minutes")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def use_memory_cache(self) -> bool:
        """Development and test runs never talk to a real Redis."""
        return self.environment in {"development", "test"} or self.is_testing

    def get_database_url(self) -> str:
        """Get the appropriate database URL based on context."""
        if self.is_testing or is_running_tests():
            return self.test_database_url
        return self.database_url_raw

    @property
    def database_url(self) -> str:
        return self.get_database_url()

    def secret_value(self) -> str:
        return self.secret_key.get_secret_value()


settings = Settings()

if settings.is_production and "change-me" in settings.secret_value():
    logger.warning("[CONFIG] Running in production with the default SECRET_KEY")


def get_settings() -> Settings:
    return settings
