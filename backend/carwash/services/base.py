# backend/carwash/services/base.py
"""
Base Service Pattern for the car-wash platform.

Provides common functionality for all service classes including:
- Transaction management
- Logging
- Performance monitoring
- Pagination argument checks
"""

from contextlib import contextmanager
from functools import wraps
import logging
import math
import time
from typing import Any, Callable, Dict, Iterator, Tuple, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import ServiceException, ValidationException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class BaseService:
    """
    Base class for all service layer components.

    Provides common patterns for:
    - Database session management
    - Logging
    - Transaction handling
    - Performance monitoring
    """

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)
        self._metrics: Dict[str, Dict[str, Any]] = {}

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Context manager for database transactions.

        Usage:
            with self.transaction():
                self.repository.create(...)
                # commit is handled automatically
        """
        try:
            yield self.db
            self.db.commit()
            self.logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self.logger.error(f"Transaction failed: {str(e)}")
            self.db.rollback()
            raise ServiceException(f"Database operation failed: {str(e)}")
        except Exception as e:
            self.logger.error(f"Unexpected error in transaction: {str(e)}")
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("create_reservation")
            def create_reservation(self, data):
                ...
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                start_time = time.time()
                success = False
                error_type = None

                try:
                    result = func(self, *args, **kwargs)
                    success = True
                    return result
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    elapsed = time.time() - start_time
                    self._record_metric(operation_name, elapsed, success)

                    # Only log if it's actually slow
                    if elapsed > 1.0:
                        self.logger.warning(
                            f"Slow operation detected: {operation_name} took {elapsed:.2f}s"
                        )

                    prometheus_metrics.record_service_operation(
                        service=self.__class__.__name__,
                        operation=operation_name,
                        duration=elapsed,
                        status="success" if success else "error",
                        error_type=error_type,
                    )

            return cast(F, wrapper)

        return decorator

    def _record_metric(self, operation: str, elapsed: float, success: bool) -> None:
        metrics = self._metrics.setdefault(
            operation, {"count": 0, "total_time": 0.0, "success_count": 0, "failure_count": 0}
        )
        metrics["count"] += 1
        metrics["total_time"] += elapsed
        if success:
            metrics["success_count"] += 1
        else:
            metrics["failure_count"] += 1

    def get_metrics(self) -> Dict[str, Dict[str, Any]]:
        """Per-operation counters with average duration and success rate."""
        result: Dict[str, Dict[str, Any]] = {}
        for operation, data in self._metrics.items():
            count = data["count"]
            result[operation] = {
                **data,
                "avg_time": data["total_time"] / count if count else 0.0,
                "success_rate": data["success_count"] / count if count else 0.0,
            }
        return result

    def log_operation(self, operation: str, **kwargs: Any) -> None:
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, "details": kwargs})

    @staticmethod
    def check_pagination(page: int, limit: int) -> Tuple[int, int]:
        """
        Validate page/limit and return (skip, limit).

        Raises:
            ValidationException: page < 1 or limit outside 1..max_page_size
        """
        if page < 1:
            raise ValidationException("Page must be greater than or equal to 1")
        if limit < 1 or limit > settings.max_page_size:
            raise ValidationException(
                f"Limit must be between 1 and {settings.max_page_size}"
            )
        return (page - 1) * limit, limit

    @staticmethod
    def page_result(items: list, total: int, page: int, limit: int) -> Dict[str, Any]:
        return {
            "items": items,
            "total": total,
            "page": page,
            "pages": math.ceil(total / limit) if total else 0,
        }
