# backend/tutorconnect/services/base.py
"""
Service layer base class.

Every service of a workspace holds the same SQLAlchemy session. The
base class gives them:
- nested-safe transactions over that session
- timing of public operations (in-process stats plus Prometheus)
- a per-class logger
"""

import asyncio
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
import logging
import time
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import ServiceException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Session.info key counting open service transactions
_TX_DEPTH_KEY = "service_transaction_depth"


@dataclass
class OperationStats:
    count: int = 0
    failures: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0

    def record(self, elapsed: float, success: bool) -> None:
        self.count += 1
        self.total_time += elapsed
        self.min_time = min(self.min_time, elapsed)
        self.max_time = max(self.max_time, elapsed)
        if not success:
            self.failures += 1

    def summary(self) -> Dict[str, Any]:
        successes = self.count - self.failures
        return {
            "count": self.count,
            "avg_time": self.total_time / self.count,
            "min_time": self.min_time,
            "max_time": self.max_time,
            "total_time": self.total_time,
            "success_rate": successes / self.count,
            "success_count": successes,
            "failure_count": self.failures,
        }


class BaseService:
    """Common plumbing for the workflow services."""

    # service class name -> operation name -> stats
    _class_metrics: Dict[str, Dict[str, OperationStats]] = {}

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run a unit of work on the shared session.

        Blocks nest: only the outermost one commits, or rolls back on any
        error, so a service called from another service's transaction just
        flushes into it. SQLAlchemy errors are re-raised as ServiceException.

        Usage:
            with self.transaction():
                self.repository.create(...)
        """
        depth = self.db.info.get(_TX_DEPTH_KEY, 0)
        self.db.info[_TX_DEPTH_KEY] = depth + 1
        outermost = depth == 0
        try:
            yield self.db
            if outermost:
                self.db.commit()
                self.logger.debug("Transaction committed")
        except SQLAlchemyError as e:
            self.logger.error(f"Database error, transaction aborted: {str(e)}")
            if outermost:
                self.db.rollback()
            raise ServiceException(f"Database operation failed: {str(e)}") from e
        except Exception as e:
            self.logger.error(f"Transaction aborted: {str(e)}")
            if outermost:
                self.db.rollback()
            raise
        finally:
            self.db.info[_TX_DEPTH_KEY] = depth

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Time a service method and record its outcome.

        Works on plain and ``async`` methods:

            @BaseService.measure_operation("send_message")
            def send_message(self, data): ...
        """

        def decorator(func: F) -> F:
            if asyncio.iscoroutinefunction(func):

                @wraps(func)
                async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                    start_time = time.time()
                    error_type: Optional[str] = None
                    try:
                        return await func(self, *args, **kwargs)
                    except Exception as e:
                        error_type = type(e).__name__
                        raise
                    finally:
                        _finish_measurement(
                            self, operation_name, time.time() - start_time, error_type
                        )

                return cast(F, async_wrapper)

            @wraps(func)
            def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                start_time = time.time()
                error_type: Optional[str] = None
                try:
                    return func(self, *args, **kwargs)
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    _finish_measurement(self, operation_name, time.time() - start_time, error_type)

            return cast(F, wrapper)

        return decorator

    def log_operation(self, operation: str, **context: Any) -> None:
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})

    def _record_metric(self, operation: str, elapsed: float, success: bool) -> None:
        per_class = BaseService._class_metrics.setdefault(self.__class__.__name__, {})
        per_class.setdefault(operation, OperationStats()).record(elapsed, success)

    def get_metrics(self) -> Dict[str, Any]:
        """Per-operation timing summary for this service class."""
        per_class = BaseService._class_metrics.get(self.__class__.__name__, {})
        return {name: stats.summary() for name, stats in per_class.items() if stats.count}

    def reset_metrics(self) -> None:
        BaseService._class_metrics.pop(self.__class__.__name__, None)
        self.logger.info(f"Metrics reset for {self.__class__.__name__}")


def _finish_measurement(
    service: Any, operation_name: str, elapsed: float, error_type: Optional[str]
) -> None:
    success = error_type is None
    if isinstance(service, BaseService):
        service._record_metric(operation_name, elapsed, success)
        if elapsed > settings.slow_operation_threshold_seconds:
            service.logger.warning(f"Slow operation: {operation_name} took {elapsed:.2f}s")

    try:
        prometheus_metrics.record_service_operation(
            service=service.__class__.__name__,
            operation=operation_name,
            duration=elapsed,
            status="success" if success else "error",
            error_type=error_type,
        )
    except Exception as exc:
        # Metrics collection must not break the operation
        logger.debug(f"Failed to record metrics for {operation_name}: {exc}")
