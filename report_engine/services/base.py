"""
Shared plumbing for services: settings lookup, operation logging and error wrapping.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from report_engine.core.config import Settings, get_settings
from report_engine.core.exceptions import AppException, ServiceError
from report_engine.utils.logger import get_logger


class BaseService(ABC):

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger = get_logger(f"services.{self.get_service_name()}")

    @abstractmethod
    def get_service_name(self) -> str:
        """Name used for this service's logger."""

    def log_operation(self, operation: str, **details: Any) -> None:
        if details:
            summary = ", ".join(f"{key}={value}" for key, value in details.items())
            self.logger.info(f"{operation}: {summary}")
        else:
            self.logger.info(operation)

    @contextmanager
    def guard(self, operation: str) -> Iterator[None]:
        """
        Run a block of service work.

        Application errors pass through unchanged. Anything else is logged
        and re-raised as ServiceError naming the operation.
        """
        try:
            yield
        except AppException:
            raise
        except Exception as e:
            self.logger.exception(f"{operation} failed: {e}")
            raise ServiceError(f"Error in {operation}: {e}", operation=operation) from e
