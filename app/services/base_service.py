"""
Base service class.

Provides common functionality for service classes including bound
logging, a standard result container and a timing decorator.
"""

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from loguru import logger


# Type variable for generic decorator return types
T = TypeVar("T")


@dataclass
class ServiceResult:
    """
    Standard service result container.

    Used to return structured results from service methods.
    """
    success: bool
    data: Any = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls, error: str | None, code: str | None = None, data: Any = None
    ) -> "ServiceResult":
        """Create a failed result."""
        return cls(success=False, data=data, error=error, error_code=code)


class BaseService:
    """
    Base service class.

    Provides logging with bound service context.
    """

    def __init__(self) -> None:
        """Initialize base service."""
        self.logger = logger.bind(service=self.__class__.__name__)


def log_operation(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to log method entry/exit with timing.

    Logs:
    - Method entry
    - Method exit with duration
    - Exceptions if any

    Usage:
        @log_operation
        async def my_service_method(self, token: str):
            # Your code here
            pass

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> Any:
        start_time = time.time()

        self.logger.debug(f"Starting {func.__name__}")

        try:
            result = await func(self, *args, **kwargs)
        except Exception as e:
            duration = time.time() - start_time
            self.logger.warning(
                f"Failed {func.__name__} after {duration:.3f}s: {e}"
            )
            raise

        duration = time.time() - start_time
        self.logger.debug(f"Completed {func.__name__} in {duration:.3f}s")
        return result

    return wrapper
