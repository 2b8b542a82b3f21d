"""
Retry utilities for start-up work.

Uses tenacity for exponential backoff. Ledger operations themselves are
never retried: a failed bet or balance write is reported to the caller
exactly once.
"""

import asyncio
from functools import wraps
from typing import Any, Callable, Type

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config.logging_config import get_logger

logger = get_logger(__name__)


RETRIABLE_EXCEPTIONS: tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
)


def _log_retry(retry_state) -> None:
    logger.warning(
        "Retrying after error",
        function=getattr(retry_state.fn, "__name__", "unknown"),
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )


def with_async_retry(
    max_attempts: int = 3,
    wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    exceptions: tuple[Type[Exception], ...] = RETRIABLE_EXCEPTIONS,
):
    """
    Decorator for async functions that should be retried on failure.

    Uses exponential backoff between attempts and re-raises the last
    error once attempts are exhausted.

    Args:
        max_attempts: Maximum number of attempts
        wait_seconds: Initial wait time between retries
        max_wait_seconds: Maximum wait time between retries
        exceptions: Tuple of exception types to retry on

    Usage:
        @with_async_retry(max_attempts=3)
        async def connect():
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(multiplier=wait_seconds, max=max_wait_seconds),
                retry=retry_if_exception_type(exceptions),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    return await func(*args, **kwargs)
        return wrapper
    return decorator
