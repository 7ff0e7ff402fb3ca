"""Utility decorators for consistent error handling."""
from __future__ import annotations

import functools
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from loguru import logger

from core.result import Success, Failure, Result

T = TypeVar('T')


def handle_exceptions(
    logger_instance=logger,
    default_return: Optional[Any] = None,
    reraise: bool = False,
    message: Optional[str] = None
):
    """Decorator to handle exceptions consistently.

    Args:
        logger_instance: Logger to use for error logging
        default_return: Value to return on exception
        reraise: Whether to re-raise the exception after logging
        message: Custom error message prefix
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                error_msg = message or f"Error in {func.__name__}"
                logger_instance.exception(f"{error_msg}: {e}")
                if reraise:
                    raise
                return default_return
        return wrapper
    return decorator


def as_result(
    exceptions: Tuple[Type[Exception], ...] = (Exception,)
) -> Callable[[Callable[..., T]], Callable[..., Result[T, Exception]]]:
    """Decorator to convert function output to Result type.

    Success values are wrapped in Success, listed exceptions in Failure.
    Anything else propagates.

    Args:
        exceptions: Exception types converted into Failure
    """
    def decorator(func: Callable[..., T]) -> Callable[..., Result[T, Exception]]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Result[T, Exception]:
            try:
                return Success(func(*args, **kwargs))
            except exceptions as e:
                return Failure(e)
        return wrapper
    return decorator


def log_execution_time(logger_instance=logger, level: str = "DEBUG"):
    """Decorator to log function execution time.

    Args:
        logger_instance: Logger to use
        level: Log level (DEBUG, INFO, etc.)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = time.time() - start_time
                log_func = getattr(logger_instance, level.lower(), logger_instance.debug)
                log_func(f"{func.__name__} executed in {elapsed:.3f}s")
        return wrapper
    return decorator
