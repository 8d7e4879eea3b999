"""
Error handling utilities for identity platform services.

This module provides custom exceptions and the decorator that converts them
into HTTP errors at the API boundary.
"""
import asyncio
import logging
import time
import uuid
from typing import Callable, TypeVar, ParamSpec, Optional
from functools import wraps
from contextvars import ContextVar

from fastapi import HTTPException

logger = logging.getLogger(__name__)

# Context variable for request ID tracking across async contexts
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

# Type variables for generic function signatures
P = ParamSpec('P')
T = TypeVar('T')


# ============================================================================
# Custom Exceptions
# ============================================================================

class IdPlatformError(Exception):
    """Base exception for identity platform errors."""
    pass


class UISpecError(IdPlatformError):
    """Error signalled by the master data service for a UI spec operation."""

    def __init__(self, error_code: str, message: str):
        super().__init__(message)
        self.error_code = error_code
        self.message = message

    def __repr__(self) -> str:
        return f"UISpecError(error_code={self.error_code!r}, message={self.message!r})"


class DemographicValidationError(IdPlatformError):
    """Demographic validation produced one or more failures."""

    def __init__(self, result):
        self.result = result
        super().__init__(f"{len(result.errors)} demographic validation error(s)")


class ClientConfigurationError(IdPlatformError):
    """Client not properly configured."""
    pass


class UnsupportedMatchStrategyError(IdPlatformError):
    """No match function registered for the attribute/strategy pair."""
    pass


# ============================================================================
# Error Handler Decorator
# ============================================================================

def _to_http_exception(
    exc: Exception,
    error_message: str,
    func_name: str,
    request_id: str,
    elapsed: float
) -> HTTPException:
    """Map an exception raised by a handler onto an HTTPException."""
    headers = {"X-Request-ID": request_id}

    if isinstance(exc, DemographicValidationError):
        logger.warning(f"[{request_id}] {error_message} - Validation failed after {elapsed:.2f}s: {exc}")
        return HTTPException(
            status_code=400,
            detail=[error.to_dict() for error in exc.result.errors],
            headers=headers
        )
    if isinstance(exc, ClientConfigurationError):
        logger.error(f"[{request_id}] {error_message} - Configuration error after {elapsed:.2f}s: {exc}")
        return HTTPException(
            status_code=500,
            detail=f"Service configuration error: {str(exc)}",
            headers=headers
        )
    if isinstance(exc, UISpecError):
        logger.error(f"[{request_id}] {error_message} - Master data error after {elapsed:.2f}s: {exc!r}")
        return HTTPException(
            status_code=502,
            detail={"errorCode": exc.error_code, "message": exc.message},
            headers=headers
        )
    if isinstance(exc, IdPlatformError):
        logger.error(f"[{request_id}] {error_message} - Service error after {elapsed:.2f}s: {exc}")
        return HTTPException(status_code=400, detail=str(exc), headers=headers)
    if isinstance(exc, ValueError):
        logger.error(f"[{request_id}] {error_message} - Invalid value after {elapsed:.2f}s: {exc}")
        return HTTPException(
            status_code=400,
            detail=f"Invalid input: {str(exc)}",
            headers=headers
        )

    logger.exception(
        f"[{request_id}] {error_message} - Unexpected error in {func_name} after {elapsed:.2f}s: {exc}"
    )
    return HTTPException(
        status_code=500,
        detail=f"{error_message}: {str(exc)}",
        headers=headers
    )


def _log_completion(request_id: str, func_name: str, elapsed: float) -> None:
    # Log with warning if response time exceeds threshold
    from idplatform.core.config import settings
    threshold_ms = settings.RESPONSE_TIME_WARNING_THRESHOLD_MS
    elapsed_ms = elapsed * 1000
    if elapsed_ms > threshold_ms:
        logger.warning(
            f"[{request_id}] SLOW RESPONSE: {func_name} took {elapsed:.2f}s "
            f"({elapsed_ms:.0f}ms > {threshold_ms}ms threshold)"
        )
    else:
        logger.info(f"[{request_id}] Completed {func_name} in {elapsed:.2f}s")


def _ensure_request_id() -> str:
    if not request_id_var.get():
        request_id_var.set(str(uuid.uuid4()))
    return request_id_var.get()


def handle_service_errors(
    error_message: str = "Operation failed"
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator to handle errors in API handlers.

    Converts service errors to appropriate HTTP exceptions and logs them
    with the current request id and elapsed time. Works with both sync
    and async functions.

    Args:
        error_message: Custom error message prefix

    Returns:
        Decorated function with error handling

    Example:
        @handle_service_errors("Failed to validate demographic data")
        async def validate(request: AuthRequest) -> dict:
            ...
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            request_id = _ensure_request_id()
            start_time = time.time()

            try:
                logger.info(f"[{request_id}] Starting {func.__name__}")
                result = await func(*args, **kwargs)
                _log_completion(request_id, func.__name__, time.time() - start_time)
                return result
            except HTTPException:
                raise
            except Exception as e:
                raise _to_http_exception(
                    e, error_message, func.__name__, request_id, time.time() - start_time
                ) from e

        @wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            request_id = _ensure_request_id()
            start_time = time.time()

            try:
                logger.info(f"[{request_id}] Starting {func.__name__}")
                result = func(*args, **kwargs)
                _log_completion(request_id, func.__name__, time.time() - start_time)
                return result
            except HTTPException:
                raise
            except Exception as e:
                raise _to_http_exception(
                    e, error_message, func.__name__, request_id, time.time() - start_time
                ) from e

        # Return appropriate wrapper based on function type
        if asyncio.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        else:
            return sync_wrapper  # type: ignore

    return decorator


def error_code_of(error: tuple[str, str], *args: Optional[str]) -> tuple[str, str]:
    """Return (code, formatted message) for an error constant."""
    code, template = error
    return code, template.format(*args) if args else template
