"""
Application-level exception handlers.

Give every error response the same JSON shape and echo the request id.
"""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from idplatform.core.error_handling import ClientConfigurationError, IdPlatformError, request_id_var

logger = logging.getLogger(__name__)


def _error_body(status_code: int, detail) -> dict:
    return {
        "status_code": status_code,
        "detail": detail,
        "request_id": request_id_var.get() or None,
    }


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Request validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content=_error_body(422, [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]),
    )


async def platform_exception_handler(request: Request, exc: IdPlatformError) -> JSONResponse:
    """Handle platform errors raised outside the route decorators (e.g. in dependencies)."""
    status_code = 503 if isinstance(exc, ClientConfigurationError) else 400
    logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content=_error_body(status_code, str(exc)))
