"""
FastAPI application for the identity platform services.
Exposes demographic validation and UI spec management over master data.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from idplatform import __version__
from idplatform.api.routes import health, uispec, demographic
from idplatform.core.logging import setup_logging
from idplatform.core.error_handling import IdPlatformError
from idplatform.core.exceptions import (
    http_exception_handler,
    validation_exception_handler,
    platform_exception_handler,
)
from idplatform.core.middleware import RequestIDMiddleware
from idplatform.services.service_factory import get_service_factory

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_service_factory().close()
    logger.info("Service factory closed")


app = FastAPI(
    title="Identity Platform Services",
    description="Demographic validation and UI specification management",
    version=__version__,
    lifespan=lifespan
)

# Middleware
app.add_middleware(RequestIDMiddleware)

# Add exception handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IdPlatformError, platform_exception_handler)

# Include routers
app.include_router(health.router)
app.include_router(uispec.router)
app.include_router(demographic.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, workers=1)
