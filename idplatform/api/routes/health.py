from fastapi import APIRouter

from idplatform import __version__
from idplatform.core.config import settings

router = APIRouter()


@router.get("/")
async def root():
    """Basic health check endpoint."""
    return {"message": "Identity Platform Services API", "status": "healthy"}


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Reports configuration of the master data collaborator and the
    demographic validation settings.
    """
    health_status = {
        "status": "healthy",
        "service": "Identity Platform Services",
        "version": __version__,
        "response_version": settings.APP_VERSION,
        "masterdata_configured": bool(settings.MASTERDATA_BASE_URL),
        "ui_spec_domain": settings.UI_SPEC_DOMAIN,
        "date_pattern": settings.DATE_PATTERN,
    }

    if not health_status["masterdata_configured"]:
        health_status["status"] = "degraded"
        health_status["warning"] = "Master data service not configured; UI spec endpoints unavailable"

    return health_status
