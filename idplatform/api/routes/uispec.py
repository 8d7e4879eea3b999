"""
UI spec API endpoints.

Thin bindings onto UISpecService. Master data errors come back inside the
response envelope with HTTP 200, the same shape as a success.
"""
import logging

from fastapi import APIRouter, Depends, Query

from idplatform.core.error_handling import handle_service_errors
from idplatform.models.uispec_models import MainResponse, UISpecRequest
from idplatform.services.service_factory import get_service_factory
from idplatform.services.uispec_service import UISpecService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/uispec", tags=["uispec"])


def get_uispec_service() -> UISpecService:
    """Dependency returning the shared UI spec service."""
    return get_service_factory().uispec_service


@router.post("", response_model=MainResponse)
@handle_service_errors("Failed to save UI spec")
async def save_ui_spec(request: UISpecRequest, service: UISpecService = Depends(get_uispec_service)):
    return await service.save_ui_spec(request)


@router.put("/{spec_id}", response_model=MainResponse)
@handle_service_errors("Failed to update UI spec")
async def update_ui_spec(
    spec_id: str,
    request: UISpecRequest,
    service: UISpecService = Depends(get_uispec_service)
):
    return await service.update_ui_spec(request, spec_id)


@router.get("/latest", response_model=MainResponse)
@handle_service_errors("Failed to fetch UI spec")
async def get_ui_spec(
    version: float = Query(default=0),
    identity_schema_version: float = Query(default=0, alias="identitySchemaVersion"),
    service: UISpecService = Depends(get_uispec_service)
):
    """Fetch UI specs; identitySchemaVersion=0 returns the latest published spec."""
    return await service.get_ui_spec(version, identity_schema_version)


@router.get("/all", response_model=MainResponse)
@handle_service_errors("Failed to list UI specs")
async def get_all_ui_spec(
    page_number: int = Query(default=0, alias="pageNumber", ge=0),
    page_size: int = Query(default=10, alias="pageSize", ge=1),
    service: UISpecService = Depends(get_uispec_service)
):
    return await service.get_all_ui_spec(page_number, page_size)


@router.put("/{spec_id}/publish", response_model=MainResponse)
@handle_service_errors("Failed to publish UI spec")
async def publish_ui_spec(spec_id: str, service: UISpecService = Depends(get_uispec_service)):
    return await service.publish_ui_spec(spec_id)


@router.delete("/{spec_id}", response_model=MainResponse)
@handle_service_errors("Failed to delete UI spec")
async def delete_ui_spec(spec_id: str, service: UISpecService = Depends(get_uispec_service)):
    return await service.delete_ui_spec(spec_id)
