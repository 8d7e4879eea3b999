"""
Demographic validation API endpoint.
"""
import logging

from fastapi import APIRouter, Depends

from idplatform.core.error_handling import DemographicValidationError, handle_service_errors
from idplatform.models.auth_models import AuthRequest
from idplatform.services.demographic_validator import DemographicValidator
from idplatform.services.service_factory import get_service_factory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth/demographic", tags=["demographic"])


def get_demographic_validator() -> DemographicValidator:
    """Dependency returning the shared demographic validator."""
    return get_service_factory().demographic_validator


@router.post("/validate")
@handle_service_errors("Failed to validate demographic data")
async def validate_demographic_data(
    request: AuthRequest,
    validator: DemographicValidator = Depends(get_demographic_validator)
):
    """
    Validate the demographic part of an authentication request.

    Returns {"valid": true} when every rule passes; otherwise responds 400
    with the full list of failures.
    """
    result = validator.validate(request)
    if not result.is_valid:
        raise DemographicValidationError(result)
    return {"valid": True, "errors": []}
