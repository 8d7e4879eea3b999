"""Pydantic models and result types for the identity platform services."""

from .auth_models import (
    AuthType,
    PersonalIdentity,
    PersonalAddress,
    PersonalFullAddress,
    Demo,
    PersonalIdentityData,
    AuthRequest
)
from .validation_models import FieldValidationError, ValidationResult
from .uispec_models import (
    UISpecStatus,
    UISpecRequest,
    MasterDataUISpecRequest,
    JsonSpec,
    UISpecRecord,
    UISpecMetaData,
    Page,
    ErrorInfo,
    MainResponse
)

__all__ = [
    "AuthType",
    "PersonalIdentity",
    "PersonalAddress",
    "PersonalFullAddress",
    "Demo",
    "PersonalIdentityData",
    "AuthRequest",
    "FieldValidationError",
    "ValidationResult",
    "UISpecStatus",
    "UISpecRequest",
    "MasterDataUISpecRequest",
    "JsonSpec",
    "UISpecRecord",
    "UISpecMetaData",
    "Page",
    "ErrorInfo",
    "MainResponse"
]
