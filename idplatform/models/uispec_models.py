"""
Pydantic models for UI spec requests, master data records and response envelopes.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class UISpecStatus(str, Enum):
    """Lifecycle status of a UI spec in master data."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class UISpecRequest(BaseModel):
    """Public request to create or update a UI spec."""

    identity_schema_id: str = Field(..., alias="identitySchemaId")
    title: str
    description: Optional[str] = None
    type: str = Field(..., description="UI spec type, e.g. 'newProcess'")
    jsonspec: Any = Field(..., description="UI rendering document (arbitrary JSON)")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "identitySchemaId": "10001",
                "title": "Pre-registration UI spec",
                "description": "Demographic form layout",
                "type": "newProcess",
                "jsonspec": {"identity": {"identity": []}}
            }
        }
    }


class MasterDataUISpecRequest(UISpecRequest):
    """Request sent to master data; the domain is fixed by the service."""

    domain: str


class JsonSpec(BaseModel):
    """One typed spec document stored on a master data UI spec record."""

    type: Optional[str] = None
    spec: Any = None


class UISpecRecord(BaseModel):
    """UI spec record as returned by master data."""

    id: str
    version: Optional[float] = None
    domain: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    identity_schema_id: Optional[str] = Field(default=None, alias="identitySchemaId")
    id_schema_version: Optional[float] = Field(default=None, alias="idSchemaVersion")
    json_spec: List[JsonSpec] = Field(default_factory=list, alias="jsonSpec")
    status: Optional[str] = None
    effective_from: Optional[datetime] = Field(default=None, alias="effectiveFrom")
    created_on: Optional[datetime] = Field(default=None, alias="createdOn")
    updated_on: Optional[datetime] = Field(default=None, alias="updatedOn")

    model_config = {
        "populate_by_name": True
    }


class UISpecMetaData(BaseModel):
    """Shaped UI spec returned to callers, with the first spec document inlined."""

    id: str
    version: Optional[float] = None
    title: Optional[str] = None
    description: Optional[str] = None
    identity_schema_id: Optional[str] = Field(default=None, alias="identitySchemaId")
    id_schema_version: Optional[float] = Field(default=None, alias="idSchemaVersion")
    json_spec: Any = Field(default=None, alias="jsonSpec")
    status: Optional[str] = None
    effective_from: Optional[datetime] = Field(default=None, alias="effectiveFrom")
    created_on: Optional[datetime] = Field(default=None, alias="createdOn")
    updated_on: Optional[datetime] = Field(default=None, alias="updatedOn")

    model_config = {
        "populate_by_name": True
    }

    @classmethod
    def from_record(cls, record: UISpecRecord) -> "UISpecMetaData":
        # Raises IndexError when the record carries no spec document
        return cls(
            id=record.id,
            version=record.version,
            title=record.title,
            description=record.description,
            identity_schema_id=record.identity_schema_id,
            id_schema_version=record.id_schema_version,
            json_spec=record.json_spec[0].spec,
            status=record.status,
            effective_from=record.effective_from,
            created_on=record.created_on,
            updated_on=record.updated_on,
        )


class Page(BaseModel, Generic[T]):
    """One page of results with upstream pagination metadata."""

    page_no: int = Field(default=0, alias="pageNo")
    page_size: int = Field(default=0, alias="pageSize")
    total_items: int = Field(default=0, alias="totalItems")
    total_pages: int = Field(default=0, alias="totalPages")
    sort: Any = None
    data: List[T] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True
    }


class ErrorInfo(BaseModel):
    """Error entry in a response envelope."""

    error_code: str = Field(..., alias="errorCode")
    message: str

    model_config = {
        "populate_by_name": True
    }


class MainResponse(BaseModel, Generic[T]):
    """Versioned response envelope carrying either a payload or errors."""

    version: str
    responsetime: str
    response: Optional[T] = None
    errors: Optional[List[ErrorInfo]] = None

    @property
    def is_error(self) -> bool:
        return bool(self.errors)
