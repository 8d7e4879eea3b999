"""
Pydantic models for demographic authentication requests.

Field names are snake_case; the camelCase wire names used by upstream
callers are accepted through aliases.
"""
from typing import Optional, Any
from pydantic import BaseModel, Field


class AuthType(BaseModel):
    """Which demographic sections take part in authentication."""

    ad: bool = Field(default=False, description="Address authentication requested")
    fad: bool = Field(default=False, description="Full address authentication requested")
    pi: bool = Field(default=False, description="Personal info authentication requested")


class PersonalIdentity(BaseModel):
    """Personal identity attributes (primary/secondary language)."""

    name_pri: Optional[str] = Field(default=None, alias="namePri")
    name_sec: Optional[str] = Field(default=None, alias="nameSec")
    age: Optional[int] = None
    dob: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    ms_pri: Optional[str] = Field(default=None, alias="msPri", description="Match strategy, primary language")
    ms_sec: Optional[str] = Field(default=None, alias="msSec", description="Match strategy, secondary language")
    mt_pri: Optional[int] = Field(default=None, alias="mtPri", description="Match threshold, primary language")
    mt_sec: Optional[int] = Field(default=None, alias="mtSec", description="Match threshold, secondary language")

    model_config = {
        "populate_by_name": True
    }


class PersonalAddress(BaseModel):
    """Structured address, every attribute in primary and secondary language."""

    addr_line1_pri: Optional[str] = Field(default=None, alias="addrLine1Pri")
    addr_line2_pri: Optional[str] = Field(default=None, alias="addrLine2Pri")
    addr_line3_pri: Optional[str] = Field(default=None, alias="addrLine3Pri")
    city_pri: Optional[str] = Field(default=None, alias="cityPri")
    state_pri: Optional[str] = Field(default=None, alias="statePri")
    country_pri: Optional[str] = Field(default=None, alias="countryPri")
    pin_code_pri: Optional[str] = Field(default=None, alias="pinCodePri")
    addr_line1_sec: Optional[str] = Field(default=None, alias="addrLine1Sec")
    addr_line2_sec: Optional[str] = Field(default=None, alias="addrLine2Sec")
    addr_line3_sec: Optional[str] = Field(default=None, alias="addrLine3Sec")
    city_sec: Optional[str] = Field(default=None, alias="citySec")
    state_sec: Optional[str] = Field(default=None, alias="stateSec")
    country_sec: Optional[str] = Field(default=None, alias="countrySec")
    pin_code_sec: Optional[str] = Field(default=None, alias="pinCodeSec")

    model_config = {
        "populate_by_name": True
    }

    def is_empty(self) -> bool:
        """True when none of the fourteen address attributes is set."""
        return all(value is None for value in self.model_dump().values())


class PersonalFullAddress(BaseModel):
    """Free-text full address in primary and secondary language."""

    addr_pri: Optional[str] = Field(default=None, alias="addrPri")
    addr_sec: Optional[str] = Field(default=None, alias="addrSec")

    model_config = {
        "populate_by_name": True
    }


class Demo(BaseModel):
    """Demographic sections of the request."""

    pi: Optional[PersonalIdentity] = None
    ad: Optional[PersonalAddress] = None
    fad: Optional[PersonalFullAddress] = None


class PersonalIdentityData(BaseModel):
    """Container for the demographic part of the PII block."""

    demo: Optional[Demo] = None


class AuthRequest(BaseModel):
    """Authentication request carrying demographic data."""

    id: Optional[str] = None
    txn_id: Optional[str] = Field(default=None, alias="txnID")
    req_time: Optional[str] = Field(default=None, alias="reqTime")
    auth_type: Optional[AuthType] = Field(default=None, alias="authType")
    pii: Optional[PersonalIdentityData] = None

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "mosip.identity.auth",
                "txnID": "1234567890",
                "reqTime": "2024-03-01T10:00:00.000+05:30",
                "authType": {"ad": False, "fad": False, "pi": True},
                "pii": {
                    "demo": {
                        "pi": {
                            "namePri": "Jane Doe",
                            "gender": "F",
                            "dob": "1990-01-31",
                            "email": "jane.doe@example.com",
                            "msPri": "E",
                            "mtPri": 100
                        }
                    }
                }
            }
        }
    }

    def demo(self) -> Optional[Demo]:
        """Shortcut to pii.demo, None when either level is missing."""
        return self.pii.demo if self.pii is not None else None


def is_all_none(obj: Any, *attributes: str) -> bool:
    """Return True when every named attribute of obj is None."""
    return all(getattr(obj, name) is None for name in attributes)
