"""
Master data client for UI spec persistence.

The master data service is the sole persistence authority for UI specs.
This client translates each operation into an HTTP call and turns every
failure (transport, status, or an error listed in the response envelope)
into a UISpecError carrying an error code and message.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from idplatform.core import constants
from idplatform.core.config import settings
from idplatform.core.error_handling import ClientConfigurationError, UISpecError
from idplatform.core.http_client import get_async_client, get_managed_client, request_with_retry
from idplatform.models.uispec_models import MasterDataUISpecRequest, Page, UISpecRecord

logger = logging.getLogger(__name__)


class MasterDataClient:
    """Async client for the master data UI spec endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the master data client.

        Args:
            base_url: Master data base URL (defaults to settings.MASTERDATA_BASE_URL)
            timeout: Request timeout in seconds
            max_attempts: Attempts per request; 1 disables retry
            transport: Optional httpx transport (used by tests)

        Raises:
            ClientConfigurationError: If no base URL is configured
        """
        self.base_url = (base_url or settings.MASTERDATA_BASE_URL or "").rstrip("/")
        self.timeout = timeout or settings.MASTERDATA_TIMEOUT
        self.max_attempts = max_attempts or settings.MASTERDATA_RETRY_ATTEMPTS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        if not self.base_url:
            raise ClientConfigurationError(constants.MASTERDATA_NOT_CONFIGURED[1])

        logger.info(f"Initialized {self.__class__.__name__} for {self.base_url} with timeout={self.timeout}s")

    async def __aenter__(self):
        """Async context manager entry - open a persistent connection pool."""
        self._client = get_async_client(
            timeout=self.timeout,
            base_url=self.base_url,
            transport=self._transport
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the persistent HTTP client. Safe to call multiple times."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # UI spec operations
    # ------------------------------------------------------------------

    async def create_ui_spec(self, request: MasterDataUISpecRequest) -> UISpecRecord:
        body = await self._call("POST", "/uispec", json=_request_body(request))
        return self._parse(UISpecRecord, body)

    async def update_ui_spec(self, request: MasterDataUISpecRequest, spec_id: str) -> UISpecRecord:
        body = await self._call("PUT", "/uispec", params={"id": spec_id}, json=_request_body(request))
        return self._parse(UISpecRecord, body)

    async def get_ui_spec(
        self,
        domain: str,
        version: float,
        identity_schema_version: float
    ) -> List[UISpecRecord]:
        body = await self._call(
            "GET",
            f"/uispec/{domain}/latest",
            params={"version": version, "identitySchemaVersion": identity_schema_version}
        )
        return [self._parse(UISpecRecord, item) for item in (body or [])]

    async def get_all_ui_spec(self, page_number: int, page_size: int) -> Page[UISpecRecord]:
        body = await self._call(
            "GET",
            "/uispec/all",
            params={"pageNumber": page_number, "pageSize": page_size}
        )
        return self._parse(Page[UISpecRecord], body)

    async def publish_ui_spec(self, spec_id: str, effective_from: Optional[datetime] = None) -> str:
        effective_from = effective_from or datetime.now(timezone.utc)
        body = await self._call(
            "PUT",
            "/uispec/publish",
            json={"request": {"id": spec_id, "effectiveFrom": effective_from.isoformat()}}
        )
        return str(body)

    async def delete_ui_spec(self, spec_id: str) -> str:
        body = await self._call("DELETE", "/uispec", params={"id": spec_id})
        return str(body)

    # ------------------------------------------------------------------
    # Transport helpers
    # ------------------------------------------------------------------

    async def _call(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None
    ) -> Any:
        """Perform a request and return the envelope's "response" member."""
        url = f"{self.base_url}{path}"
        logger.debug(f"Master data request: {method} {url} params={params}")

        try:
            async with get_managed_client(
                self._client, self.timeout, transport=self._transport
            ) as client:
                response = await request_with_retry(
                    client,
                    method,
                    url,
                    params=params,
                    json=json,
                    timeout=self.timeout,
                    max_attempts=self.max_attempts,
                )
        except httpx.HTTPError as e:
            logger.error(f"Master data call {method} {path} failed: {e}")
            raise UISpecError(constants.MASTERDATA_UNAVAILABLE[0], f"{constants.MASTERDATA_UNAVAILABLE[1]}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise UISpecError(*constants.MASTERDATA_INVALID_RESPONSE) from e

        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            first = errors[0] if isinstance(errors, list) else None
            if not isinstance(first, dict):
                logger.error(f"Malformed errors member from master data for {method} {path}: {errors!r}")
                raise UISpecError(*constants.MASTERDATA_INVALID_RESPONSE)
            raise UISpecError(
                first.get("errorCode", constants.MASTERDATA_INVALID_RESPONSE[0]),
                first.get("message", constants.MASTERDATA_INVALID_RESPONSE[1])
            )

        if response.status_code >= 400:
            raise UISpecError(
                constants.MASTERDATA_UNAVAILABLE[0],
                f"Master data returned status {response.status_code} for {method} {path}"
            )

        if not isinstance(payload, dict) or "response" not in payload:
            raise UISpecError(*constants.MASTERDATA_INVALID_RESPONSE)

        return payload["response"]

    @staticmethod
    def _parse(model, data: Any):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected master data payload for {model.__name__}: {e}")
            raise UISpecError(*constants.MASTERDATA_INVALID_RESPONSE) from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url}, timeout={self.timeout}s)"


def _request_body(request: MasterDataUISpecRequest) -> dict:
    return {"request": request.model_dump(by_alias=True)}
