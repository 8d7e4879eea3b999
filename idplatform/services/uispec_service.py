"""
UI specification service.

A façade over the master data service: maps public requests to master data
requests, shapes the returned records and flattens master data errors into
the response envelope. Nothing is persisted here.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from idplatform.core import constants
from idplatform.core.config import settings
from idplatform.core.error_handling import UISpecError
from idplatform.models.uispec_models import (
    MainResponse,
    MasterDataUISpecRequest,
    Page,
    UISpecMetaData,
    UISpecRecord,
    UISpecRequest,
    UISpecStatus,
)
from idplatform.services.masterdata_client import MasterDataClient
from idplatform.services.response_builder import ResponseBuilder

logger = logging.getLogger(__name__)


class UISpecService:
    """Create, update, fetch, list, publish and delete UI specs of one domain."""

    def __init__(
        self,
        client: MasterDataClient,
        domain: Optional[str] = None,
        version: Optional[str] = None
    ):
        self.client = client
        self.domain = domain or settings.UI_SPEC_DOMAIN
        self.response_builder = ResponseBuilder(version)

    async def save_ui_spec(self, request: UISpecRequest) -> MainResponse:
        logger.info(f"Saving the UI spec request {request.title!r}")
        try:
            record = await self.client.create_ui_spec(self._to_master_data_request(request))
        except UISpecError as ex:
            logger.error(f"Exception occurred while saving the UI spec request {request.title!r}")
            return self.response_builder.build_error(ex)
        return self.response_builder.build_success(record)

    async def update_ui_spec(self, request: UISpecRequest, spec_id: str) -> MainResponse:
        logger.info(f"Updating the UI spec {spec_id}")
        try:
            record = await self.client.update_ui_spec(self._to_master_data_request(request), spec_id)
        except UISpecError as ex:
            logger.error(f"Exception occurred while updating the UI spec {spec_id}")
            return self.response_builder.build_error(ex)
        return self.response_builder.build_success(record)

    async def get_ui_spec(self, version: float, identity_schema_version: float) -> MainResponse:
        """Fetch UI specs for a version pair.

        identity_schema_version == 0 selects the latest published spec only.
        When no published spec exists the IndexError from the empty selection
        propagates to the caller.
        """
        logger.info(f"Fetching the UI spec version {version} and identitySchemaVersion {identity_schema_version}")
        try:
            records = await self.client.get_ui_spec(self.domain, version, identity_schema_version)
        except UISpecError as ex:
            logger.error("Exception occurred while fetching the UI spec")
            return self.response_builder.build_error(ex)

        fetched = self._prepare_response(records)
        if identity_schema_version == constants.LATEST_ID_SCHEMA_VERSION:
            return self.response_builder.build_success([latest_published(fetched)])
        return self.response_builder.build_success(fetched)

    async def delete_ui_spec(self, spec_id: str) -> MainResponse:
        logger.info(f"Deleting the UI spec {spec_id}")
        try:
            message = await self.client.delete_ui_spec(spec_id)
        except UISpecError as ex:
            logger.error(f"Exception occurred while deleting the UI spec {spec_id}")
            return self.response_builder.build_error(ex)
        return self.response_builder.build_success(message)

    async def publish_ui_spec(self, spec_id: str) -> MainResponse:
        logger.info(f"Publishing the UI spec {spec_id}")
        try:
            message = await self.client.publish_ui_spec(spec_id)
        except UISpecError as ex:
            logger.error(f"Exception occurred while publishing the UI spec {spec_id}")
            return self.response_builder.build_error(ex)
        return self.response_builder.build_success(message)

    async def get_all_ui_spec(self, page_number: int, page_size: int) -> MainResponse:
        """List one page of UI specs belonging to this service's domain.

        total_items reflects the filtered page; total_pages is the upstream
        value and is not recomputed.
        """
        logger.info(f"Fetching all UI specs, page {page_number} size {page_size}")
        try:
            page = await self.client.get_all_ui_spec(page_number, page_size)
        except UISpecError as ex:
            logger.error("Exception occurred while fetching all the UI specs")
            return self.response_builder.build_error(ex)

        data = self._prepare_response([spec for spec in page.data if spec.domain == self.domain])
        filtered = Page[UISpecMetaData](
            page_no=page.page_no,
            page_size=page.page_size,
            total_items=len(data),
            total_pages=page.total_pages,
            sort=page.sort,
            data=data
        )
        return self.response_builder.build_success(filtered)

    def _to_master_data_request(self, request: UISpecRequest) -> MasterDataUISpecRequest:
        return MasterDataUISpecRequest(
            domain=self.domain,
            identity_schema_id=request.identity_schema_id,
            title=request.title,
            description=request.description,
            type=request.type,
            jsonspec=request.jsonspec
        )

    @staticmethod
    def _prepare_response(records: List[UISpecRecord]) -> List[UISpecMetaData]:
        return [UISpecMetaData.from_record(record) for record in records]


def latest_published(specs: List[UISpecMetaData]) -> UISpecMetaData:
    """Return the published spec with the most recent effective-from date.

    Raises IndexError when none of the specs is published.
    """
    published = [spec for spec in specs if spec.status == UISpecStatus.PUBLISHED.value]
    published.sort(key=lambda spec: _as_utc(spec.effective_from), reverse=True)
    return published[0]


def _as_utc(value: Optional[datetime]) -> datetime:
    # Naive values are taken as UTC so every key compares by instant
    if value is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
